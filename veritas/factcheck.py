"""Fact-check evidence from the Google Fact Check Tools claims search.

Lookups never fail the caller: transport errors, bad statuses and malformed
payloads all degrade to an empty verdict list, which the validity scorer
treats as neutral.
"""

import asyncio
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from veritas.core.errors import FactCheckError
from veritas.core.logging import get_logger
from veritas.core.models import FactCheckRating, FactCheckResult
from veritas.core.settings import get_settings

logger = get_logger(__name__)

DEFAULT_LANGUAGE = "en"
RETRYABLE_STATUS_CODES = (429, 500, 502, 503, 504)


def map_rating(textual: Optional[str]) -> FactCheckRating:
    """
    Map a fact-checker's free-text verdict onto the five-level scale.

    Phrases are checked in a fixed order: TRUE, MOSTLY_TRUE, MIXED,
    MOSTLY_FALSE, FALSE. Anything unrecognized is MIXED.
    """
    lower = (textual or "").lower()

    if ("true" in lower and "false" not in lower
            and "partly" not in lower and "mostly" not in lower):
        return FactCheckRating.TRUE
    if "mostly true" in lower or "mostly correct" in lower:
        return FactCheckRating.MOSTLY_TRUE
    if "mixed" in lower or "partly" in lower or "half" in lower:
        return FactCheckRating.MIXED
    if "mostly false" in lower or "mostly incorrect" in lower:
        return FactCheckRating.MOSTLY_FALSE
    if "false" in lower or "pants on fire" in lower or "incorrect" in lower:
        return FactCheckRating.FALSE

    return FactCheckRating.MIXED


def parse_claims(payload: Mapping[str, Any], query: str) -> List[FactCheckResult]:
    """Convert a claims:search response body into verdicts, first review per claim."""
    results = []
    for claim in payload.get("claims") or []:
        reviews = claim.get("claimReview") or [{}]
        review = reviews[0] or {}
        publisher = review.get("publisher") or {}
        results.append(FactCheckResult(
            claim=claim.get("text") or query,
            rating=map_rating(review.get("textualRating")),
            source=publisher.get("name") or "Unknown",
            url=review.get("url") or "",
        ))
    return results


class FactCheckClient:
    """Async client for claim searches with retry on transient failures."""

    def __init__(self,
                 api_url: Optional[str] = None,
                 api_key: Optional[str] = None,
                 timeout: Optional[float] = None,
                 language: str = DEFAULT_LANGUAGE,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        settings = get_settings()
        self.api_url = api_url or settings.fact_check_api_url
        self.api_key = api_key if api_key is not None else settings.fact_check_api_key
        self.language = language
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout or settings.fact_check_timeout),
            headers={"User-Agent": "Veritas/1.0 (fact-check lookup)"},
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def _params(self, query: str) -> Dict[str, str]:
        params = {"query": query, "languageCode": self.language}
        if self.api_key:
            params["key"] = self.api_key
        return params

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4.0),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.TimeoutException, httpx.NetworkError)),
        reraise=True
    )
    async def _fetch_with_retry(self, query: str) -> httpx.Response:
        response = await self.client.get(self.api_url, params=self._params(query))
        if response.status_code in RETRYABLE_STATUS_CODES:
            logger.warning(f"Fact-check API returned {response.status_code}, will retry")
            response.raise_for_status()
        return response

    async def fetch_claims(self, query: str) -> List[FactCheckResult]:
        """
        Search for fact checks of a claim, raising on failure.

        Raises:
            FactCheckError: On transport errors, error statuses or unreadable bodies
        """
        try:
            response = await self._fetch_with_retry(query)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise FactCheckError(f"Fact-check API unavailable: {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise FactCheckError(f"Fact-check request failed: {type(e).__name__}") from e
        except ValueError as e:
            raise FactCheckError(f"Fact-check API returned invalid JSON: {e}") from e

        if not isinstance(payload, Mapping):
            raise FactCheckError("Fact-check API returned an unexpected payload")
        return parse_claims(payload, query)

    async def search(self, query: str) -> List[FactCheckResult]:
        """Search for fact checks of a claim; any failure yields []."""
        try:
            results = await self.fetch_claims(query)
        except FactCheckError as e:
            logger.warning(f"Fact check lookup failed for {query[:60]!r}: {e}")
            return []
        logger.debug(f"Found {len(results)} fact checks for {query[:60]!r}")
        return results

    async def search_many(self, queries: Sequence[str]) -> Dict[str, List[FactCheckResult]]:
        """Look up several claims concurrently, keyed by claim text."""
        unique = list(dict.fromkeys(queries))
        results = await asyncio.gather(*(self.search(q) for q in unique))
        return dict(zip(unique, results))


def lookup_from(verdicts: Mapping[str, Sequence[FactCheckResult]]) -> Callable[[str], Sequence[FactCheckResult]]:
    """Wrap prefetched verdicts as the synchronous lookup the pipeline expects."""
    def lookup(claim: str) -> Sequence[FactCheckResult]:
        return verdicts.get(claim, ())
    return lookup

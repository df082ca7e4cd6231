"""Veritas engine FastAPI application."""

from datetime import datetime
from functools import lru_cache
from typing import Any, Dict, List, Optional, Union

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from veritas.core.errors import ArticleValidationError, OverrideConfigError
from veritas.core.logging import get_logger, setup_logging
from veritas.core.models import Article, Bias, FactCheckRating, FactCheckResult, Source
from veritas.core.settings import get_settings
from veritas.core.time import utc_now
from veritas.engine.pipeline import StoryPipeline, validate_articles
from veritas.factcheck import lookup_from
from veritas.recap import build_recap
from veritas.scoring.overrides import OverrideTable, load_overrides
from veritas.scoring.validity import ValidityScorer
from veritas.sources.ratings import normalize_domain, resolve_source

# Setup logging
setup_logging("engine")
logger = get_logger(__name__)

settings = get_settings()

app = FastAPI(title="Veritas Engine", version="0.1.0", description="Story clustering and trust scoring API")


class SourceIn(BaseModel):
    """Outlet of an article; unrated fields are filled from the source registry."""
    domain: str
    name: Optional[str] = None
    id: Optional[str] = None
    bias: Optional[Bias] = None
    factual_rating: Optional[float] = Field(default=None, ge=0, le=100)

    def to_source(self) -> Source:
        known = resolve_source(self.domain)
        return Source(
            id=self.id or known.id,
            name=self.name or known.name,
            domain=normalize_domain(self.domain),
            bias=self.bias or known.bias,
            factual_rating=known.factual_rating if self.factual_rating is None else self.factual_rating,
        )


class ArticleIn(BaseModel):
    """Article as received from ingestion."""
    id: str
    title: str
    url: str = ""
    source: SourceIn
    published_at: Union[datetime, str]
    summary: str = ""
    sentiment: float = Field(default=0.0, ge=-1.0, le=1.0)

    def to_article(self) -> Article:
        return Article(
            id=self.id,
            title=self.title,
            url=self.url,
            source=self.source.to_source(),
            published_at=self.published_at,
            summary=self.summary,
            sentiment=self.sentiment,
        )


class VerdictIn(BaseModel):
    """One fact-check verdict."""
    rating: FactCheckRating
    claim: str = ""
    source: str = "Unknown"
    url: str = ""

    def to_result(self) -> FactCheckResult:
        return FactCheckResult(claim=self.claim, rating=self.rating, source=self.source, url=self.url)


class OverrideIn(BaseModel):
    """Trust override for one domain."""
    mode: str = "ABS"
    value: float
    note: str = ""


class ClustersRequest(BaseModel):
    """Request model for clustering a batch."""
    articles: List[ArticleIn]
    now: Optional[datetime] = None
    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0, description="Similarity threshold")
    overrides: Optional[Dict[str, OverrideIn]] = None
    fact_checks: Dict[str, List[VerdictIn]] = Field(default_factory=dict, description="Verdicts by article title")


class ScoreRequest(BaseModel):
    """Request model for scoring one article against its siblings."""
    article: ArticleIn
    siblings: List[ArticleIn] = Field(default_factory=list)
    fact_checks: List[VerdictIn] = Field(default_factory=list)
    overrides: Optional[Dict[str, OverrideIn]] = None


class RecapRequest(ClustersRequest):
    """Request model for a recap of a batch."""
    window_hours: Optional[float] = Field(default=None, gt=0)
    max_items: Optional[int] = Field(default=None, ge=1)


class ClustersResponse(BaseModel):
    """Response model for clustering."""
    status: str
    counts: Dict[str, int]
    clusters: List[Dict[str, Any]]


@lru_cache()
def get_default_overrides() -> OverrideTable:
    """Overrides from the configured YAML file, or an empty table."""
    if not settings.overrides_path:
        return OverrideTable()
    return load_overrides(settings.overrides_path)


def _override_table(overrides: Optional[Dict[str, OverrideIn]]) -> OverrideTable:
    if overrides is None:
        return get_default_overrides()
    return OverrideTable.from_dict({domain: o.model_dump() for domain, o in overrides.items()})


def _run_pipeline(request: ClustersRequest, now: Optional[datetime] = None):
    articles = [a.to_article() for a in request.articles]
    verdicts = {
        claim: [v.to_result() for v in items]
        for claim, items in request.fact_checks.items()
    }
    pipeline = StoryPipeline(
        threshold=request.threshold if request.threshold is not None else settings.cluster_threshold,
        topic_keywords=settings.topic_keywords,
        scorer=ValidityScorer(trust_override=_override_table(request.overrides).apply),
        fact_checks=lookup_from(verdicts) if verdicts else None,
        workers=settings.scoring_workers,
    )
    return pipeline.run(articles, now=now or request.now)


@app.exception_handler(ArticleValidationError)
async def article_validation_handler(request: Request, exc: ArticleValidationError):
    logger.warning(f"Rejected batch: {exc}")
    return JSONResponse(status_code=422, content={"detail": exc.to_dict()})


@app.exception_handler(OverrideConfigError)
async def override_config_handler(request: Request, exc: OverrideConfigError):
    logger.warning(f"Rejected overrides: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/healthz")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "engine"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "engine",
        "version": app.version,
        "endpoints": {
            "health": "/healthz",
            "clusters": "/clusters (POST)",
            "score": "/score (POST)",
            "recap": "/recap (POST)",
        }
    }


@app.post("/clusters", response_model=ClustersResponse)
def clusters_endpoint(request: ClustersRequest):
    """
    Cluster a batch of articles into stories and rank them.

    Every article is scored against the other members of its story; clusters
    are returned highest score first.
    """
    logger.info(f"Clustering batch of {len(request.articles)} articles via API")
    clusters = _run_pipeline(request)
    return {
        "status": "success" if clusters else "no_results",
        "counts": {
            "articles": len(request.articles),
            "clusters": len(clusters),
        },
        "clusters": [c.to_dict() for c in clusters],
    }


@app.post("/score")
def score_endpoint(request: ScoreRequest):
    """Validity score of one article given its siblings and verdicts."""
    article = request.article.to_article()
    siblings = [s.to_article() for s in request.siblings]
    validate_articles([article, *siblings])

    scorer = ValidityScorer(trust_override=_override_table(request.overrides).apply)
    result = scorer.score(article, siblings, [v.to_result() for v in request.fact_checks])
    return result.to_dict()


@app.post("/recap")
def recap_endpoint(request: RecapRequest):
    """Recap of the top stories of a batch."""
    now = request.now or utc_now()
    clusters = _run_pipeline(request, now=now)
    recap = build_recap(
        clusters,
        now=now,
        window_hours=request.window_hours or settings.recap_window_hours,
        max_items=request.max_items or settings.recap_max_items,
    )
    return recap.to_dict()


if __name__ == "__main__":
    logger.info("Starting engine service via uvicorn")
    uvicorn.run(
        "veritas.api.app:app",
        host=settings.service_host,
        port=settings.service_port or 8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )

"""User trust overrides applied to source factual ratings.

An override either replaces a source's rating outright (``ABS``) or shifts it
(``DELTA``). Results are always clamped to [0, 100]. The override file is YAML:

    overrides:
      example.com:
        mode: ABS
        value: 70
        note: local paper of record
      tabloid.net:
        mode: DELTA
        value: -15
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from veritas.core.errors import OverrideConfigError
from veritas.core.logging import get_logger
from veritas.core.utils import clamp
from veritas.sources.ratings import normalize_domain

logger = get_logger(__name__)


class OverrideMode(str, Enum):
    ABS = "ABS"
    DELTA = "DELTA"


@dataclass(frozen=True)
class SourceOverride:
    mode: OverrideMode
    value: float
    note: str = ""

    def apply(self, base: float) -> float:
        if self.mode == OverrideMode.ABS:
            return clamp(self.value)
        return clamp(base + self.value)


class OverrideTable:
    """Per-domain overrides; ``apply`` is usable as a validity trust override."""

    def __init__(self, overrides: Optional[Mapping[str, SourceOverride]] = None):
        self._overrides: Dict[str, SourceOverride] = {
            normalize_domain(domain): override
            for domain, override in (overrides or {}).items()
        }

    def __len__(self) -> int:
        return len(self._overrides)

    def __contains__(self, domain: str) -> bool:
        return normalize_domain(domain) in self._overrides

    def get(self, domain: str) -> Optional[SourceOverride]:
        return self._overrides.get(normalize_domain(domain))

    def set(self, domain: str, override: SourceOverride) -> None:
        self._overrides[normalize_domain(domain)] = override

    def remove(self, domain: str) -> None:
        self._overrides.pop(normalize_domain(domain), None)

    def apply(self, base: float, domain: str) -> float:
        """Effective rating for ``domain``; unknown domains pass through clamped."""
        override = self.get(domain)
        if override is None:
            return clamp(base)
        return override.apply(base)

    __call__ = apply

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OverrideTable":
        """
        Build a table from a ``{domain: {mode, value, note}}`` mapping.

        Raises:
            OverrideConfigError: If an entry has an unknown mode or a non-numeric value
        """
        overrides = {}
        for domain, entry in (data or {}).items():
            if not isinstance(entry, Mapping):
                raise OverrideConfigError(f"Override for '{domain}' must be a mapping")
            try:
                mode = OverrideMode(str(entry.get('mode', OverrideMode.ABS.value)).upper())
            except ValueError:
                raise OverrideConfigError(
                    f"Override for '{domain}' has unknown mode {entry.get('mode')!r}"
                )
            value = entry.get('value')
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise OverrideConfigError(f"Override for '{domain}' needs a numeric value")
            overrides[domain] = SourceOverride(mode=mode, value=value, note=str(entry.get('note') or ""))
        return cls(overrides)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {
            domain: {'mode': o.mode.value, 'value': o.value, 'note': o.note}
            for domain, o in self._overrides.items()
        }


def load_overrides(path: Union[str, Path]) -> OverrideTable:
    """
    Load an override table from a YAML file.

    Raises:
        OverrideConfigError: If the file is missing, unreadable or malformed
    """
    config_path = Path(path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise OverrideConfigError(f"Override file not found: {config_path}")
    except yaml.YAMLError as e:
        raise OverrideConfigError(f"Invalid YAML in override file {config_path}: {e}")

    if not isinstance(config, Mapping):
        raise OverrideConfigError(f"Override file {config_path} must contain a mapping")

    table = OverrideTable.from_dict(config.get('overrides', {}))
    logger.info(f"Loaded {len(table)} source overrides from {config_path}")
    return table

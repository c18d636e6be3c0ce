# a11y_scout/crawler/models.py
"""
Data models for the A11yScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True, slots=True)
class FrontierNode:
    """A discovered, not yet expanded page and its distance from the start URL."""

    url: str
    depth: int


@dataclass(slots=True)
class ScanResult:
    """Successful analysis of one page; *result* is the analyzer's opaque payload."""

    url: str
    result: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "result": self.result}


@dataclass(slots=True)
class CrawlStats:
    """Counters collected during one crawl for the summary log line."""

    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    levels: int = 0
    visited: int = 0
    duration: float = 0.0

    @property
    def pages_per_second(self) -> float:
        return self.succeeded / self.duration if self.duration else 0.0

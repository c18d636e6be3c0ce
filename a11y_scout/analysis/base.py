# a11y_scout/analysis/base.py
"""
Contract for page analyzers consumed by the crawl orchestrator.
"""
from __future__ import annotations

import abc
from typing import Any

from a11y_scout.render.base import RenderedPage


class PageAnalyzer(abc.ABC):
    """Produces a JSON-serializable payload for one rendered page."""

    #: load state the page is rendered with before :meth:`analyze`
    wait_until: str = "networkidle"

    @abc.abstractmethod
    async def analyze(self, page: RenderedPage) -> Any:
        """Return the analysis payload; raise AnalysisError on failure."""


__all__ = ["PageAnalyzer"]

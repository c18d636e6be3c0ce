"""
Exception types shared by renderers, analyzers and the crawl core.
"""
from __future__ import annotations


class ScanError(Exception):
    """Base class for per-page failures; never fatal for the crawl."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class RenderError(ScanError):
    """Navigation or rendering failed (timeout, network error, non-HTML content)."""


class AnalysisError(ScanError):
    """The content analysis threw or returned malformed data."""


__all__ = ["ScanError", "RenderError", "AnalysisError"]

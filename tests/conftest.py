# File: tests/conftest.py
import asyncio
from typing import Any, Dict, Iterable, List, Optional

import pytest

from a11y_scout.analysis.base import PageAnalyzer
from a11y_scout.config import CrawlConfig
from a11y_scout.errors import AnalysisError, RenderError
from a11y_scout.render.base import PageRenderer, RenderedPage

ORIGIN = "https://example.com"


class FakePage:
    """In-memory RenderedPage with fixed hrefs and HTML."""

    def __init__(self, url: str, hrefs: Iterable[str] = (), html: str = "<html></html>") -> None:
        self.url = url
        self._hrefs = list(hrefs)
        self.html = html
        self.scripts: List[Any] = []
        self.eval_results: List[Any] = []

    async def content(self) -> str:
        return self.html

    async def hrefs(self) -> List[str]:
        return list(self._hrefs)

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        self.scripts.append((script, arg))
        if self.eval_results:
            outcome = self.eval_results.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        return None


class FakeRenderer(PageRenderer):
    """
    Serves a site graph from memory: url -> list of absolute hrefs.

    Unknown URLs and URLs in *failing* raise RenderError after the delay.
    Tracks every render call and how many pages are open at once.
    """

    def __init__(
        self,
        site: Dict[str, List[str]],
        failing: Iterable[str] = (),
        delay: float = 0.0,
    ) -> None:
        self.site = site
        self.failing = set(failing)
        self.delay = delay
        self.renders: List[tuple] = []
        self.open_pages = 0
        self.max_open = 0
        self.closed = 0
        self.started = False
        self.stopped = False

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.stopped = True

    async def render(self, url: str, *, wait_until: str = "load", timeout: Optional[float] = None) -> RenderedPage:
        self.renders.append((url, wait_until))
        self.open_pages += 1
        self.max_open = max(self.max_open, self.open_pages)
        try:
            await asyncio.sleep(self.delay)
            if url in self.failing or url not in self.site:
                raise RenderError(url, "navigation timed out")
        except RenderError:
            self.open_pages -= 1
            self.closed += 1
            raise
        return FakePage(url, self.site[url])

    async def close(self, page: RenderedPage) -> None:
        self.open_pages -= 1
        self.closed += 1

    def rendered(self, wait_until: str) -> List[str]:
        return [url for url, wait in self.renders if wait == wait_until]


class FakeAnalyzer(PageAnalyzer):
    """Records analyzed URLs; fails for the configured ones."""

    wait_until = "networkidle"

    def __init__(self, failing: Iterable[str] = (), crashing: Iterable[str] = ()) -> None:
        self.failing = set(failing)
        self.crashing = set(crashing)
        self.analyzed: List[str] = []

    async def analyze(self, page: RenderedPage) -> Any:
        self.analyzed.append(page.url)
        await asyncio.sleep(0)
        if page.url in self.failing:
            raise AnalysisError(page.url, "axe threw")
        if page.url in self.crashing:
            raise RuntimeError("unexpected analyzer bug")
        return {"url": page.url, "violations": []}


def url(path: str) -> str:
    return f"{ORIGIN}{path}"


@pytest.fixture()
def make_config():
    """Build a CrawlConfig rooted at https://example.com/ with overrides."""

    def factory(**overrides: Any) -> CrawlConfig:
        data: Dict[str, Any] = {"start_url": url("/"), "max_depth": 3, "max_scans": 50, "concurrency": 5}
        data.update(overrides)
        return CrawlConfig(**data)

    return factory

# File: a11y_scout/engine.py
"""a11y_scout.engine: wiring of renderer, analyzer and crawl, plus the request envelope."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from a11y_scout.analysis import AxeAnalyzer, MarkupAnalyzer, PageAnalyzer, load_axe_source
from a11y_scout.config import CrawlConfig
from a11y_scout.crawler.models import ScanResult
from a11y_scout.crawler.orchestrator import CrawlOrchestrator
from a11y_scout.logger import logger
from a11y_scout.render.base import PageRenderer
from a11y_scout.render.browser import BrowserRenderer
from a11y_scout.render.http import HttpRenderer

__all__ = [
    "build_analyzer",
    "build_renderer",
    "build_response",
    "error_response",
    "handle_scan_request",
    "run_accessibility_scan",
    "start_scan",
]

ScanFn = Callable[[CrawlConfig], Awaitable[Sequence[ScanResult]]]


def build_renderer(config: CrawlConfig) -> PageRenderer:
    """Instantiate the renderer selected by ``render.engine``."""
    opts = config.render
    if opts.engine == "http":
        return HttpRenderer(timeout=opts.timeout, user_agent=opts.user_agent)

    return BrowserRenderer(
        timeout=opts.timeout,
        user_agent=opts.user_agent,
        block_resources=opts.block_resources,
        headless=opts.headless,
    )


def build_analyzer(config: CrawlConfig) -> PageAnalyzer:
    """Instantiate the analyzer selected by ``analysis.engine``; loads the axe script."""
    wait_until = config.render.analysis_wait_until
    if config.analysis.engine == "markup":
        return MarkupAnalyzer(wait_until=wait_until)
    source = load_axe_source(config.analysis.axe_script)
    return AxeAnalyzer(source, tags=config.analysis.tags, wait_until=wait_until)


async def start_scan(
    config: CrawlConfig,
    renderer: Optional[PageRenderer] = None,
    analyzer: Optional[PageAnalyzer] = None,
) -> List[ScanResult]:
    """
    Run one crawl and return the successful scan results.

    Per-page failures are absorbed by the crawl; configuration and startup
    problems (missing axe script, browser launch) propagate.
    """
    analyzer = analyzer or build_analyzer(config)
    renderer = renderer or build_renderer(config)
    async with renderer:
        orchestrator = CrawlOrchestrator(config, renderer, analyzer)
        return await orchestrator.run()


async def run_accessibility_scan(start_url: str, **options: Any) -> List[ScanResult]:
    """Convenience entry point: ``await run_accessibility_scan(url, max_depth=1)``."""
    return await start_scan(CrawlConfig(start_url=start_url, **options))


def build_response(results: Sequence[ScanResult]) -> Dict[str, Any]:
    return {"success": True, "results": [r.to_dict() for r in results]}


def error_response() -> Dict[str, Any]:
    return {"success": False, "error": "Scan failed"}


async def handle_scan_request(
    payload: Mapping[str, Any],
    base: Optional[CrawlConfig] = None,
    scan: ScanFn = start_scan,
) -> Tuple[int, Dict[str, Any]]:
    """
    Map a ``{"url": ...}`` request to ``(status, body)``.

    400 when the url is missing, 500 with a generic error body when the scan
    fails, 200 with the results otherwise.
    """
    url = payload.get("url")
    if not url:
        return 400, {"error": "Missing URL"}
    try:
        if base is not None:
            config = base.model_copy(update={"start_url": CrawlConfig(start_url=url).start_url})
        else:
            config = CrawlConfig(start_url=url)
        results = await scan(config)
    except Exception as exc:
        logger.error("Scan failed: %s", exc)
        return 500, error_response()
    return 200, build_response(results)

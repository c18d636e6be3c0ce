# a11y_scout/crawler/orchestrator.py
"""
Level-by-level crawl driver.

Each loop iteration analyzes the whole current level in concurrency-sized
batches, then renders the same level again to extract links and build the
next level. The loop stops when the level is empty or the scan budget is
spent. Link expansion runs for every node of a level whether or not its
analysis succeeded.
"""
from __future__ import annotations

import time
from typing import List, Optional

from a11y_scout.analysis.base import PageAnalyzer
from a11y_scout.config import CrawlConfig
from a11y_scout.crawler.batcher import ConcurrencyBatcher
from a11y_scout.crawler.frontier import Expansion, Frontier
from a11y_scout.crawler.link_extractor import extract_links, origin_of
from a11y_scout.crawler.models import CrawlStats, FrontierNode, ScanResult
from a11y_scout.errors import ScanError
from a11y_scout.logger import get_logger
from a11y_scout.render.base import PageRenderer

__all__ = ("CrawlOrchestrator",)


class CrawlOrchestrator:
    """Breadth-first crawl bounded by depth, scan count and concurrency."""

    def __init__(self, config: CrawlConfig, renderer: PageRenderer, analyzer: PageAnalyzer) -> None:
        self.config = config
        self.renderer = renderer
        self.analyzer = analyzer
        self.frontier = Frontier(config.start_url, config.max_depth)
        self.batcher = ConcurrencyBatcher(config.concurrency)
        self.scan_count = 0
        self.results: List[ScanResult] = []
        self.stats = CrawlStats()
        self.logger = get_logger("crawler")

    @property
    def visited(self):
        return self.frontier.visited

    def has_budget(self) -> bool:
        return self.scan_count < self.config.max_scans

    async def run(self) -> List[ScanResult]:
        """Crawl from the start URL and return successful analyses, levels in depth order."""
        self.logger.info(
            "Crawl started: %s (depth<=%d, scans<=%d, concurrency=%d)",
            self.config.start_url, self.config.max_depth, self.config.max_scans, self.config.concurrency,
        )
        start = time.monotonic()

        while self.frontier and self.has_budget():
            urls = self.frontier.urls()
            self.stats.levels += 1
            self.logger.info("Level %d: %d page(s)", self.frontier.depth, len(urls))

            scanned = await self.batcher.run(urls, self._scan_page)
            self.results.extend(scanned)

            nodes = self.frontier.expandable(self.has_budget)
            expansions = await self.batcher.run(nodes, self._expand_node)
            self.frontier.advance(expansions)

        if not self.has_budget():
            self.logger.info("Scan budget of %d page(s) exhausted", self.config.max_scans)

        self.stats.duration = time.monotonic() - start
        self.stats.visited = len(self.visited)
        self.logger.info(
            "Crawl finished: %d page(s) scanned, %d failed, %d visited in %.2f s (%.2f pages/s)",
            self.stats.succeeded, self.stats.failed, self.stats.visited,
            self.stats.duration, self.stats.pages_per_second,
        )
        return self.results

    async def _scan_page(self, url: str) -> Optional[ScanResult]:
        # budget check and increment happen before the first await
        if not self.has_budget():
            return None
        self.scan_count += 1
        self.stats.attempted += 1

        try:
            async with self.renderer.session(
                url,
                wait_until=self.analyzer.wait_until,
                timeout=self.config.render.timeout,
            ) as page:
                payload = await self.analyzer.analyze(page)
        except ScanError as exc:
            self.stats.failed += 1
            self.logger.warning("Failed to scan %s: %s", url, exc.reason)
            return None
        except Exception as exc:
            self.stats.failed += 1
            self.logger.error("Unexpected error while scanning %s: %r", url, exc)
            return None

        self.stats.succeeded += 1
        self.logger.info("Scanned: %s", url)
        return ScanResult(url, payload)

    async def _expand_node(self, node: FrontierNode) -> Expansion:
        try:
            async with self.renderer.session(
                node.url,
                wait_until=self.config.render.links_wait_until,
                timeout=self.config.render.timeout,
            ) as page:
                links = await extract_links(page, origin_of(node.url))
        except ScanError as exc:
            self.logger.warning("Failed to extract links from %s: %s", node.url, exc.reason)
            links = []
        self.logger.debug("%s: %d link(s)", node.url, len(links))
        return node, links

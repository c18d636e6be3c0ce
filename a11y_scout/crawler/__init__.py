"""a11y_scout.crawler: breadth-first crawl core."""

from a11y_scout.crawler.batcher import ConcurrencyBatcher
from a11y_scout.crawler.frontier import Frontier
from a11y_scout.crawler.models import CrawlStats, FrontierNode, ScanResult
from a11y_scout.crawler.orchestrator import CrawlOrchestrator

__all__ = [
    "ConcurrencyBatcher",
    "CrawlOrchestrator",
    "CrawlStats",
    "Frontier",
    "FrontierNode",
    "ScanResult",
]

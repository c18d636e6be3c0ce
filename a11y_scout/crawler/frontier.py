# a11y_scout/crawler/frontier.py
"""
Breadth-first frontier: the current level of (url, depth) nodes plus the
visited set shared by every level of one crawl.
"""
from __future__ import annotations

from typing import Callable, Iterable, List, Sequence, Set, Tuple

from a11y_scout.crawler.models import FrontierNode

Expansion = Tuple[FrontierNode, Sequence[str]]


class Frontier:
    """Owns the visited set; a URL enters it once and is never removed."""

    def __init__(self, start_url: str, max_depth: int) -> None:
        start = start_url.strip()
        self.max_depth = max_depth
        self.visited: Set[str] = {start}
        self.level: List[FrontierNode] = [FrontierNode(start, 0)]

    @property
    def depth(self) -> int:
        return self.level[0].depth if self.level else -1

    def __bool__(self) -> bool:
        return bool(self.level)

    def urls(self) -> List[str]:
        return [node.url for node in self.level]

    def mark_visited(self, url: str) -> bool:
        """Insert *url* into the visited set; False if it was already there."""
        if url in self.visited:
            return False
        self.visited.add(url)
        return True

    def expandable(self, has_budget: Callable[[], bool]) -> List[FrontierNode]:
        """
        Nodes of the current level whose links should be followed.

        Nodes at max_depth contribute no successors. Selection stops at the
        first node seen while the scan budget is exhausted.
        """
        nodes: List[FrontierNode] = []
        for node in self.level:
            if not has_budget():
                break
            if node.depth < self.max_depth:
                nodes.append(node)
        return nodes

    def advance(self, expansions: Iterable[Expansion]) -> List[FrontierNode]:
        """
        Build the next level from *expansions*, in node order, and make it current.

        Only links not yet visited are appended; nodes at max_depth add nothing.
        """
        next_level: List[FrontierNode] = []
        for node, links in expansions:
            if node.depth >= self.max_depth:
                continue
            for link in links:
                if self.mark_visited(link):
                    next_level.append(FrontierNode(link, node.depth + 1))
        self.level = next_level
        return next_level


__all__ = ["Frontier", "Expansion"]

# a11y_scout/crawler/batcher.py
"""
Concurrency batching: fixed-size chunks run one after another, members of a
chunk run concurrently, and a failed member never aborts its siblings.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

from a11y_scout.logger import get_logger

T = TypeVar("T")
R = TypeVar("R")

log = get_logger("batcher")


class ConcurrencyBatcher:
    """Runs an async worker over items, at most *concurrency* at a time."""

    def __init__(self, concurrency: int) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be > 0")
        self.concurrency = concurrency

    def chunks(self, items: Sequence[T]) -> List[Sequence[T]]:
        """Contiguous groups of *concurrency* items; the last may be smaller."""
        size = self.concurrency
        return [items[i:i + size] for i in range(0, len(items), size)]

    async def run(
        self,
        items: Sequence[T],
        worker: Callable[[T], Awaitable[Optional[R]]],
    ) -> List[R]:
        """
        Run *worker* over *items* chunk by chunk and return the non-None results.

        Each chunk is awaited in full before the next one starts. Results keep
        submission order within a chunk; ``None`` results and exceptions are dropped.
        """
        results: List[R] = []
        batches = self.chunks(items)
        for index, batch in enumerate(batches, start=1):
            log.debug("Batch %d/%d: %d item(s)", index, len(batches), len(batch))
            outcomes = await asyncio.gather(*(worker(item) for item in batch), return_exceptions=True)
            for item, outcome in zip(batch, outcomes):
                if isinstance(outcome, BaseException):
                    if isinstance(outcome, asyncio.CancelledError):
                        raise outcome
                    log.warning("Worker failed for %s: %r", item, outcome)
                    continue
                if outcome is not None:
                    results.append(outcome)
        return results


__all__ = ["ConcurrencyBatcher"]

# a11y_scout/render/base.py
"""
Contracts between the crawl core and page renderers.

A renderer hands out one dedicated page per navigation; every page must be
closed on every exit path, which :meth:`PageRenderer.session` guarantees.
"""
from __future__ import annotations

import abc
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class RenderedPage(Protocol):
    """A navigated page that can be queried and scripted."""

    url: str

    async def content(self) -> str:
        """Serialized HTML of the document."""
        ...

    async def hrefs(self) -> List[str]:
        """Resolved ``href`` of every ``<a>`` in document order ("" when absent)."""
        ...

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        """Evaluate *script* in the page and return its JSON-serializable value."""
        ...


class PageRenderer(abc.ABC):
    """Base class for rendering backends; use as ``async with renderer: ...``."""

    default_timeout: float = 30.0

    async def __aenter__(self) -> PageRenderer:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def start(self) -> None:
        """Acquire engine-wide resources (session, browser)."""

    async def stop(self) -> None:
        """Release engine-wide resources."""

    @abc.abstractmethod
    async def render(
        self,
        url: str,
        *,
        wait_until: str = "load",
        timeout: Optional[float] = None,
    ) -> RenderedPage:
        """
        Navigate a fresh page to *url*.

        Raises RenderError on timeout, network error or non-HTML content; a page
        opened for a failed navigation is released before raising.
        """

    @abc.abstractmethod
    async def close(self, page: RenderedPage) -> None:
        """Release a page returned by :meth:`render`."""

    @asynccontextmanager
    async def session(
        self,
        url: str,
        *,
        wait_until: str = "load",
        timeout: Optional[float] = None,
    ) -> AsyncIterator[RenderedPage]:
        """Scoped page: rendered on entry, closed on exit whatever happens."""
        page = await self.render(url, wait_until=wait_until, timeout=timeout)
        try:
            yield page
        finally:
            await self.close(page)


__all__ = ["RenderedPage", "PageRenderer"]

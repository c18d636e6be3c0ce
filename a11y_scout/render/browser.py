# a11y_scout/render/browser.py
"""
Headless Chromium renderer built on the Playwright async API.

One browser and one browser context live for the whole crawl; every
navigation gets its own page (tab), closed again by the caller's session.
"""
from __future__ import annotations

from typing import Any, List, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, Route, async_playwright
from playwright.async_api import Error as PlaywrightError

from a11y_scout.errors import RenderError
from a11y_scout.logger import get_logger
from a11y_scout.render.base import PageRenderer, RenderedPage

BLOCKED_RESOURCE_TYPES = frozenset({"image", "stylesheet", "font", "media"})
LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]
_HREFS_SCRIPT = "els => els.map(a => (a.href || '').trim())"

log = get_logger("render.browser")


class BrowserPage:
    """Wraps a navigated Playwright page."""

    def __init__(self, page: Page, url: str) -> None:
        self.page = page
        self.url = url

    async def content(self) -> str:
        try:
            return await self.page.content()
        except PlaywrightError as exc:
            raise RenderError(self.url, exc.message) from exc

    async def hrefs(self) -> List[str]:
        try:
            return await self.page.eval_on_selector_all("a", _HREFS_SCRIPT)
        except PlaywrightError as exc:
            raise RenderError(self.url, exc.message) from exc

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        try:
            return await self.page.evaluate(script, arg)
        except PlaywrightError as exc:
            raise RenderError(self.url, exc.message) from exc


async def _abort_heavy_resources(route: Route) -> None:
    if route.request.resource_type in BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


class BrowserRenderer(PageRenderer):
    """Renders pages in headless Chromium."""

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: Optional[str] = None,
        block_resources: bool = False,
        headless: bool = True,
    ) -> None:
        self.default_timeout = timeout
        self.user_agent = user_agent
        self.block_resources = block_resources
        self.headless = headless
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    async def start(self) -> None:
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.headless, args=LAUNCH_ARGS)
        context_kwargs = {"user_agent": self.user_agent} if self.user_agent else {}
        self._context = await self._browser.new_context(**context_kwargs)
        log.debug("Chromium started (headless=%s)", self.headless)

    async def stop(self) -> None:
        if self._context is not None:
            await self._context.close()
            self._context = None
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def render(
        self,
        url: str,
        *,
        wait_until: str = "load",
        timeout: Optional[float] = None,
    ) -> RenderedPage:
        if self._context is None:
            raise RuntimeError("Browser not started")
        page = await self._context.new_page()
        try:
            if self.block_resources:
                await page.route("**/*", _abort_heavy_resources)
            response = await page.goto(
                url,
                wait_until=wait_until,
                timeout=(timeout or self.default_timeout) * 1000,
            )
            if response is not None:
                ctype = (response.headers.get("content-type") or "").split(";", 1)[0].strip().lower()
                if ctype and ctype not in ("text/html", "application/xhtml+xml"):
                    raise RenderError(url, f"non-HTML content ({ctype})")
        except PlaywrightError as exc:
            await page.close()
            raise RenderError(url, exc.message) from exc
        except BaseException:
            # RenderError, cancellation (whole-scan timeout) and anything else
            await page.close()
            raise
        return BrowserPage(page, url)

    async def close(self, page: RenderedPage) -> None:
        if isinstance(page, BrowserPage):
            await page.page.close()


__all__ = ["BrowserPage", "BrowserRenderer", "BLOCKED_RESOURCE_TYPES"]

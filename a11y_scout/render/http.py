# a11y_scout/render/http.py
"""
Browser-free renderer: fetches HTML with aiohttp and queries it with BeautifulSoup.

No JavaScript runs, so :meth:`HttpPage.evaluate` always fails; pair it with an
analyzer that reads markup only.
"""
from __future__ import annotations

import asyncio
from typing import Any, List, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout
from bs4 import BeautifulSoup
from bs4.element import Tag
from yarl import URL

from a11y_scout.errors import RenderError
from a11y_scout.logger import get_logger
from a11y_scout.render.base import PageRenderer, RenderedPage

_HTML_TYPES = ("text/html", "application/xhtml+xml")
_DEFAULT_PORTS = {"http": 80, "https": 443}
DEFAULT_USER_AGENT = "A11yScoutBot/1.0"

log = get_logger("render.http")


def resolve_href(base: str, href: str) -> str:
    """
    Resolve *href* against *base* and serialize it like a browser's ``a.href``.

    Scheme and host are lowercased, a default port is dropped and an empty
    path becomes ``/``. An href that cannot be parsed is returned trimmed.
    """
    raw = href.strip()
    try:
        resolved = URL(base).join(URL(raw))
    except ValueError:
        return raw
    scheme = resolved.scheme.lower()
    if scheme not in ("http", "https") or not resolved.raw_host:
        return str(resolved)
    return str(
        URL.build(
            scheme=scheme,
            user=resolved.raw_user,
            password=resolved.raw_password,
            host=resolved.raw_host.lower(),
            port=None if resolved.port == _DEFAULT_PORTS[scheme] else resolved.port,
            path=resolved.raw_path or "/",
            query_string=resolved.raw_query_string,
            fragment=resolved.raw_fragment,
            encoded=True,
        )
    )


class HttpPage:
    """Static document fetched over HTTP."""

    def __init__(self, url: str, html: str) -> None:
        self.url = url
        self.html = html
        self._soup: Optional[BeautifulSoup] = None

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = BeautifulSoup(self.html, "html.parser")
        return self._soup

    def _base_url(self) -> str:
        base = self.soup.find("base", href=True)
        if isinstance(base, Tag):
            href = base.get("href")
            if isinstance(href, str) and href.strip():
                return resolve_href(self.url, href)
        return self.url

    async def content(self) -> str:
        return self.html

    async def hrefs(self) -> List[str]:
        base = self._base_url()
        hrefs: List[str] = []
        for tag in self.soup.find_all("a"):
            if not isinstance(tag, Tag):
                continue
            href_val = tag.get("href")
            if not isinstance(href_val, str):
                hrefs.append("")
                continue
            hrefs.append(resolve_href(base, href_val))
        return hrefs

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        raise RenderError(self.url, "script evaluation requires the browser renderer")


class HttpRenderer(PageRenderer):
    """Renders pages with a single shared aiohttp session."""

    def __init__(self, timeout: float = 30.0, user_agent: Optional[str] = None) -> None:
        self.default_timeout = timeout
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.client: Optional[ClientSession] = None

    async def start(self) -> None:
        self.client = ClientSession(
            timeout=ClientTimeout(total=self.default_timeout),
            headers={"User-Agent": self.user_agent},
            raise_for_status=False,
        )

    async def stop(self) -> None:
        if self.client and not self.client.closed:
            await self.client.close()
        self.client = None

    async def render(
        self,
        url: str,
        *,
        wait_until: str = "load",
        timeout: Optional[float] = None,
    ) -> RenderedPage:
        if self.client is None:
            raise RuntimeError("Session not initialized")
        request_timeout = ClientTimeout(total=timeout or self.default_timeout)
        try:
            async with self.client.get(url, timeout=request_timeout) as resp:
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if mime not in _HTML_TYPES:
                    raise RenderError(url, f"non-HTML content ({mime or 'unknown'})")
                text = await resp.text()
                final_url = str(resp.url)
        except asyncio.TimeoutError as exc:
            raise RenderError(url, "navigation timed out") from exc
        except ClientError as exc:
            raise RenderError(url, f"request failed: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise RenderError(url, f"undecodable body: {exc.reason}") from exc
        log.debug("Fetched %s (%d bytes)", url, len(text))
        return HttpPage(final_url, text)

    async def close(self, page: RenderedPage) -> None:
        # nothing is held per page; the response is already released
        return None


__all__ = ["HttpPage", "HttpRenderer", "DEFAULT_USER_AGENT", "resolve_href"]

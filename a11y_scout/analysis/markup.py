# a11y_scout/analysis/markup.py
"""
Static accessibility checks over the page markup, for renderers that cannot
run JavaScript. The payload mimics the axe result shape (violations/passes)
so reports treat both analyzers alike.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from a11y_scout.analysis.base import PageAnalyzer
from a11y_scout.errors import AnalysisError, RenderError
from a11y_scout.render.base import RenderedPage

_SNIPPET_LEN = 200

Finder = Callable[[BeautifulSoup], List[Tag]]


def _snippet(tag: Tag) -> str:
    html = str(tag)
    return html if len(html) <= _SNIPPET_LEN else html[:_SNIPPET_LEN] + "…"


def _accessible_name(tag: Tag) -> str:
    for attr in ("aria-label", "title"):
        value = tag.get(attr)
        if isinstance(value, str) and value.strip():
            return value.strip()
    if tag.get("aria-labelledby"):
        return "labelledby"
    text = tag.get_text(" ", strip=True)
    if text:
        return text
    for img in tag.find_all("img"):
        alt = img.get("alt") if isinstance(img, Tag) else None
        if isinstance(alt, str) and alt.strip():
            return alt.strip()
    return ""


def _missing_lang(soup: BeautifulSoup) -> List[Tag]:
    html = soup.find("html")
    if not isinstance(html, Tag):
        return []
    lang = html.get("lang")
    return [] if isinstance(lang, str) and lang.strip() else [html]


def _missing_title(soup: BeautifulSoup) -> List[Tag]:
    title = soup.find("title")
    if isinstance(title, Tag) and title.get_text(strip=True):
        return []
    head = soup.find("head")
    return [head if isinstance(head, Tag) else soup.new_tag("head")]


def _images_without_alt(soup: BeautifulSoup) -> List[Tag]:
    return [
        img for img in soup.find_all("img")
        if isinstance(img, Tag)
        and img.get("alt") is None
        and img.get("role") not in ("presentation", "none")
        and img.get("aria-hidden") != "true"
    ]


def _unnamed(selector: str) -> Finder:
    def find(soup: BeautifulSoup) -> List[Tag]:
        return [
            tag for tag in soup.select(selector)
            if tag.get("aria-hidden") != "true" and not _accessible_name(tag)
        ]
    return find


# id -> (impact, description, finder)
RULES: Dict[str, Tuple[str, str, Finder]] = {
    "html-has-lang": ("serious", "<html> element must have a lang attribute", _missing_lang),
    "document-title": ("serious", "Documents must have <title> element", _missing_title),
    "image-alt": ("critical", "Images must have alternate text", _images_without_alt),
    "link-name": ("serious", "Links must have discernible text", _unnamed("a[href]")),
    "button-name": ("critical", "Buttons must have discernible text", _unnamed("button")),
}


class MarkupAnalyzer(PageAnalyzer):
    """Checks a fixed rule set against the page HTML."""

    def __init__(self, wait_until: str = "load") -> None:
        self.wait_until = wait_until

    async def analyze(self, page: RenderedPage) -> Any:
        try:
            html = await page.content()
        except RenderError as exc:
            raise AnalysisError(page.url, exc.reason) from exc
        if not html.strip():
            raise AnalysisError(page.url, "empty document")
        return self.check(html, page.url)

    @staticmethod
    def check(html: str, url: str = "") -> Dict[str, Any]:
        soup = BeautifulSoup(html, "html.parser")
        violations: List[Dict[str, Any]] = []
        passes: List[Dict[str, Any]] = []
        for rule_id, (impact, description, finder) in RULES.items():
            offenders = finder(soup)
            entry: Dict[str, Any] = {"id": rule_id, "description": description}
            if offenders:
                entry["impact"] = impact
                entry["nodes"] = [{"html": _snippet(tag)} for tag in offenders]
                violations.append(entry)
            else:
                passes.append(entry)
        return {"url": url, "violations": violations, "passes": passes}


__all__ = ["MarkupAnalyzer", "RULES"]

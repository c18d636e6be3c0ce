# a11y_scout/analysis/axe.py
"""
axe-core audit: the library source is injected into the rendered page and
``axe.run`` is called with a WCAG tag filter.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence, Union

from a11y_scout.analysis.base import PageAnalyzer
from a11y_scout.config import DEFAULT_TAGS
from a11y_scout.errors import AnalysisError, RenderError
from a11y_scout.render.base import RenderedPage

DEFAULT_AXE_PATH = Path("node_modules") / "axe-core" / "axe.min.js"

_RUN_SCRIPT = """
tags => window.axe.run({
    runOnly: {
        type: 'tag',
        values: tags
    }
})
"""


def load_axe_source(path: Union[str, Path, None] = None) -> str:
    """
    Read the axe-core script.

    Without *path* the copy installed by npm under the current directory is used.
    Raises FileNotFoundError when the file is missing.
    """
    script = Path(path).expanduser() if path is not None else Path.cwd() / DEFAULT_AXE_PATH
    if not script.is_file():
        raise FileNotFoundError(f"axe-core script not found: {script}")
    return script.read_text(encoding="utf-8")


class AxeAnalyzer(PageAnalyzer):
    """Runs axe-core inside a browser page."""

    def __init__(
        self,
        source: str,
        tags: Optional[Sequence[str]] = None,
        wait_until: str = "networkidle",
    ) -> None:
        self.source = source
        self.tags = list(tags or DEFAULT_TAGS)
        self.wait_until = wait_until

    async def analyze(self, page: RenderedPage) -> Any:
        try:
            await page.evaluate(self.source)
            result = await page.evaluate(_RUN_SCRIPT, self.tags)
        except RenderError as exc:
            raise AnalysisError(page.url, exc.reason) from exc
        if not isinstance(result, dict):
            raise AnalysisError(page.url, f"malformed axe result: {type(result).__name__}")
        return result


__all__ = ["AxeAnalyzer", "DEFAULT_AXE_PATH", "load_axe_source"]

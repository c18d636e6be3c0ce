"""a11y_scout.render: page rendering backends (Playwright browser, plain HTTP)."""

from a11y_scout.render.base import PageRenderer, RenderedPage

__all__ = ["PageRenderer", "RenderedPage"]

"""a11y_scout.analysis: page analyzers (axe-core in the browser, static markup checks)."""

from a11y_scout.analysis.axe import AxeAnalyzer, load_axe_source
from a11y_scout.analysis.base import PageAnalyzer
from a11y_scout.analysis.markup import MarkupAnalyzer

__all__ = ["AxeAnalyzer", "MarkupAnalyzer", "PageAnalyzer", "load_axe_source"]

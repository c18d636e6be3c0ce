"""a11y_scout.report: JSON and HTML report writers used by the CLI."""

from a11y_scout.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from a11y_scout.report.json_report import render_json

__all__ = ["DEFAULT_TEMPLATE_DIR", "render_html", "render_json"]

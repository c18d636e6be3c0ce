# File: a11y_scout/aggregator.py
"""a11y_scout.aggregator: summary of scan results for reports."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Sequence, TypedDict

from a11y_scout.crawler.models import ScanResult


class PageSummary(TypedDict):
    """Per-page line of the report."""

    url: str
    violations: int
    rules: List[str]


@dataclass(slots=True)
class ScanReport:
    """Scanned pages with violation counts, plus totals per rule."""

    pages: List[PageSummary] = field(default_factory=list)
    total_violations: int = 0
    rules: Dict[str, int] = field(default_factory=dict)

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


def _violations(payload: Any) -> List[Dict[str, Any]]:
    # payloads are opaque; only axe-shaped mappings are counted
    if not isinstance(payload, dict):
        return []
    violations = payload.get("violations")
    if not isinstance(violations, list):
        return []
    return [v for v in violations if isinstance(v, dict)]


def aggregate_results(results: Sequence[ScanResult]) -> ScanReport:
    """Build a ScanReport; pages keep the order of *results*."""
    report = ScanReport()
    per_rule: Counter[str] = Counter()
    for entry in results:
        violations = _violations(entry.result)
        rule_ids = [str(v.get("id", "unknown")) for v in violations]
        per_rule.update(rule_ids)
        report.pages.append({"url": entry.url, "violations": len(violations), "rules": rule_ids})
    report.total_violations = sum(page["violations"] for page in report.pages)
    report.rules = dict(per_rule.most_common())
    return report


__all__ = ["PageSummary", "ScanReport", "aggregate_results"]

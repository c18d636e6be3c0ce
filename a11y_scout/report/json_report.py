# a11y_scout/report/json_report.py

"""
JSON report for A11yScout: the response envelope written to a file.
"""
import json
from pathlib import Path
from typing import Any


def render_json(data: Any, output_path: Path | str) -> Path:
    """
    Save *data* (usually the ``{"success": ..., "results": ...}`` envelope) as JSON.

    :param data: JSON-serializable object
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from a11y_scout.report.json_report import render_json
    report_path = render_json(build_response(results), 'reports/scan.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output

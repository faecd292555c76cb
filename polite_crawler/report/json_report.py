# polite_crawler/report/json_report.py

"""
JSON report for a crawl run.

Serializes a CrawlReport (and optionally search hits) to a file.
"""
import json
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from polite_crawler.crawler.models import CrawlReport
from polite_crawler.index import Hit


def render_json(
    report: CrawlReport,
    output_path: Path | str,
    hits: Optional[Dict[str, List[Hit]]] = None,
    *,
    pretty: bool = True,
) -> Path:
    """
    Save *report* as JSON at *output_path*.

    :param report: counters of a finished crawl
    :param output_path: path of the JSON file, parent dirs are created
    :param hits: optional mapping query -> hits to include under "searches"
    :return: Path of the saved file

    Example:
    ```python
    from polite_crawler.report.json_report import render_json
    report_path = render_json(report, 'reports/crawl.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = asdict(report)
    if hits is not None:
        data["searches"] = {
            query: [asdict(hit) for hit in query_hits] for query, query_hits in hits.items()
        }

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)

    return output

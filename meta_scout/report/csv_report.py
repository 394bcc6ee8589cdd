# meta_scout/report/csv_report.py
"""
CSV export: URL, title, keywords and description per page, every cell quoted.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, List

from meta_scout.crawler.models import PageRecord

CSV_HEADER: List[str] = ["URL", "Title", "Meta keywords", "Meta description"]


def csv_rows(pages: Iterable[PageRecord]) -> List[List[str]]:
    rows = [list(CSV_HEADER)]
    for page in pages:
        rows.append(
            [
                page.url,
                page.title or "",
                page.meta.get("keywords", ""),
                page.meta.get("description", ""),
            ]
        )
    return rows


def render_csv(pages: Iterable[PageRecord], output_path: Path | str) -> Path:
    """Сохраняет CSV с одной строкой на страницу; принимает CrawlResult или список записей."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerows(csv_rows(pages))
    return output

# File: meta_scout/report/__init__.py
"""meta_scout.report: Сохранение результатов обхода в JSON, CSV и HTML."""

from __future__ import annotations

from meta_scout.report.csv_report import render_csv
from meta_scout.report.html_report import render_html
from meta_scout.report.json_report import render_json

__all__ = ["render_json", "render_csv", "render_html"]

# File: site_probe/report/__init__.py
"""site_probe.report: сохранение отчётов прогона (JSON-артефакты и HTML-сводка)."""

from __future__ import annotations

from site_probe.report.html_report import render_html
from site_probe.report.json_report import REPORT_FILES, render_json, write_reports

__all__ = ["render_json", "render_html", "write_reports", "REPORT_FILES"]

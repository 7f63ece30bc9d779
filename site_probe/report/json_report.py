# site_probe/report/json_report.py

"""
Сохранение JSON-отчётов SiteProbe.

Прогон даёт четыре файла в одном каталоге:
``tested_sites.json``, ``error_pages.json``, ``empty_content_pages.json`` и
``test_report.json`` (полный RunResult, посещённые URL — массивом).
"""
import json
from pathlib import Path
from typing import Any, Dict

from site_probe.aggregator import RunReport

REPORT_FILES = {
    "tested_sites": "tested_sites.json",
    "error_pages": "error_pages.json",
    "empty_content_pages": "empty_content_pages.json",
    "test_report": "test_report.json",
}


def report_payloads(report: RunReport) -> Dict[str, Any]:
    """Логические записи отчёта, по имени артефакта."""
    results = report.results.to_dict()
    return {
        "tested_sites": [site.to_dict() for site in report.sites],
        "error_pages": results["errors"],
        "empty_content_pages": results["emptyContent"],
        "test_report": results,
    }


def write_reports(report: RunReport, report_dir: Path | str) -> Dict[str, Path]:
    """
    Сохраняет четыре JSON-файла отчёта в report_dir.

    :param report: итог прогона
    :param report_dir: каталог для файлов (создаётся при необходимости)
    :return: имя артефакта -> путь сохранённого файла

    Пример:
    ```python
    from site_probe.report.json_report import write_reports
    files = write_reports(report, 'report')
    print(files['test_report'])
    ```
    """
    directory = Path(report_dir)
    directory.mkdir(parents=True, exist_ok=True)

    saved: Dict[str, Path] = {}
    for name, payload in report_payloads(report).items():
        path = directory / REPORT_FILES[name]
        with path.open('w', encoding='utf-8') as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        saved[name] = path
    return saved


def render_json(report: RunReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """Сохраняет весь отчёт (сайты + результаты) одним JSON-файлом."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=pretty), encoding='utf-8')
    return output

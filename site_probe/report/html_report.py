# File: site_probe/report/html_report.py
"""site_probe.report.html_report: HTML-сводка прогона с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, PackageLoader, select_autoescape

from site_probe.aggregator import RunReport

TEMPLATE_NAME = "report.html.j2"


def _environment(template_dir: Optional[Union[Path, str]]) -> Environment:
    loader = (
        FileSystemLoader(str(template_dir))
        if template_dir is not None
        else PackageLoader("site_probe.report", "templates")
    )
    return Environment(loader=loader, autoescape=select_autoescape(["html", "xml", "j2"]))


def render_html(
    report: RunReport,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит HTML-сводку и сохраняет её по указанному пути.

    Args:
        report: итог прогона.
        output_path: путь к итоговому HTML-файлу.
        template_dir: каталог со своим ``report.html.j2``; по умолчанию шаблон пакета.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    template = _environment(template_dir).get_template(TEMPLATE_NAME)
    results = report.results
    context: dict[str, Any] = {
        "sites": [site.to_dict() for site in report.sites],
        "languages": {
            lang: summary.to_dict() for lang, summary in sorted(results.language_summary.items())
        },
        "totals": {
            "tested": len(results.urls_tested),
            "success": len(results.success),
            "errors": len(results.errors),
            "empty_content": len(results.empty_content),
        },
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path

# File: tests/test_cli.py
"""Тесты для CLI (`site_probe.cli`) с использованием click.testing.CliRunner.
Проверяют команды `run`, `config`, `--version`, а также обработку ошибок.
"""
import importlib
import json

import pytest
from click.testing import CliRunner
from site_probe.aggregator import RunReport, SiteReport
from site_probe.cli import cli
from site_probe.crawler.models import Classification, VisitRecord
from site_probe.engine import ProbeOutcome
from site_probe.report.json_report import write_reports

# site_probe/__init__.py re-exports the click group as `cli`, shadowing the submodule attribute.
cli_module = importlib.import_module("site_probe.cli")


@pytest.fixture()
def captured(monkeypatch):
    """Патчим probe: без сети, отчёт из одного сайта; запоминаем конфиг."""
    seen = {}

    async def fake_probe(cfg):
        seen["config"] = cfg
        report = RunReport()
        site = SiteReport("https://example.com", list(cfg.languages))
        record = VisitRecord("https://example.com/en/", "en", Classification.ERROR)
        site.record(record)
        report.results.record(record)
        report.sites.append(site)
        return ProbeOutcome(report, write_reports(report, cfg.report_dir))

    monkeypatch.setattr(cli_module, "probe", fake_probe)
    return seen


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SiteProbe" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "probe.json"
    cfg_file.write_text(
        json.dumps({"languages": ["en", "de"], "language_concurrency": 2}), encoding="utf-8"
    )

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output[result.output.index("{"):])
    assert data["languages"] == ["en", "de"]
    assert data["language_concurrency"] == 2


def test_bad_config_exits_with_error(tmp_path):
    cfg_file = tmp_path / "probe.yaml"
    cfg_file.write_text("site_concurrency: 0\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


def test_run_writes_reports(tmp_path, captured):
    out = tmp_path / "report"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "run",
            "--site", "example.com",
            "--language", "en", "--language", "pt",
            "--report-dir", str(out),
            "--language-concurrency", "2",
        ],
    )

    assert result.exit_code == 0, result.output
    cfg = captured["config"]
    assert cfg.sites == ["example.com"]
    assert cfg.languages == ["en", "pt"]
    assert cfg.language_concurrency == 2
    assert "1 error" in result.output
    assert json.loads((out / "error_pages.json").read_text(encoding="utf-8")) == [
        "https://example.com/en/"
    ]
    assert (out / "tested_sites.json").exists()
    assert (out / "empty_content_pages.json").exists()
    assert (out / "test_report.json").exists()


def test_run_with_html(tmp_path, captured):
    html = tmp_path / "summary.html"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["run", "--site", "example.com", "--report-dir", str(tmp_path / "r"), "--html", str(html)]
    )

    assert result.exit_code == 0, result.output
    assert "https://example.com/en/" in html.read_text(encoding="utf-8")


def test_run_nothing_to_test(tmp_path, monkeypatch):
    async def empty_probe(cfg):
        return None

    monkeypatch.setattr(cli_module, "probe", empty_probe)
    runner = CliRunner()
    result = runner.invoke(cli, ["run", "--report-dir", str(tmp_path / "r")])

    assert result.exit_code == 0
    assert "Nothing to test" in result.output
    assert not (tmp_path / "r").exists()


def test_run_failure_exits_non_zero(tmp_path, monkeypatch):
    async def broken_probe(cfg):
        raise RuntimeError("executor defect")

    monkeypatch.setattr(cli_module, "probe", broken_probe)
    runner = CliRunner()
    result = runner.invoke(cli, ["run", "--site", "example.com", "--report-dir", str(tmp_path)])

    assert result.exit_code == 1
    assert "executor defect" in result.output

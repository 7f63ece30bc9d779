# File: tests/conftest.py
import pytest

from site_probe.config import ProbeConfig


@pytest.fixture()
def basic_config(tmp_path) -> ProbeConfig:
    """
    Return a small valid ProbeConfig writing reports under tmp_path.
    """
    return ProbeConfig(
        sites=["ex.com"],
        languages=["en", "pt"],
        navigation_timeout=2.0,
        user_agent="TestAgent/1.0",
        report_dir=tmp_path / "report",
    )

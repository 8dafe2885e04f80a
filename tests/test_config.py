"""
Tests for settings helpers, logger setup and the hosted model factory
"""

from pathlib import Path

import pytest
from loguru import logger

from bizassist.config.settings import PROJECT_ROOT, Settings, settings
from bizassist.llm.client import create_hosted_llm, create_llm
from bizassist.utils.logger import setup_logger


def test_relative_sqlite_url_resolves_to_project_root():
    url = Settings(database_url="sqlite:///data/test-resolve.db").resolved_database_url()
    assert url == f"sqlite:///{PROJECT_ROOT / 'data' / 'test-resolve.db'}"


@pytest.mark.parametrize("url", [
    "sqlite:////tmp/absolute.db",
    "sqlite:///:memory:",
    "postgresql://user:pw@localhost/bizassist",
])
def test_other_urls_are_unchanged(url):
    assert Settings(database_url=url).resolved_database_url() == url


def test_relative_log_dir():
    assert Settings(log_dir="data/logs").resolved_log_dir() == PROJECT_ROOT / "data" / "logs"
    assert Settings(log_dir="/var/log/bizassist").resolved_log_dir() == Path("/var/log/bizassist")


def test_setup_logger_writes_file(tmp_path):
    setup_logger(level="WARNING", log_dir=tmp_path)
    logger.debug("file sink records debug output")
    # Removing the sinks closes and flushes the log file
    logger.remove()

    assert "file sink records debug output" in (tmp_path / "app.log").read_text()


def test_hosted_model_disabled(monkeypatch):
    monkeypatch.setattr(settings, "hosted_model_enabled", False)
    assert create_hosted_llm() is None


def test_missing_openai_key_means_no_hosted_model(monkeypatch):
    monkeypatch.setattr(settings, "hosted_model_enabled", True)
    monkeypatch.setattr(settings, "llm_provider", "openai")
    monkeypatch.setattr(settings, "openai_api_key", "")
    assert create_hosted_llm() is None


def test_unknown_provider(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "bard")
    with pytest.raises(ValueError):
        create_llm()

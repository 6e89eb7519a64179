from __future__ import annotations

import pytest

from birch import config


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    monkeypatch.setattr(config, "load_env", lambda: None)
    monkeypatch.delenv("BIRCH_TRACE", raising=False)
    monkeypatch.delenv("BIRCH_MAX_STEPS", raising=False)


def test_defaults():
    s = config.load_settings()
    assert s.trace is False
    assert s.max_steps is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("BIRCH_TRACE", "yes")
    monkeypatch.setenv("BIRCH_MAX_STEPS", " 500 ")
    s = config.load_settings()
    assert s.trace is True
    assert s.max_steps == 500


@pytest.mark.parametrize("raw", ["lots", "-1"])
def test_invalid_max_steps(monkeypatch, raw: str):
    monkeypatch.setenv("BIRCH_MAX_STEPS", raw)
    with pytest.raises(ValueError, match="BIRCH_MAX_STEPS"):
        config.load_settings()


def test_repo_root_contains_package():
    assert (config.repo_root() / "birch" / "__init__.py").exists()

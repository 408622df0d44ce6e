"""Unit tests for config.py"""

import pytest
from pydantic import ValidationError

from mdpage.config import load_config


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run from an empty directory with no MDPAGE_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in ("DB_URL", "STYLE", "ACCENT", "OUTPUT_DIR", "PUBLIC", "LOG_LEVEL"):
        monkeypatch.delenv(f"MDPAGE_{name}", raising=False)


def test_load_config_defaults():
    """Settings defaults apply when no config.yaml, env var, or CLI override exists."""
    settings = load_config()
    assert settings.db_url == "sqlite:///mdpage.db"
    assert settings.style == "editorial"
    assert settings.accent is None
    assert settings.output_dir == "dist"
    assert settings.public is True
    assert settings.log_level == "WARNING"


def test_load_config_uses_env_db_url(monkeypatch):
    """MDPAGE_DB_URL env var is picked up by load_config."""
    monkeypatch.setenv("MDPAGE_DB_URL", "sqlite:///env.db")
    assert load_config().db_url == "sqlite:///env.db"


def test_load_config_reads_config_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("style: warm\noutput_dir: site\n")
    settings = load_config()
    assert settings.style == "warm"
    assert settings.output_dir == "site"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """MDPAGE_STYLE takes precedence over config.yaml style."""
    (tmp_path / "config.yaml").write_text("style: warm\n")
    monkeypatch.setenv("MDPAGE_STYLE", "mono")
    assert load_config().style == "mono"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("MDPAGE_STYLE", "mono")
    assert load_config(overrides={"style": "bold"}).style == "bold"
    assert load_config(overrides={"style": None}).style == "mono"


def test_load_config_env_public_coerced(monkeypatch):
    """MDPAGE_PUBLIC env var is coerced to bool."""
    monkeypatch.setenv("MDPAGE_PUBLIC", "false")
    assert load_config().public is False


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_rejects_bad_accent():
    with pytest.raises(ValidationError):
        load_config(overrides={"accent": "red"})


def test_load_config_accepts_short_hex_accent():
    assert load_config(overrides={"accent": "#F53"}).accent == "#F53"


def test_load_config_rejects_bad_log_level(monkeypatch):
    monkeypatch.setenv("MDPAGE_LOG_LEVEL", "LOUD")
    with pytest.raises(ValidationError):
        load_config()

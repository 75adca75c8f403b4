from __future__ import annotations

from pathlib import Path

import pytest

from lms_csv.config.loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    ConfigError,
    load_config,
    resolve_config_path,
)


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source_directory == "./data"
    assert cfg.business_timezone == "America/Bogota"
    assert cfg.max_file_size_mb == 150
    assert cfg.max_file_size_bytes == 150 * 1024 * 1024
    assert cfg.max_displayed_errors == 2
    assert cfg.audit_log_directory == "./logs"


def test_load_config_defaults(temp_workdir: Path):
    path = temp_workdir / "config" / "portal.yml"
    path.write_text("source_directory: ./incoming\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.source_directory == "./incoming"
    assert cfg.business_timezone == "America/Bogota"
    assert cfg.max_file_size_mb == 150
    assert cfg.max_displayed_errors == 20
    assert cfg.audit_log_directory == "./logs"


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_invalid_yaml(temp_workdir: Path):
    path = temp_workdir / "config" / "portal.yml"
    path.write_text("source_directory: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(path)


def test_load_config_unknown_timezone(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("America/Bogota", "Mars/Olympus")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="unknown business_timezone"):
        load_config(write_config)


def test_resolve_config_path_precedence(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert resolve_config_path() == DEFAULT_CONFIG_PATH
    monkeypatch.setenv(CONFIG_ENV_VAR, "/etc/lms/portal.yml")
    assert resolve_config_path() == Path("/etc/lms/portal.yml")
    assert resolve_config_path("other.yml") == Path("other.yml")

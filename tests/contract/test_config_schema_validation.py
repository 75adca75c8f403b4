from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest
import yaml
from jsonschema.exceptions import ValidationError

from lms_csv.config.loader import SCHEMA_PATH, ConfigError, load_config

"""Config schema contract tests."""

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_bundled_sample_config_is_valid():
    data = yaml.safe_load((PROJECT_ROOT / "config" / "portal.yml").read_text(encoding="utf-8"))
    jsonschema.validate(data, _schema())


def test_schema_minimal_config():
    jsonschema.validate({"source_directory": "./data"}, _schema())


def test_schema_missing_required_key():
    with pytest.raises(ValidationError):
        jsonschema.validate({"business_timezone": "UTC"}, _schema())


@pytest.mark.parametrize(
    "config",
    [
        {"source_directory": "./data", "max_file_size_mb": 0},
        {"source_directory": "./data", "max_file_size_mb": "150"},
        {"source_directory": "./data", "max_displayed_errors": -1},
        {"source_directory": ""},
        {"source_directory": "./data", "unexpected": True},
    ],
)
def test_schema_rejects_invalid_values(config):
    with pytest.raises(ValidationError):
        jsonschema.validate(config, _schema())


def test_loader_reports_required_property(write_config: Path):
    write_config.write_text("business_timezone: UTC\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_loader_rejects_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_loader_rejects_non_mapping_document(write_config: Path):
    write_config.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)

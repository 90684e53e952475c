"""Test configuration loading."""

import pytest
from pydantic import ValidationError

from genpinout.config import GenPinoutConfig

CONFIG_YAML = """\
genpinout:
  log_level: DEBUG
  output_dir: build
  default:
    page: A3-L
    dpi: 150
  strict_references: true
"""


def test_default_config():
    config = GenPinoutConfig()
    assert config.log_level == "INFO"
    assert config.default_page == "A4-L"
    assert config.default_dpi == 300
    assert config.strict_references is False
    assert config.sine_samples_per_period == 32


def test_yaml_config(tmp_path):
    path = tmp_path / "genpinout.yaml"
    path.write_text(CONFIG_YAML)
    config = GenPinoutConfig.from_yaml(path)
    assert config.log_level == "DEBUG"
    assert config.output_dir == "build"
    assert config.default_page == "A3-L"
    assert config.default_dpi == 150
    assert config.strict_references is True


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "genpinout.yaml"
    path.write_text(CONFIG_YAML)
    monkeypatch.setenv("GENPINOUT_DEFAULT_DPI", "600")
    config = GenPinoutConfig.from_yaml(path)
    assert config.default_dpi == 600
    assert config.default_page == "A3-L"


def test_missing_yaml_uses_defaults(tmp_path):
    config = GenPinoutConfig.from_yaml(tmp_path / "absent.yaml")
    assert config.output_dir == "."


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        GenPinoutConfig(png_scale=0)
    with pytest.raises(ValidationError):
        GenPinoutConfig(sine_samples_per_period=2)

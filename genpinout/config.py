"""Configuration loading from YAML + environment variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from genpinout.render.style import DEFAULT_DPI, DEFAULT_PAGE, SINE_SAMPLES_PER_PERIOD

ENV_PREFIX = "GENPINOUT_"


class GenPinoutConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)

    # Logging
    log_level: str = "INFO"

    # Output
    output_dir: str = "."
    overwrite: bool = False
    png_scale: float = Field(default=1.0, gt=0)

    # Page defaults, overridden by PAGE / DPI in a script
    default_page: str = DEFAULT_PAGE
    default_dpi: int = DEFAULT_DPI

    # Rendering
    strict_references: bool = False
    sine_samples_per_period: int = Field(default=SINE_SAMPLES_PER_PERIOD, ge=4)

    # Network
    font_fetch_timeout: float = 10.0

    @classmethod
    def from_yaml(cls, path: str | Path = "genpinout.yaml") -> GenPinoutConfig:
        """Load config from YAML file, with env vars taking precedence."""
        yaml_path = Path(path)
        yaml_data: dict[str, Any] = {}

        if yaml_path.exists():
            with yaml_path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
            yaml_data = _flatten_yaml(raw.get("genpinout", {}))

        # Init kwargs outrank the environment in pydantic-settings.
        yaml_data = {
            key: value for key, value in yaml_data.items()
            if f"{ENV_PREFIX}{key}".upper() not in os.environ
        }
        return cls(**yaml_data)


def _flatten_yaml(data: dict, prefix: str = "") -> dict:
    """Flatten nested YAML into flat key-value pairs for Pydantic."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        full_key = key if not prefix else f"{prefix}_{key}"
        if isinstance(value, dict):
            flat.update(_flatten_yaml(value, full_key))
        else:
            flat[full_key] = value
    return flat

"""Output files for rendered pinouts.

SVG text and PNG bytes land next to each other under the configured output
directory. Existing files are only replaced when overwriting is allowed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from genpinout.config import GenPinoutConfig
from genpinout.errors import OutputExistsError

log = logging.getLogger(__name__)


def default_output_path(csv_path: str | Path, config: Optional[GenPinoutConfig] = None) -> Path:
    """``<output_dir>/<script stem>.svg`` for a script path."""
    config = config or GenPinoutConfig()
    return Path(config.output_dir) / f"{Path(csv_path).stem}.svg"


def _prepare(path: Path, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise OutputExistsError(f"{path} already exists (use --overwrite to replace it)")
    path.parent.mkdir(parents=True, exist_ok=True)


def save_svg(svg: str, path: str | Path, overwrite: bool = False) -> Path:
    """Write SVG text. Returns the file path."""
    path = Path(path)
    _prepare(path, overwrite)
    path.write_text(svg, encoding="utf-8")
    log.info("SVG saved: %s", path)
    return path


def save_png(data: bytes, path: str | Path, overwrite: bool = False) -> Path:
    path = Path(path)
    _prepare(path, overwrite)
    path.write_bytes(data)
    log.info("PNG saved: %s (%d bytes)", path, len(data))
    return path

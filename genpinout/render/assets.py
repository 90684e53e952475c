"""Embedded assets: raster images, SVG icons and web font stylesheets.

Images are decoded with Pillow, optionally cropped and resized, then inlined
as base64 PNG data URLs. Icons are inlined as-is. Positions name the element
center and rotation happens about that center.
"""

from __future__ import annotations

import base64
import io
import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

import httpx
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from genpinout.errors import (
    FontFetchError,
    InvalidAsset,
    InvalidCropBounds,
    MissingAsset,
    PartialCropSpecification,
)
from genpinout.render.document import Image
from genpinout.render.geometry import normalize, rotate_transform
from genpinout.render.style import ICON_SIZE

log = logging.getLogger(__name__)

Crop = tuple[Optional[float], Optional[float], Optional[float], Optional[float]]

_LENGTH = re.compile(r"^\s*([0-9]*\.?[0-9]+)")

# Modes stored as-is; palette and bilevel images are expanded before resampling.
_PNG_MODES = ("RGB", "RGBA", "L", "LA", "I")


class AssetLoader:
    """Loads assets relative to the script's directory."""

    def __init__(
        self,
        base_dir: Path | str = ".",
        http_client: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_dir = Path(base_dir)
        self.timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def resolve_path(self, name: str) -> Path:
        path = Path(name)
        if not path.is_absolute():
            path = self.base_dir / path
        if not path.is_file():
            raise MissingAsset(f"image {path} not found")
        return path

    def embed_image(
        self,
        name: str,
        x: Optional[float],
        y: Optional[float],
        width: Optional[float],
        height: Optional[float],
        crop: Crop = (None, None, None, None),
        rotation: float = 0.0,
        page: tuple[int, int] = (0, 0),
    ) -> Image:
        """Decode, crop, resize and inline a raster image."""
        path = self.resolve_path(name)
        try:
            with PILImage.open(path) as source:
                source.load()
                img = _png_ready(_crop(source, crop))
                if width is not None or height is not None:
                    size = (
                        max(1, round(normalize(width, img.width))),
                        max(1, round(normalize(height, img.height))),
                    )
                    img = img.resize(size, PILImage.Resampling.LANCZOS)
                buf = io.BytesIO()
                img.save(buf, format="PNG")
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise InvalidAsset(f"cannot decode image {path}: {e}") from e

        href = "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode()
        log.debug("Embedded image %s at %dx%d", path.name, img.width, img.height)
        return _place(href, x, y, img.width, img.height, rotation, page)

    def embed_icon(
        self,
        name: str,
        x: Optional[float],
        y: Optional[float],
        width: Optional[float],
        height: Optional[float],
        rotation: float = 0.0,
        page: tuple[int, int] = (0, 0),
    ) -> Image:
        """Inline an SVG icon, scaled against its natural size."""
        path = self.resolve_path(name)
        if path.suffix.lower() != ".svg":
            raise InvalidAsset(f"icon {path} must be an SVG")

        data = path.read_bytes()
        natural_w, natural_h = svg_natural_size(data)
        w = normalize(width, natural_w)
        h = normalize(height, natural_h)

        href = "data:image/svg+xml;base64," + base64.b64encode(data).decode()
        return _place(href, x, y, w, h, rotation, page)

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------

    def _get_client(self) -> httpx.Client:
        if not self._client:
            self._client = httpx.Client(timeout=self.timeout, follow_redirects=True)
        return self._client

    def fetch_font_css(self, link: str) -> str:
        """Download a web font stylesheet (e.g. Google Fonts) for inlining."""
        client = self._get_client()
        try:
            resp = client.get(link)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise FontFetchError(f"could not fetch font stylesheet {link}: {e}") from e
        log.info("Fetched font stylesheet %s (%d bytes)", link, len(resp.content))
        return resp.text

    def close(self) -> None:
        if self._client and self._owns_client:
            self._client.close()
            self._client = None


def _png_ready(img: PILImage.Image) -> PILImage.Image:
    """Convert to a mode PNG can store and LANCZOS can resample."""
    if img.mode in _PNG_MODES:
        return img
    if img.mode == "F" or img.mode.startswith("I;16"):
        return img.convert("I")
    alpha = "A" in img.getbands() or "transparency" in img.info
    return img.convert("RGBA" if alpha else "RGB")


def _crop(img: PILImage.Image, crop: Crop) -> PILImage.Image:
    given = [value is not None for value in crop]
    if not any(given):
        return img
    if not all(given):
        raise PartialCropSpecification("crop needs <cx>, <cy>, <cw> and <ch>, or none of them")

    left, top, w, h = (round(value) for value in crop)
    if left < 0 or top < 0 or w <= 0 or h <= 0 or left + w > img.width or top + h > img.height:
        raise InvalidCropBounds(
            f"crop {left},{top} {w}x{h} outside image of {img.width}x{img.height}"
        )
    return img.crop((left, top, left + w, top + h))


def _place(
    href: str,
    x: Optional[float],
    y: Optional[float],
    width: float,
    height: float,
    rotation: float,
    page: tuple[int, int],
) -> Image:
    cx = normalize(x, page[0], 0)
    cy = normalize(y, page[1], 0)
    return Image(
        x=cx - width / 2,
        y=cy - height / 2,
        width=width,
        height=height,
        href=href,
        transform=rotate_transform(rotation, cx, cy),
    )


def svg_natural_size(data: bytes) -> tuple[float, float]:
    """Width and height declared by an SVG document, from attributes or viewBox."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise InvalidAsset(f"icon is not valid SVG: {e}") from e

    width = _length(root.get("width"))
    height = _length(root.get("height"))
    if width is None or height is None:
        box = (root.get("viewBox") or "").replace(",", " ").split()
        if len(box) == 4:
            try:
                width = width if width is not None else float(box[2])
                height = height if height is not None else float(box[3])
            except ValueError:
                pass
    return (width or ICON_SIZE, height or ICON_SIZE)


def _length(value: Optional[str]) -> Optional[float]:
    if not value or value.strip().endswith("%"):
        return None
    match = _LENGTH.match(value)
    return float(match.group(1)) if match else None

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import re

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from funcplot.raster.canvas import RGBA, blend_mask


DEFAULT_FONT_FAMILY = "Helvetica"
DEFAULT_FONT_SIZE_PX = 13.0
SANS_FONT_FALLBACK_PATTERNS = (
    "helvetica",
    "arial",
    "liberationsans",
    "liberation sans",
    "dejavusans",
    "dejavu sans",
    "freesans",
)
TEXT_ALIGNS = ("start", "end", "left", "right", "center")
TEXT_BASELINES = ("top", "middle", "bottom", "alphabetic")

_FONT_RE = re.compile(r"^\s*(?P<size>\d+(?:\.\d+)?)px\s+(?P<family>.+?)\s*$")


@dataclass(frozen=True)
class TextBox:
    """Glyph mask placement relative to the text anchor, in unflipped pixel units."""

    left: int
    top: int
    width: int
    height: int


def parse_font(font: str) -> tuple[float, str]:
    """Split a canvas-style font string such as ``"13px helvetica"`` into size and family."""
    match = _FONT_RE.match(font)
    if match is None:
        raise ValueError(f"font must look like '<size>px <family>', got {font!r}")
    return float(match.group("size")), match.group("family").strip("'\" ")


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    align: str = "start",
    baseline: str = "alphabetic",
    mirror_x: bool = False,
    mirror_y: bool = False,
) -> None:
    """Draw ``text`` anchored at pixel (x, y).

    ``mirror_x``/``mirror_y`` reproduce what a 2D canvas does with text under a
    negatively scaled transform: the glyph box is reflected around the anchor and
    the glyphs themselves come out mirrored.
    """
    if not text:
        return
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    box = text_box(text, font_family=font_family, font_size_px=font_size_px, align=align, baseline=baseline)
    mask = _render_mask(text=text, font=font)
    left = x + box.left
    top = y + box.top
    if mirror_x:
        mask = np.fliplr(mask)
        left = x - (box.left + box.width)
    if mirror_y:
        mask = np.flipud(mask)
        top = y - (box.top + box.height)
    blend_mask(dst, left, top, mask, color)


def text_box(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    align: str = "start",
    baseline: str = "alphabetic",
) -> TextBox:
    if align not in TEXT_ALIGNS:
        raise ValueError(f"unsupported text align: {align}")
    if baseline not in TEXT_BASELINES:
        raise ValueError(f"unsupported text baseline: {baseline}")
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    left, top, right, bottom = font.getbbox(text)
    advance = float(font.getlength(text))
    ascent, descent = _metrics(font)

    if align in ("end", "right"):
        origin_x = -advance
    elif align == "center":
        origin_x = -advance / 2.0
    else:
        origin_x = 0.0

    if baseline == "top":
        origin_y = 0.0
    elif baseline == "alphabetic":
        origin_y = -float(ascent)
    elif baseline == "bottom":
        origin_y = -float(ascent + descent)
    else:
        origin_y = -(ascent + descent) / 2.0

    return TextBox(
        left=int(round(origin_x + left)),
        top=int(round(origin_y + top)),
        width=max(1, int(right - left)),
        height=max(1, int(bottom - top)),
    )


def _metrics(font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> tuple[int, int]:
    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        return (int(ascent), int(descent))
    # Bitmap fallback fonts carry no metrics; treat the full cell as ascent.
    _, _, _, bottom = font.getbbox("Ag")
    return (int(bottom), 0)


@lru_cache(maxsize=128)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        return ImageFont.load_default()


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("C:/Windows/Fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if p in stem:
                return path
    return None

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from luvatrix_axis.config import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX, RGBA


HAlign = Literal["left", "center", "right"]
VAlign = Literal["top", "center", "bottom"]

CAPITAL_PROBE = "X"
MONO_FONT_FALLBACKS = ("Comic Mono", "Menlo", "Monaco", "Courier New", "Courier", "DejaVu Sans Mono")
FONT_SUFFIXES = (".ttf", ".otf", ".ttc")
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: int = 0,
) -> tuple[int, int]:
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        w, h = (0, max(1, int(ascent + descent)))
    else:
        left, top, right, bottom = font.getbbox(text)
        w = max(0, int(right - left))
        h = max(1, int(bottom - top))
    if _normalize_quarter_turns(rotate_deg) % 2 == 1:
        return (h, w)
    return (w, h)


def capital_height(*, font_family: str = DEFAULT_FONT_FAMILY, font_size_px: float = DEFAULT_FONT_SIZE_PX) -> int:
    _, h = text_size(CAPITAL_PROBE, font_family=font_family, font_size_px=font_size_px)
    return h


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
    rotate_deg: int = 0,
) -> None:
    if not text:
        return
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    mask = _render_mask(text=text, font=font)
    if embolden_px > 1:
        mask = _embolden(mask, embolden_px)
    turns = _normalize_quarter_turns(rotate_deg)
    if turns:
        mask = np.rot90(mask, k=turns)
    _blend_mask(dst, x, y, mask, color)


def draw_aligned_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    h_align: HAlign = "left",
    v_align: VAlign = "top",
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
    rotate_deg: int = 0,
) -> tuple[int, int, int, int]:
    """Draw ``text`` so that its bounding box is anchored at ``(x, y)``.

    Returns the ``(x, y, w, h)`` box the text occupies on the canvas.
    """
    w, h = text_size(text, font_family=font_family, font_size_px=font_size_px, rotate_deg=rotate_deg)
    left = x - _anchor_offset(w, h_align)
    top = y - _anchor_offset(h, v_align)
    draw_text(
        dst,
        left,
        top,
        text,
        color,
        font_family=font_family,
        font_size_px=font_size_px,
        embolden_px=embolden_px,
        rotate_deg=rotate_deg,
    )
    return (left, top, w, h)


def _anchor_offset(size: int, align: str) -> int:
    if align in ("left", "top"):
        return 0
    if align == "center":
        return size // 2
    if align in ("right", "bottom"):
        return size
    raise ValueError(f"unsupported text alignment: {align}")


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    """Composite a glyph coverage mask onto ``dst`` in ``color``, clipped to the canvas."""
    rows = slice(max(0, y), min(dst.shape[0], y + mask.shape[0]))
    cols = slice(max(0, x), min(dst.shape[1], x + mask.shape[1]))
    if rows.start >= rows.stop or cols.start >= cols.stop:
        return
    coverage = mask[rows.start - y : rows.stop - y, cols.start - x : cols.stop - x]
    alpha = coverage.astype(np.float32) * (color[3] / (255.0 * 255.0))
    if not alpha.any():
        return

    region = dst[rows, cols]
    ink = np.asarray(color[:3], dtype=np.float32)
    mixed = region[:, :, :3].astype(np.float32) * (1.0 - alpha[:, :, None]) + ink * alpha[:, :, None]
    region[:, :, :3] = np.clip(np.round(mixed), 0, 255).astype(np.uint8)
    region[:, :, 3] = np.maximum(region[:, :, 3], np.round(alpha * 255.0).astype(np.uint8))


def _embolden(mask: np.ndarray, embolden_px: int) -> np.ndarray:
    # Smear coverage rightwards by up to ``embolden_px - 1`` columns.
    width = mask.shape[1]
    shifted = [np.pad(mask[:, : width - s], ((0, 0), (s, 0))) for s in range(1, min(embolden_px, width))]
    return np.maximum.reduce([mask, *shifted])


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
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


@lru_cache(maxsize=1)
def _installed_fonts() -> dict[str, Path]:
    """First font file found for each normalised file stem."""
    found: dict[str, Path] = {}
    for base in FONT_DIRS:
        if not base.is_dir():
            continue
        for path in sorted(base.rglob("*")):
            if path.suffix.lower() in FONT_SUFFIXES:
                found.setdefault(_normalize_font_name(path.stem), path)
    return found


@lru_cache(maxsize=16)
def _resolve_font_path(font_family: str) -> Path | None:
    fonts = _installed_fonts()
    for wanted in (font_family.strip() or DEFAULT_FONT_FAMILY,) + MONO_FONT_FALLBACKS:
        key = _normalize_font_name(wanted)
        match = fonts.get(key) or next((path for stem, path in fonts.items() if key in stem), None)
        if match is not None:
            return match
    return None


def _normalize_font_name(name: str) -> str:
    return name.lower().replace(" ", "").replace("-", "").replace("_", "")


def _normalize_quarter_turns(rotate_deg: int) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (rotate_deg // 90) % 4

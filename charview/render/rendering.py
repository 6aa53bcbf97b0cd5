from typing import List, Optional, Tuple
from PIL import Image, ImageDraw, ImageFont

from charview.core.classify import DIGIT, UPPER, LOWER, SYMBOL, SPACE, EMPTY
from charview.core.model import RenderModel
from charview.render.color import (
    DEFAULT_BG_RGB, DEFAULT_FG_RGB, RGB, blend, category_colors, hex_to_rgb,
)
from charview.utils.fonts import measure_char_cell, text_width

PAD = 8
GAP = 4
CELL_PAD = 3
SECTION_GAP = 10
KEY_SWATCH = 12


def cell_size(font: ImageFont.ImageFont, model: RenderModel) -> Tuple[int, int]:
    char_w, char_h = measure_char_cell(font)
    widest = max((text_width(font, c.display) for row in model.lines for c in row), default=0)
    return max(char_w, widest) + 2 * CELL_PAD, char_h + 2 * CELL_PAD


def _key_entries(model: RenderModel) -> List[Tuple[str, RGB]]:
    if model.color_key is None:
        return []
    return [(item.label, hex_to_rgb(item.color)) for item in model.color_key]


def _stat_entries(model: RenderModel, fg_rgb: RGB) -> List[Tuple[str, str, RGB]]:
    if model.stats is None:
        return []
    colors = {
        "Numbers": model.color_of(DIGIT),
        "Uppercase": model.color_of(UPPER),
        "Lowercase": model.color_of(LOWER),
        "Symbols": model.color_of(SYMBOL),
        "Spaces": model.color_of(SPACE),
    }
    out = []
    for label, value in model.stats.items():
        rgb = hex_to_rgb(colors[label]) if label in colors else fg_rgb
        out.append((f"{label}: ", str(value), rgb))
    return out


def render_model_to_rgba(model: RenderModel,
                         font: ImageFont.ImageFont,
                         title_font: Optional[ImageFont.ImageFont] = None,
                         transparent_bg: bool = False,
                         bg_rgb=DEFAULT_BG_RGB,
                         fg_rgb=DEFAULT_FG_RGB) -> Image.Image:
    title = model.display_title
    if not model.lines and title is None:
        raise ValueError("Nothing to render.")
    title_font = title_font or font

    cw, ch = cell_size(font, model)
    _, line_h = measure_char_cell(font)
    _, title_h = measure_char_cell(title_font)
    small_gap = 12

    key = _key_entries(model)
    stats = _stat_entries(model, fg_rgb)

    key_w = sum(KEY_SWATCH + 4 + text_width(font, lbl) + small_gap for lbl, _ in key)
    stats_w = sum(text_width(font, a + b) + small_gap for a, b, _ in stats)
    grid_w = model.width * (cw + GAP) - GAP if model.lines else 0
    title_w = text_width(title_font, title) if title else 0

    width = max(grid_w, key_w, stats_w, title_w, cw) + 2 * PAD
    height = PAD
    if title:
        height += title_h + SECTION_GAP
    if key:
        height += line_h + SECTION_GAP
    if model.lines:
        height += len(model.lines) * (ch + GAP) - GAP
    if stats:
        height += SECTION_GAP + line_h
    height += PAD

    bg = (0, 0, 0, 0) if transparent_bg else (*bg_rgb, 255)
    out = Image.new("RGBA", (width, height), bg)
    draw = ImageDraw.Draw(out, "RGBA")

    y = PAD
    if title:
        draw.text((PAD, y), title, fill=(*fg_rgb, 255), font=title_font)
        y += title_h + SECTION_GAP

    if key:
        x = PAD
        for label, swatch in key:
            sy = y + (line_h - KEY_SWATCH) // 2
            draw.rounded_rectangle((x, sy, x + KEY_SWATCH, sy + KEY_SWATCH), radius=3, fill=(*swatch, 255))
            x += KEY_SWATCH + 4
            draw.text((x, y), label, fill=(*fg_rgb, 255), font=font)
            x += text_width(font, label) + small_gap
        y += line_h + SECTION_GAP

    lut = category_colors(model)
    base_bg = (0, 0, 0) if transparent_bg else bg_rgb
    for row in model.lines:
        x = PAD
        for cell in row:
            col = lut[cell.category]
            if cell.category == EMPTY:
                col = blend(col, base_bg, 0.5)
            draw.rounded_rectangle((x, y, x + cw - 1, y + ch - 1), radius=4, outline=(*col, 255), width=1)
            gx = x + (cw - text_width(font, cell.display)) // 2
            draw.text((gx, y + CELL_PAD), cell.display, fill=(*col, 255), font=font)
            x += cw + GAP
        y += ch + GAP

    if stats:
        y += SECTION_GAP - GAP if model.lines else 0
        x = PAD
        for label, value, rgb in stats:
            draw.text((x, y), label, fill=(*fg_rgb, 255), font=font)
            x += text_width(font, label)
            draw.text((x, y), value, fill=(*rgb, 255), font=font)
            x += text_width(font, value) + small_gap

    return out

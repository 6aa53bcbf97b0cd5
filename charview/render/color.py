import numpy as np
from typing import Dict, Tuple

from charview.core.classify import CATEGORIES, SPACE, EMPTY
from charview.core.model import RenderModel

RGB = Tuple[int, int, int]

DEFAULT_FG_RGB = (230, 230, 230)
DEFAULT_BG_RGB = (15, 15, 15)


def hex_to_rgb(value: str, fallback: RGB = DEFAULT_FG_RGB) -> RGB:
    s = (value or "").strip().lstrip("#")
    if len(s) == 3:
        s = "".join(c * 2 for c in s)
    if len(s) != 6:
        return fallback
    try:
        return int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16)
    except ValueError:
        return fallback


def rgb_hex(rgb: Tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(int(rgb[0]), int(rgb[1]), int(rgb[2]))


def category_colors(model: RenderModel) -> Dict[str, RGB]:
    colors = {cat: hex_to_rgb(model.color_of(cat)) for cat in CATEGORIES}
    # empty-line marker is drawn in the space color
    colors[EMPTY] = colors[SPACE]
    return colors


def build_color_map(model: RenderModel, fill_rgb: RGB = DEFAULT_FG_RGB) -> np.ndarray:
    """
    (rows, width, 3) uint8 array: the foreground color of every cell.
    Positions past the end of a short line hold fill_rgb.
    """
    h = len(model.lines)
    w = model.width
    cmap = np.empty((h, w, 3), dtype=np.uint8)
    cmap[:, :] = np.array(fill_rgb, dtype=np.uint8)

    lut = category_colors(model)
    for y, row in enumerate(model.lines):
        for x, cell in enumerate(row):
            cmap[y, x] = lut[cell.category]
    return cmap


def blend(fg: RGB, bg: RGB, alpha: float) -> RGB:
    a = float(np.clip(alpha, 0.0, 1.0))
    out = np.asarray(fg, dtype=np.float32) * a + np.asarray(bg, dtype=np.float32) * (1.0 - a)
    return tuple(int(round(v)) for v in out)

# charview/utils/fonts.py
import os
import re
import sys
from typing import Dict, List, Tuple
from PIL import Image, ImageDraw, ImageFont

_FONT_CACHE: Dict[Tuple[str, int, int], ImageFont.ImageFont] = {}

_SIZE_RE = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(px|pt|rem|em|%)?\s*$", re.IGNORECASE)

PREFERRED_MONO = ["consola.ttf", "cascadiamono.ttf", "dejavusansmono.ttf", "menlo.ttc", "lucon.ttf", "cour.ttf"]


def font_dirs() -> List[str]:
    if os.name == "nt":
        return [os.path.join(os.environ.get("WINDIR", "C:\\Windows"), "Fonts")]
    if sys.platform == "darwin":
        return ["/System/Library/Fonts", "/Library/Fonts", os.path.expanduser("~/Library/Fonts")]
    return ["/usr/share/fonts", "/usr/local/share/fonts", os.path.expanduser("~/.fonts")]


def list_font_files() -> List[Tuple[str, str]]:
    items: List[Tuple[str, str]] = []
    for root_dir in font_dirs():
        if not os.path.isdir(root_dir):
            continue
        for root, _dirs, files in os.walk(root_dir):
            for fn in files:
                if fn.lower().endswith((".ttf", ".otf", ".ttc")):
                    items.append((fn, os.path.join(root, fn)))
    items.sort(key=lambda x: x[0].lower())
    return items


def preferred_font_path() -> str:
    files = list_font_files()
    by_name = {lbl.lower(): p for lbl, p in files}
    for name in PREFERRED_MONO:
        if name in by_name:
            return by_name[name]
    return ""


def safe_load_pil_font(path: str, size: int, ttc_index: int = 0):
    key = (path or "", int(size), int(ttc_index))
    if key in _FONT_CACHE:
        return _FONT_CACHE[key]
    try:
        if path and os.path.exists(path):
            f = ImageFont.truetype(path, size=int(size), index=int(ttc_index))
        else:
            f = ImageFont.load_default(size=int(size))
    except (OSError, ValueError):
        f = ImageFont.load_default()
    _FONT_CACHE[key] = f
    return f


def measure_char_cell(font) -> Tuple[int, int]:
    """
    More stable than textbbox('M') alone:
    - width from getlength('M') when available
    - height from ascent+descent when available
    """
    if hasattr(font, "getlength"):
        char_w = int(round(font.getlength("M")))
    else:
        dummy = Image.new("RGB", (80, 80))
        d = ImageDraw.Draw(dummy)
        bbox = d.textbbox((0, 0), "M", font=font)
        char_w = bbox[2] - bbox[0]

    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        char_h = int(ascent + descent)
    else:
        dummy = Image.new("RGB", (80, 80))
        d = ImageDraw.Draw(dummy)
        bbox = d.textbbox((0, 0), "Hg", font=font)  # includes descenders better
        char_h = bbox[3] - bbox[1]

    return max(1, char_w), max(1, char_h)


def text_width(font, text: str) -> int:
    if hasattr(font, "getlength"):
        return int(round(font.getlength(text)))
    dummy = Image.new("RGB", (8, 8))
    bbox = ImageDraw.Draw(dummy).textbbox((0, 0), text, font=font)
    return bbox[2] - bbox[0]


def css_size_to_px(size: str, base_px: int = 16) -> int:
    """
    '0.8rem' -> 13 with a 16px base. Accepts px, pt, rem, em, % and bare numbers
    (treated as px). Unparseable sizes give base_px.
    """
    m = _SIZE_RE.match(size or "")
    if m is None:
        return base_px
    value = float(m.group(1))
    unit = (m.group(2) or "px").lower()
    if unit in ("rem", "em"):
        px = value * base_px
    elif unit == "%":
        px = value * base_px / 100.0
    elif unit == "pt":
        px = value * 4.0 / 3.0
    else:
        px = value
    return max(1, int(round(px)))

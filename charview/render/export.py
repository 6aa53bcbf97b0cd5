import io
import base64
from html import escape as html_escape
from PIL import Image
from xml.sax.saxutils import escape as xml_escape

from charview.core.classify import EMPTY
from charview.core.model import RenderModel
from charview.render.color import DEFAULT_BG_RGB, DEFAULT_FG_RGB, build_color_map, rgb_hex
from charview.render.nodes import STYLESHEET, model_to_nodes, nodes_to_html


def svg_embed_png(pil_img: Image.Image, transparent_bg: bool, bg_rgb=DEFAULT_BG_RGB) -> str:
    buf = io.BytesIO()
    pil_img.save(buf, format="PNG")
    b64 = base64.b64encode(buf.getvalue()).decode("ascii")
    w, h = pil_img.size
    rect = "" if transparent_bg else f'<rect width="100%" height="100%" fill="{rgb_hex(bg_rgb)}"/>'
    return f'''<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">
  {rect}
  <image x="0" y="0" width="{w}" height="{h}" href="data:image/png;base64,{b64}" />
</svg>'''


def svg_text_export(model: RenderModel,
                    font_family: str,
                    font_size_px: int,
                    char_w: int,
                    line_h: int,
                    transparent_bg: bool,
                    bg_rgb=DEFAULT_BG_RGB,
                    default_fg_rgb=DEFAULT_FG_RGB) -> str:
    """
    Editable SVG: one <text> per grid row with a <tspan> per cell, each
    carrying its tooltip as a <title>. Title and stats become plain text rows.
    """
    title = model.display_title
    if not model.lines and title is None:
        raise ValueError("Nothing to render.")
    pad = 4
    gap = 2
    cell_w = char_w + gap

    rows = len(model.lines) + (1 if title else 0) + (1 if model.stats is not None else 0)
    width_px = max(model.width * cell_w, len(title or "") * char_w) + 2 * pad
    if model.stats is not None:
        width_px = max(width_px, len(_stats_line(model)) * char_w + 2 * pad)
    height_px = rows * line_h + 2 * pad

    bg_rect = "" if transparent_bg else f'<rect width="100%" height="100%" fill="{rgb_hex(bg_rgb)}"/>'
    fg_hex = rgb_hex(default_fg_rgb)
    color_map = build_color_map(model, fill_rgb=default_fg_rgb)

    style = f"""
    <style>
      text {{
        font-family: {xml_escape(font_family)}, Consolas, "Cascadia Mono", "Courier New", monospace;
        font-size: {font_size_px}px;
        white-space: pre;
        font-variant-ligatures: none;
        font-feature-settings: "liga" 0, "calt" 0;
      }}
      .char-empty {{ opacity: 0.5; }}
    </style>
    """

    out = []
    out.append(f'<svg xmlns="http://www.w3.org/2000/svg" width="{width_px}" height="{height_px}" viewBox="0 0 {width_px} {height_px}">')
    out.append(style.strip())
    if bg_rect:
        out.append(bg_rect)

    y_px = pad
    if title:
        out.append(f'<text x="{pad}" y="{y_px}" fill="{fg_hex}" font-weight="bold" dominant-baseline="hanging">{xml_escape(title)}</text>')
        y_px += line_h

    for y, row in enumerate(model.lines):
        out.append(f'<text y="{y_px}" dominant-baseline="hanging" xml:space="preserve">')
        for x, cell in enumerate(row):
            col = color_map[y, x]
            cls = ' class="char-empty"' if cell.category == EMPTY else ""
            out.append(
                f'<tspan x="{pad + x * cell_w}" fill="{rgb_hex((int(col[0]), int(col[1]), int(col[2])))}"{cls}>'
                f'<title>{xml_escape(cell.tooltip.text)}</title>{xml_escape(cell.display)}</tspan>'
            )
        out.append('</text>')
        y_px += line_h

    if model.stats is not None:
        out.append(f'<text x="{pad}" y="{y_px}" fill="{fg_hex}" dominant-baseline="hanging" xml:space="preserve">{xml_escape(_stats_line(model))}</text>')

    out.append('</svg>')
    return "\n".join(out)


def _stats_line(model: RenderModel) -> str:
    return "  ".join(f"{label}: {value}" for label, value in model.stats.items())


def html_export(model: RenderModel, page_title: str = "charview") -> str:
    body = nodes_to_html(model_to_nodes(model), indent=2)
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{html_escape(model.title or page_title)}</title>
  <style>
{STYLESHEET}
  </style>
</head>
<body>
{body}
</body>
</html>
"""


def text_export(model: RenderModel) -> str:
    out = []
    if model.display_title:
        out.append(model.display_title)
    for row in model.lines:
        out.append("".join(cell.display for cell in row))
    if model.stats is not None:
        out.append(_stats_line(model))
    return "\n".join(out)

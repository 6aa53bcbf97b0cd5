"""Render a text block as a color-coded character grid."""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from charview.config.presets import COLOR_PRESETS
from charview.config.settings import apply_preset, resolve_settings, set_option
from charview.config.store import JsonSettingsStore
from charview.core.model import build_render_model
from charview.render.export import html_export, svg_embed_png, svg_text_export, text_export
from charview.render.rendering import render_model_to_rgba
from charview.utils.fonts import css_size_to_px, measure_char_cell, preferred_font_path, safe_load_pil_font

logger = logging.getLogger(__name__)

FORMATS = ["png", "svg", "svg-png", "html", "txt"]
_EXT_FORMATS = {".png": "png", ".svg": "svg", ".html": "html", ".htm": "html", ".txt": "txt"}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="charview-render", description=__doc__)
    parser.add_argument("source", help="text file to render, or - for stdin")
    parser.add_argument("-o", "--output", help="output file (default: stdout for text formats)")
    parser.add_argument("-f", "--format", choices=FORMATS, help="output format (default: from extension, else txt)")
    parser.add_argument("--preset", choices=sorted(COLOR_PRESETS), help="color preset for this render")
    parser.add_argument("--stats", action="store_true", help="attach character statistics")
    parser.add_argument("--color-key", action="store_true", help="attach the color legend")
    parser.add_argument("--no-space-symbol", action="store_true", help="draw spaces as blanks")
    parser.add_argument("--space-symbol", help="glyph drawn for whitespace")
    parser.add_argument("--settings", help="settings JSON to load (read only)")
    parser.add_argument("--font", default=None, help="TTF/OTF/TTC font file")
    parser.add_argument("--font-size", type=int, default=16)
    parser.add_argument("--transparent", action="store_true", help="transparent background (png/svg)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _resolve_format(args: argparse.Namespace) -> str:
    if args.format:
        return args.format
    if args.output:
        ext = os.path.splitext(args.output)[1].lower()
        return _EXT_FORMATS.get(ext, "txt")
    return "txt"


def _settings_for(args: argparse.Namespace):
    # CLI flags override the stored settings for this run only; nothing is saved back
    stored = JsonSettingsStore(args.settings).load() if args.settings else {}
    settings = resolve_settings(stored)
    if args.preset:
        settings = apply_preset(settings, args.preset)
    if args.stats:
        settings = set_option(settings, "show_statistics", True)
    if args.color_key:
        settings = set_option(settings, "show_color_key", True)
    if args.no_space_symbol:
        settings = set_option(settings, "show_space_symbol", False)
    if args.space_symbol is not None:
        settings = set_option(settings, "space_symbol", args.space_symbol)
    return settings


def run(args: argparse.Namespace) -> int:
    try:
        source = _read_source(args.source)
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.source, exc)
        return 2

    settings = _settings_for(args)
    model = build_render_model(source, settings)
    fmt = _resolve_format(args)
    logger.debug("Rendering %d lines as %s with preset %s", len(model.lines), fmt, settings.current_preset)

    if fmt == "txt":
        payload = text_export(model) + "\n"
    elif fmt == "html":
        payload = html_export(model)
    else:
        font_path = args.font if args.font is not None else preferred_font_path()
        font = safe_load_pil_font(font_path, args.font_size)
        title_font = safe_load_pil_font(font_path, css_size_to_px(model.title_font_size, base_px=args.font_size))
        try:
            if fmt == "svg":
                char_w, line_h = measure_char_cell(font)
                payload = svg_text_export(model, font_family="monospace", font_size_px=args.font_size,
                                          char_w=char_w, line_h=line_h, transparent_bg=args.transparent)
            else:
                img = render_model_to_rgba(model, font, title_font=title_font, transparent_bg=args.transparent)
                if fmt == "png":
                    if not args.output:
                        logger.error("PNG output needs -o/--output")
                        return 2
                    img.save(args.output, format="PNG")
                    logger.info("Wrote %s (%dx%d)", args.output, img.size[0], img.size[1])
                    return 0
                payload = svg_embed_png(img, transparent_bg=args.transparent)
        except ValueError as exc:
            logger.error("%s", exc)
            return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(payload)
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(payload)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")
    return run(args)


if __name__ == "__main__":
    sys.exit(main())

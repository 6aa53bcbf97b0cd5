"""Unit tests for :mod:`charview.render.nodes`."""

from charview.config.settings import DEFAULT_SETTINGS, set_option
from charview.core.model import build_render_model
from charview.render.nodes import model_to_nodes, nodes_to_html


def _settings(**options):
    s = DEFAULT_SETTINGS
    for name, value in options.items():
        s = set_option(s, name, value)
    return s


def test_block_carries_color_variables() -> None:
    block = model_to_nodes(build_render_model("a", DEFAULT_SETTINGS))
    assert block.classes == ["charview-block"]
    assert block.style["--char-num-color"] == DEFAULT_SETTINGS.number_color
    assert block.style["--char-space-color"] == DEFAULT_SETTINGS.space_color
    assert block.style["--char-title-font-size"] == "0.8rem"


def test_cells_are_grouped_per_line_with_tooltips() -> None:
    block = model_to_nodes(build_render_model("A1\n\nb c", DEFAULT_SETTINGS))
    lines = block.find_all("charview-line")
    assert [len(line.children) for line in lines] == [2, 1, 3]

    first = lines[0].children[0]
    assert first.classes == ["charview-char", "char-upper"]
    assert first.attrs["title"] == "Uppercase A\nUnicode: U+0041\nDecimal: 65"

    empty = lines[1].children[0]
    assert empty.classes == ["charview-char", "char-empty"]
    assert empty.text == "␤"
    assert empty.attrs["title"] == "Empty Line"

    assert lines[2].children[1].classes[-1] == "char-space"


def test_optional_sections() -> None:
    plain = model_to_nodes(build_render_model("x", DEFAULT_SETTINGS))
    assert plain.find_all("charview-title") == []
    assert plain.find_all("charview-stats") == []
    assert plain.find_all("charview-color-key") == []

    full = model_to_nodes(build_render_model(
        "title: Demo\nx1",
        _settings(show_statistics=True, show_color_key=True, title_uppercase=False),
    ))
    (title,) = full.find_all("charview-title")
    assert title.text == "Demo"
    assert title.style["text-transform"] == "none"
    assert len(full.find_all("charview-key-item")) == 5
    assert len(full.find_all("charview-stat-item")) == 6


def test_section_order_matches_block_layout() -> None:
    block = model_to_nodes(build_render_model(
        "title: T\nx", _settings(show_statistics=True, show_color_key=True),
    ))
    order = [child.classes[0] for child in block.children]
    assert order == ["charview-title", "charview-color-key", "charview-wrapper", "charview-stats"]


def test_html_escapes_text_and_attributes() -> None:
    html = nodes_to_html(model_to_nodes(build_render_model('<&">', DEFAULT_SETTINGS)))
    assert "&lt;" in html
    assert "&amp;" in html
    assert "Less-Than Sign" in html
    assert '<div class="charview-char char-symbol" title="Quotation Mark' in html
    assert "<&\">" not in html

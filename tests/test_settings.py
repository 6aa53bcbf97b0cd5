"""Unit tests for :mod:`charview.config.settings` and :mod:`charview.config.presets`."""

import pytest

from charview.config.presets import COLOR_PRESETS, CUSTOM_PRESET, preset_choices
from charview.config.settings import (
    DEFAULT_SETTINGS,
    CharViewSettings,
    apply_preset,
    resolve_settings,
    set_color,
    set_option,
    to_persisted,
)
from charview.core.classify import DIGIT, SPACE, UPPER


def test_catalog_has_the_eight_builtin_presets() -> None:
    assert list(COLOR_PRESETS) == [
        "default", "pastel", "dark", "colorblind", "monochrome", "ocean", "sunset", "forest",
    ]
    assert preset_choices()["colorblind"] == "Colorblind Friendly"


def test_defaults_match_default_preset() -> None:
    preset = COLOR_PRESETS["default"]
    assert DEFAULT_SETTINGS.number_color == preset.number_color
    assert DEFAULT_SETTINGS.space_color == preset.space_color
    assert DEFAULT_SETTINGS.space_symbol == "␣"
    assert DEFAULT_SETTINGS.title_font_size == "0.8rem"
    assert DEFAULT_SETTINGS.title_uppercase is True
    assert DEFAULT_SETTINGS.show_statistics is False
    assert DEFAULT_SETTINGS.current_preset == "default"


def test_resolve_empty_or_missing_record_gives_defaults() -> None:
    assert resolve_settings(None) == DEFAULT_SETTINGS
    assert resolve_settings({}) == DEFAULT_SETTINGS


def test_resolve_overrides_field_by_field() -> None:
    s = resolve_settings({"upperColor": "#000000", "showStatistics": True, "spaceSymbol": "_"})
    assert s.upper_color == "#000000"
    assert s.show_statistics is True
    assert s.space_symbol == "_"
    assert s.lower_color == DEFAULT_SETTINGS.lower_color
    assert s.show_color_key is False


def test_resolve_rejects_invalid_values() -> None:
    s = resolve_settings({"numberColor": "green", "showColorKey": "yes", "spaceSymbol": "", "titleFontSize": 3})
    assert s == DEFAULT_SETTINGS


def test_resolve_unknown_preset_becomes_custom() -> None:
    assert resolve_settings({"currentPreset": "neon"}).current_preset == CUSTOM_PRESET
    assert resolve_settings({"currentPreset": "custom"}).current_preset == CUSTOM_PRESET
    assert resolve_settings({"currentPreset": "ocean"}).current_preset == "ocean"


def test_unknown_keys_are_kept_and_written_back() -> None:
    s = resolve_settings({"legacyFlag": 1, "lowerColor": "#111111"})
    assert s.extra == {"legacyFlag": 1}
    data = to_persisted(s)
    assert data["legacyFlag"] == 1
    assert data["lowerColor"] == "#111111"
    assert data["currentPreset"] == "default"


def test_persisted_round_trip() -> None:
    s = set_option(apply_preset(DEFAULT_SETTINGS, "sunset"), "show_color_key", True)
    assert resolve_settings(to_persisted(s)) == s


def test_apply_preset_overwrites_colors_and_records_key() -> None:
    s = apply_preset(DEFAULT_SETTINGS, "pastel")
    pastel = COLOR_PRESETS["pastel"]
    assert s.current_preset == "pastel"
    assert (s.number_color, s.upper_color, s.lower_color, s.symbol_color, s.space_color) == (
        pastel.number_color, pastel.upper_color, pastel.lower_color, pastel.symbol_color, pastel.space_color,
    )


def test_apply_preset_is_idempotent() -> None:
    once = apply_preset(DEFAULT_SETTINGS, "pastel")
    assert apply_preset(once, "pastel") == once


def test_apply_unknown_preset_is_a_no_op() -> None:
    cfg = set_color(DEFAULT_SETTINGS, UPPER, "#123456")
    assert apply_preset(cfg, "nonexistent") == cfg


def test_apply_preset_keeps_display_options() -> None:
    cfg = set_option(DEFAULT_SETTINGS, "show_statistics", True)
    assert apply_preset(cfg, "dark").show_statistics is True


def test_set_color_switches_to_custom() -> None:
    s = set_color(apply_preset(DEFAULT_SETTINGS, "ocean"), DIGIT, "#abcdef")
    assert s.number_color == "#abcdef"
    assert s.current_preset == CUSTOM_PRESET
    assert s.color_for(DIGIT) == "#abcdef"


def test_set_color_validates_input() -> None:
    with pytest.raises(KeyError):
        set_color(DEFAULT_SETTINGS, "purple", "#ffffff")
    with pytest.raises(ValueError):
        set_color(DEFAULT_SETTINGS, SPACE, "white")


@pytest.mark.parametrize(
    "name, value",
    [
        ("show_statistics", True),
        ("show_color_key", True),
        ("title_uppercase", False),
        ("title_font_size", "14px"),
        ("space_symbol", "·"),
        ("show_space_symbol", False),
    ],
)
def test_options_do_not_touch_current_preset(name: str, value) -> None:
    base = apply_preset(DEFAULT_SETTINGS, "forest")
    s = set_option(base, name, value)
    assert getattr(s, name) == value
    assert s.current_preset == "forest"


def test_empty_text_options_fall_back_to_defaults() -> None:
    s = set_option(CharViewSettings(space_symbol="_"), "space_symbol", "")
    assert s.space_symbol == "␣"
    s = set_option(CharViewSettings(title_font_size="2em"), "title_font_size", "")
    assert s.title_font_size == "0.8rem"


def test_set_option_rejects_color_fields() -> None:
    with pytest.raises(KeyError):
        set_option(DEFAULT_SETTINGS, "number_color", "#000000")


@pytest.mark.parametrize(
    "name, value",
    [
        ("show_statistics", "false"),
        ("show_color_key", 1),
        ("title_uppercase", None),
        ("space_symbol", 5),
        ("title_font_size", True),
    ],
)
def test_set_option_rejects_wrong_types(name: str, value) -> None:
    with pytest.raises(ValueError):
        set_option(DEFAULT_SETTINGS, name, value)

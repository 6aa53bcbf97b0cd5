import logging
import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional

from charview.config.presets import COLOR_PRESETS, CUSTOM_PRESET
from charview.core.classify import DIGIT, UPPER, LOWER, SPACE, SYMBOL

logger = logging.getLogger(__name__)

DEFAULT_SPACE_SYMBOL = "␣"
DEFAULT_TITLE_FONT_SIZE = "0.8rem"

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Category -> settings field holding its color
COLOR_FIELDS = {
    DIGIT: "number_color",
    UPPER: "upper_color",
    LOWER: "lower_color",
    SYMBOL: "symbol_color",
    SPACE: "space_color",
}

# Fields that never reset the active preset
OPTION_FIELDS = (
    "title_uppercase",
    "show_space_symbol",
    "space_symbol",
    "title_font_size",
    "show_statistics",
    "show_color_key",
)

# Settings field -> key in the persisted JSON record
PERSISTED_KEYS = {
    "number_color": "numberColor",
    "upper_color": "upperColor",
    "lower_color": "lowerColor",
    "symbol_color": "symbolColor",
    "space_color": "spaceColor",
    "title_uppercase": "titleUppercase",
    "show_space_symbol": "showSpaceSymbol",
    "space_symbol": "spaceSymbol",
    "title_font_size": "titleFontSize",
    "show_statistics": "showStatistics",
    "show_color_key": "showColorKey",
    "current_preset": "currentPreset",
}

_DEFAULT_PRESET = COLOR_PRESETS["default"]


@dataclass(frozen=True)
class CharViewSettings:
    number_color: str = _DEFAULT_PRESET.number_color
    upper_color: str = _DEFAULT_PRESET.upper_color
    lower_color: str = _DEFAULT_PRESET.lower_color
    symbol_color: str = _DEFAULT_PRESET.symbol_color
    space_color: str = _DEFAULT_PRESET.space_color

    title_uppercase: bool = True
    show_space_symbol: bool = True
    space_symbol: str = DEFAULT_SPACE_SYMBOL
    title_font_size: str = DEFAULT_TITLE_FONT_SIZE
    show_statistics: bool = False
    show_color_key: bool = False

    current_preset: str = "default"

    # Unrecognised persisted keys, written back untouched on save
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def color_for(self, category: str) -> str:
        return getattr(self, COLOR_FIELDS[category])


DEFAULT_SETTINGS = CharViewSettings()


def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and _HEX_COLOR.match(value) is not None


def _valid(name: str, value: Any) -> bool:
    if name.endswith("_color"):
        return is_hex_color(value)
    if name in ("space_symbol", "title_font_size"):
        return isinstance(value, str) and value != ""
    if name == "current_preset":
        return isinstance(value, str)
    return isinstance(value, bool)


def resolve_settings(persisted: Optional[Mapping[str, Any]]) -> CharViewSettings:
    """
    Field-by-field merge of DEFAULT_SETTINGS with a persisted record.
    Missing or malformed fields keep their defaults.
    """
    persisted = dict(persisted or {})
    values: Dict[str, Any] = {}
    for name, key in PERSISTED_KEYS.items():
        if key not in persisted:
            continue
        value = persisted.pop(key)
        if _valid(name, value):
            values[name] = value
        else:
            logger.warning("Ignoring invalid setting %s=%r", key, value)

    preset = values.get("current_preset")
    if preset is not None and preset != CUSTOM_PRESET and preset not in COLOR_PRESETS:
        logger.warning("Unknown preset %r in settings, treating as custom", preset)
        values["current_preset"] = CUSTOM_PRESET

    return CharViewSettings(extra=persisted, **values)


def to_persisted(settings: CharViewSettings) -> Dict[str, Any]:
    data = dict(settings.extra)
    for f in fields(settings):
        if f.name in PERSISTED_KEYS:
            data[PERSISTED_KEYS[f.name]] = getattr(settings, f.name)
    return data


def apply_preset(settings: CharViewSettings, key: str) -> CharViewSettings:
    preset = COLOR_PRESETS.get(key)
    if preset is None:
        logger.debug("Unknown color preset %r, settings unchanged", key)
        return settings
    return replace(settings, current_preset=key, **preset.colors())


def set_color(settings: CharViewSettings, category: str, value: str) -> CharViewSettings:
    if category not in COLOR_FIELDS:
        raise KeyError(f"Unknown category: {category}")
    if not is_hex_color(value):
        raise ValueError(f"Not a hex color: {value!r}")
    return replace(settings, current_preset=CUSTOM_PRESET, **{COLOR_FIELDS[category]: value})


def set_option(settings: CharViewSettings, name: str, value: Any) -> CharViewSettings:
    if name not in OPTION_FIELDS:
        raise KeyError(f"Not a display option: {name}")
    if name == "space_symbol":
        value = value or DEFAULT_SPACE_SYMBOL
    elif name == "title_font_size":
        value = value or DEFAULT_TITLE_FONT_SIZE
    if not _valid(name, value):
        raise ValueError(f"Invalid value for {name}: {value!r}")
    return replace(settings, **{name: value})

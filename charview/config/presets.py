from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping

CUSTOM_PRESET = "custom"


@dataclass(frozen=True)
class ColorPreset:
    name: str
    number_color: str
    upper_color: str
    lower_color: str
    symbol_color: str
    space_color: str

    def colors(self) -> Dict[str, str]:
        return {
            "number_color": self.number_color,
            "upper_color": self.upper_color,
            "lower_color": self.lower_color,
            "symbol_color": self.symbol_color,
            "space_color": self.space_color,
        }


COLOR_PRESETS: Mapping[str, ColorPreset] = MappingProxyType({
    "default":    ColorPreset("Default", "#2ecc71", "#e74c3c", "#3498db", "#9b59b6", "#7f8c8d"),
    "pastel":     ColorPreset("Pastel", "#a8e6cf", "#ffd3b6", "#ffaaa5", "#dda0dd", "#d3d3d3"),
    "dark":       ColorPreset("Dark", "#1e8449", "#922b21", "#1f618d", "#6c3483", "#566573"),
    "colorblind": ColorPreset("Colorblind Friendly", "#0173b2", "#de8f05", "#029e73", "#cc78bc", "#949494"),
    "monochrome": ColorPreset("Monochrome", "#2c3e50", "#34495e", "#7f8c8d", "#95a5a6", "#bdc3c7"),
    "ocean":      ColorPreset("Ocean", "#16a085", "#2980b9", "#3498db", "#8e44ad", "#7f8c8d"),
    "sunset":     ColorPreset("Sunset", "#e67e22", "#e74c3c", "#f39c12", "#d35400", "#95a5a6"),
    "forest":     ColorPreset("Forest", "#27ae60", "#229954", "#28b463", "#1e8449", "#7f8c8d"),
})


def preset_choices() -> Dict[str, str]:
    """Preset key -> display name, in catalog order."""
    return {key: p.name for key, p in COLOR_PRESETS.items()}

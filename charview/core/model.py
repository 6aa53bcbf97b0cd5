from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from charview.config.settings import CharViewSettings
from charview.core.classify import (
    CATEGORIES, DIGIT, UPPER, LOWER, SPACE, SYMBOL, EMPTY,
    CharTooltip, char_tooltip, classify_char,
)
from charview.core.stats import CharStats, character_stats
from charview.core.title import extract_title

EMPTY_LINE_GLYPH = "␤"
NBSP = "\u00a0"

COLOR_KEY_LABELS = [
    (DIGIT, "Numbers (0-9)"),
    (UPPER, "Uppercase (A-Z)"),
    (LOWER, "Lowercase (a-z)"),
    (SYMBOL, "Symbols"),
    (SPACE, "Spaces"),
]


@dataclass(frozen=True)
class ClassifiedChar:
    char: str
    category: str
    display: str
    tooltip: CharTooltip

    @property
    def is_empty_line(self) -> bool:
        return self.category == EMPTY


@dataclass(frozen=True)
class ColorKeyItem:
    category: str
    label: str
    color: str


@dataclass(frozen=True)
class RenderModel:
    title: Optional[str]
    title_uppercase: bool
    title_font_size: str
    lines: Tuple[Tuple[ClassifiedChar, ...], ...]
    colors: Tuple[Tuple[str, str], ...]
    stats: Optional[CharStats] = None
    color_key: Optional[Tuple[ColorKeyItem, ...]] = None

    @property
    def display_title(self) -> Optional[str]:
        if not self.title:
            return None
        return self.title.upper() if self.title_uppercase else self.title

    def color_of(self, category: str) -> str:
        return dict(self.colors)[category]

    @property
    def width(self) -> int:
        return max((len(row) for row in self.lines), default=0)


EMPTY_LINE_CELL = ClassifiedChar(
    char="",
    category=EMPTY,
    display=EMPTY_LINE_GLYPH,
    tooltip=CharTooltip(name="Empty Line"),
)


def classify_line(line: str, settings: CharViewSettings) -> Tuple[ClassifiedChar, ...]:
    if len(line) == 0:
        return (EMPTY_LINE_CELL,)

    space_display = settings.space_symbol if settings.show_space_symbol else NBSP
    cells: List[ClassifiedChar] = []
    for ch in line:
        cat = classify_char(ch)
        cells.append(ClassifiedChar(
            char=ch,
            category=cat,
            display=space_display if cat == SPACE else ch,
            tooltip=char_tooltip(ch),
        ))
    return tuple(cells)


def build_from_lines(title: Optional[str],
                     lines: Sequence[str],
                     settings: CharViewSettings) -> RenderModel:
    stats = character_stats("".join(lines)) if settings.show_statistics else None

    color_key = None
    if settings.show_color_key:
        color_key = tuple(
            ColorKeyItem(category=cat, label=label, color=settings.color_for(cat))
            for cat, label in COLOR_KEY_LABELS
        )

    return RenderModel(
        title=title if title else None,
        title_uppercase=settings.title_uppercase,
        title_font_size=settings.title_font_size,
        lines=tuple(classify_line(line, settings) for line in lines),
        colors=tuple((cat, settings.color_for(cat)) for cat in CATEGORIES),
        stats=stats,
        color_key=color_key,
    )


def build_render_model(source: str, settings: CharViewSettings) -> RenderModel:
    title, lines = extract_title(source)
    return build_from_lines(title, lines, settings)

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from charview.core.classify import DIGIT, UPPER, LOWER, SPACE, classify_char


@dataclass(frozen=True)
class CharStats:
    numbers: int = 0
    uppercase: int = 0
    lowercase: int = 0
    symbols: int = 0
    spaces: int = 0
    total: int = 0

    def items(self) -> List[Tuple[str, int]]:
        return [
            ("Numbers", self.numbers),
            ("Uppercase", self.uppercase),
            ("Lowercase", self.lowercase),
            ("Symbols", self.symbols),
            ("Spaces", self.spaces),
            ("Total", self.total),
        ]


def character_stats(text: Iterable[str]) -> CharStats:
    counts = {DIGIT: 0, UPPER: 0, LOWER: 0, SPACE: 0}
    symbols = 0
    total = 0
    for ch in text:
        total += 1
        cat = classify_char(ch)
        if cat in counts:
            counts[cat] += 1
        else:
            symbols += 1
    return CharStats(
        numbers=counts[DIGIT],
        uppercase=counts[UPPER],
        lowercase=counts[LOWER],
        symbols=symbols,
        spaces=counts[SPACE],
        total=total,
    )

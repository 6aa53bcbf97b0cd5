from dataclasses import dataclass

DIGIT = "digit"
UPPER = "upper"
LOWER = "lower"
SPACE = "space"
SYMBOL = "symbol"

# Sentinel category for a zero-length line; never produced by classify_char.
EMPTY = "empty"

CATEGORIES = [DIGIT, UPPER, LOWER, SPACE, SYMBOL]

SPECIAL_NAMES = {
    9: "Tab",
    10: "Line Feed",
    13: "Carriage Return",
    32: "Space",
    33: "Exclamation Mark",
    34: "Quotation Mark",
    35: "Number Sign",
    36: "Dollar Sign",
    37: "Percent Sign",
    38: "Ampersand",
    39: "Apostrophe",
    40: "Left Parenthesis",
    41: "Right Parenthesis",
    42: "Asterisk",
    43: "Plus Sign",
    44: "Comma",
    45: "Hyphen-Minus",
    46: "Period",
    47: "Slash",
    58: "Colon",
    59: "Semicolon",
    60: "Less-Than Sign",
    61: "Equals Sign",
    62: "Greater-Than Sign",
    63: "Question Mark",
    64: "At Sign",
    91: "Left Square Bracket",
    92: "Backslash",
    93: "Right Square Bracket",
    94: "Caret",
    95: "Underscore",
    96: "Grave Accent",
    123: "Left Curly Bracket",
    124: "Vertical Bar",
    125: "Right Curly Bracket",
    126: "Tilde",
}


@dataclass(frozen=True)
class CharTooltip:
    name: str
    code_hex: str = ""
    code_decimal: int = -1

    @property
    def text(self) -> str:
        if self.code_decimal < 0:
            return self.name
        return f"{self.name}\nUnicode: U+{self.code_hex}\nDecimal: {self.code_decimal}"


def classify_char(ch: str) -> str:
    cp = ord(ch)
    if 48 <= cp <= 57:
        return DIGIT
    if 65 <= cp <= 90:
        return UPPER
    if 97 <= cp <= 122:
        return LOWER
    if ch.isspace():
        return SPACE
    return SYMBOL


def character_name(ch: str) -> str:
    cp = ord(ch)
    name = SPECIAL_NAMES.get(cp)
    if name:
        return name
    if 65 <= cp <= 90:
        return f"Uppercase {ch}"
    if 97 <= cp <= 122:
        return f"Lowercase {ch}"
    if 48 <= cp <= 57:
        return f"Digit {ch}"
    return "Character"


def char_tooltip(ch: str) -> CharTooltip:
    cp = ord(ch)
    return CharTooltip(name=character_name(ch), code_hex=f"{cp:04X}", code_decimal=cp)

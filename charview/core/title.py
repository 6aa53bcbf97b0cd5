import re
from typing import List, Optional, Tuple

TITLE_QUOTED = re.compile(r'^\s*title\s*:\s*"([^"]+)"\s*$', re.IGNORECASE)
TITLE_PLAIN = re.compile(r"^\s*title\s*:\s*(.+)$", re.IGNORECASE)


def split_lines(source: str) -> List[str]:
    if not source:
        return []
    return source.replace("\r\n", "\n").split("\n")


def parse_title_directive(line: str) -> Optional[str]:
    """
    Match a single line against the title directive:
    - title:"My title"   (tried first)
    - title: My title
    """
    m = TITLE_QUOTED.match(line)
    if m is None:
        m = TITLE_PLAIN.match(line)
    if m is None:
        return None
    return m.group(1).strip()


def extract_title(source: str) -> Tuple[Optional[str], List[str]]:
    lines = split_lines(source)

    first = next((i for i, line in enumerate(lines) if line.strip() != ""), -1)
    if first == -1:
        return None, lines

    title = parse_title_directive(lines[first].strip())
    if title is None:
        return None, lines

    del lines[first]
    return title, lines

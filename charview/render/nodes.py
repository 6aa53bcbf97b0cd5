from dataclasses import dataclass, field
from html import escape
from typing import Dict, List, Optional

from charview.core.classify import CATEGORIES, DIGIT, UPPER, LOWER, SPACE, SYMBOL, EMPTY
from charview.core.model import RenderModel

# Category -> CSS class on a cell
CELL_CLASSES = {
    DIGIT: "char-num",
    UPPER: "char-upper",
    LOWER: "char-lower",
    SPACE: "char-space",
    SYMBOL: "char-symbol",
    EMPTY: "char-empty",
}

# Category -> CSS variable on the block
COLOR_VARS = {
    DIGIT: "--char-num-color",
    UPPER: "--char-upper-color",
    LOWER: "--char-lower-color",
    SYMBOL: "--char-symbol-color",
    SPACE: "--char-space-color",
}

STAT_CATEGORIES = {
    "Numbers": DIGIT,
    "Uppercase": UPPER,
    "Lowercase": LOWER,
    "Symbols": SYMBOL,
    "Spaces": SPACE,
}


@dataclass
class Node:
    tag: str = "div"
    classes: List[str] = field(default_factory=list)
    text: Optional[str] = None
    attrs: Dict[str, str] = field(default_factory=dict)
    style: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)

    def add(self, tag: str = "div", cls: str = "", text: Optional[str] = None) -> "Node":
        child = Node(tag=tag, classes=cls.split(), text=text)
        self.children.append(child)
        return child

    def find_all(self, cls: str) -> List["Node"]:
        found = [self] if cls in self.classes else []
        for c in self.children:
            found.extend(c.find_all(cls))
        return found


def model_to_nodes(model: RenderModel) -> Node:
    block = Node(classes=["charview-block"])
    for cat in CATEGORIES:
        block.style[COLOR_VARS[cat]] = model.color_of(cat)
    block.style["--char-title-font-size"] = model.title_font_size

    if model.title:
        title = block.add(cls="charview-title", text=model.title)
        title.style["text-transform"] = "uppercase" if model.title_uppercase else "none"

    if model.color_key is not None:
        key = block.add(cls="charview-color-key")
        for item in model.color_key:
            entry = key.add(cls="charview-key-item")
            box = entry.add(cls="charview-key-color")
            box.style["background-color"] = item.color
            entry.add("span", "charview-key-label", item.label)

    wrapper = block.add(cls="charview-wrapper")
    for row in model.lines:
        line = wrapper.add(cls="charview-line")
        for cell in row:
            div = line.add(cls="charview-char " + CELL_CLASSES[cell.category], text=cell.display)
            div.attrs["title"] = cell.tooltip.text

    if model.stats is not None:
        stats = block.add(cls="charview-stats")
        for label, value in model.stats.items():
            item = stats.add("span", "charview-stat-item")
            item.add("span", text=f"{label}: ")
            val = item.add("span", text=str(value))
            cat = STAT_CATEGORIES.get(label)
            val.style["color"] = model.color_of(cat) if cat else "var(--text-normal)"

    return block


def _style_text(style: Dict[str, str]) -> str:
    return "; ".join(f"{k}: {v}" for k, v in style.items())


def nodes_to_html(node: Node, indent: int = 0) -> str:
    pad = "  " * indent
    attrs = []
    if node.classes:
        attrs.append(f'class="{escape(" ".join(node.classes))}"')
    for k, v in node.attrs.items():
        attrs.append(f'{k}="{escape(v)}"')
    if node.style:
        attrs.append(f'style="{escape(_style_text(node.style))}"')
    open_tag = "<" + " ".join([node.tag] + attrs) + ">"

    if not node.children:
        return f"{pad}{open_tag}{escape(node.text or '', quote=False)}</{node.tag}>"

    out = [pad + open_tag]
    if node.text:
        out.append(pad + "  " + escape(node.text, quote=False))
    for c in node.children:
        out.append(nodes_to_html(c, indent + 1))
    out.append(f"{pad}</{node.tag}>")
    return "\n".join(out)


STYLESHEET = """
.charview-block { font-family: var(--font-monospace, monospace); margin: 0.5em 0; }
.charview-title {
  font-size: var(--char-title-font-size);
  font-weight: 600; letter-spacing: 0.05em; margin-bottom: 0.4em;
}
.charview-wrapper { display: flex; flex-direction: column; gap: 4px; }
.charview-line { display: flex; flex-wrap: wrap; gap: 4px; }
.charview-char {
  min-width: 1.6em; height: 1.8em; padding: 0 2px;
  display: flex; align-items: center; justify-content: center;
  border: 1px solid currentColor; border-radius: 4px;
  white-space: pre; cursor: default;
}
.charview-char.char-num { color: var(--char-num-color); }
.charview-char.char-upper { color: var(--char-upper-color); }
.charview-char.char-lower { color: var(--char-lower-color); }
.charview-char.char-symbol { color: var(--char-symbol-color); }
.charview-char.char-space { color: var(--char-space-color); }
.charview-char.char-empty { color: var(--char-space-color); opacity: 0.5; border-style: dashed; }
.charview-color-key, .charview-stats { display: flex; flex-wrap: wrap; gap: 12px; margin: 0.5em 0; font-size: 0.85em; }
.charview-key-item { display: flex; align-items: center; gap: 4px; }
.charview-key-color { width: 12px; height: 12px; border-radius: 3px; }
""".strip()

# mdpreview/preprocessors/diagram_labels.py
"""
Rewrite mermaid node labels as markdown strings.

Mermaid only wraps long node labels automatically when the label is a
markdown string (``"`text`"``). This turns

    A[Hello World] --> B{Is it?}

into

    A["`Hello World`"] --> B{"`Is it?`"}

for every node shape that takes a free-text label. Frontmatter (between
``---`` lines), ``%%`` comments, labels that are already quoted and icon
references such as ``fa:fa-car`` are left alone.
"""

import re
from typing import NamedTuple, Pattern

DEFAULT_ICON_PREFIXES = ("fa:", "fab:", "fas:")


class Shape(NamedTuple):
    pattern: Pattern
    opening: str
    closing: str
    # Rounded nodes share "(" with edge and link syntax
    skip_edge_text: bool = False


# Multi-character shapes come first so the single-bracket patterns never see
# their delimiters. Each label class excludes the delimiter and quote chars.
SHAPES = [
    Shape(re.compile(r"(\b\w+)\(\(\(([^()\"'`]+)\)\)\)"), "(((", ")))"),
    Shape(re.compile(r"(\b\w+)\[\[([^\[\]\"'`]+)\]\]"), "[[", "]]"),
    Shape(re.compile(r"(\b\w+)\{\{([^{}\"'`]+)\}\}"), "{{", "}}"),
    Shape(re.compile(r"(\b\w+)\(\[([^\[\]\"'`]+)\]\)"), "([", "])"),
    Shape(re.compile(r"(\b\w+)\[([^\[\]\"'`]+)\]"), "[", "]"),
    Shape(re.compile(r"(\b\w+)\(([^()\"'`]+)\)(?!\))"), "(", ")", skip_edge_text=True),
    Shape(re.compile(r"(\b\w+)\{([^{}\"'`]+)\}(?!\})"), "{", "}"),
]


def _shape_replacer(shape, icon_prefixes):
    def replace(match):
        node_id, label = match.group(1), match.group(2)
        if label.startswith(icon_prefixes):
            return match.group(0)
        if shape.skip_edge_text and (label.startswith("[") or "|" in label):
            return match.group(0)
        return f'{node_id}{shape.opening}"`{label}`"{shape.closing}'

    return replace


def wrap_label_line(line, icon_prefixes=DEFAULT_ICON_PREFIXES):
    """Wrap the label of every node shape found on a single diagram line."""
    for shape in SHAPES:
        line = shape.pattern.sub(_shape_replacer(shape, icon_prefixes), line)
    return line


def wrap_diagram_labels(code: str, icon_prefixes=DEFAULT_ICON_PREFIXES) -> str:
    """Apply :func:`wrap_label_line` to every eligible line of a diagram."""
    icon_prefixes = tuple(icon_prefixes)
    in_frontmatter = False
    lines = []

    for line in code.split("\n"):
        trimmed = line.strip()

        if trimmed == "---":
            in_frontmatter = not in_frontmatter
            lines.append(line)
            continue

        if in_frontmatter or trimmed.startswith("%%") or '"`' in line:
            lines.append(line)
            continue

        lines.append(wrap_label_line(line, icon_prefixes))

    return "\n".join(lines)

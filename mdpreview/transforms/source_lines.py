# mdpreview/transforms/source_lines.py
"""
Tag rendered elements with the source line they came from.

Block elements use the first line of their token map. Inline elements have no
map of their own, so their line is counted from the enclosing block's first
line plus the soft and hard breaks seen before them. The editor uses these
attributes to keep the preview scrolled in step with the cursor.
"""

from .math import MATH_INLINE_TOKEN

SOURCE_LINE_ATTR = "data-source-line"

_INLINE_ELEMENTS = {"code_inline", "image", MATH_INLINE_TOKEN}
_LINE_BREAKS = {"softbreak", "hardbreak"}
# Rendered verbatim, so there is no element to carry an attribute
_RAW_BLOCKS = {"html_block"}


def _tag_inline(inline, line):
    for child in inline.children or []:
        if child.type in _LINE_BREAKS:
            line += 1
        elif child.nesting == 1 or child.type in _INLINE_ELEMENTS:
            child.attrSet(SOURCE_LINE_ATTR, str(line))


def tag_source_lines(tokens, context):
    for token in tokens:
        if not token.map:
            continue
        line = token.map[0] + 1
        if token.type == "inline":
            _tag_inline(token, line)
        elif token.nesting != -1 and token.type not in _RAW_BLOCKS:
            token.attrSet(SOURCE_LINE_ATTR, str(line))
    return tokens

# mdpreview/preprocessors/display_math.py
"""
Preprocessor that normalises display math into ``$$`` blocks.

The dollarmath parser only treats ``$$`` as display math when the delimiters
sit on their own lines. Authors often write either of these instead:

    \\[                      $$ x = 1 $$
    x = 1
    \\]

Both are rewritten to

    $$
    x = 1
    $$

keeping the indentation of the opening line so the block stays inside any
list item it belongs to. Fenced code regions are copied through untouched.
"""

import re

_LEADING_WS_RE = re.compile(r"^(\s*)")
_ONE_LINE_DISPLAY_RE = re.compile(r"^\$\$(.+)\$\$$")
_DOUBLE_DOLLAR_RE = re.compile(r"\$\$")
_FENCE_RE = re.compile(r"^(`{3,}|~{3,})")


def _closes_fence(trimmed, fence):
    return trimmed.startswith(fence) and not trimmed.strip(fence[0])


def normalize_display_math(text: str) -> str:
    """Rewrite bracket and single-line double-dollar math into ``$$`` blocks."""
    result = []
    bracket_lines = []
    bracket_indent = ""
    bracket_open_line = None
    fence = None

    for line in text.split("\n"):
        trimmed = line.strip()
        leading = _LEADING_WS_RE.match(line).group(1)

        if bracket_open_line is not None:
            if trimmed == "\\]":
                result.append(bracket_indent + "$$")
                result.extend(bracket_lines)
                result.append(bracket_indent + "$$")
                bracket_open_line = None
            else:
                bracket_lines.append(line)
            continue

        if fence is not None:
            if _closes_fence(trimmed, fence):
                fence = None
            result.append(line)
            continue

        fence_match = _FENCE_RE.match(trimmed)
        if fence_match:
            fence = fence_match.group(1)
            result.append(line)
            continue

        if trimmed == "\\[":
            bracket_open_line = line
            bracket_lines = []
            bracket_indent = leading
            continue

        one_line = _ONE_LINE_DISPLAY_RE.match(trimmed)
        if one_line and len(_DOUBLE_DOLLAR_RE.findall(trimmed)) == 2:
            result.append(leading + "$$")
            result.append(leading + one_line.group(1).strip())
            result.append(leading + "$$")
            continue

        result.append(line)

    if bracket_open_line is not None:
        # No closing \] - keep the region as written
        result.append(bracket_open_line)
        result.extend(bracket_lines)

    return "\n".join(result)


def display_math_default(text: str, context: dict) -> str:
    """
    Default configuration for normalize_display_math.

    This is the function that should be registered in PREPROCESSORS.
    """
    return normalize_display_math(text)

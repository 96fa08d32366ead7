# mdpreview/transforms/__init__.py

from ..config import get_markdown_config
from .diagrams import DIAGRAM_TOKEN, expand_diagram_fences, render_diagram
from .heading_ids import assign_heading_ids
from .highlight import CODE_TOKEN, highlight_code_blocks, render_code
from .math import MATH_BLOCK_TOKEN, MATH_INLINE_TOKEN, expand_math, render_math_display, render_math_span
from .source_lines import tag_source_lines

BLOCK_TRANSFORMS = [
    expand_diagram_fences,  # Must run before highlighting claims the fence
    expand_math,
    highlight_code_blocks,
    tag_source_lines,  # Last, so it also tags nodes the other stages produced
]

DOCUMENT_TRANSFORMS = [
    expand_diagram_fences,
    expand_math,
    highlight_code_blocks,
    assign_heading_ids,
    tag_source_lines,
]

# Serialisation for the token types introduced above
RENDER_RULES = {
    DIAGRAM_TOKEN: render_diagram,
    MATH_BLOCK_TOKEN: render_math_display,
    MATH_INLINE_TOKEN: render_math_span,
    CODE_TOKEN: render_code,
}


def apply_transforms(tokens, context, transforms=None):
    """Apply the tree transforms in order"""
    context.setdefault("config", get_markdown_config())
    for transform in BLOCK_TRANSFORMS if transforms is None else transforms:
        tokens = transform(tokens, context)
    return tokens

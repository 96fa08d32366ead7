# mdpreview/transforms/math.py
"""
Expand dollar math tokens into rendered math markup.

Two engines are available:

- ``mathjax`` (default) emits the markup Pandoc's ``--mathjax`` writer
  produces, tagged with ``data-math``, and leaves typesetting to MathJax:

      <span class="math inline" data-math="inline">\\(x\\)</span>
      <div class="math display" data-math="display">\\[x\\]</div>

- ``pandoc`` converts every expression to MathML with pypandoc. If the pandoc
  binary is missing the MathJax markup is used instead.
"""

import logging
import re
from functools import lru_cache

import pypandoc
from bs4 import BeautifulSoup
from markdown_it.common.utils import escapeHtml

logger = logging.getLogger(__name__)

MATH_BLOCK_TOKEN = "math_display"
MATH_INLINE_TOKEN = "math_span"

_BLOCK_TYPES = {"math_block", "math_block_label"}
# math_inline_double is only produced with dollarmath's double_inline option on
_INLINE_TYPES = {"math_inline": False, "math_inline_double": True}

# Marks markup produced here, as opposed to raw HTML that happens to use a
# "math" class
MATH_ATTR = "data-math"


def render_mathjax(expression: str, display: bool) -> str:
    if display:
        return escapeHtml(f"\\[{expression}\\]")
    return escapeHtml(f"\\({expression}\\)")


@lru_cache(maxsize=1)
def pandoc_available() -> bool:
    try:
        pypandoc.get_pandoc_version()
    except OSError:
        logger.warning("pandoc not installed - math falls back to MathJax markup")
        return False
    return True


@lru_cache(maxsize=512)
def render_mathml(expression: str, display: bool) -> str:
    source = f"$${expression}$$" if display else f"${expression}$"
    html = pypandoc.convert_text(
        source,
        to="html5",
        format="markdown",
        extra_args=["--mathml"],
    )
    math = BeautifulSoup(html, "html.parser").find("math")
    return str(math) if math is not None else html.strip()


def render_math(expression: str, display: bool, engine: str = "mathjax") -> str:
    """Render one math expression to markup with the configured engine."""
    expression = expression.strip()
    if engine == "pandoc" and pandoc_available():
        return render_mathml(expression, display)
    return render_mathjax(expression, display)


def _label_id(label):
    return re.sub(r"\s+", "-", label.strip())


def expand_math(tokens, context):
    engine = context["config"]["math"]["engine"]

    for token in tokens:
        if token.type in _BLOCK_TYPES:
            label = token.info if token.type == "math_block_label" else ""
            token.type = MATH_BLOCK_TOKEN
            token.tag = "div"
            token.meta["html"] = render_math(token.content, True, engine)
            token.attrs = {"class": "math display", MATH_ATTR: "display"}
            if label:
                token.attrs["id"] = _label_id(label)
        elif token.type == "inline" and token.children:
            for child in token.children:
                if child.type not in _INLINE_TYPES:
                    continue
                display = _INLINE_TYPES[child.type]
                child.type = MATH_INLINE_TOKEN
                child.tag = "span"
                child.meta["html"] = render_math(child.content, display, engine)
                mode = "display" if display else "inline"
                child.attrs = {"class": f"math {mode}", MATH_ATTR: mode}
    return tokens


def render_math_display(self, tokens, idx, options, env):
    token = tokens[idx]
    return f"<div{self.renderAttrs(token)}>{token.meta['html']}</div>\n"


def render_math_span(self, tokens, idx, options, env):
    token = tokens[idx]
    return f"<span{self.renderAttrs(token)}>{token.meta['html']}</span>"

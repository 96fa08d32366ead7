# mdpreview/transforms/highlight.py

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound
from markdown_it.common.utils import escapeHtml

from .diagrams import fence_language

CODE_TOKEN = "code_highlighted"

_FORMATTER = HtmlFormatter(nowrap=True)


def find_lexer(code, language=None, detect=True):
    """
    Return a Pygments lexer for ``code``, or None to render it plain.

    A declared language that Pygments does not know yields None rather than
    an error. Without a declared language the lexer is guessed when
    ``detect`` is set; a guess of plain text counts as no match.
    """
    if language:
        try:
            return get_lexer_by_name(language)
        except ClassNotFound:
            return None
    if not detect or not code.strip():
        return None
    try:
        lexer = guess_lexer(code)
    except ClassNotFound:
        return None
    return None if isinstance(lexer, TextLexer) else lexer


def highlight_code(code, language=None, detect=True, code_class="hljs"):
    """
    Highlight ``code`` and return ``(inner_html, class_attribute)``.

    Unsupported or undetectable languages come back HTML-escaped with only a
    ``language-*`` class (if one was declared).
    """
    lexer = find_lexer(code, language, detect)
    if lexer is None:
        return escapeHtml(code), f"language-{language}" if language else ""
    name = language or (lexer.aliases[0] if lexer.aliases else lexer.name.lower())
    return highlight(code, lexer, _FORMATTER), f"{code_class} language-{name}"


def highlight_code_blocks(tokens, context):
    options = context["config"]["highlight"]

    for token in tokens:
        if token.type not in ("fence", "code_block"):
            continue
        language = fence_language(token) if token.type == "fence" else ""
        html, css_class = highlight_code(
            token.content,
            language or None,
            detect=options["detect"],
            code_class=options["code_class"],
        )
        token.type = CODE_TOKEN
        token.tag = "pre"
        token.meta["html"] = html
        token.meta["code_class"] = css_class
    return tokens


def render_code(self, tokens, idx, options, env):
    token = tokens[idx]
    css_class = token.meta.get("code_class")
    code_attrs = f' class="{escapeHtml(css_class)}"' if css_class else ""
    return f"<pre{self.renderAttrs(token)}><code{code_attrs}>{token.meta['html']}</code></pre>\n"

# mdpreview/transforms/diagrams.py
"""
Turn diagram code fences into placeholders for the client-side renderer.

A fence such as

    ```mermaid
    graph TD
        A[Start] --> B[End]
    ```

becomes

    <div class="mermaid" data-mermaid="...">...</div>

where both the data attribute and the element text carry the diagram source
after label auto-wrapping. The diagram itself is drawn in the browser.
"""

from markdown_it.common.utils import escapeHtml

from ..preprocessors.diagram_labels import wrap_diagram_labels

DIAGRAM_TOKEN = "diagram"


def fence_language(token):
    info = (token.info or "").strip()
    return info.split(maxsplit=1)[0].lower() if info else ""


def expand_diagram_fences(tokens, context):
    config = context["config"]
    languages = set(config["diagram_languages"])
    icon_prefixes = config["icon_prefixes"]

    for token in tokens:
        if token.type != "fence":
            continue
        language = fence_language(token)
        if language not in languages:
            continue

        source = wrap_diagram_labels(token.content.rstrip("\n"), icon_prefixes)
        token.type = DIAGRAM_TOKEN
        token.tag = "div"
        token.content = source
        token.meta["language"] = language
        token.attrs = {"class": language, f"data-{language}": source}
    return tokens


def render_diagram(self, tokens, idx, options, env):
    token = tokens[idx]
    return f"<div{self.renderAttrs(token)}>{escapeHtml(token.content)}</div>\n"

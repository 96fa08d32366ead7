import os

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def get_markdown_config():
    """
    Configuration for the markdown-it rendering pipeline.

    The parser runs the CommonMark preset with the GitHub flavoured additions
    the editor relies on (tables, strikethrough, bare URL links, task lists)
    and dollar-delimited math. Raw HTML in the source is passed through.

    Environment overrides:
        MDPREVIEW_MATH_ENGINE: "mathjax" (default) or "pandoc" (MathML via pypandoc)
        MDPREVIEW_HIGHLIGHT_DETECT: guess the language of untagged code fences
    """
    return {
        "preset": "commonmark",
        "options": {
            "html": True,
            "linkify": True,
            "typographer": False,
        },
        "enable": ["table", "strikethrough", "linkify"],
        # mdit_py_plugins.dollarmath options
        "dollarmath": {
            "allow_labels": True,
            "allow_space": True,
            "allow_digits": True,
            "double_inline": False,
        },
        "diagram_languages": ("mermaid",),
        # Labels starting with these are icon references and are never wrapped
        "icon_prefixes": ("fa:", "fab:", "fas:"),
        "math": {
            "engine": os.environ.get("MDPREVIEW_MATH_ENGINE", "mathjax").strip().lower(),
        },
        "highlight": {
            "detect": _env_flag("MDPREVIEW_HIGHLIGHT_DETECT", True),
            "code_class": "hljs",
        },
    }

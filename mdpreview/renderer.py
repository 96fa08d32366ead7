# mdpreview/renderer.py

import asyncio

from .parser import get_parser
from .postprocessors import apply_postprocessors
from .preprocessors import apply_preprocessors
from .transforms import DOCUMENT_TRANSFORMS, apply_transforms


def render_tokens(tokens, env=None):
    """Serialise a transformed token stream to HTML, raw HTML included."""
    md = get_parser()
    return md.renderer.render(tokens, md.options, env if env is not None else {})


def render_markdown(text, context=None):
    """
    Render a whole document in one pass.

    Heading ids are assigned here in a single walk over the document, which
    makes this the reference the block renderer's ids must agree with.

    Args:
        text: Raw markdown text
        context: Optional dict for processors that need additional data;
            copied, so one dict can be reused across documents
    """
    context = dict(context or {})
    if not text.strip():
        return ""

    # Pre-processing: before parsing
    text = apply_preprocessors(text, context)

    env = {}
    tokens = get_parser().parse(text, env)
    tokens = apply_transforms(tokens, context, DOCUMENT_TRANSFORMS)
    html = render_tokens(tokens, env)

    # Post-processing: after HTML serialisation
    return apply_postprocessors(html, context)


def process_markdown_sync(text):
    return render_markdown(text)


async def process_markdown(text):
    """Full-document render that runs off the event loop."""
    return await asyncio.to_thread(render_markdown, text)

# mdpreview/postprocessors/slug_injector.py
"""
Postprocessor that applies document-wide heading slugs to one block's HTML.

Blocks are rendered in isolation, so a block cannot know whether its
``## Notes`` is the first or the third in the document. The slug table
resolved from the full document does; this looks each heading up by level,
owning block and plain text and sets its ``id``. Headings the table does not
know are left as rendered.
"""

from collections import Counter

from bs4 import BeautifulSoup, NavigableString, Tag

from ..transforms.math import MATH_ATTR

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def _is_rendered_math(element: Tag) -> bool:
    # Only math rendered by expand_math; author HTML with a "math" class is text
    return element.name == "math" or element.has_attr(MATH_ATTR)


def heading_plain_text(element: Tag) -> str:
    """
    Return the literal text of a heading element.

    Markup is dropped, entities come back decoded, and rendered math and
    comments are skipped so the result matches the text taken from the
    heading's tokens.
    """
    parts = []
    for child in element.children:
        if isinstance(child, Tag):
            if not _is_rendered_math(child):
                parts.append(heading_plain_text(child))
        elif type(child) is NavigableString:
            parts.append(str(child))
    return "".join(parts)


def inject_slugs(html: str, slug_table, block_id: str) -> str:
    """
    Set the id of each heading in ``html`` from ``slug_table``.

    Args:
        html: Rendered HTML of a single block
        slug_table: SlugTable resolved from the whole document
        block_id: Id of the block the HTML belongs to

    Returns:
        HTML with resolved ids applied; unchanged if nothing matched
    """
    if not html or not slug_table:
        return html

    soup = BeautifulSoup(html, "html.parser")
    seen = Counter()
    changed = False

    for heading in soup.find_all(HEADING_TAGS):
        level = int(heading.name[1])
        text = heading_plain_text(heading)
        seen[(level, text)] += 1

        info = slug_table.get(level, block_id, text, seen[(level, text)])
        if info is None:
            continue
        heading["id"] = info.slug
        changed = True

    return str(soup) if changed else html


def slug_injector_default(html: str, context: dict) -> str:
    """
    Default configuration for inject_slugs.

    Reads the table and block id from the render context and does nothing
    when either is missing.
    """
    slug_table = context.get("slug_table")
    block_id = context.get("block_id")
    if slug_table is None or block_id is None:
        return html
    return inject_slugs(html, slug_table, block_id)

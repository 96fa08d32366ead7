# mdpreview/transforms/heading_ids.py

from ..slugs import Slugger, heading_text, iter_headings


def assign_heading_ids(tokens, context):
    """
    Give every heading with text an id, numbering duplicates in document order.

    Only used when the whole document is rendered in one pass; the block path
    gets the same ids from the slug resolver and injector.
    """
    slugger = Slugger()
    for heading, inline in iter_headings(tokens):
        title = heading_text(inline)
        if title.strip():
            heading.attrSet("id", slugger.slug(title))
    return tokens

# mdpreview/postprocessors/__init__.py

from .slug_injector import slug_injector_default

POSTPROCESSORS = [
    slug_injector_default,  # Apply document-wide heading ids to a block
    # Order matters - they run sequentially
]


def apply_postprocessors(html, context):
    """Apply all postprocessors in order"""
    for processor in POSTPROCESSORS:
        html = processor(html, context)
    return html

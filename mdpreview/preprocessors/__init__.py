# mdpreview/preprocessors/__init__.py

from .display_math import display_math_default

PREPROCESSORS = [
    display_math_default,  # \[ ... \] and one-line $$...$$ become $$ blocks
    # Order matters - they run sequentially
]


def apply_preprocessors(text, context):
    """Apply all preprocessors in order"""
    for processor in PREPROCESSORS:
        text = processor(text, context)
    return text


def preprocess(text):
    """Run the preprocessing stages on ``text`` with a throwaway context."""
    return apply_preprocessors(text, {})

# postrender/markdown/preprocessors/__init__.py

from .front_matter import front_matter_default
from .line_endings import line_endings_default

PREPROCESSORS = [
    front_matter_default,  # Must run first, before newlines are rewritten
    line_endings_default,
    # Order matters - they run sequentially
]

# Mixed-HTML documents keep their markup byte-for-byte apart from the header
HTML_PREPROCESSORS = [
    front_matter_default,
]


def apply_preprocessors(text, context, processors=None):
    """Apply all preprocessors in order"""
    for processor in PREPROCESSORS if processors is None else processors:
        text = processor(text, context)
    return text

"""
Preprocessor that folds every line-ending variant to ``\\n``.

Posts fetched from different sources arrive with ``\\r\\n``, a lone ``\\r``,
or even the two-character sequence backslash + ``n`` where a serializer
escaped the newlines.
"""


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n").replace("\\n", "\n")


def line_endings_default(text: str, context: dict) -> str:
    """
    Default configuration for normalize_line_endings.

    Register this in PREPROCESSORS after the front matter stripper.
    """
    return normalize_line_endings(text)

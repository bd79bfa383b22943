# postrender/markdown/highlight.py
"""
Syntax highlighting for code parts.

The pipeline passes fence language tags through untouched; this is the one
place that decides what they mean. Unknown tags fall back to plain text.
The theme only picks the Pygments style, so light and dark renders of the
same post differ in palette alone.
"""

import logging

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from postrender import conf

logger = logging.getLogger(__name__)

# Tags authors write that Pygments does not know under that name
LANGUAGE_ALIASES = {
    "txt": "text",
    "plain": "text",
    "plaintext": "text",
    "yml": "yaml",
    "md": "markdown",
    "sh": "bash",
    "shell": "bash",
    "js": "javascript",
    "ts": "typescript",
}


def get_lexer(language):
    name = (language or "").strip().lower()
    if not name:
        return TextLexer()
    name = LANGUAGE_ALIASES.get(name, name)
    try:
        return get_lexer_by_name(name)
    except ClassNotFound:
        logger.debug("No lexer for code language %r, rendering as plain text", language)
        return TextLexer()


def style_for_theme(theme):
    themes = conf.code_themes()
    return themes.get(theme) or themes["light"]


def highlight_code(code, language=None, theme="light"):
    """
    Highlight ``code`` as HTML with inline styles.

    Returns a ``<div class="highlight"><pre>...</pre></div>`` block; the
    styles are inlined so the output needs no stylesheet.
    """
    formatter = HtmlFormatter(
        style=style_for_theme(theme),
        noclasses=True,
        cssclass="highlight",
    )
    return highlight(code, get_lexer(language), formatter)

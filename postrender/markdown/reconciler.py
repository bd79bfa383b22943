# postrender/markdown/reconciler.py
"""
HTML reconciler: promote the pipeline's marker markup to render parts.

The intermediate HTML carries two kinds of markers:

    <span class="enhanced-link" data-href="URL">text</span>   → LinkPart
    <pre><code class="language-x">escaped code</code></pre> → CodePart

The string is split on both (keeping the delimiters), markers become typed
parts and everything in between becomes RawHtmlPart. RawHtmlPart only ever
holds this pipeline's own sanitized output.
"""

from __future__ import annotations

import html as html_std
import logging
import re
from typing import List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from .nodes import CodePart, LinkPart, RawHtmlPart, RenderPart

logger = logging.getLogger(__name__)

LINK_MARKER_PATTERN = r'<span\b[^>]*\bclass="enhanced-link"[^>]*>.*?</span>'
CODE_MARKER_PATTERN = r"<pre\b[^>]*>.*?</pre>"

SPLIT_RE = re.compile(f"({LINK_MARKER_PATTERN}|{CODE_MARKER_PATTERN})", re.DOTALL | re.IGNORECASE)
LINK_MARKER_RE = re.compile(LINK_MARKER_PATTERN, re.DOTALL | re.IGNORECASE)
CODE_MARKER_RE = re.compile(
    r"<pre\b(?P<pre_attrs>[^>]*)>\s*"
    r"(?:<code\b(?P<code_attrs>[^>]*)>(?P<code_body>.*?)</code>\s*|(?P<pre_body>.*?))"
    r"</pre>",
    re.DOTALL | re.IGNORECASE,
)
LANGUAGE_RE = re.compile(r"\b(?:language|lang)-([\w+#.-]+)")
TAG_RE = re.compile(r"<[^>]+>")

SAFE_SCHEMES = {"", "http", "https", "mailto", "tel"}


def is_safe_href(href: str) -> bool:
    try:
        scheme = urlparse(href.strip()).scheme.lower()
    except ValueError:
        return False
    return scheme in SAFE_SCHEMES


def decode_code(body: str) -> str:
    """Drop any highlighter markup and decode HTML entities."""
    return html_std.unescape(TAG_RE.sub("", body)).strip("\n")


def _code_language(*attr_strings: Optional[str]) -> Optional[str]:
    for attrs in attr_strings:
        match = LANGUAGE_RE.search(attrs or "")
        if match:
            return match.group(1)
    return None


def _link_part(chunk: str) -> RenderPart:
    span = BeautifulSoup(chunk, "html.parser").find("span")
    href = (span.get("data-href") or "").strip() if span else ""
    text = span.get_text() if span else ""

    if not href or not is_safe_href(href):
        logger.debug("Dropping link with unusable href %r", href)
        return RawHtmlPart(html_std.escape(text))
    return LinkPart(href=href, text=text or href)


def _code_part(match: re.Match) -> CodePart:
    if match.group("code_body") is not None:
        body = match.group("code_body")
        language = _code_language(match.group("code_attrs"), match.group("pre_attrs"))
    else:
        body = match.group("pre_body") or ""
        language = _code_language(match.group("pre_attrs"))
    return CodePart(language=language, code=decode_code(body))


def reconcile(html: str) -> List[RenderPart]:
    """
    Split intermediate HTML into render parts, in document order.

    Args:
        html: Output of the inline transformer or of the mixed-HTML
            postprocessor chain

    Returns:
        LinkPart / CodePart for each marker, RawHtmlPart for the markup
        between them (empty stretches are skipped)
    """
    parts: List[RenderPart] = []
    for chunk in SPLIT_RE.split(html):
        if not chunk:
            continue
        if LINK_MARKER_RE.fullmatch(chunk):
            parts.append(_link_part(chunk))
            continue
        code_match = CODE_MARKER_RE.fullmatch(chunk)
        if code_match:
            parts.append(_code_part(code_match))
            continue
        parts.append(RawHtmlPart(chunk))
    return parts

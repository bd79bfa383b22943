# postrender/markdown/images.py
"""
Helpers shared by every place that emits an ``<img>``.

- Sizing: author styles are kept, missing width/height hints are appended
- Unreliable hosts: image proxies that refuse hot-linking are detected and
  their wrapped target URL is recovered when possible
"""

from __future__ import annotations

import binascii
import logging
import re
from typing import Optional
from urllib.parse import parse_qs, urlparse

from postrender import conf

logger = logging.getLogger(__name__)

HEX_RE = re.compile(r"^(?:[0-9a-fA-F]{2})+$")


def with_sizing_hints(style: str) -> str:
    """
    Append ``max-width: 100%`` and ``height: auto`` when the style does not
    already size the image along that axis.

    An author-specified declaration is never overwritten.
    """
    style = (style or "").strip().rstrip(";").strip()
    properties = {
        declaration.split(":", 1)[0].strip().lower()
        for declaration in style.split(";")
        if ":" in declaration
    }

    hints = []
    if not any("width" in prop for prop in properties):
        hints.append("max-width: 100%")
    if not any("height" in prop for prop in properties):
        hints.append("height: auto")

    return "; ".join(part for part in [style, *hints] if part)


def is_unreliable_host(src: str) -> bool:
    try:
        hostname = (urlparse(src).hostname or "").lower()
    except ValueError:
        return False
    if not hostname:
        return False
    return any(hostname == host or hostname.endswith("." + host) for host in conf.unreliable_image_hosts())


def decode_wrapped_url(src: str) -> Optional[str]:
    """
    Recover the original image URL from a proxy URL.

    Camo-style proxies put the target URL hex-encoded in the last path
    segment (``/<digest>/<hex url>``); others carry it in a ``url`` query
    parameter. Returns None when neither yields an http(s) URL.
    """
    try:
        parsed = urlparse(src)
    except ValueError:
        return None

    candidates = []
    segments = [segment for segment in parsed.path.split("/") if segment]
    if segments and HEX_RE.match(segments[-1]):
        try:
            candidates.append(binascii.unhexlify(segments[-1]).decode("utf-8"))
        except (binascii.Error, UnicodeDecodeError):
            pass
    for value in parse_qs(parsed.query).get("url", []):
        candidates.append(value)

    for candidate in candidates:
        if candidate.startswith(("http://", "https://")):
            return candidate

    logger.debug("Could not decode wrapped image URL %s", src)
    return None

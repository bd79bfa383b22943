# postrender/links/classifier.py
"""
Link classification: map a URL to the site it points at.

Each known site has a descriptor (category, label, icon glyph and colors)
that the UI adapter renders as a small badge next to external links.

Lookup order:
1. Exact match on the hostname (lower-cased, leading ``www.`` removed)
2. Fuzzy match: the first known site sharing a hostname label with the URL,
   ignoring the top-level label (``com``, ``org``...) which every site shares
3. The generic "external link" descriptor
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urljoin, urlparse

from postrender import conf

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkInfo:
    domain: str
    type: str
    label: str
    icon: str
    color: str
    bg_color: str


# Site table: domain -> (type, label, icon, color, background color)
SITE_CONFIGS: dict[str, tuple[str, str, str, str, str]] = {
    # Tech
    "github.com": ("tech", "GitHub", "\U0001F419", "#24292e", "#f6f8fa"),
    "stackoverflow.com": ("tech", "Stack Overflow", "\U0001F4DA", "#f48024", "#fdf7e7"),
    "nodejs.org": ("tech", "Node.js", "\U0001F49A", "#339933", "#e8f5e8"),
    "reactjs.org": ("tech", "React", "⚛️", "#61dafb", "#e8f8fd"),
    "nextjs.org": ("tech", "Next.js", "▲", "#000000", "#f0f0f0"),
    "tailwindcss.com": ("tech", "Tailwind CSS", "\U0001F4A8", "#06b6d4", "#e0f7fa"),
    "segmentfault.com": ("tech", "SegmentFault", "\U0001F527", "#009a61", "#e8f5f0"),
    # Documentation
    "developer.mozilla.org": ("docs", "MDN", "\U0001F4D6", "#000000", "#f0f0f0"),
    "docs.python.org": ("docs", "Python Docs", "\U0001F40D", "#3776ab", "#e7f3ff"),
    # Blogs and newsletters
    "medium.com": ("blog", "Medium", "✍️", "#00ab6c", "#e8f5f0"),
    "dev.to": ("blog", "DEV", "\U0001F468‍\U0001F4BB", "#0a0a0a", "#f5f5f5"),
    "hashnode.com": ("blog", "Hashnode", "\U0001F4DD", "#2962ff", "#e3f2fd"),
    "substack.com": ("newsletter", "Substack", "\U0001F4E7", "#ff6719", "#fff3e0"),
    "juejin.cn": ("blog", "掘金", "⛏️", "#007fff", "#e3f2fd"),
    "csdn.net": ("blog", "CSDN", "\U0001F4BB", "#fc5531", "#fff3e0"),
    "cnblogs.com": ("blog", "博客园", "\U0001F338", "#2e8b57", "#f0f8f0"),
    # Education
    "coursera.org": ("education", "Coursera", "\U0001F393", "#0056d3", "#e3f2fd"),
    "udemy.com": ("education", "Udemy", "\U0001F4DA", "#a435f0", "#f3e5f5"),
    "khanacademy.org": ("education", "Khan Academy", "\U0001F3EB", "#14bf96", "#e0f2f1"),
    # Tools
    "figma.com": ("design", "Figma", "\U0001F3A8", "#f24e1e", "#ffeee8"),
    "notion.so": ("productivity", "Notion", "\U0001F4CB", "#000000", "#f7f7f7"),
    "trello.com": ("productivity", "Trello", "\U0001F4CB", "#0079bf", "#e3f2fd"),
    # Video
    "youtube.com": ("video", "YouTube", "\U0001F4FA", "#ff0000", "#ffebee"),
    "bilibili.com": ("video", "Bilibili", "\U0001F4FA", "#00a1d6", "#e1f5fe"),
    # Social
    "twitter.com": ("social", "Twitter", "\U0001F426", "#1da1f2", "#e3f2fd"),
    "x.com": ("social", "X", "✖️", "#000000", "#f5f5f5"),
    "linkedin.com": ("social", "LinkedIn", "\U0001F4BC", "#0077b5", "#e3f2fd"),
    "reddit.com": ("social", "Reddit", "\U0001F534", "#ff4500", "#fff3e0"),
    "zhihu.com": ("social", "知乎", "\U0001F914", "#0084ff", "#e3f2fd"),
    # Specifications
    "w3.org": ("spec", "W3C", "\U0001F310", "#005a9c", "#e3f2fd"),
    "tc39.es": ("spec", "TC39", "\U0001F4CB", "#f7df1e", "#fffde7"),
}

DEFAULT_SITE = ("external", "External link", "\U0001F517", "#6b7280", "#f9fafb")


def _site_table() -> dict[str, tuple[str, str, str, str, str]]:
    """Built-in sites with ``POSTRENDER_EXTRA_LINK_SITES`` merged over them."""
    table = dict(SITE_CONFIGS)
    for domain, descriptor in conf.extra_link_sites().items():
        if isinstance(descriptor, dict):
            table[domain.lower()] = (
                descriptor.get("type", DEFAULT_SITE[0]),
                descriptor.get("label", domain),
                descriptor.get("icon", DEFAULT_SITE[2]),
                descriptor.get("color", DEFAULT_SITE[3]),
                descriptor.get("bg_color", DEFAULT_SITE[4]),
            )
        else:
            table[domain.lower()] = tuple(descriptor)
    return table


def extract_domain(url: str) -> str:
    """Return the lower-cased hostname of ``url`` without ``www.``, or ""."""
    try:
        hostname = urlparse(url).hostname or ""
    except ValueError:
        return ""
    hostname = hostname.lower()
    if hostname.startswith("www."):
        hostname = hostname[4:]
    return hostname


def _significant_labels(domain: str) -> set[str]:
    labels = [label for label in domain.split(".") if label]
    if len(labels) > 1:
        labels = labels[:-1]
    return set(labels)


def classify(url: str) -> LinkInfo:
    """Map ``url`` to the descriptor of the site it points at."""
    domain = extract_domain(url)
    table = _site_table()

    descriptor = table.get(domain)
    if descriptor is None and domain:
        domain_labels = _significant_labels(domain)
        for site_domain, site_descriptor in table.items():
            if _significant_labels(site_domain) & domain_labels:
                descriptor = site_descriptor
                break

    if descriptor is None:
        descriptor = DEFAULT_SITE

    return LinkInfo(domain, *descriptor)


def is_internal(url: str, origin: str | None = None) -> bool:
    """Check whether ``url`` stays on the site served from ``origin``.

    Falls back to treating anything that does not start with ``http`` as
    internal when the URL cannot be resolved.
    """
    if origin is None:
        origin = conf.site_origin()

    try:
        if not origin:
            parsed = urlparse(url)
            return not (parsed.scheme or parsed.netloc)
        base = urlparse(origin)
        resolved = urlparse(urljoin(origin, url))
        return (resolved.scheme, resolved.netloc) == (base.scheme, base.netloc)
    except ValueError:
        logger.debug("Could not resolve link %r against %r", url, origin)
        return not url.startswith("http")


def format_display_domain(domain: str) -> str:
    """Strip common host prefixes for display."""
    for prefix in ("www.", "m.", "mobile."):
        if domain.startswith(prefix):
            return domain[len(prefix):]
    return domain

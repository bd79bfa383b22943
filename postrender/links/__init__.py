"""
Link classification for rendered posts.
"""

from .classifier import (
    DEFAULT_SITE,
    SITE_CONFIGS,
    LinkInfo,
    classify,
    extract_domain,
    format_display_domain,
    is_internal,
)

__all__ = [
    'DEFAULT_SITE',
    'SITE_CONFIGS',
    'LinkInfo',
    'classify',
    'extract_domain',
    'format_display_domain',
    'is_internal',
]

# postrender/conf.py
"""
Optional Django settings read by the rendering pipeline.

Every setting has a default so the app works without any configuration.
"""

from django.conf import settings

DEFAULT_UNRELIABLE_IMAGE_HOSTS = ("camo.githubusercontent.com", "wostatic.cn")
DEFAULT_CODE_THEMES = {"light": "default", "dark": "monokai"}


def site_origin() -> str:
    return getattr(settings, "POSTRENDER_SITE_ORIGIN", "") or ""


def unreliable_image_hosts() -> tuple:
    hosts = getattr(settings, "POSTRENDER_UNRELIABLE_IMAGE_HOSTS", DEFAULT_UNRELIABLE_IMAGE_HOSTS)
    return tuple(host.lower() for host in hosts)


def extra_link_sites() -> dict:
    return dict(getattr(settings, "POSTRENDER_EXTRA_LINK_SITES", {}) or {})


def max_heading_level() -> int:
    return int(getattr(settings, "POSTRENDER_MAX_HEADING_LEVEL", 6))


def code_themes() -> dict:
    themes = dict(DEFAULT_CODE_THEMES)
    themes.update(getattr(settings, "POSTRENDER_CODE_THEMES", {}) or {})
    return themes

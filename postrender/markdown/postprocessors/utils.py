"""Shared BeautifulSoup parsing and inline-style helpers for the mixed-HTML chain."""

from __future__ import annotations

from bs4 import BeautifulSoup

# context[_SOUP_CACHE_KEY] = (html the soup was parsed from or serialized to, soup)
_SOUP_CACHE_KEY = "__shared_soup"


def get_shared_soup(html: str, context: dict) -> BeautifulSoup:
    """Return the soup for ``html``, parsing it only if the chain has not already.

    Consecutive postprocessors hand each other the string they serialized,
    so as long as nobody rewrote it in between, the cached tree is reused.
    """
    cached = context.get(_SOUP_CACHE_KEY)
    if cached is not None and cached[0] == html:
        return cached[1]

    soup = BeautifulSoup(html, "html.parser")
    context[_SOUP_CACHE_KEY] = (html, soup)
    return soup


def soup_to_html(context: dict, soup: BeautifulSoup | None = None) -> str:
    """Serialize ``soup`` (default: the cached one) and remember the result."""
    if soup is None:
        cached = context.get(_SOUP_CACHE_KEY)
        soup = cached[1] if cached is not None else None
    if soup is None:
        return ""

    html = str(soup)
    context[_SOUP_CACHE_KEY] = (html, soup)
    return html


def clear_shared_soup(context: dict) -> None:
    context.pop(_SOUP_CACHE_KEY, None)


def parse_style(style: str) -> list[tuple[str, str]]:
    """Split an inline ``style`` attribute into (property, value) pairs."""
    declarations = []
    for declaration in (style or "").split(";"):
        name, sep, value = declaration.partition(":")
        if sep and name.strip():
            declarations.append((name.strip().lower(), value.strip()))
    return declarations


def format_style(declarations) -> str:
    return "; ".join(f"{name}: {value}" for name, value in declarations)

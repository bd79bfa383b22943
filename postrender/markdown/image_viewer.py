# postrender/markdown/image_viewer.py
"""
Click-to-zoom image viewer state.

One ImageViewer belongs to one rendered document and is passed in through
the render context instead of living in a module global, so concurrent
renders never share it. It records every image the document shows and
models the single overlay: at most one image is open, opening another
replaces it, and the page scroll stays locked while the overlay is open.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from bs4 import BeautifulSoup

from .nodes import RawHtmlPart, RenderPart

IMG_TAG_RE = re.compile(r"<img\b([^>]*>)", re.IGNORECASE)

MIN_SCALE = 0.1
MAX_SCALE = 5.0
SCALE_STEP = 0.2
WHEEL_STEP = 0.1


@dataclass(frozen=True)
class ImageEntry:
    index: int
    src: str
    alt: str = ""


@dataclass
class ImageViewer:
    images: List[ImageEntry] = field(default_factory=list)
    active: Optional[int] = None
    scale: float = 1.0
    offset: Tuple[float, float] = (0.0, 0.0)
    scroll_locked: bool = False

    @property
    def is_open(self) -> bool:
        return self.active is not None

    @property
    def current(self) -> Optional[ImageEntry]:
        return self.images[self.active] if self.active is not None else None

    def register(self, src: str, alt: str = "") -> ImageEntry:
        entry = ImageEntry(len(self.images), src, alt)
        self.images.append(entry)
        return entry

    def open(self, index: int) -> ImageEntry:
        if not 0 <= index < len(self.images):
            raise IndexError(f"No image registered at index {index}")
        self.active = index
        self.reset()
        self.scroll_locked = True
        return self.images[index]

    def close(self) -> None:
        self.active = None
        self.reset()
        self.scroll_locked = False

    def reset(self) -> None:
        self.scale = 1.0
        self.offset = (0.0, 0.0)

    def _set_scale(self, scale: float) -> float:
        self.scale = round(max(MIN_SCALE, min(MAX_SCALE, scale)), 2)
        return self.scale

    def zoom_in(self) -> float:
        return self._set_scale(self.scale + SCALE_STEP)

    def zoom_out(self) -> float:
        return self._set_scale(self.scale - SCALE_STEP)

    def zoom_by(self, wheel_delta: float) -> float:
        """Wheel zoom: scrolling down zooms out, scrolling up zooms in."""
        return self._set_scale(self.scale + (-WHEEL_STEP if wheel_delta > 0 else WHEEL_STEP))

    def pan(self, dx: float, dy: float) -> Tuple[float, float]:
        if self.is_open:
            self.offset = (self.offset[0] + dx, self.offset[1] + dy)
        return self.offset


def collect_images(parts: Iterable[RenderPart], viewer: ImageViewer) -> List[RenderPart]:
    """
    Register every ``<img>`` found in raw HTML parts with ``viewer``.

    Each image is tagged with ``data-zoom-index`` so the overlay can find it.
    Returns the parts, with raw HTML parts rewritten where images were found.
    """
    collected: List[RenderPart] = []
    for part in parts:
        if not isinstance(part, RawHtmlPart) or "<img" not in part.html:
            collected.append(part)
            continue

        def tag_image(match):
            img = BeautifulSoup(match.group(0), "html.parser").find("img")
            if img is None:
                return match.group(0)
            entry = viewer.register(img.get("src", ""), img.get("alt", ""))
            return f'<img data-zoom-index="{entry.index}"{match.group(1)}'

        # Tags are patched in place: parts may hold unbalanced markup that a
        # parse and re-serialize round trip would rebalance
        collected.append(RawHtmlPart(IMG_TAG_RE.sub(tag_image, part.html)))
    return collected

"""
Image module.

Concrete module for images laid out on a scrollable page. Visibility is
decided by intersecting the item's box with a viewport rectangle.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import numpy as np
from easydict import EasyDict as edict

from ...config import load_config
from ..annotation import BasicAnnotator, PolygonSelector, RectSelector
from .module import Module
from .scheduler import HostSignal

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ImageItem:
    """An image element of the host page, positioned in page coordinates."""

    src: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    kind: str = "image"

    def box(self) -> np.ndarray:
        return np.array([self.x, self.y, self.x + self.width, self.y + self.height], dtype=np.float64)

    def to_dict(self):
        return {
            "src": self.src,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "kind": self.kind,
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            src=data["src"],
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            width=float(data.get("width", 0.0)),
            height=float(data.get("height", 0.0)),
            kind=data.get("kind", "image"),
        )


@dataclass
class Viewport:
    """Visible part of the page. ``margin`` grows it on every side."""

    x: float = 0.0
    y: float = 0.0
    width: float = 1280.0
    height: float = 800.0
    margin: float = 0.0

    def box(self) -> np.ndarray:
        return np.array(
            [
                self.x - self.margin,
                self.y - self.margin,
                self.x + self.width + self.margin,
                self.y + self.height + self.margin,
            ],
            dtype=np.float64,
        )

    def contains(self, item: ImageItem) -> bool:
        """True if any part of the item overlaps the viewport."""
        a = item.box()
        b = self.box()
        lo = np.maximum(a[:2], b[:2])
        hi = np.minimum(a[2:], b[2:])
        return bool(np.all(hi > lo))


class ImageModule(Module):
    """
    Module for :class:`ImageItem` objects of kind ``"image"``.

    Args:
        viewport: Visible page area; built from ``cfg.viewport`` if omitted
        signal: Scroll signal of the host page
        cfg: Configuration
    """

    def __init__(
        self,
        viewport: Optional[Viewport] = None,
        signal: Optional[HostSignal] = None,
        cfg: Optional[edict] = None,
    ):
        cfg = cfg if cfg is not None else load_config()
        super().__init__(signal=signal, cfg=cfg)
        if viewport is None:
            viewport = Viewport(
                width=float(cfg.viewport.width),
                height=float(cfg.viewport.height),
                margin=float(cfg.viewport.margin),
            )
        self.viewport = viewport

    def get_item_url(self, item: ImageItem) -> str:
        return item.src

    def init(self, predefined_items: Optional[List[Any]] = None):
        self._init([item for item in predefined_items or [] if self.supports(item)])

    def new_annotator(self, item: ImageItem) -> BasicAnnotator:
        return BasicAnnotator(item, selectors=[RectSelector(), PolygonSelector()])

    def supports(self, item: Any) -> bool:
        return isinstance(item, ImageItem) and item.kind == "image"

    def is_in_viewport(self, item: ImageItem) -> bool:
        return self.viewport.contains(item)

    def scroll_to(self, y: float, x: Optional[float] = None):
        """Move the viewport and notify listeners, as a page scroll would."""
        self.viewport.y = y
        if x is not None:
            self.viewport.x = x
        self.signal.fire()

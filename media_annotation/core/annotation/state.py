"""
Annotation records.

Contains the data classes exchanged between modules, annotators and
plugins. Annotations compare by identity: the module buffers and
replaces them by reference, so two annotations with the same content
are still two different annotations.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import numpy as np


@dataclass
class Shape:
    """A region on an item."""

    type: str
    geometry: Dict[str, Any] = field(default_factory=dict)
    units: str = "pixel"
    style: Dict[str, Any] = field(default_factory=dict)

    def points(self) -> np.ndarray:
        """Outline of the shape as an (N, 2) array of x, y coordinates."""
        if self.type == "rect":
            g = self.geometry
            x, y = g["x"], g["y"]
            w, h = g["width"], g["height"]
            return np.array(
                [[x, y], [x + w, y], [x + w, y + h], [x, y + h]], dtype=np.float64
            )
        if self.type == "polygon":
            return np.array(
                [[p["x"], p["y"]] for p in self.geometry["points"]], dtype=np.float64
            ).reshape(-1, 2)
        if self.type == "point":
            return np.array(
                [[self.geometry["x"], self.geometry["y"]]], dtype=np.float64
            )
        raise ValueError(f"Unknown shape type: {self.type}")

    def bounding_box(self) -> Tuple[float, float, float, float]:
        """Return (x, y, width, height) of the shape outline."""
        pts = self.points()
        if pts.size == 0:
            return (0.0, 0.0, 0.0, 0.0)
        lo = pts.min(axis=0)
        hi = pts.max(axis=0)
        return (float(lo[0]), float(lo[1]), float(hi[0] - lo[0]), float(hi[1] - lo[1]))

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "type": self.type,
            "geometry": dict(self.geometry),
            "units": self.units,
            "style": dict(self.style),
        }

    @classmethod
    def from_dict(cls, data: dict):
        """Create from dictionary."""
        return cls(
            type=data["type"],
            geometry=dict(data.get("geometry", {})),
            units=data.get("units", "pixel"),
            style=dict(data.get("style", {})),
        )


@dataclass(eq=False)
class Annotation:
    """
    One marked region or comment on an item.

    ``src`` is the URL of the annotated item and decides which annotator
    the annotation belongs to.
    """

    src: str
    text: str = ""
    shapes: List[Shape] = field(default_factory=list)
    context: Optional[str] = None
    editable: bool = True

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "src": self.src,
            "text": self.text,
            "shapes": [s.to_dict() for s in self.shapes],
            "context": self.context,
            "editable": self.editable,
        }

    @classmethod
    def from_dict(cls, data: dict):
        """Create from dictionary."""
        return cls(
            src=data["src"],
            text=data.get("text", ""),
            shapes=[Shape.from_dict(s) for s in data.get("shapes", [])],
            context=data.get("context"),
            editable=data.get("editable", True),
        )

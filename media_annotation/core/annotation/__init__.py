"""
Core annotation module - UI-agnostic annotation records and annotators.

This module provides the base abstractions shared by modules, annotators
and plugins, independent of how annotations are rendered.
"""

from .annotator import Annotator, BasicAnnotator, PolygonSelector, RectSelector, Selector
from .events import AnnotationEvent, EventType, EventEmitter
from .state import Annotation, Shape

__all__ = [
    "Annotator",
    "BasicAnnotator",
    "Selector",
    "RectSelector",
    "PolygonSelector",
    "AnnotationEvent",
    "EventType",
    "EventEmitter",
    "Annotation",
    "Shape",
]

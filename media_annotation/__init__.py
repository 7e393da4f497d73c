import media_annotation.utils.i18n  # noqa:F401

from media_annotation.config import load_config
from media_annotation.core.annotation import (
    Annotation,
    AnnotationEvent,
    Annotator,
    BasicAnnotator,
    EventType,
    Shape,
)
from media_annotation.core.module import (
    HostSignal,
    ImageItem,
    ImageModule,
    Module,
    Viewport,
)

__all__ = [
    "load_config",
    "Annotation",
    "AnnotationEvent",
    "Annotator",
    "BasicAnnotator",
    "EventType",
    "Shape",
    "HostSignal",
    "ImageItem",
    "ImageModule",
    "Module",
    "Viewport",
]

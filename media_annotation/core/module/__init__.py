"""
Modules - bind annotatable items to their annotators.

Provides the abstract module lifecycle (materialization, buffering,
lazy loading) and the image module built on it.
"""

from .buffer import MutationBuffer
from .image import ImageItem, ImageModule, Viewport
from .module import Module
from .scheduler import HostSignal, LazyLoadScheduler, ListenerKey

__all__ = [
    "Module",
    "MutationBuffer",
    "HostSignal",
    "LazyLoadScheduler",
    "ListenerKey",
    "ImageItem",
    "ImageModule",
    "Viewport",
]

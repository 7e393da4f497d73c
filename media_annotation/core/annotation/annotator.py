"""
Annotator contract and an in-memory reference annotator.

An annotator owns the annotation state and overlay interaction of
exactly one item. Modules only talk to annotators through the methods
of :class:`Annotator`, so any rendering backend can be plugged in.
"""

import logging
from abc import ABC, abstractmethod
from gettext import gettext as _
from typing import Any, Callable, List, Optional

from .events import AnnotationEvent, EventEmitter, EventType
from .state import Annotation

logger = logging.getLogger(__name__)


class Selector(ABC):
    """A named strategy for drawing annotation geometry on an item."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...


class RectSelector(Selector):
    @property
    def name(self) -> str:
        return "rect"


class PolygonSelector(Selector):
    @property
    def name(self) -> str:
        return "polygon"


class Annotator(ABC):
    """Capability set a module consumes from an annotator."""

    @abstractmethod
    def add_annotation(self, annotation: Annotation, replace: Optional[Annotation] = None):
        ...

    @abstractmethod
    def remove_annotation(self, annotation: Annotation):
        ...

    @abstractmethod
    def get_annotations(self) -> List[Annotation]:
        ...

    @abstractmethod
    def highlight_annotation(self, annotation: Optional[Annotation] = None):
        """Highlight an annotation, or clear the highlight when None."""
        ...

    @abstractmethod
    def add_handler(self, event_type: EventType, handler: Callable[[AnnotationEvent], None]):
        ...

    @abstractmethod
    def set_selection_enabled(self, enabled: bool):
        ...

    @abstractmethod
    def enable_selection(self, param: Any = None):
        ...

    @abstractmethod
    def disable_selection(self):
        ...

    @abstractmethod
    def add_selector(self, selector: Selector):
        ...

    @abstractmethod
    def set_active_selector(self, name: str):
        ...

    @abstractmethod
    def get_active_selector(self) -> Optional[Selector]:
        ...

    @abstractmethod
    def get_available_selectors(self) -> List[Selector]:
        ...


class BasicAnnotator(Annotator):
    """
    Annotator keeping its state in memory, without any overlay.

    This class handles:
    - Ordered annotation storage with replace support
    - Event emission for annotation changes
    - Highlight tracking
    - Selection flag and selector management

    Args:
        item: The item this annotator belongs to
        selectors: Selectors to register; the first one becomes active
    """

    def __init__(self, item: Any = None, selectors: Optional[List[Selector]] = None):
        self.item = item
        self.events = EventEmitter()

        self._annotations: List[Annotation] = []
        self._highlighted: Optional[Annotation] = None
        self._selection_enabled = True

        self._selectors: List[Selector] = []
        self._active_selector: Optional[Selector] = None
        for selector in selectors if selectors is not None else [RectSelector()]:
            self.add_selector(selector)

    def add_annotation(self, annotation: Annotation, replace: Optional[Annotation] = None):
        if replace is not None and any(a is replace for a in self._annotations):
            idx = next(i for i, a in enumerate(self._annotations) if a is replace)
            self._annotations[idx] = annotation
            if self._highlighted is replace:
                self._highlighted = annotation
            self.events.emit(
                AnnotationEvent(
                    EventType.ANNOTATION_UPDATED,
                    {"annotation": annotation, "replaced": replace},
                )
            )
            return

        self._annotations.append(annotation)
        self.events.emit(
            AnnotationEvent(EventType.ANNOTATION_CREATED, {"annotation": annotation})
        )

    def remove_annotation(self, annotation: Annotation):
        if not any(a is annotation for a in self._annotations):
            logger.debug(_("Annotation not present on annotator, ignoring removal"))
            return

        self.events.emit(
            AnnotationEvent(EventType.BEFORE_ANNOTATION_REMOVED, {"annotation": annotation})
        )
        self._annotations = [a for a in self._annotations if a is not annotation]
        if self._highlighted is annotation:
            self._highlighted = None
        self.events.emit(
            AnnotationEvent(EventType.ANNOTATION_REMOVED, {"annotation": annotation})
        )

    def get_annotations(self) -> List[Annotation]:
        return list(self._annotations)

    def highlight_annotation(self, annotation: Optional[Annotation] = None):
        if annotation is not None and not any(a is annotation for a in self._annotations):
            return
        self._highlighted = annotation

    @property
    def highlighted(self) -> Optional[Annotation]:
        return self._highlighted

    def add_handler(self, event_type: EventType, handler: Callable[[AnnotationEvent], None]):
        self.events.on(EventType.parse(event_type), handler)

    def set_selection_enabled(self, enabled: bool):
        self._selection_enabled = bool(enabled)

    def enable_selection(self, param: Any = None):
        self._selection_enabled = True

    def disable_selection(self):
        self._selection_enabled = False

    @property
    def selection_enabled(self) -> bool:
        return self._selection_enabled

    def add_selector(self, selector: Selector):
        self._selectors.append(selector)
        if self._active_selector is None:
            self._active_selector = selector

    def set_active_selector(self, name: str):
        for selector in self._selectors:
            if selector.name == name:
                self._active_selector = selector
                return
        logger.debug(_("No selector named {name}").format(name=name))

    def get_active_selector(self) -> Optional[Selector]:
        return self._active_selector

    def get_available_selectors(self) -> List[Selector]:
        return list(self._selectors)

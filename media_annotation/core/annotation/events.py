"""
Event system for annotators.

Provides a decoupled way for annotators to notify handlers registered
by the host page or by plugins, without depending on any UI framework.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events an annotator can fire."""

    # Pointer events
    MOUSE_OVER_ITEM = "mouse_over_item"
    MOUSE_OUT_OF_ITEM = "mouse_out_of_item"
    MOUSE_OVER_ANNOTATION = "mouse_over_annotation"
    MOUSE_OUT_OF_ANNOTATION = "mouse_out_of_annotation"

    # Selection events
    SELECTION_STARTED = "selection_started"
    SELECTION_CANCELED = "selection_canceled"
    SELECTION_COMPLETED = "selection_completed"
    SELECTION_CHANGED = "selection_changed"

    # Popup events
    BEFORE_POPUP_HIDE = "before_popup_hide"
    POPUP_SHOWN = "popup_shown"
    POPUP_HIDDEN = "popup_hidden"

    # Annotation events
    BEFORE_ANNOTATION_REMOVED = "before_annotation_removed"
    ANNOTATION_REMOVED = "annotation_removed"
    ANNOTATION_CREATED = "annotation_created"
    ANNOTATION_UPDATED = "annotation_updated"
    ANNOTATION_CLICKED = "annotation_clicked"

    @classmethod
    def parse(cls, value: Union["EventType", str]) -> Union["EventType", str]:
        """
        Accept an EventType or its string value.

        Strings naming no known event are returned unchanged, so hosts and
        plugins can register handlers for their own event types.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return value


def event_name(event_type: Union[EventType, str]) -> str:
    return event_type.value if isinstance(event_type, EventType) else str(event_type)


@dataclass
class AnnotationEvent:
    """Event fired by an annotator."""

    event_type: Union[EventType, str]
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


class EventEmitter:
    """
    Handlers of one annotator, grouped by event type.

    Event types are EventType members or custom strings; handlers run in
    subscription order.
    """

    def __init__(self):
        self._handlers: Dict[Union[EventType, str], List[Callable]] = {}

    def on(self, event_type: Union[EventType, str], callback: Callable[[AnnotationEvent], None]):
        """Subscribe to an event type."""
        self._handlers.setdefault(EventType.parse(event_type), []).append(callback)

    def emit(self, event: AnnotationEvent):
        """Call every handler of the event's type."""
        for callback in list(self._handlers.get(EventType.parse(event.event_type), [])):
            try:
                callback(event)
            except Exception:
                # Log and keep delivering
                logger.exception("Error in handler for %s", event_name(event.event_type))

    def listener_count(self, event_type: Union[EventType, str]) -> int:
        return len(self._handlers.get(EventType.parse(event_type), []))

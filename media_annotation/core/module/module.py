"""
Module base class.

A module binds the annotatable items of one media type to their
annotators. Callers use a single API whether or not an item's annotator
exists yet: requests for pending items are recorded and replayed when
the item is materialized.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from gettext import gettext as _
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from easydict import EasyDict as edict

from ...config import load_config
from ..annotation import Annotation, AnnotationEvent, Annotator, EventType, Selector
from .buffer import MutationBuffer
from .scheduler import HostSignal, LazyLoadScheduler

logger = logging.getLogger(__name__)


class Module(ABC):
    """
    Lifecycle coordinator between items and annotators.

    Subclasses implement :meth:`supports`, :meth:`get_item_url`,
    :meth:`new_annotator` and :meth:`init`, and must call :meth:`_init`
    from :meth:`init` with the items to make annotatable right away.

    Args:
        signal: Scroll-equivalent host signal driving lazy loading
        cfg: Configuration, see :func:`media_annotation.config.load_config`
        is_in_viewport: Visibility test for items; everything is visible if omitted
    """

    def __init__(
        self,
        signal: Optional[HostSignal] = None,
        cfg: Optional[edict] = None,
        is_in_viewport: Optional[Callable[[Any], bool]] = None,
    ):
        self.cfg = cfg if cfg is not None else load_config()
        self.signal = signal if signal is not None else HostSignal()
        self._visibility = is_in_viewport

        self._annotators: Dict[str, Annotator] = {}
        self._event_handlers: List[Tuple[Union[EventType, str], Callable[[AnnotationEvent], None]]] = []
        self._plugins: List[Any] = []
        self._all_items: List[Any] = []
        self._items_to_load: List[Any] = []
        self._buffer = MutationBuffer()
        self._is_selection_enabled = bool(self.cfg.selection_enabled)

        self.scheduler = LazyLoadScheduler(
            self.signal,
            has_pending=lambda: len(self._items_to_load) > 0,
            sweep=self._lazy_load,
        )

    # Methods that must be implemented by subclasses

    @abstractmethod
    def get_item_url(self, item: Any) -> str:
        """Return the identifying URL of an item."""

    @abstractmethod
    def init(self, predefined_items: Optional[List[Any]] = None):
        """Run subclass setup, then call ``self._init`` with the initial items."""

    @abstractmethod
    def new_annotator(self, item: Any) -> Annotator:
        """Create the annotator for an item."""

    @abstractmethod
    def supports(self, item: Any) -> bool:
        """Tell whether this module handles the item's media type."""

    def is_in_viewport(self, item: Any) -> bool:
        if self._visibility is None:
            return True
        return self._visibility(item)

    # Lifecycle

    def _init(self, predefined_items: Optional[List[Any]] = None):
        for item in predefined_items or []:
            self._record_item(item)
            if not self._is_known_pending(item) and not self.is_active(self.get_item_url(item)):
                self._items_to_load.append(item)

        if not self.cfg.lazy_load:
            for item in list(self._items_to_load):
                self._init_annotator(item)
            return

        # Make items in viewport annotatable
        self._lazy_load()

        # Load the remaining ones as they scroll into view
        self.scheduler.attach()

    def _lazy_load(self):
        for item in list(self._items_to_load):
            if any(i is item for i in self._items_to_load) and self.is_in_viewport(item):
                self._init_annotator(item)

    def _init_annotator(self, item: Any) -> Annotator:
        item_src = self.get_item_url(item)

        existing = self._annotators.get(item_src)
        if existing is not None:
            self._drop_pending(item_src)
            return existing

        annotator = self.new_annotator(item)

        if not self._is_selection_enabled:
            annotator.set_selection_enabled(False)

        # Attach handlers that are already registered
        for event_type, handler in self._event_handlers:
            annotator.add_handler(event_type, handler)

        # Callback to registered plugins
        for plugin in self._plugins:
            self._init_plugin(plugin, annotator)

        try:
            added, removed = self._buffer.reconcile(item_src, annotator)
        except Exception:
            logger.error(
                _("Replaying buffered annotations for {src} failed, "
                  "unapplied entries stay buffered").format(src=item_src)
            )
            raise
        finally:
            self._annotators[item_src] = annotator
            self._drop_pending(item_src)

        logger.debug(
            _("Created annotator for {src} ({added} buffered additions, "
              "{removed} buffered removals)").format(src=item_src, added=added, removed=removed)
        )
        return annotator

    def _init_plugin(self, plugin: Any, annotator: Annotator):
        hook = getattr(plugin, "on_init_annotator", None)
        if callable(hook):
            hook(annotator)

    def _record_item(self, item: Any):
        if not any(i is item for i in self._all_items):
            self._all_items.append(item)

    def _is_known_pending(self, item: Any) -> bool:
        return any(i is item for i in self._items_to_load)

    def _drop_pending(self, item_url: str):
        self._items_to_load = [
            i for i in self._items_to_load if self.get_item_url(i) != item_url
        ]

    def make_annotatable(self, item: Any):
        """Make an item annotatable, if it is supported by this module."""
        if not self.supports(item):
            logger.debug(_("Ignoring unsupported item {item!r}").format(item=item))
            return

        self._record_item(item)
        if self.is_active(self.get_item_url(item)):
            logger.debug(_("Item {src} already has an annotator").format(src=self.get_item_url(item)))
            return
        self._init_annotator(item)

    def flush_buffered(self, item_url: str):
        """Retry replaying mutations still buffered for an item with an annotator."""
        annotator = self._annotators.get(item_url)
        if annotator is not None:
            self._buffer.reconcile(item_url, annotator)

    # State queries

    @property
    def all_items(self) -> List[Any]:
        return list(self._all_items)

    @property
    def pending_items(self) -> List[Any]:
        return list(self._items_to_load)

    @property
    def buffer(self) -> MutationBuffer:
        return self._buffer

    @property
    def selection_enabled(self) -> bool:
        return self._is_selection_enabled

    def is_active(self, item_url: str) -> bool:
        return item_url in self._annotators

    def get_annotator(self, item_url: str) -> Optional[Annotator]:
        return self._annotators.get(item_url)

    def annotates_item(self, item_url: str) -> bool:
        """Tell whether this module is in charge of the item with this URL."""
        if item_url in self._annotators:
            return True
        return any(self.get_item_url(item) == item_url for item in self._items_to_load)

    # Annotations

    def add_annotation(self, annotation: Annotation, replace: Optional[Annotation] = None):
        """
        Add an annotation to an item managed by this module.

        Args:
            annotation: The annotation
            replace: Optionally, an existing annotation to replace
        """
        if not self.annotates_item(annotation.src):
            logger.debug(_("Not responsible for {src}, ignoring annotation").format(src=annotation.src))
            return

        if replace is not None and replace.src != annotation.src:
            logger.debug(_("Ignoring replace across items {a} and {b}").format(a=annotation.src, b=replace.src))
            replace = None

        # Mutations still queued after a failed replay keep their turn
        annotator = self._annotators.get(annotation.src)
        if annotator is not None and not self._buffer.holds(annotation.src):
            annotator.add_annotation(annotation, replace)
        else:
            self._buffer.buffer_addition(annotation, replace, forward_replace=annotator is not None)

    def remove_annotation(self, annotation: Annotation):
        """Remove an annotation from the item it belongs to."""
        if not self.annotates_item(annotation.src):
            return

        annotator = self._annotators.get(annotation.src)
        if annotator is not None and not self._buffer.holds(annotation.src):
            annotator.remove_annotation(annotation)
        else:
            self._buffer.buffer_removal(annotation)

    def get_annotations(self, item_url: Optional[str] = None) -> List[Annotation]:
        """
        Return the annotations of one item, or of every item of this module.

        Annotations waiting for an annotator are included.
        """
        if item_url is not None:
            annotator = self._annotators.get(item_url)
            buffered = self._buffer.additions_for(item_url)
            if annotator is not None:
                return annotator.get_annotations() + buffered
            return buffered

        annotations: List[Annotation] = []
        for annotator in self._annotators.values():
            annotations.extend(annotator.get_annotations())
        annotations.extend(self._buffer.additions)
        return annotations

    def highlight_annotation(self, annotation: Optional[Annotation] = None):
        """Highlight an annotation, or clear highlights everywhere if None."""
        if annotation is not None:
            if self.annotates_item(annotation.src):
                annotator = self._annotators.get(annotation.src)
                if annotator is not None:
                    annotator.highlight_annotation(annotation)
        else:
            for annotator in self._annotators.values():
                annotator.highlight_annotation()

    # Handlers and plugins

    def add_handler(self, event_type, handler: Callable[[AnnotationEvent], None]):
        """Register a lifecycle event handler on every annotator, now and later."""
        event_type = EventType.parse(event_type)
        for annotator in self._annotators.values():
            annotator.add_handler(event_type, handler)

        self._event_handlers.append((event_type, handler))

    def add_plugin(self, plugin: Any):
        """Register a plugin; its ``on_init_annotator`` runs for every annotator."""
        self._plugins.append(plugin)

        for annotator in self._annotators.values():
            self._init_plugin(plugin, annotator)

    # Selectors

    def _active_annotator(self, item_url: str) -> Optional[Annotator]:
        if self.annotates_item(item_url):
            return self._annotators.get(item_url)
        return None

    def add_selector(self, item_url: str, selector: Selector):
        annotator = self._active_annotator(item_url)
        if annotator is not None:
            annotator.add_selector(selector)

    def set_active_selector(self, item_url: str, selector: str):
        annotator = self._active_annotator(item_url)
        if annotator is not None:
            annotator.set_active_selector(selector)

    def get_active_selector(self, item_url: str) -> Optional[str]:
        """Return the name of the selector active on an item, if it has an annotator."""
        annotator = self._active_annotator(item_url)
        if annotator is not None:
            selector = annotator.get_active_selector()
            if selector is not None:
                return selector.name
        return None

    def get_available_selectors(self, item_url: str) -> Optional[List[str]]:
        """Return the names of the selectors available on an item."""
        annotator = self._active_annotator(item_url)
        if annotator is not None:
            return [selector.name for selector in annotator.get_available_selectors()]
        return None

    # Selection

    def set_selection_enabled(self, enabled: bool):
        """Enable or disable creating new annotations, on all items now and later."""
        self._is_selection_enabled = bool(enabled)
        for annotator in self._annotators.values():
            annotator.set_selection_enabled(enabled)

    def enable_selection(self, url_or_params: Any = None):
        item_url = None
        if isinstance(url_or_params, str):
            item_url = url_or_params
        elif isinstance(url_or_params, Mapping):
            item_url = url_or_params.get("item_url")

        if item_url is not None:
            annotator = self._annotators.get(item_url)
            if annotator is not None:
                annotator.enable_selection(url_or_params)
        else:
            for annotator in self._annotators.values():
                annotator.enable_selection(url_or_params)

    def disable_selection(self, item_url: Optional[str] = None):
        if item_url is not None:
            annotator = self._annotators.get(item_url)
            if annotator is not None:
                annotator.disable_selection()
        else:
            for annotator in self._annotators.values():
                annotator.disable_selection()

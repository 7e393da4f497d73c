"""
Lazy loading of items as they scroll into view.
"""

import itertools
import logging
from dataclasses import dataclass
from gettext import gettext as _
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListenerKey:
    """Handle returned by :meth:`HostSignal.listen`."""

    key: int


class HostSignal:
    """
    A host-page signal such as scroll.

    The host calls :meth:`fire` whenever the signal occurs; listeners are
    called in subscription order.
    """

    def __init__(self, name: str = "scroll"):
        self.name = name
        self._listeners: Dict[ListenerKey, Callable[[], None]] = {}
        self._keys = itertools.count(1)

    def listen(self, callback: Callable[[], None]) -> ListenerKey:
        key = ListenerKey(next(self._keys))
        self._listeners[key] = callback
        return key

    def unlisten(self, key: ListenerKey) -> bool:
        return self._listeners.pop(key, None) is not None

    def fire(self):
        for callback in list(self._listeners.values()):
            callback()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


class LazyLoadScheduler:
    """
    Runs a sweep on every host signal while items are pending.

    The first signal that finds nothing pending releases the subscription
    for good; :meth:`attach` does nothing after that.

    Args:
        signal: Host signal to listen on
        has_pending: Tells whether any item still waits for an annotator
        sweep: Materializes the pending items that became visible
    """

    def __init__(
        self,
        signal: HostSignal,
        has_pending: Callable[[], bool],
        sweep: Callable[[], None],
    ):
        self.signal = signal
        self._has_pending = has_pending
        self._sweep = sweep
        self._key: Optional[ListenerKey] = None
        self._released = False

    @property
    def attached(self) -> bool:
        return self._key is not None

    @property
    def released(self) -> bool:
        return self._released

    def attach(self):
        if self._key is not None or self._released:
            return
        self._key = self.signal.listen(self._on_signal)
        logger.debug(_("Listening for {signal} to load items").format(signal=self.signal.name))

    def release(self):
        if self._key is not None:
            self.signal.unlisten(self._key)
            self._key = None
        self._released = True

    def _on_signal(self):
        if self._has_pending():
            self._sweep()
        else:
            self.release()
            logger.debug(_("No pending items left, stopped listening for {signal}").format(
                signal=self.signal.name
            ))

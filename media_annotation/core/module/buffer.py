"""
Deferred annotation mutations.

Additions and removals that target an item without an annotator are
queued here, in arrival order, and replayed once the annotator exists.
"""

import logging
from gettext import gettext as _
from typing import Dict, List, Optional, Tuple

from ..annotation import Annotation, Annotator

logger = logging.getLogger(__name__)


def _remove_first(queue: List[Annotation], annotation: Annotation) -> bool:
    for idx, queued in enumerate(queue):
        if queued is annotation:
            del queue[idx]
            return True
    return False


class MutationBuffer:
    """
    Two ordered queues of annotation mutations keyed by ``Annotation.src``.

    Entries are matched by identity. An entry leaves its queue only after
    it was applied to an annotator without raising, or when an addition
    is superseded through ``replace`` by an addition for the same item.
    """

    def __init__(self):
        self.additions: List[Annotation] = []
        self.removals: List[Annotation] = []
        # id(addition) -> annotation it replaces on the annotator
        self._replaces: Dict[int, Annotation] = {}

    def __len__(self):
        return len(self.additions) + len(self.removals)

    def holds(self, item_url: str) -> bool:
        return any(a.src == item_url for a in self.additions) or any(
            a.src == item_url for a in self.removals
        )

    def buffer_addition(
        self,
        annotation: Annotation,
        replace: Optional[Annotation] = None,
        forward_replace: bool = False,
    ):
        """
        Queue an addition.

        A ``replace`` for another item is ignored. If ``replace`` is still
        queued it is dropped; otherwise, with ``forward_replace``, it is
        handed to the annotator together with ``annotation`` on replay.
        """
        self.additions.append(annotation)
        if replace is None or replace.src != annotation.src:
            return
        if _remove_first(self.additions, replace):
            self._replaces.pop(id(replace), None)
            logger.debug(_("Superseded buffered annotation on {src}").format(src=replace.src))
        elif forward_replace:
            self._replaces[id(annotation)] = replace

    def buffer_removal(self, annotation: Annotation):
        self.removals.append(annotation)

    def additions_for(self, item_url: str) -> List[Annotation]:
        return [a for a in self.additions if a.src == item_url]

    def removals_for(self, item_url: str) -> List[Annotation]:
        return [a for a in self.removals if a.src == item_url]

    def reconcile(self, item_url: str, annotator: Annotator) -> Tuple[int, int]:
        """
        Replay the buffered mutations of one item onto its annotator.

        Additions are replayed before removals, each in arrival order.
        Entries of other items keep their place. If the annotator raises,
        the failing entry and everything after it stay buffered and the
        exception propagates.

        Returns:
            Number of (additions, removals) applied
        """
        added = 0
        for annotation in self.additions_for(item_url):
            replace = self._replaces.get(id(annotation))
            if replace is None:
                annotator.add_annotation(annotation)
            else:
                annotator.add_annotation(annotation, replace)
            _remove_first(self.additions, annotation)
            self._replaces.pop(id(annotation), None)
            added += 1

        removed = 0
        for annotation in self.removals_for(item_url):
            annotator.remove_annotation(annotation)
            _remove_first(self.removals, annotation)
            removed += 1

        return added, removed

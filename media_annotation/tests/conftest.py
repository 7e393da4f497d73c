"""
Test fixtures and utilities for media_annotation tests.

Provides a minimal concrete module whose visibility is controlled by the
test, and whose annotators are spied on with ``Mock(wraps=...)``.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
from unittest.mock import Mock

import pytest

from media_annotation.config import load_config
from media_annotation.core.annotation import Annotation, BasicAnnotator
from media_annotation.core.module import HostSignal, Module


@dataclass(eq=False)
class FakeItem:
    """Item identified by its URL."""

    url: str
    kind: str = "image"


class FakeModule(Module):
    """
    Module over :class:`FakeItem` objects.

    Items whose URL is in ``visible`` are in the viewport. Every created
    annotator is a real :class:`BasicAnnotator` (kept in ``real``) wrapped
    by a spy (kept in ``spies``), and the creation order is in ``created``.
    """

    def __init__(self, visible=None, cfg=None, signal: Optional[HostSignal] = None):
        self.visible = set(visible or [])
        self.real: Dict[str, BasicAnnotator] = {}
        self.spies: Dict[str, Mock] = {}
        self.created: List[str] = []
        super().__init__(
            signal=signal,
            cfg=cfg if cfg is not None else load_config({}),
            is_in_viewport=lambda item: item.url in self.visible,
        )

    def get_item_url(self, item):
        return item.url

    def init(self, predefined_items=None):
        self._init(predefined_items)

    def new_annotator(self, item):
        real = self.make_real_annotator(item)
        spy = Mock(wraps=real)
        self.real[item.url] = real
        self.spies[item.url] = spy
        self.created.append(item.url)
        return spy

    def make_real_annotator(self, item):
        return BasicAnnotator(item)

    def supports(self, item):
        return isinstance(item, FakeItem) and item.kind == "image"


@pytest.fixture
def module_factory():
    """The FakeModule class, for tests needing custom visibility or config."""
    return FakeModule


@pytest.fixture
def module():
    """A module with no items and nothing visible."""
    return FakeModule()


@pytest.fixture
def make_item():
    def factory(url: str, kind: str = "image") -> FakeItem:
        return FakeItem(url=url, kind=kind)

    return factory


@pytest.fixture
def make_annotation():
    def factory(src: str, text: str = "") -> Annotation:
        return Annotation(src=src, text=text)

    return factory

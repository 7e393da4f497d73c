"""Tests for the annotator contract and BasicAnnotator."""

from unittest.mock import Mock

import pytest

from media_annotation.core.annotation import (
    Annotation,
    Annotator,
    BasicAnnotator,
    EventType,
    PolygonSelector,
    RectSelector,
    Shape,
)


@pytest.fixture
def annotator():
    return BasicAnnotator("item", selectors=[RectSelector(), PolygonSelector()])


class TestBasicAnnotator:
    def test_cannot_instantiate_contract(self):
        with pytest.raises(TypeError):
            Annotator()

    def test_add_emits_created(self, annotator):
        handler = Mock()
        annotator.add_handler(EventType.ANNOTATION_CREATED, handler)
        annotation = Annotation(src="item")
        annotator.add_annotation(annotation)

        assert annotator.get_annotations() == [annotation]
        assert handler.call_args[0][0].data == {"annotation": annotation}

    def test_replace_keeps_position_and_emits_updated(self, annotator):
        handler = Mock()
        annotator.add_handler("annotation_updated", handler)
        first, old, last = Annotation(src="item"), Annotation(src="item"), Annotation(src="item")
        for annotation in (first, old, last):
            annotator.add_annotation(annotation)
        annotator.highlight_annotation(old)

        new = Annotation(src="item")
        annotator.add_annotation(new, old)

        assert annotator.get_annotations() == [first, new, last]
        assert annotator.highlighted is new
        handler.assert_called_once()

    def test_replace_of_unknown_annotation_appends(self, annotator):
        new = Annotation(src="item")
        annotator.add_annotation(new, Annotation(src="item"))
        assert annotator.get_annotations() == [new]

    def test_remove_emits_before_and_after(self, annotator):
        seen = []
        annotator.add_handler(EventType.BEFORE_ANNOTATION_REMOVED, lambda e: seen.append("before"))
        annotator.add_handler(EventType.ANNOTATION_REMOVED, lambda e: seen.append("after"))
        annotation = Annotation(src="item")
        annotator.add_annotation(annotation)
        annotator.highlight_annotation(annotation)

        annotator.remove_annotation(annotation)
        annotator.remove_annotation(annotation)

        assert seen == ["before", "after"]
        assert annotator.get_annotations() == []
        assert annotator.highlighted is None

    def test_highlight_ignores_foreign_annotation(self, annotator):
        annotator.highlight_annotation(Annotation(src="item"))
        assert annotator.highlighted is None

    def test_selection_flag(self, annotator):
        assert annotator.selection_enabled
        annotator.set_selection_enabled(False)
        assert not annotator.selection_enabled
        annotator.enable_selection({"item_url": "item"})
        assert annotator.selection_enabled
        annotator.disable_selection()
        assert not annotator.selection_enabled

    def test_selectors(self, annotator):
        assert annotator.get_active_selector().name == "rect"
        annotator.set_active_selector("polygon")
        assert annotator.get_active_selector().name == "polygon"
        annotator.set_active_selector("freehand")
        assert annotator.get_active_selector().name == "polygon"
        assert [s.name for s in annotator.get_available_selectors()] == ["rect", "polygon"]

    def test_no_selectors(self):
        annotator = BasicAnnotator(selectors=[])
        assert annotator.get_active_selector() is None
        assert annotator.get_available_selectors() == []


class TestAnnotationRecords:
    def test_annotations_compare_by_identity(self):
        assert Annotation(src="a", text="t") != Annotation(src="a", text="t")

    def test_from_dict(self):
        annotation = Annotation.from_dict(
            {
                "src": "a.jpg",
                "text": "cat",
                "shapes": [{"type": "rect", "geometry": {"x": 1, "y": 2, "width": 3, "height": 4}}],
            }
        )
        assert annotation.src == "a.jpg"
        assert annotation.shapes[0].units == "pixel"
        assert annotation.to_dict()["shapes"][0]["geometry"]["width"] == 3

    def test_rect_bounding_box(self):
        shape = Shape("rect", {"x": 10, "y": 20, "width": 30, "height": 40})
        assert shape.bounding_box() == (10.0, 20.0, 30.0, 40.0)

    def test_polygon_bounding_box(self):
        shape = Shape("polygon", {"points": [{"x": 0, "y": 5}, {"x": 4, "y": 1}, {"x": 2, "y": 9}]})
        assert shape.bounding_box() == (0.0, 1.0, 4.0, 8.0)

    def test_empty_polygon_bounding_box(self):
        assert Shape("polygon", {"points": []}).bounding_box() == (0.0, 0.0, 0.0, 0.0)

    def test_unknown_shape(self):
        with pytest.raises(ValueError):
            Shape("ellipse").points()

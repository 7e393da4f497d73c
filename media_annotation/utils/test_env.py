import media_annotation.utils.i18n  # noqa:F401

import pytest
from easydict import EasyDict as edict

from media_annotation.config import load_config
from .env import coerce_value, load_cfg_from_env


def test_load_cfg_from_env():
    input_dict = {"MEDIA_ANNOTATION_a": 2, "MEDIA_ANNOTATION_eoq__trabson": 3, "OTHER": 1}
    loaded = load_cfg_from_env(edict(), input_dict)
    assert loaded.a == 2
    assert loaded.eoq.trabson == 3
    assert "other" not in loaded


def test_load_config_coerces_to_default_types():
    cfg = load_config(
        {
            "MEDIA_ANNOTATION_SELECTION_ENABLED": "false",
            "MEDIA_ANNOTATION_VIEWPORT__HEIGHT": "900",
        }
    )
    assert cfg.selection_enabled is False
    assert cfg.viewport.height == 900
    assert cfg.viewport.width == 1280
    assert cfg.lazy_load is True


def test_load_config_is_not_shared():
    first = load_config({})
    first.viewport.height = 1
    assert load_config({}).viewport.height == 800


@pytest.mark.parametrize(
    "value,current,expected",
    [("yes", False, True), ("0", True, False), ("12", 3, 12), ("0.5", 1.0, 0.5), ("x", None, "x")],
)
def test_coerce_value(value, current, expected):
    assert coerce_value(value, current) == expected


def test_coerce_value_rejects_bad_bool():
    with pytest.raises(ValueError):
        coerce_value("maybe", True)

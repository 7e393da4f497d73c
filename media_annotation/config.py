"""Default configuration and environment overrides."""

import copy
import os
from typing import Any, Mapping, Optional

from easydict import EasyDict as edict

from media_annotation.utils.env import load_cfg_from_env

DEFAULT_CONFIG = {
    # Initial global selection flag of a module
    "selection_enabled": True,
    # When false, predefined items get their annotator at init time
    "lazy_load": True,
    "viewport": {
        "width": 1280,
        "height": 800,
        "margin": 0,
    },
}


def load_config(env: Optional[Mapping[str, Any]] = None) -> edict:
    cfg = edict(copy.deepcopy(DEFAULT_CONFIG))
    return load_cfg_from_env(cfg, os.environ if env is None else env)

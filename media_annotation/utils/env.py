import logging
from gettext import gettext as _
from typing import Any, Mapping

from easydict import EasyDict as edict

logger = logging.getLogger(__name__)

ENV_PREFIX = "MEDIA_ANNOTATION_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def coerce_value(value: Any, current: Any) -> Any:
    """Convert an override to the type of the value it replaces."""
    if current is None or not isinstance(value, str):
        return value
    if isinstance(current, bool):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(_("Invalid boolean value: {v}").format(v=value))
    if isinstance(current, int):
        return int(value)
    if isinstance(current, float):
        return float(value)
    return value


def load_cfg_from_env(cfg: edict, env: Mapping[str, Any]):
    for k, v in env.items():
        if k.startswith(ENV_PREFIX):
            cfgkey = k[len(ENV_PREFIX):].replace("__", ".").lower()
            logger.warning(
                _(
                    "Changing configuration entry from environment variable: {k}={v}"
                ).format(
                    k=cfgkey, v=v
                )  # noqa:E501
            )  # noqa: E501
            *parts, last = cfgkey.split(".")
            this_cfg = cfg
            for part in parts:
                if this_cfg.get(part) is None:
                    this_cfg[part] = edict()
                this_cfg = this_cfg[part]
            this_cfg[last] = coerce_value(v, this_cfg.get(last))
    return cfg

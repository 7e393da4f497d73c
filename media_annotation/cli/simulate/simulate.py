import json
import logging
import sys
from gettext import gettext as _
from typing import Optional, TextIO

from media_annotation.config import load_config
from media_annotation.core.annotation import Annotation, EventType
from media_annotation.core.module import ImageItem, ImageModule, Viewport

logger = logging.getLogger(__name__)


def run_simulation(scene: dict, step: Optional[float] = None, out: TextIO = sys.stdout) -> ImageModule:
    """
    Scroll a viewport down a scene and print the module state after each step.

    The scene is a mapping with ``items`` (see :meth:`ImageItem.from_dict`),
    ``annotations`` (see :meth:`Annotation.from_dict`) and an optional
    ``viewport`` overriding the configured width, height and margin.
    """
    cfg = load_config()
    viewport_cfg = {**cfg.viewport, **scene.get("viewport", {})}
    viewport = Viewport(
        width=float(viewport_cfg["width"]),
        height=float(viewport_cfg["height"]),
        margin=float(viewport_cfg["margin"]),
    )
    module = ImageModule(viewport=viewport, cfg=cfg)

    created = {}

    def on_created(event):
        src = event.data["annotation"].src
        created[src] = created.get(src, 0) + 1

    module.add_handler(EventType.ANNOTATION_CREATED, on_created)

    items = [ImageItem.from_dict(d) for d in scene.get("items", [])]
    module.init(items)

    for data in scene.get("annotations", []):
        module.add_annotation(Annotation.from_dict(data))

    step = step if step is not None else viewport.height
    if step <= 0:
        raise ValueError(_("Scroll step must be positive"))
    page_end = max((item.y + item.height for item in items), default=0.0)

    def report(offset):
        print(
            f"{offset:>8.0f}  "
            f"active={sum(module.is_active(i.src) for i in items)}/{len(items)}  "
            f"pending={len(module.pending_items)}  "
            f"buffered={len(module.buffer)}  "
            f"listening={'yes' if module.scheduler.attached else 'no'}",
            file=out,
        )

    offset = 0.0
    report(offset)
    while offset + viewport.height < page_end:
        offset += step
        module.scroll_to(offset)
        report(offset)

    # One more signal lets the listener notice that nothing is pending
    module.scroll_to(offset)
    report(offset)

    for item in items:
        annotations = module.get_annotations(item.src)
        if module.is_active(item.src):
            state = _("active")
        elif module.annotates_item(item.src):
            state = _("pending")
        else:
            state = _("ignored")
        print(
            f"{item.src}: {state}, {len(annotations)} annotations, "
            f"{created.get(item.src, 0)} created events",
            file=out,
        )
    return module


def handle(args):
    logger.debug(_("Loading scene from {path}").format(path=args.scene))
    scene = json.loads(args.scene.read_text())
    run_simulation(scene, step=args.step)

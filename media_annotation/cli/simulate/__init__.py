from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Scroll through a scene and report lazy loading")


def command(subparser):
    subparser.add_argument("scene", type=Path, help=_("JSON file describing items and annotations"))
    subparser.add_argument(
        "-s",
        "--step",
        dest="step",
        type=float,
        default=None,
        help=_("Scroll distance per step (defaults to the viewport height)"),
    )

    def handle(args):
        from .simulate import handle as simulate_handle

        simulate_handle(args)

    return handle

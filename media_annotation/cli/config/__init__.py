from gettext import gettext as _

COMMAND_DESCRIPTION = _("Show the effective configuration")


def command(subparser):
    def handle(args):
        import json

        from media_annotation.config import load_config

        print(json.dumps(load_config(), indent=2, sort_keys=True))

    return handle

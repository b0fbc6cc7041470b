from gettext import gettext as _

COMMAND_DESCRIPTION = _("Show or change the project storage settings")


def command(subparser):
    subparser.add_argument(
        "--backend", dest="backend", choices=["local", "remote"], default=None
    )
    subparser.add_argument("--local-path", dest="local_path", default=None)
    subparser.add_argument("--url", dest="base_url", default=None)
    subparser.add_argument("--api-key", dest="api_key", default=None)

    def handle(args):
        from .settings import handle as settings_handle

        settings_handle(args)

    return handle

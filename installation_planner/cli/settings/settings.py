import logging
from gettext import gettext as _

from installation_planner.utils.config import load_config, save_settings

logger = logging.getLogger(__name__)


def handle(args):
    cfg = load_config(args.settings, env={})
    changed = False
    if args.backend is not None:
        cfg.storage.backend = args.backend
        changed = True
    if args.local_path is not None:
        cfg.storage.local_path = args.local_path
        changed = True
    if args.base_url is not None:
        cfg.storage.remote.base_url = args.base_url
        changed = True
    if args.api_key is not None:
        cfg.storage.remote.api_key = args.api_key
        changed = True

    if changed:
        path = save_settings(cfg, args.settings)
        logger.info(_("Settings saved to {path}").format(path=path))

    key = cfg.storage.remote.api_key
    print(_("backend: {value}").format(value=cfg.storage.backend))
    print(_("local path: {value}").format(value=cfg.storage.local_path))
    print(_("remote url: {value}").format(value=cfg.storage.remote.base_url or "-"))
    print(_("api key: {value}").format(value=("*" * 8 + key[-4:]) if key else "-"))

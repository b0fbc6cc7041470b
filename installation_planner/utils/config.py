"""
Application configuration.

Defaults live here; a JSON settings file and ``PLANNER_*`` environment
variables are layered on top by :func:`load_config`.
"""

import json
import logging
import os
from gettext import gettext as _
from pathlib import Path
from typing import Mapping, Optional

from easydict import EasyDict as edict

from ..core.annotation.errors import ValidationError
from .env import load_cfg_from_env

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".installation_planner" / "settings.json"


def get_default_config() -> edict:
    return edict(
        {
            "storage": {
                "backend": "local",
                "local_path": str(
                    Path.home() / ".installation_planner" / "projects.json"
                ),
                "remote": {
                    "base_url": "",
                    "api_key": "",
                    "table": "projects",
                    "timeout": 30,
                },
            },
            "editor": {
                "hit_threshold": 30.0,
            },
        }
    )


def _merge(cfg: edict, data: Mapping):
    for key, value in data.items():
        if isinstance(value, Mapping) and isinstance(cfg.get(key), dict):
            _merge(cfg[key], value)
        else:
            cfg[key] = value


def load_config(
    settings_path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> edict:
    """
    Build the effective configuration.

    Args:
        settings_path: JSON settings file; defaults to
            ``~/.installation_planner/settings.json`` when it exists
        env: Environment mapping, ``os.environ`` when omitted

    Returns:
        Configuration as an EasyDict
    """
    cfg = get_default_config()

    path = Path(settings_path) if settings_path else DEFAULT_SETTINGS_PATH
    if path.exists():
        logger.debug(
            _('Loading settings from "{path}"').format(path=path)
        )
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ValidationError(
                _('Cannot read settings file "{path}": {error}').format(path=path, error=e)
            ) from e
        if not isinstance(data, Mapping):
            raise ValidationError(
                _('Settings file "{path}" must hold a JSON object').format(path=path)
            )
        _merge(cfg, data)
    elif settings_path is not None:
        logger.warning(
            _('Settings file "{path}" not found, using defaults').format(path=path)
        )

    load_cfg_from_env(cfg, dict(os.environ if env is None else env))
    return cfg


def save_settings(cfg: Mapping, settings_path: Optional[Path] = None) -> Path:
    """Persist the storage settings so the next run picks them up."""
    path = Path(settings_path) if settings_path else DEFAULT_SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"storage": cfg["storage"]}, f, indent=2)
    return path

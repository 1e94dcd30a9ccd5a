from __future__ import annotations

import os
from pathlib import Path

SYSFS_BACKLIGHT = Path("/sys/class/backlight")


def sysfs_backlight_root() -> Path:
    """Directory holding one entry per backlight device.

    BRIGHTR_SYSFS_ROOT overrides it, which is mostly useful for testing
    against a fake tree.
    """

    override = os.environ.get("BRIGHTR_SYSFS_ROOT")
    return Path(override) if override else SYSFS_BACKLIGHT


def default_config_path(app_name: str = "brightr") -> Path:
    """Return the per-user config file location.

    Uses XDG_CONFIG_HOME when available, else ~/.config.
    """

    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        root = Path(base)
    else:
        root = Path.home() / ".config"
    return root / app_name / "config.yaml"

from __future__ import annotations

import math
from pathlib import Path
from typing import Any

import yaml

from brightr.errors import InvalidInput
from brightr.paths import default_config_path


class ConfigError(InvalidInput):
    pass


DEFAULTS: dict[str, Any] = {
    "name": None,
    "raw": False,
    "exponent": 1.0,
    "min": 0,
    "picky": False,
    "logind": False,
    "sysfs_root": None,
}


def load(path: str | Path | None = None) -> dict[str, Any]:
    """Read a YAML config file.

    With no path, the per-user default is used if it exists and an empty
    config is returned otherwise. An explicitly given path must exist.
    """

    if path is None:
        p = default_config_path()
        if not p.is_file():
            return {}
    else:
        p = Path(path)
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Can't read config file {p}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Top-level config must be a mapping")
    validate(data)
    return data


def validate(cfg: dict[str, Any]) -> None:
    unknown = sorted(set(cfg) - set(DEFAULTS))
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(map(str, unknown))}")

    for key in ("raw", "picky", "logind"):
        if key in cfg and not isinstance(cfg[key], bool):
            raise ConfigError(f"{key} must be true or false")

    for key in ("name", "sysfs_root"):
        if cfg.get(key) is not None and not isinstance(cfg[key], str):
            raise ConfigError(f"{key} must be a string")

    if "exponent" in cfg:
        e = cfg["exponent"]
        if isinstance(e, bool) or not isinstance(e, (int, float)):
            raise ConfigError("exponent must be a number")
        if not math.isfinite(e) or e <= 0:
            raise ConfigError(f"exponent must be > 0: {e}")

    if "min" in cfg:
        m = cfg["min"]
        if isinstance(m, bool) or not isinstance(m, int) or m < 0:
            raise ConfigError(f"min must be an integer >= 0: {m}")


def merge(cfg: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Layer built-in defaults, then ``cfg``, then non-None ``overrides``."""

    out = dict(DEFAULTS)
    out.update(cfg)
    out.update({k: v for k, v in overrides.items() if v is not None})
    return out

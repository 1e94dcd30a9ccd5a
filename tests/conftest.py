from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


def write_device(
    root: Path, name: str, *, brightness: int, max_brightness: int, kind: str | None = "raw"
) -> Path:
    dev = root / name
    dev.mkdir(parents=True)
    (dev / "brightness").write_text(f"{brightness}\n", encoding="utf-8")
    (dev / "max_brightness").write_text(f"{max_brightness}\n", encoding="utf-8")
    if kind is not None:
        (dev / "type").write_text(f"{kind}\n", encoding="utf-8")
    return dev


@pytest.fixture
def sysfs_root(tmp_path: Path) -> Path:
    root = tmp_path / "class" / "backlight"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def make_device(sysfs_root: Path) -> Callable[..., Path]:
    def make(name: str = "intel_backlight", **kw) -> Path:
        return write_device(sysfs_root, name, **kw)

    return make


def read_brightness(dev: Path) -> int:
    return int((dev / "brightness").read_text(encoding="utf-8"))

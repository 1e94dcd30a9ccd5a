from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from brightr.errors import InvalidInput, IoFailure

log = logging.getLogger(__name__)

UNKNOWN_KIND = "unknown"


def _read_int(path: Path) -> int:
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as e:
        raise IoFailure(f"reading backlight file {path}: {e}") from e
    try:
        value = int(contents.strip())
    except ValueError as e:
        raise IoFailure(f"parsing brightness value from file {path}: {contents!r}") from e
    if value < 0:
        raise IoFailure(f"negative brightness value in file {path}: {value}")
    return value


@dataclass(frozen=True)
class Backlight:
    """One device under /sys/class/backlight.

    ``max_raw`` is read once when the device is opened; the current level is
    owned by the kernel and re-read on every call to :meth:`read_raw`.
    """

    name: str
    sysfs_dir: Path
    max_raw: int
    kind: str = UNKNOWN_KIND

    @property
    def _brightness(self) -> Path:
        return self.sysfs_dir / "brightness"

    @classmethod
    def open(cls, name: str, sysfs_dir: str | Path) -> Backlight:
        sysfs_dir = Path(sysfs_dir)
        max_raw = _read_int(sysfs_dir / "max_brightness")
        # Only a device whose current level is readable counts as usable.
        _read_int(sysfs_dir / "brightness")
        # Kernels expose "firmware", "platform" or "raw"; test fixtures may not.
        try:
            kind = (sysfs_dir / "type").read_text(encoding="utf-8").strip() or UNKNOWN_KIND
        except OSError:
            kind = UNKNOWN_KIND
        return cls(name=name, sysfs_dir=sysfs_dir, max_raw=max_raw, kind=kind)

    def read_raw(self) -> int:
        value = _read_int(self._brightness)
        log.debug("backlight %s raw setting = %d / %d", self.name, value, self.max_raw)
        return value

    def write_raw(self, value: int) -> None:
        value = int(value)
        if not 0 <= value <= self.max_raw:
            raise InvalidInput(
                f"raw value {value} out of range for {self.name} (max {self.max_raw})"
            )
        log.debug("writing %d to %s", value, self._brightness)
        try:
            self._brightness.write_text(str(value), encoding="utf-8")
        except OSError as e:
            raise IoFailure(f"can't set backlight {self.name}: {e}") from e

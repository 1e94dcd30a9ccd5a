"""Finding the backlight device to operate on.

With no name given, every device under the sysfs root is opened and the one
with the most preferred ``type`` wins: ``firmware`` (ACPI/EFI interfaces),
then ``platform``, then ``raw`` (direct driver register access), then
anything else. Ties go to the first name in sorted order, so the choice only
depends on the set of devices present.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from brightr.errors import DeviceNotFound, IoFailure, NoDeviceAvailable
from brightr.paths import sysfs_backlight_root
from brightr.system.backlight import Backlight

log = logging.getLogger(__name__)

KIND_PREFERENCE = ("firmware", "platform", "raw")

ListDevices = Callable[[], Sequence[tuple[str, Path]]]
OpenDevice = Callable[[str, Path], Backlight]


def sysfs_lister(root: str | Path | None = None) -> ListDevices:
    def list_devices() -> list[tuple[str, Path]]:
        base = Path(root) if root is not None else sysfs_backlight_root()
        try:
            entries = sorted(base.iterdir(), key=lambda p: p.name)
        except FileNotFoundError:
            return []
        except OSError as e:
            raise IoFailure(f"can't access directory {base}: {e}") from e
        return [(p.name, p) for p in entries]

    return list_devices


def kind_rank(kind: str) -> int:
    try:
        return KIND_PREFERENCE.index(kind)
    except ValueError:
        return len(KIND_PREFERENCE)


@dataclass
class DeviceLocator:
    list_devices: ListDevices = field(default_factory=sysfs_lister)
    open_device: OpenDevice = Backlight.open

    def locate(self, name: str | None = None) -> Backlight:
        if name is not None:
            return self.by_name(name)
        return self.auto()

    def by_name(self, name: str) -> Backlight:
        for dev_name, path in self.list_devices():
            if dev_name == name:
                try:
                    return self.open_device(dev_name, path)
                except IoFailure as e:
                    raise IoFailure(
                        f"can't use explicitly requested backlight device {name!r}: {e}"
                    ) from e
        raise DeviceNotFound(f"backlight device not found: {name!r}")

    def auto(self) -> Backlight:
        candidates = sorted(self.list_devices(), key=lambda entry: entry[0])
        if not candidates:
            raise NoDeviceAvailable("no backlight device found")

        opened: list[Backlight] = []
        for dev_name, path in candidates:
            try:
                opened.append(self.open_device(dev_name, path))
            except IoFailure as e:
                log.warning("skipping backlight-like device at %s: %s", path, e)
        if not opened:
            raise NoDeviceAvailable("cannot find any valid backlight devices")

        # min() keeps the first of equally ranked devices, i.e. the lowest name.
        chosen = min(opened, key=lambda dev: kind_rank(dev.kind))
        log.debug("selected backlight %s (type %s)", chosen.name, chosen.kind)
        return chosen

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from brightr.errors import DeviceNotFound, IoFailure, NoDeviceAvailable
from brightr.locator import DeviceLocator, sysfs_lister
from brightr.system.backlight import Backlight


def _fake(kinds: dict[str, str], broken: set[str] = frozenset()):
    opened: list[str] = []

    def list_devices() -> list[tuple[str, Path]]:
        return [(name, Path("/fake") / name) for name in kinds]

    def open_device(name: str, path: Path) -> Backlight:
        opened.append(name)
        if name in broken:
            raise IoFailure(f"reading backlight file {path / 'max_brightness'}")
        return Backlight(name=name, sysfs_dir=path, max_raw=100, kind=kinds[name])

    return DeviceLocator(list_devices=list_devices, open_device=open_device), opened


def test_no_devices_fails_without_opening_anything() -> None:
    locator, opened = _fake({})
    with pytest.raises(NoDeviceAvailable):
        locator.locate()
    assert opened == []


def test_prefers_firmware_then_platform_then_raw() -> None:
    locator, _ = _fake({"intel_backlight": "raw", "acpi_video0": "firmware", "x": "platform"})
    assert locator.locate().name == "acpi_video0"

    locator, _ = _fake({"intel_backlight": "raw", "dell_backlight": "platform"})
    assert locator.locate().name == "dell_backlight"

    locator, _ = _fake({"zz": "weird", "intel_backlight": "raw"})
    assert locator.locate().name == "intel_backlight"


def test_ties_go_to_lowest_name() -> None:
    locator, _ = _fake({"radeon_bl1": "raw", "amdgpu_bl0": "raw"})
    assert locator.locate().name == "amdgpu_bl0"


def test_skips_unreadable_devices(caplog: pytest.LogCaptureFixture) -> None:
    locator, opened = _fake({"acpi_video0": "firmware", "intel_backlight": "raw"}, {"acpi_video0"})
    with caplog.at_level(logging.WARNING, logger="brightr"):
        assert locator.locate().name == "intel_backlight"
    assert "skipping backlight-like device" in caplog.text
    assert sorted(opened) == ["acpi_video0", "intel_backlight"]


def test_all_unreadable_is_no_device() -> None:
    locator, _ = _fake({"a": "raw", "b": "raw"}, {"a", "b"})
    with pytest.raises(NoDeviceAvailable):
        locator.locate()


def test_named_device() -> None:
    locator, opened = _fake({"acpi_video0": "firmware", "intel_backlight": "raw"})
    assert locator.locate("intel_backlight").name == "intel_backlight"
    assert opened == ["intel_backlight"]


def test_named_device_missing() -> None:
    locator, _ = _fake({"acpi_video0": "firmware"})
    with pytest.raises(DeviceNotFound):
        locator.locate("intel_backlight")


def test_named_device_unreadable_is_io_failure() -> None:
    locator, _ = _fake({"intel_backlight": "raw"}, {"intel_backlight"})
    with pytest.raises(IoFailure, match="explicitly requested"):
        locator.locate("intel_backlight")


def test_sysfs_lister_reads_directory(make_device, sysfs_root: Path) -> None:
    make_device("intel_backlight", brightness=10, max_brightness=100, kind="raw")
    make_device("acpi_video0", brightness=3, max_brightness=15, kind="firmware")

    assert [name for name, _ in sysfs_lister(sysfs_root)()] == ["acpi_video0", "intel_backlight"]

    dev = DeviceLocator(list_devices=sysfs_lister(sysfs_root)).locate()
    assert (dev.name, dev.max_raw, dev.kind) == ("acpi_video0", 15, "firmware")


def test_sysfs_lister_missing_root(tmp_path: Path) -> None:
    assert sysfs_lister(tmp_path / "nope")() == []


def test_sysfs_lister_honours_env(monkeypatch: pytest.MonkeyPatch, make_device, sysfs_root) -> None:
    make_device("intel_backlight", brightness=10, max_brightness=100)
    monkeypatch.setenv("BRIGHTR_SYSFS_ROOT", str(sysfs_root))
    assert DeviceLocator().locate().name == "intel_backlight"


def test_auto_skips_device_without_readable_brightness(make_device, sysfs_root: Path) -> None:
    acpi = make_device("acpi_video0", brightness=3, max_brightness=15, kind="firmware")
    make_device("intel_backlight", brightness=10, max_brightness=100, kind="raw")
    (acpi / "brightness").unlink()

    assert DeviceLocator(list_devices=sysfs_lister(sysfs_root)).locate().name == "intel_backlight"

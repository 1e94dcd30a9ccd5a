from __future__ import annotations


class BrightrError(RuntimeError):
    """Base class for every failure that aborts a brightr invocation."""


class DeviceNotFound(BrightrError):
    pass


class NoDeviceAvailable(BrightrError):
    pass


class IoFailure(BrightrError):
    """Reading or writing a backlight failed (permissions, missing or malformed file, D-Bus)."""


class InvalidInput(BrightrError, ValueError):
    pass

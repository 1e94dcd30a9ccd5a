from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from dbus_next import BusType
from dbus_next.aio import MessageBus
from dbus_next.errors import AuthError, DBusError, InvalidAddressError

from brightr.errors import InvalidInput, IoFailure
from brightr.system.backlight import Backlight

log = logging.getLogger(__name__)

BUS = "org.freedesktop.login1"
# The caller's own session. This lives on the SYSTEM bus, not the session bus.
SESSION_OBJ = "/org/freedesktop/login1/session/auto"
SESSION_IFACE = "org.freedesktop.login1.Session"
SUBSYSTEM = "backlight"


@dataclass
class LogindSession:
    bus: MessageBus
    iface: object

    @classmethod
    async def connect(cls) -> LogindSession:
        bus = await MessageBus(bus_type=BusType.SYSTEM).connect()
        introspection = await bus.introspect(BUS, SESSION_OBJ)
        obj = bus.get_proxy_object(BUS, SESSION_OBJ, introspection)
        iface = obj.get_interface(SESSION_IFACE)
        return cls(bus=bus, iface=iface)

    async def set_brightness(self, name: str, value: int) -> None:
        await self.iface.call_set_brightness(SUBSYSTEM, name, value)

    async def close(self) -> None:
        self.bus.disconnect()


async def set_brightness(name: str, value: int) -> None:
    session = await LogindSession.connect()
    try:
        await session.set_brightness(name, value)
    finally:
        await session.close()


@dataclass(frozen=True)
class LogindBacklight(Backlight):
    """A backlight whose writes go through systemd-logind.

    logind lets the user logged in at the seat change the backlight without
    write access to sysfs. Reads still come straight from sysfs, since logind
    offers no way to query the level.
    """

    def write_raw(self, value: int) -> None:
        value = int(value)
        if not 0 <= value <= self.max_raw:
            raise InvalidInput(
                f"raw value {value} out of range for {self.name} (max {self.max_raw})"
            )
        log.debug("asking logind to set %s to %d", self.name, value)
        try:
            asyncio.run(set_brightness(self.name, value))
        except (AuthError, DBusError, InvalidAddressError, OSError) as e:
            raise IoFailure(f"can't set backlight {self.name} via logind: {e}") from e

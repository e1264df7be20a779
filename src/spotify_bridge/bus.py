from __future__ import annotations

import re
from typing import Any

from dbus_next.aio import MessageBus, ProxyInterface
from dbus_next.constants import BusType


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def member_to_attr(prefix: str, member: str) -> str:
    """Map a D-Bus member name to the dbus-next proxy attribute.

    ``("get", "PlaybackStatus")`` becomes ``get_playback_status`` and
    ``("call", "OpenUri")`` becomes ``call_open_uri``.
    """
    return f"{prefix}_{_CAMEL_BOUNDARY.sub('_', member).lower()}"


class PlayerInterface:
    def __init__(self, proxy: ProxyInterface) -> None:
        self._proxy = proxy

    async def read_property(self, name: str) -> Any:
        return await getattr(self._proxy, member_to_attr("get", name))()

    async def write_property(self, name: str, value: Any) -> None:
        await getattr(self._proxy, member_to_attr("set", name))(value)

    async def call(self, method: str, *args: Any) -> Any:
        return await getattr(self._proxy, member_to_attr("call", method))(*args)


class MprisSession:
    def __init__(self, bus: MessageBus) -> None:
        self._bus = bus

    @classmethod
    async def connect(cls, bus_type: BusType = BusType.SESSION) -> MprisSession:
        bus = await MessageBus(bus_type=bus_type).connect()
        return cls(bus)

    async def get_interface(
        self, service: str, object_path: str, interface: str
    ) -> PlayerInterface:
        introspection = await self._bus.introspect(service, object_path)
        proxy = self._bus.get_proxy_object(service, object_path, introspection)
        return PlayerInterface(proxy.get_interface(interface))

    def disconnect(self) -> None:
        self._bus.disconnect()

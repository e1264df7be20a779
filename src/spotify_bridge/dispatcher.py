from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
import logging
import sys
from typing import Any, Protocol

from spotify_bridge.applescript import AppleScriptBackend, ScriptRunner
from spotify_bridge.config import BridgeConfig
from spotify_bridge.mpris import MprisBackend
from spotify_bridge.operations import Operation, OperationName
from spotify_bridge.registry import DEFAULT_REGISTRY, OperationRegistry


LOGGER = logging.getLogger(__name__)


class Platform(str, Enum):
    APPLESCRIPT = "applescript"
    MPRIS = "mpris"


class Backend(Protocol):
    async def invoke(self, operation: Operation, args: Sequence[Any] = ()) -> str: ...


def detect_platform(sys_platform: str | None = None, override: str = "auto") -> Platform:
    if override != "auto":
        return Platform(override)
    current = sys.platform if sys_platform is None else sys_platform
    return Platform.APPLESCRIPT if current == "darwin" else Platform.MPRIS


class Dispatcher:
    def __init__(
        self,
        registry: OperationRegistry,
        platform: Platform,
        script_backend: Backend,
        bus_backend: Backend,
    ) -> None:
        self._registry = registry
        self._platform = platform
        self._script_backend = script_backend
        self._bus_backend = bus_backend

    @classmethod
    def from_config(
        cls, config: BridgeConfig, registry: OperationRegistry | None = None
    ) -> Dispatcher:
        return cls(
            registry=DEFAULT_REGISTRY if registry is None else registry,
            platform=detect_platform(override=config.platform),
            script_backend=AppleScriptBackend(ScriptRunner(config.osascript), config.scripts_dir),
            bus_backend=MprisBackend(config),
        )

    @property
    def platform(self) -> Platform:
        return self._platform

    @property
    def registry(self) -> OperationRegistry:
        return self._registry

    async def invoke(self, name: OperationName | str, args: Sequence[Any] = ()) -> str:
        operation = self._registry.get(name)
        backend = (
            self._script_backend if self._platform is Platform.APPLESCRIPT else self._bus_backend
        )
        LOGGER.debug("Dispatching %s via %s", operation.name.value, self._platform.value)
        return await backend.invoke(operation, tuple(args))

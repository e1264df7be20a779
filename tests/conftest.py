from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from dbus_next import Variant
import pytest

from spotify_bridge.config import BridgeConfig
from spotify_bridge.controller import SpotifyController
from spotify_bridge.dispatcher import Dispatcher, Platform
from spotify_bridge.mpris import MprisBackend
from spotify_bridge.operations import Operation
from spotify_bridge.registry import DEFAULT_REGISTRY


def spotify_metadata() -> dict[str, Variant]:
    return {
        "mpris:trackid": Variant("o", "/com/spotify/track/abc123"),
        "mpris:length": Variant("t", 180_000_000),
        "mpris:artUrl": Variant("s", "https://i.scdn.co/image/cover"),
        "xesam:album": Variant("s", "Album"),
        "xesam:albumArtist": Variant("as", ["Album Artist"]),
        "xesam:artist": Variant("as", ["Artist", "Guest"]),
        "xesam:discNumber": Variant("i", 1),
        "xesam:title": Variant("s", "Song"),
        "xesam:trackNumber": Variant("i", 7),
    }


class FakePlayer:
    def __init__(self, **properties: Any) -> None:
        self.properties: dict[str, Any] = {
            "Volume": 0.5,
            "Position": 0,
            "PlaybackStatus": "Playing",
            "LoopStatus": "None",
            "Shuffle": False,
            "Metadata": spotify_metadata(),
        }
        self.properties.update(properties)
        self.writes: list[tuple[str, Any]] = []
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.fail_on: dict[str, Exception] = {}

    async def read_property(self, name: str) -> Any:
        return self.properties[name]

    async def write_property(self, name: str, value: Any) -> None:
        self.writes.append((name, value))
        self.properties[name] = value

    async def call(self, method: str, *args: Any) -> None:
        if method in self.fail_on:
            raise self.fail_on[method]
        self.calls.append((method, args))


class FakeSession:
    def __init__(self, player: FakePlayer, error: Exception | None = None) -> None:
        self.player = player
        self.error = error
        self.requested: list[tuple[str, str, str]] = []
        self.disconnected = False

    async def get_interface(self, service: str, object_path: str, interface: str) -> FakePlayer:
        self.requested.append((service, object_path, interface))
        if self.error is not None:
            raise self.error
        return self.player

    def disconnect(self) -> None:
        self.disconnected = True


class SessionFactory:
    def __init__(self, session: FakeSession | None = None, error: Exception | None = None) -> None:
        self.session = session
        self.error = error
        self.connections = 0

    async def __call__(self) -> FakeSession:
        self.connections += 1
        if self.error is not None:
            raise self.error
        assert self.session is not None
        return self.session


class RecordingBackend:
    def __init__(self, result: str = "") -> None:
        self.result = result
        self.invocations: list[tuple[Operation, tuple[Any, ...]]] = []

    async def invoke(self, operation: Operation, args: Sequence[Any] = ()) -> str:
        self.invocations.append((operation, tuple(args)))
        return self.result


@pytest.fixture
def player() -> FakePlayer:
    return FakePlayer()


@pytest.fixture
def session(player: FakePlayer) -> FakeSession:
    return FakeSession(player)


@pytest.fixture
def connect(session: FakeSession) -> SessionFactory:
    return SessionFactory(session)


@pytest.fixture
def bus_backend(connect: SessionFactory) -> MprisBackend:
    return MprisBackend(BridgeConfig(), connect=connect)


@pytest.fixture
def bus_controller(bus_backend: MprisBackend) -> SpotifyController:
    dispatcher = Dispatcher(
        registry=DEFAULT_REGISTRY,
        platform=Platform.MPRIS,
        script_backend=RecordingBackend(),
        bus_backend=bus_backend,
    )
    return SpotifyController(dispatcher)

import json

from conftest import FakePlayer, FakeSession, SessionFactory
from dbus_next.errors import DBusError
import pytest

from spotify_bridge import mpris
from spotify_bridge.config import BridgeConfig
from spotify_bridge.errors import (
    BackendConnectionError,
    BackendExecutionError,
    NotImplementedOnPlatformError,
)
from spotify_bridge.mpris import MprisBackend
from spotify_bridge.operations import Operation, OperationName
from spotify_bridge.registry import DEFAULT_REGISTRY


@pytest.mark.asyncio
async def test_read_state_converts_units(player: FakePlayer) -> None:
    player.properties.update(Position=2_500_000, Volume=0.3, PlaybackStatus="Paused")

    state = await mpris.read_state(player)

    assert state == {
        "track_id": "spotify:track:abc123",
        "volume": 30,
        "position": 2.5,
        "state": "paused",
    }


@pytest.mark.asyncio
async def test_read_track_flattens_metadata(player: FakePlayer) -> None:
    track = await mpris.read_track(player)

    assert track["name"] == "Song"
    assert track["artist"] == "Artist"
    assert track["album"] == "Album"
    assert track["album_artist"] == "Album Artist"
    assert track["duration"] == 180
    assert track["disc_number"] == 1
    assert track["track_number"] == 7
    assert track["id"] == "spotify:track:abc123"
    assert track["spotify_url"] == "spotify:track:abc123"
    assert track["artwork_url"] == "https://i.scdn.co/image/cover"
    assert (track["played_count"], track["starred"], track["popularity"]) == (0, False, 0)


@pytest.mark.asyncio
async def test_set_volume_writes_bus_scale(player: FakePlayer) -> None:
    await mpris.set_volume(player, [55])

    assert player.writes == [("Volume", 0.55)]


@pytest.mark.asyncio
async def test_volume_steps_are_clamped(player: FakePlayer) -> None:
    player.properties["Volume"] = 0.95
    await mpris.volume_up(player)
    assert player.writes[-1] == ("Volume", 1.0)

    player.properties["Volume"] = 0.05
    await mpris.volume_down(player)
    assert player.writes[-1] == ("Volume", 0.0)


@pytest.mark.asyncio
async def test_jump_to_seeks_relative_to_current_position(player: FakePlayer) -> None:
    player.properties["Position"] = 1_000_000

    await mpris.jump_to(player, [5])

    assert player.calls == [("Seek", (4_000_000,))]


@pytest.mark.asyncio
async def test_play_track_in_context_opens_track_only(player: FakePlayer) -> None:
    await mpris.open_uri(player, ["spotify:track:abc123", "spotify:album:xyz"])

    assert player.calls == [("OpenUri", ("spotify:track:abc123",))]


@pytest.mark.asyncio
@pytest.mark.parametrize(("status", "expected"), [("Track", True), ("Playlist", True), ("None", False)])
async def test_is_repeating_collapses_loop_status(
    player: FakePlayer, status: str, expected: bool
) -> None:
    player.properties["LoopStatus"] = status

    assert await mpris.is_repeating(player) is expected


@pytest.mark.asyncio
async def test_set_repeating_never_writes_track(player: FakePlayer) -> None:
    await mpris.set_repeating(player, [True])
    await mpris.set_repeating(player, [False])

    assert player.writes == [("LoopStatus", "Playlist"), ("LoopStatus", "None")]


@pytest.mark.asyncio
async def test_toggles_flip_current_values(player: FakePlayer) -> None:
    player.properties.update(LoopStatus="Track", Shuffle=False)

    await mpris.toggle_repeating(player)
    await mpris.toggle_shuffling(player)

    assert player.writes == [("LoopStatus", "None"), ("Shuffle", True)]


@pytest.mark.asyncio
async def test_invoke_serializes_result_and_disconnects(
    bus_backend: MprisBackend, session: FakeSession
) -> None:
    raw = await bus_backend.invoke(DEFAULT_REGISTRY.get("isShuffling"))

    assert raw == "false"
    assert session.disconnected
    assert session.requested == [
        ("org.mpris.MediaPlayer2.spotify", "/org/mpris/MediaPlayer2", "org.mpris.MediaPlayer2.Player")
    ]


@pytest.mark.asyncio
async def test_invoke_opens_a_new_connection_per_call(
    bus_backend: MprisBackend, connect: SessionFactory
) -> None:
    await bus_backend.invoke(DEFAULT_REGISTRY.get("play"))
    await bus_backend.invoke(DEFAULT_REGISTRY.get("pause"))

    assert connect.connections == 2


@pytest.mark.asyncio
async def test_is_running_true_when_interface_resolves(bus_backend: MprisBackend) -> None:
    assert await bus_backend.invoke(DEFAULT_REGISTRY.get("isRunning")) == "true"


@pytest.mark.asyncio
async def test_is_running_false_when_service_missing(player: FakePlayer) -> None:
    session = FakeSession(player, error=DBusError("org.freedesktop.DBus.Error.ServiceUnknown", "gone"))
    backend = MprisBackend(BridgeConfig(), connect=SessionFactory(session))

    assert await backend.invoke(DEFAULT_REGISTRY.get("isRunning")) == "false"
    assert session.disconnected


@pytest.mark.asyncio
async def test_is_running_false_when_bus_unavailable() -> None:
    backend = MprisBackend(BridgeConfig(), connect=SessionFactory(error=FileNotFoundError("no bus")))

    assert await backend.invoke(DEFAULT_REGISTRY.get("isRunning")) == "false"


@pytest.mark.asyncio
async def test_connection_failure_raises_for_regular_operations(player: FakePlayer) -> None:
    session = FakeSession(player, error=DBusError("org.freedesktop.DBus.Error.ServiceUnknown", "gone"))
    backend = MprisBackend(BridgeConfig(), connect=SessionFactory(session))

    with pytest.raises(BackendConnectionError):
        await backend.invoke(DEFAULT_REGISTRY.get("play"))


@pytest.mark.asyncio
async def test_missing_handler_fails_before_connecting(connect: SessionFactory) -> None:
    backend = MprisBackend(BridgeConfig(), connect=connect)

    with pytest.raises(NotImplementedOnPlatformError):
        await backend.invoke(Operation(OperationName.PLAY))
    assert connect.connections == 0


@pytest.mark.asyncio
async def test_handler_failure_is_logged_and_raised(
    bus_backend: MprisBackend, player: FakePlayer, caplog: pytest.LogCaptureFixture
) -> None:
    player.fail_on["Next"] = DBusError("org.mpris.MediaPlayer2.Error", "cannot skip")

    with pytest.raises(BackendExecutionError, match="cannot skip") as excinfo:
        await bus_backend.invoke(DEFAULT_REGISTRY.get("next"))

    assert isinstance(excinfo.value.__cause__, DBusError)
    assert "MPRIS call next failed" in caplog.text


@pytest.mark.asyncio
async def test_state_payload_round_trips_through_json(bus_backend: MprisBackend) -> None:
    raw = await bus_backend.invoke(DEFAULT_REGISTRY.get("state"))

    assert json.loads(raw)["track_id"] == "spotify:track:abc123"

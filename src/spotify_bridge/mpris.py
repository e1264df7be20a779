from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
import json
import logging
from typing import Any

from spotify_bridge.bus import MprisSession, PlayerInterface
from spotify_bridge.config import BridgeConfig
from spotify_bridge.convert import (
    bus_volume_to_percent,
    flatten_properties,
    loop_status_to_repeating,
    microseconds_to_seconds,
    normalize_track_id,
    percent_to_bus_volume,
    repeating_to_loop_status,
    seek_offset,
    step_volume,
)
from spotify_bridge.errors import (
    BackendConnectionError,
    BackendExecutionError,
    NotImplementedOnPlatformError,
)
from spotify_bridge.operations import Operation, OperationName


LOGGER = logging.getLogger(__name__)
VOLUME_STEP = 0.1

SessionFactory = Callable[[], Awaitable[MprisSession]]


async def read_property(player: PlayerInterface, name: str) -> Any:
    return flatten_properties(await player.read_property(name))


async def write_property(player: PlayerInterface, name: str, value: Any) -> None:
    await player.write_property(name, value)


async def current_track_id(player: PlayerInterface) -> str:
    metadata = await read_property(player, "Metadata")
    return normalize_track_id(str(metadata.get("mpris:trackid", "")))


async def read_state(player: PlayerInterface, args: Sequence[Any] = ()) -> dict[str, Any]:
    position = await read_property(player, "Position")
    volume = await read_property(player, "Volume")
    status = await read_property(player, "PlaybackStatus")
    return {
        "track_id": await current_track_id(player),
        "volume": bus_volume_to_percent(volume),
        "position": microseconds_to_seconds(position),
        "state": str(status).lower(),
    }


async def read_track(player: PlayerInterface, args: Sequence[Any] = ()) -> dict[str, Any]:
    metadata = await read_property(player, "Metadata")
    track_id = await current_track_id(player)
    return {
        "artist": _first(metadata.get("xesam:artist")),
        "album": metadata.get("xesam:album", ""),
        "disc_number": metadata.get("xesam:discNumber", 0),
        "duration": microseconds_to_seconds(metadata.get("mpris:length", 0)),
        # Spotify does not publish these over MPRIS.
        "played_count": 0,
        "starred": False,
        "popularity": 0,
        "track_number": metadata.get("xesam:trackNumber", 0),
        "id": track_id,
        "name": metadata.get("xesam:title", ""),
        "album_artist": _first(metadata.get("xesam:albumArtist")),
        "artwork_url": metadata.get("mpris:artUrl", ""),
        "spotify_url": track_id,
    }


async def volume_up(player: PlayerInterface, args: Sequence[Any] = ()) -> None:
    volume = await read_property(player, "Volume")
    await write_property(player, "Volume", step_volume(volume, VOLUME_STEP))


async def volume_down(player: PlayerInterface, args: Sequence[Any] = ()) -> None:
    volume = await read_property(player, "Volume")
    await write_property(player, "Volume", step_volume(volume, -VOLUME_STEP))


async def set_volume(player: PlayerInterface, args: Sequence[Any]) -> None:
    await write_property(player, "Volume", float(percent_to_bus_volume(args[0])))


async def play(player: PlayerInterface, args: Sequence[Any] = ()) -> None:
    await player.call("Play")


async def pause(player: PlayerInterface, args: Sequence[Any] = ()) -> None:
    await player.call("Pause")


async def play_pause(player: PlayerInterface, args: Sequence[Any] = ()) -> None:
    await player.call("PlayPause")


async def next_track(player: PlayerInterface, args: Sequence[Any] = ()) -> None:
    await player.call("Next")


async def previous_track(player: PlayerInterface, args: Sequence[Any] = ()) -> None:
    await player.call("Previous")


async def open_uri(player: PlayerInterface, args: Sequence[Any]) -> None:
    # OpenUri has no notion of a playback context; only the track is sent.
    await player.call("OpenUri", str(args[0]))


async def jump_to(player: PlayerInterface, args: Sequence[Any]) -> None:
    # SetPosition is ignored by the Spotify client, so seek relative to now.
    position = await read_property(player, "Position")
    await player.call("Seek", seek_offset(args[0], position))


async def is_repeating(player: PlayerInterface, args: Sequence[Any] = ()) -> bool:
    return loop_status_to_repeating(await read_property(player, "LoopStatus"))


async def is_shuffling(player: PlayerInterface, args: Sequence[Any] = ()) -> bool:
    return bool(await read_property(player, "Shuffle"))


async def set_repeating(player: PlayerInterface, args: Sequence[Any]) -> None:
    await write_property(player, "LoopStatus", repeating_to_loop_status(bool(args[0])))


async def set_shuffling(player: PlayerInterface, args: Sequence[Any]) -> None:
    await write_property(player, "Shuffle", bool(args[0]))


async def toggle_repeating(player: PlayerInterface, args: Sequence[Any] = ()) -> None:
    repeating = await is_repeating(player)
    await write_property(player, "LoopStatus", repeating_to_loop_status(not repeating))


async def toggle_shuffling(player: PlayerInterface, args: Sequence[Any] = ()) -> None:
    shuffling = await is_shuffling(player)
    await write_property(player, "Shuffle", not shuffling)


def _first(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return str(value[0]) if value else ""
    return "" if value is None else str(value)


class MprisBackend:
    def __init__(self, config: BridgeConfig, connect: SessionFactory | None = None) -> None:
        self._config = config
        self._connect = connect or MprisSession.connect

    async def invoke(self, operation: Operation, args: Sequence[Any] = ()) -> str:
        probe = operation.name is OperationName.IS_RUNNING
        if not probe and operation.bus is None:
            raise NotImplementedOnPlatformError(
                f"{operation.name.value} is not implemented over MPRIS"
            )

        session: MprisSession | None = None
        try:
            try:
                session = await self._connect()
                player = await session.get_interface(
                    self._config.mpris_service,
                    self._config.mpris_object_path,
                    self._config.mpris_interface,
                )
            except Exception as exc:  # noqa: BLE001
                if probe:
                    LOGGER.debug("Spotify is not reachable on the bus: %s", exc)
                    return json.dumps(False)
                raise BackendConnectionError(
                    f"Unable to reach {self._config.mpris_service}: {exc}"
                ) from exc

            if probe:
                return json.dumps(True)

            try:
                result = await operation.bus.func(player, args)
            except Exception as exc:
                LOGGER.exception("MPRIS call %s failed", operation.name.value)
                raise BackendExecutionError(str(exc)) from exc
            return json.dumps(result)
        finally:
            if session is not None:
                session.disconnect()

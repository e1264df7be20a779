from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dbus_next import Variant


MICROSECONDS_PER_SECOND = 1_000_000
INTERNAL_TRACK_PREFIX = "/com/spotify/track/"
PUBLIC_TRACK_PREFIX = "spotify:track:"
LOOP_NONE = "None"
LOOP_PLAYLIST = "Playlist"


def microseconds_to_seconds(value: int | float) -> float:
    return value / MICROSECONDS_PER_SECOND


def seconds_to_microseconds(value: int | float) -> float:
    return value * MICROSECONDS_PER_SECOND


def seek_offset(target_seconds: int | float, current_us: int | float) -> int:
    # Seek on the bus is relative to the current position.
    return int(round(seconds_to_microseconds(target_seconds) - current_us))


def percent_to_bus_volume(percent: int | float) -> float:
    return percent / 100


def bus_volume_to_percent(volume: int | float) -> float:
    return round(volume * 100, 2)


def step_volume(volume: int | float, delta: float) -> float:
    return max(0.0, min(1.0, float(volume) + delta))


def loop_status_to_repeating(status: str) -> bool:
    return status != LOOP_NONE


def repeating_to_loop_status(repeating: bool) -> str:
    return LOOP_PLAYLIST if repeating else LOOP_NONE


def flatten_properties(value: Any) -> Any:
    """Turn a composite bus property value into a plain ``{key: value}`` dict.

    Two composite encodings are understood: an ordered list of
    ``(key, (type_tag, [value]))`` pairs and the ``{key: Variant}`` mapping that
    dbus-next produces for ``a{sv}``. Scalars come back untouched.
    """
    if isinstance(value, Mapping):
        return {
            str(key): item.value if isinstance(item, Variant) else item
            for key, item in value.items()
        }
    if not isinstance(value, (list, tuple)):
        return value

    flattened: dict[str, Any] = {}
    for key, nested in value:
        flattened[str(key)] = nested[1][0]
    return flattened


def normalize_track_id(object_path: str) -> str:
    if object_path.startswith(INTERNAL_TRACK_PREFIX):
        return PUBLIC_TRACK_PREFIX + object_path[len(INTERNAL_TRACK_PREFIX) :]
    return object_path

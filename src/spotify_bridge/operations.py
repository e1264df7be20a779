from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from spotify_bridge.bus import PlayerInterface


BusFunction = Callable[["PlayerInterface", Sequence[Any]], Awaitable[Any]]


class OperationName(str, Enum):
    STATE = "state"
    TRACK = "track"
    VOLUME_UP = "volumeUp"
    VOLUME_DOWN = "volumeDown"
    SET_VOLUME = "setVolume"
    PLAY = "play"
    PLAY_TRACK = "playTrack"
    PLAY_TRACK_IN_CONTEXT = "playTrackInContext"
    PLAY_PAUSE = "playPause"
    PAUSE = "pause"
    NEXT = "next"
    PREVIOUS = "previous"
    JUMP_TO = "jumpTo"
    IS_RUNNING = "isRunning"
    IS_REPEATING = "isRepeating"
    IS_SHUFFLING = "isShuffling"
    SET_REPEATING = "setRepeating"
    SET_SHUFFLING = "setShuffling"
    TOGGLE_REPEATING = "toggleRepeating"
    TOGGLE_SHUFFLING = "toggleShuffling"


@dataclass(frozen=True, slots=True)
class ScriptTemplate:
    template: str


@dataclass(frozen=True, slots=True)
class ScriptFile:
    filename: str


@dataclass(frozen=True, slots=True)
class BusHandler:
    func: BusFunction


ScriptDescriptor = Union[ScriptTemplate, ScriptFile]


@dataclass(frozen=True, slots=True)
class Operation:
    name: OperationName
    script: ScriptDescriptor | None = None
    bus: BusHandler | None = None

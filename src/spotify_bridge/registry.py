from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from spotify_bridge import mpris
from spotify_bridge.errors import UnknownOperationError
from spotify_bridge.operations import (
    BusHandler,
    Operation,
    OperationName,
    ScriptDescriptor,
    ScriptFile,
    ScriptTemplate,
)


class OperationRegistry:
    def __init__(self, operations: Iterable[Operation]) -> None:
        table: dict[OperationName, Operation] = {}
        for operation in operations:
            if operation.name in table:
                raise ValueError(f"Duplicate operation: {operation.name.value}")
            table[operation.name] = operation
        self._operations = MappingProxyType(table)
        self._script = MappingProxyType(
            {name: op.script for name, op in table.items() if op.script is not None}
        )
        self._bus = MappingProxyType(
            {name: op.bus for name, op in table.items() if op.bus is not None}
        )

    @property
    def script_descriptors(self) -> Mapping[OperationName, ScriptDescriptor]:
        return self._script

    @property
    def bus_descriptors(self) -> Mapping[OperationName, BusHandler]:
        return self._bus

    def names(self) -> tuple[OperationName, ...]:
        return tuple(self._operations)

    def get(self, name: OperationName | str) -> Operation:
        try:
            return self._operations[OperationName(name)]
        except (KeyError, ValueError) as exc:
            raise UnknownOperationError(f"Unknown operation: {name}") from exc

    def __contains__(self, name: object) -> bool:
        try:
            return OperationName(name) in self._operations
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._operations)


def _tell(command: str) -> ScriptTemplate:
    return ScriptTemplate(f'tell application "Spotify" to {command}')


DEFAULT_REGISTRY = OperationRegistry(
    [
        Operation(
            OperationName.STATE,
            script=ScriptFile("get_state.applescript"),
            bus=BusHandler(mpris.read_state),
        ),
        Operation(
            OperationName.TRACK,
            script=ScriptFile("get_track.applescript"),
            bus=BusHandler(mpris.read_track),
        ),
        Operation(
            OperationName.VOLUME_UP,
            script=ScriptFile("volume_up.applescript"),
            bus=BusHandler(mpris.volume_up),
        ),
        Operation(
            OperationName.VOLUME_DOWN,
            script=ScriptFile("volume_down.applescript"),
            bus=BusHandler(mpris.volume_down),
        ),
        Operation(
            OperationName.SET_VOLUME,
            script=_tell("set sound volume to %s"),
            bus=BusHandler(mpris.set_volume),
        ),
        Operation(OperationName.PLAY, script=_tell("play"), bus=BusHandler(mpris.play)),
        Operation(
            OperationName.PLAY_TRACK,
            script=_tell('play track "%s"'),
            bus=BusHandler(mpris.open_uri),
        ),
        Operation(
            OperationName.PLAY_TRACK_IN_CONTEXT,
            script=_tell('play track "%s" in context "%s"'),
            bus=BusHandler(mpris.open_uri),
        ),
        Operation(
            OperationName.PLAY_PAUSE,
            script=_tell("playpause"),
            bus=BusHandler(mpris.play_pause),
        ),
        Operation(OperationName.PAUSE, script=_tell("pause"), bus=BusHandler(mpris.pause)),
        Operation(OperationName.NEXT, script=_tell("next track"), bus=BusHandler(mpris.next_track)),
        Operation(
            OperationName.PREVIOUS,
            script=_tell("previous track"),
            bus=BusHandler(mpris.previous_track),
        ),
        Operation(
            OperationName.JUMP_TO,
            script=_tell("set player position to %s"),
            bus=BusHandler(mpris.jump_to),
        ),
        # The bus side of this one is answered by the connection itself.
        Operation(
            OperationName.IS_RUNNING,
            script=ScriptTemplate('get running of application "Spotify"'),
        ),
        Operation(
            OperationName.IS_REPEATING,
            script=_tell("return repeating"),
            bus=BusHandler(mpris.is_repeating),
        ),
        Operation(
            OperationName.IS_SHUFFLING,
            script=_tell("return shuffling"),
            bus=BusHandler(mpris.is_shuffling),
        ),
        Operation(
            OperationName.SET_REPEATING,
            script=_tell("set repeating to %s"),
            bus=BusHandler(mpris.set_repeating),
        ),
        Operation(
            OperationName.SET_SHUFFLING,
            script=_tell("set shuffling to %s"),
            bus=BusHandler(mpris.set_shuffling),
        ),
        Operation(
            OperationName.TOGGLE_REPEATING,
            script=ScriptFile("toggle_repeating.applescript"),
            bus=BusHandler(mpris.toggle_repeating),
        ),
        Operation(
            OperationName.TOGGLE_SHUFFLING,
            script=ScriptFile("toggle_shuffling.applescript"),
            bus=BusHandler(mpris.toggle_shuffling),
        ),
    ]
)

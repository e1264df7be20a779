from __future__ import annotations

import logging
from typing import Any

from spotify_bridge.config import BridgeConfig, load_config
from spotify_bridge.dispatcher import Dispatcher
from spotify_bridge.models import PlaybackState, Track
from spotify_bridge.operations import OperationName
from spotify_bridge.responses import parse_boolean_response, parse_json_response


LOGGER = logging.getLogger(__name__)


class SpotifyController:
    """Async control surface for the local Spotify client.

    Every method is a single pass through the dispatcher: no retries, no
    caching. The only state kept between calls is the volume remembered by
    ``mute_volume`` so that ``unmute_volume`` can restore it.
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher
        self._muted_volume: float | None = None

    @classmethod
    def from_config(cls, config: BridgeConfig | None = None) -> SpotifyController:
        return cls(Dispatcher.from_config(config or load_config()))

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def muted_volume(self) -> float | None:
        return self._muted_volume

    async def play(self) -> None:
        await self._invoke(OperationName.PLAY)

    async def pause(self) -> None:
        await self._invoke(OperationName.PAUSE)

    async def play_pause(self) -> None:
        await self._invoke(OperationName.PLAY_PAUSE)

    async def next(self) -> None:
        await self._invoke(OperationName.NEXT)

    async def previous(self) -> None:
        await self._invoke(OperationName.PREVIOUS)

    async def play_track(self, uri: str) -> None:
        await self._invoke(OperationName.PLAY_TRACK, uri)

    async def play_track_in_context(self, uri: str, context_uri: str) -> None:
        await self._invoke(OperationName.PLAY_TRACK_IN_CONTEXT, uri, context_uri)

    async def jump_to(self, seconds: float) -> None:
        await self._invoke(OperationName.JUMP_TO, seconds)

    async def set_repeating(self, repeating: bool) -> None:
        await self._invoke(OperationName.SET_REPEATING, repeating)

    async def set_shuffling(self, shuffling: bool) -> None:
        await self._invoke(OperationName.SET_SHUFFLING, shuffling)

    async def toggle_repeating(self) -> None:
        await self._invoke(OperationName.TOGGLE_REPEATING)

    async def toggle_shuffling(self) -> None:
        await self._invoke(OperationName.TOGGLE_SHUFFLING)

    async def volume_up(self) -> None:
        self._muted_volume = None
        await self._invoke(OperationName.VOLUME_UP)

    async def volume_down(self) -> None:
        self._muted_volume = None
        await self._invoke(OperationName.VOLUME_DOWN)

    async def set_volume(self, percent: float) -> None:
        self._muted_volume = None
        await self._invoke(OperationName.SET_VOLUME, percent)

    async def mute_volume(self) -> None:
        state = await self.get_state()
        await self._invoke(OperationName.SET_VOLUME, 0)
        self._muted_volume = state.volume

    async def unmute_volume(self) -> bool:
        """Restore the volume saved by ``mute_volume``.

        Returns ``False`` without touching the player when nothing was saved,
        either because the player was never muted or because the volume has
        been changed explicitly since.
        """
        if self._muted_volume is None:
            LOGGER.debug("Unmute requested with no saved volume")
            return False
        await self.set_volume(self._muted_volume)
        return True

    async def get_track(self) -> Track:
        raw = await self._invoke(OperationName.TRACK)
        return Track.from_payload(parse_json_response(raw, "track"))

    async def get_state(self) -> PlaybackState:
        raw = await self._invoke(OperationName.STATE)
        return PlaybackState.from_payload(parse_json_response(raw, "state"))

    async def is_running(self) -> bool:
        return parse_boolean_response(await self._invoke(OperationName.IS_RUNNING))

    async def is_repeating(self) -> bool:
        return parse_boolean_response(await self._invoke(OperationName.IS_REPEATING))

    async def is_shuffling(self) -> bool:
        return parse_boolean_response(await self._invoke(OperationName.IS_SHUFFLING))

    async def _invoke(self, name: OperationName, *args: Any) -> str:
        return await self._dispatcher.invoke(name, args)

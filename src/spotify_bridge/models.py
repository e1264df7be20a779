from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from spotify_bridge.errors import MalformedResponseError


class PlaybackStatus(str, Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"


@dataclass(slots=True)
class PlaybackState:
    track_id: str
    volume: float
    position: float
    state: PlaybackStatus

    @classmethod
    def from_payload(cls, payload: Any) -> PlaybackState:
        data = _require_mapping(payload, "state")
        try:
            return cls(
                track_id=str(data["track_id"]),
                volume=float(data["volume"]),
                position=float(data["position"]),
                state=PlaybackStatus(str(data["state"]).lower()),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedResponseError(f"Invalid state payload: {exc}", raw=payload) from exc


@dataclass(slots=True)
class Track:
    artist: str
    album: str
    disc_number: int
    duration: float
    played_count: int
    track_number: int
    starred: bool
    popularity: int
    id: str
    name: str
    album_artist: str
    artwork_url: str
    spotify_url: str

    @classmethod
    def from_payload(cls, payload: Any) -> Track:
        data = _require_mapping(payload, "track")
        try:
            return cls(
                artist=str(data["artist"] or ""),
                album=str(data["album"] or ""),
                disc_number=int(data["disc_number"] or 0),
                duration=float(data["duration"] or 0),
                played_count=int(data["played_count"] or 0),
                track_number=int(data["track_number"] or 0),
                starred=bool(data["starred"]),
                popularity=int(data["popularity"] or 0),
                id=str(data["id"]),
                name=str(data["name"] or ""),
                album_artist=str(data["album_artist"] or ""),
                artwork_url=str(data["artwork_url"] or ""),
                spotify_url=str(data["spotify_url"] or ""),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedResponseError(f"Invalid track payload: {exc}", raw=payload) from exc


def _require_mapping(payload: Any, label: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise MalformedResponseError(f"Expected a JSON object for {label}", raw=payload)
    return payload

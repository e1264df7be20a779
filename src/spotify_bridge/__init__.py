from spotify_bridge.config import BridgeConfig, load_config
from spotify_bridge.controller import SpotifyController
from spotify_bridge.dispatcher import Dispatcher, Platform, detect_platform
from spotify_bridge.errors import (
    BackendConnectionError,
    BackendExecutionError,
    BridgeError,
    MalformedResponseError,
    NotImplementedOnPlatformError,
    UnknownOperationError,
)
from spotify_bridge.models import PlaybackState, PlaybackStatus, Track

__all__ = [
    "BackendConnectionError",
    "BackendExecutionError",
    "BridgeConfig",
    "BridgeError",
    "Dispatcher",
    "MalformedResponseError",
    "NotImplementedOnPlatformError",
    "PlaybackState",
    "PlaybackStatus",
    "Platform",
    "SpotifyController",
    "Track",
    "UnknownOperationError",
    "detect_platform",
    "load_config",
]

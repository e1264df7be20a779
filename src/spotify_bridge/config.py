from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import tomllib


DEFAULT_CONFIG_PATH = Path.home() / ".config" / "spotify-bridge" / "config.toml"
BUNDLED_SCRIPTS_DIR = Path(__file__).parent / "scripts"
PLATFORM_CHOICES = ("auto", "applescript", "mpris")


@dataclass(slots=True)
class BridgeConfig:
    platform: str = "auto"
    mpris_service: str = "org.mpris.MediaPlayer2.spotify"
    mpris_object_path: str = "/org/mpris/MediaPlayer2"
    mpris_interface: str = "org.mpris.MediaPlayer2.Player"
    osascript: str = "osascript"
    scripts_dir: Path = BUNDLED_SCRIPTS_DIR


def load_config(path: Path | None = None) -> BridgeConfig:
    resolved = path or DEFAULT_CONFIG_PATH
    if resolved.exists():
        raw = tomllib.loads(resolved.read_text(encoding="utf-8"))
    else:
        raw = {}
    backend = raw.get("backend", {})
    mpris = raw.get("mpris", {})
    applescript = raw.get("applescript", {})

    configured_platform = str(backend.get("platform", "auto"))
    platform = os.getenv("SPOTIFY_BRIDGE_PLATFORM", configured_platform).strip().lower()
    if platform not in PLATFORM_CHOICES:
        raise ValueError(
            f"Unsupported platform {platform!r}, expected one of {', '.join(PLATFORM_CHOICES)}"
        )

    configured_service = str(mpris.get("service", "org.mpris.MediaPlayer2.spotify"))
    scripts_dir = str(applescript.get("scripts_dir", "")).strip()

    return BridgeConfig(
        platform=platform,
        mpris_service=os.getenv("SPOTIFY_BRIDGE_MPRIS_SERVICE", configured_service),
        mpris_object_path=str(mpris.get("object_path", "/org/mpris/MediaPlayer2")),
        mpris_interface=str(mpris.get("interface", "org.mpris.MediaPlayer2.Player")),
        osascript=str(applescript.get("osascript", "osascript")),
        scripts_dir=Path(scripts_dir).expanduser() if scripts_dir else BUNDLED_SCRIPTS_DIR,
    )

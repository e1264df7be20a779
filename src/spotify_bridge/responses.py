from __future__ import annotations

import json
import logging
from typing import Any

from spotify_bridge.errors import MalformedResponseError


LOGGER = logging.getLogger(__name__)


def parse_json_response(raw: str, label: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        LOGGER.warning("Malformed %s response: %r", label, raw)
        raise MalformedResponseError(f"Malformed {label} response", raw=raw) from exc


def parse_boolean_response(raw: object) -> bool:
    # Strict comparison: "True", "1" and "yes" are all false.
    return raw == "true"

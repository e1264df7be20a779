from __future__ import annotations

import asyncio
from collections.abc import Sequence
import logging
from pathlib import Path
import re
from typing import Any

from spotify_bridge.config import BUNDLED_SCRIPTS_DIR
from spotify_bridge.errors import BackendExecutionError, NotImplementedOnPlatformError
from spotify_bridge.operations import Operation, ScriptFile, ScriptTemplate


LOGGER = logging.getLogger(__name__)
_PLACEHOLDER = re.compile(r"%[s%]")


def format_script(template: str, args: Sequence[Any] = ()) -> str:
    """Substitute ``%s`` placeholders left to right, printf style.

    Argument count is not checked. Placeholders without an argument stay as a
    literal ``%s`` and leftover arguments are appended separated by spaces.
    """
    if not args:
        return template

    pending = list(args)

    def substitute(match: re.Match[str]) -> str:
        if match.group(0) == "%%":
            return "%"
        if not pending:
            return match.group(0)
        return _render(pending.pop(0))

    formatted = _PLACEHOLDER.sub(substitute, template)
    if pending:
        formatted = " ".join([formatted, *(_render(value) for value in pending)])
    return formatted


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class ScriptRunner:
    def __init__(self, osascript: str = "osascript") -> None:
        self._osascript = osascript

    async def exec_string(self, script: str) -> str:
        return await self._run("-e", script)

    async def exec_file(self, path: Path | str) -> str:
        return await self._run(str(path))

    async def _run(self, *arguments: str) -> str:
        try:
            process = await asyncio.create_subprocess_exec(
                self._osascript,
                *arguments,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise BackendExecutionError(f"Unable to run {self._osascript}: {exc}") from exc

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            LOGGER.error("osascript exited with %s: %s", process.returncode, message)
            raise BackendExecutionError(
                message or f"osascript exited with status {process.returncode}"
            )
        return stdout.decode("utf-8", errors="replace").strip()


class AppleScriptBackend:
    def __init__(self, runner: ScriptRunner, scripts_dir: Path = BUNDLED_SCRIPTS_DIR) -> None:
        self._runner = runner
        self._scripts_dir = scripts_dir

    async def invoke(self, operation: Operation, args: Sequence[Any] = ()) -> str:
        script = operation.script
        if isinstance(script, ScriptTemplate):
            return await self._runner.exec_string(format_script(script.template, args))
        if isinstance(script, ScriptFile):
            # File-backed operations never take arguments.
            return await self._runner.exec_file(self._scripts_dir / script.filename)
        raise NotImplementedOnPlatformError(
            f"{operation.name.value} is not implemented over AppleScript"
        )

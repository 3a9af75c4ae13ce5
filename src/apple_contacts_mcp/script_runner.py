import asyncio
import subprocess

from loguru import logger

from apple_contacts_mcp.applescripts import BULK_ITERATION_MARKER, quote_for_shell
from apple_contacts_mcp.errors import AutomationExecutionError, ScriptTimeoutError

DEFAULT_PROBE_TIMEOUT = 30.0
DEFAULT_BULK_TIMEOUT = 120.0

_LOG_PREVIEW_CHARS = 200


class ScriptRunner:
    """Runs AppleScript through ``osascript`` one process at a time."""

    def __init__(
        self,
        interpreter: str = "osascript",
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        bulk_timeout: float = DEFAULT_BULK_TIMEOUT,
    ):
        self._interpreter = interpreter
        self._probe_timeout = probe_timeout
        self._bulk_timeout = bulk_timeout

    def timeout_for(self, script: str) -> float:
        return self._bulk_timeout if BULK_ITERATION_MARKER in script else self._probe_timeout

    def build_command(self, script: str) -> str:
        return f"{self._interpreter} -e {quote_for_shell(script)} 2>/dev/null"

    async def execute(self, script: str) -> str:
        timeout = self.timeout_for(script)
        proc = await asyncio.create_subprocess_shell(
            self.build_command(script),
            stdin=subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            try:
                await asyncio.wait_for(proc.communicate(), timeout=5)
            except asyncio.TimeoutError:
                pass
            logger.error(
                "AppleScript timed out after {timeout}s. Script was: {script}...",
                timeout=timeout,
                script=script[:_LOG_PREVIEW_CHARS],
            )
            raise ScriptTimeoutError(timeout, proc.returncode)

        output = stdout.decode(errors="replace")

        if proc.returncode != 0:
            details = output or stderr.decode(errors="replace") or "(no output)"
            logger.error(
                "AppleScript execution failed (exit code: {code}): {details}",
                code=proc.returncode,
                details=details[:_LOG_PREVIEW_CHARS],
            )
            logger.error("Script was: {script}...", script=script[:_LOG_PREVIEW_CHARS])
            raise AutomationExecutionError(proc.returncode)

        # Trailing tabs are kept: the last record may end in empty fields.
        return output.rstrip("\r\n ")

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from apple_contacts_mcp import applescripts
from apple_contacts_mcp.errors import (
    BridgeUnavailableError,
    ContactsError,
    DataSourceUnavailableError,
)
from apple_contacts_mcp.script_runner import ScriptRunner


@dataclass
class PermissionReport:
    passed: bool
    message: str
    contact_count: str | None = None


class PermissionProbe:
    """Checks that System Events and Contacts respond before data is read.

    A successful check is remembered for the lifetime of this probe; a failed
    one is retried on the next call.
    """

    def __init__(self, runner: ScriptRunner):
        self._runner = runner
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    async def check(self) -> None:
        try:
            await self._runner.execute(applescripts.bridge_probe_script())
        except ContactsError as ex:
            logger.error(f"System Events permission check failed: {ex}")
            raise BridgeUnavailableError() from ex

        try:
            await self._runner.execute(applescripts.data_source_probe_script())
        except ContactsError as ex:
            logger.error(f"Contacts permission check failed: {ex}")
            raise DataSourceUnavailableError() from ex

    async def ensure_ready(self) -> None:
        if self._ready:
            return
        await self.check()
        self._ready = True
        logger.info("Initial permissions check passed")

    async def diagnose(self) -> PermissionReport:
        try:
            await self.check()
            count = await self._runner.execute(applescripts.count_script())
        except ContactsError as ex:
            return PermissionReport(passed=False, message=str(ex))

        self._ready = True
        return PermissionReport(passed=True, message="Permissions check passed", contact_count=count.strip())

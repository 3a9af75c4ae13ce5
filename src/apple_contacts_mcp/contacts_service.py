from __future__ import annotations

from loguru import logger

from apple_contacts_mcp import applescripts
from apple_contacts_mcp.errors import ContactsError
from apple_contacts_mcp.models import ContactRecord
from apple_contacts_mcp.permissions import PermissionProbe, PermissionReport
from apple_contacts_mcp.record_extractor import parse_contacts, split_lines
from apple_contacts_mcp.script_runner import ScriptRunner

DEFAULT_FETCH_CAP = 200


class ContactsService:
    """Per-server context: one script runner, one permission probe, fetch caps."""

    def __init__(
        self,
        runner: ScriptRunner,
        probe: PermissionProbe | None = None,
        fetch_cap: int = DEFAULT_FETCH_CAP,
    ):
        self._runner = runner
        self._probe = probe or PermissionProbe(runner)
        self._fetch_cap = fetch_cap

    @property
    def fetch_cap(self) -> int:
        return self._fetch_cap

    async def fetch_contacts(self, unlimited: bool = False) -> list[ContactRecord]:
        await self._probe.ensure_ready()

        script = applescripts.fetch_contacts_script(None if unlimited else self._fetch_cap)
        result = await self._runner.execute(script)
        if not result:
            logger.warning("No result returned from AppleScript")
            return []

        contacts = parse_contacts(result)
        logger.info(
            "Parsed {count} contacts from AppleScript{suffix}",
            count=len(contacts),
            suffix=" (unlimited)" if unlimited else "",
        )
        return contacts

    async def search_names(self, name: str | None = None, exact: bool = False) -> list[str]:
        """Names of people matched by Contacts itself; every name when ``name`` is empty."""
        await self._probe.ensure_ready()

        if name:
            script = applescripts.names_matching_script(name, exact=exact)
        else:
            script = applescripts.all_names_script()
        result = await self._runner.execute(script)
        names = [line.strip() for line in split_lines(result)]
        logger.info(f"Found {len(names)} matching contacts")
        return names

    async def count(self) -> int:
        await self._probe.ensure_ready()

        result = await self._runner.execute(applescripts.count_script())
        try:
            return int(result.strip())
        except ValueError as ex:
            raise ContactsError(f"Unexpected contact count returned: {result[:50]!r}") from ex

    async def first_names(self, limit: int) -> list[str]:
        await self._probe.ensure_ready()

        result = await self._runner.execute(applescripts.first_names_script(limit))
        return [line.strip() for line in split_lines(result)]

    async def processing_report(self, sample_size: int) -> list[str]:
        await self._probe.ensure_ready()

        result = await self._runner.execute(applescripts.processing_sample_script(sample_size))
        return split_lines(result)

    async def diagnose(self) -> PermissionReport:
        return await self._probe.diagnose()

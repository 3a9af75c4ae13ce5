import time
from typing import Any

from loguru import logger

from apple_contacts_mcp.contacts_service import ContactsService
from apple_contacts_mcp.errors import ContactsError
from apple_contacts_mcp.tools.tool_input import clamp_int

DEFAULT_SAMPLE_SIZE = 5


class ContactProcessingDiagnosticTool:
    """Times field access on a few contacts to spot ones that stall AppleScript."""

    def __init__(self, service: ContactsService):
        self._service = service

    @property
    def name(self) -> str:
        return "test_contact_processing"

    @property
    def description(self) -> str:
        return "Test contact processing with a small sample to diagnose performance issues"

    @property
    def is_mutating(self) -> bool:
        return False

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "sample_size": {
                    "type": "number",
                    "description": f"Number of contacts to test (default: {DEFAULT_SAMPLE_SIZE})",
                    "default": DEFAULT_SAMPLE_SIZE,
                },
            },
            "additionalProperties": False,
        }

    async def execute(self, tool_input: dict[str, Any]) -> str:
        sample_size = clamp_int(tool_input.get("sample_size"), DEFAULT_SAMPLE_SIZE, minimum=1)
        logger.info(f"Testing contact processing with {sample_size} contacts...")

        started = time.monotonic()
        try:
            lines = await self._service.processing_report(sample_size)
        except ContactsError as ex:
            logger.error(f"Contact processing test failed: {ex}")
            return (
                f"Contact processing test failed: {ex}\n\n"
                "This suggests there may be fundamental AppleScript execution issues in this environment."
            )
        elapsed = time.monotonic() - started

        return (
            "Contact Processing Test Results:\n\n"
            + "\n".join(lines)
            + f"\n\nTotal time: {elapsed:.2f}s for {len(lines)} contacts."
            + "\n\nThis helps identify if specific contacts are causing performance issues."
        )

from typing import Any

from loguru import logger

from apple_contacts_mcp.contacts_service import ContactsService
from apple_contacts_mcp.errors import ContactsError


class GetContactCountTool:
    def __init__(self, service: ContactsService):
        self._service = service

    @property
    def name(self) -> str:
        return "get_contact_count"

    @property
    def description(self) -> str:
        return "Simple test: just return the total number of contacts in the address book"

    @property
    def is_mutating(self) -> bool:
        return False

    @property
    def input_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}, "additionalProperties": False}

    async def execute(self, tool_input: dict[str, Any]) -> str:
        logger.info("Getting contact count...")
        try:
            count = await self._service.count()
        except ContactsError as ex:
            logger.error(f"Contact count failed: {ex}")
            return (
                f"❌ Failed to get contact count: {ex}\n\n"
                "This suggests a fundamental issue with Contacts app access."
            )

        logger.info(f"Contact count retrieved: {count}")
        return (
            f"📊 Total contacts in address book: {count}\n\n"
            "This confirms basic Contacts app connectivity is working."
        )

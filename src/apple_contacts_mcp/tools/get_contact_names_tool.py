from typing import Any

from loguru import logger

from apple_contacts_mcp.contacts_service import ContactsService
from apple_contacts_mcp.errors import ContactsError
from apple_contacts_mcp.tools.contacts_formatter import format_name_list
from apple_contacts_mcp.tools.tool_input import clamp_int

DEFAULT_LIMIT = 5
MIN_LIMIT = 1
MAX_LIMIT = 20


class GetContactNamesTool:
    def __init__(self, service: ContactsService):
        self._service = service

    @property
    def name(self) -> str:
        return "get_contact_names"

    @property
    def description(self) -> str:
        return "Simple test: get just the names of the first few contacts (no emails/phones)"

    @property
    def is_mutating(self) -> bool:
        return False

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "limit": {
                    "type": "number",
                    "description": f"Number of contact names to return (default: {DEFAULT_LIMIT})",
                    "default": DEFAULT_LIMIT,
                    "minimum": MIN_LIMIT,
                    "maximum": MAX_LIMIT,
                },
            },
            "additionalProperties": False,
        }

    async def execute(self, tool_input: dict[str, Any]) -> str:
        limit = clamp_int(tool_input.get("limit"), DEFAULT_LIMIT, minimum=MIN_LIMIT, maximum=MAX_LIMIT)
        logger.info(f"Getting names of first {limit} contacts...")

        try:
            names = await self._service.first_names(limit)
        except ContactsError as ex:
            logger.error(f"Get contact names failed: {ex}")
            return (
                f"❌ Failed to get contact names: {ex}\n\n"
                "This suggests issues with accessing contact fields."
            )

        logger.info(f"Retrieved {len(names)} contact names")
        return (
            f"📝 First {len(names)} contact names:\n\n{format_name_list(names)}\n\n"
            "This tests basic contact field access without complex data extraction."
        )

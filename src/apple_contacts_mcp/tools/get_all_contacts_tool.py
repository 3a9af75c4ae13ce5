from typing import Any

from loguru import logger

from apple_contacts_mcp.contacts_service import ContactsService
from apple_contacts_mcp.errors import ContactsError
from apple_contacts_mcp.tools.contacts_formatter import format_contacts_json
from apple_contacts_mcp.tools.tool_input import clamp_int, to_bool

DEFAULT_LIMIT = 100


class GetAllContactsTool:
    def __init__(self, service: ContactsService):
        self._service = service

    @property
    def name(self) -> str:
        return "get_all_contacts"

    @property
    def description(self) -> str:
        return (
            f"Get all contacts with full details. Reads at most the first {self._service.fetch_cap} "
            "contacts from the address book unless unlimited is set."
        )

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
                    "description": f"Maximum number of contacts to return (default: {DEFAULT_LIMIT})",
                    "default": DEFAULT_LIMIT,
                },
                "unlimited": {
                    "type": "boolean",
                    "description": (
                        f"Set to true to read past the first {self._service.fetch_cap} contacts "
                        "(may be slow for large address books)"
                    ),
                    "default": False,
                },
            },
            "additionalProperties": False,
        }

    async def execute(self, tool_input: dict[str, Any]) -> str:
        limit = clamp_int(tool_input.get("limit"), DEFAULT_LIMIT, minimum=1)
        unlimited = to_bool(tool_input.get("unlimited"))

        try:
            contacts = await self._service.fetch_contacts(unlimited=unlimited)
        except ContactsError as ex:
            logger.error(f"get_all_contacts error: {ex}")
            raise

        limited = contacts[:limit]
        suffix = f" (limited from {len(contacts)} total)" if len(contacts) > limit else ""
        return f"Retrieved {len(limited)} contacts{suffix}:\n\n{format_contacts_json(limited)}"

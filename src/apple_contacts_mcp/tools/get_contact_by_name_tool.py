from typing import Any

from loguru import logger

from apple_contacts_mcp.contact_index import matches_field
from apple_contacts_mcp.contacts_service import ContactsService
from apple_contacts_mcp.errors import ContactsError
from apple_contacts_mcp.tools.contacts_formatter import (
    NATIVE_SEARCH_NOTE,
    capped_search_note,
    format_contacts_json,
    format_name_list,
)
from apple_contacts_mcp.tools.tool_input import to_bool


class GetContactByNameTool:
    def __init__(self, service: ContactsService):
        self._service = service

    @property
    def name(self) -> str:
        return "get_contact_by_name"

    @property
    def description(self) -> str:
        return "Get contacts by exact or partial name match"

    @property
    def is_mutating(self) -> bool:
        return False

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "Name to search for (partial match supported)",
                },
                "exact_match": {
                    "type": "boolean",
                    "description": "Whether to require exact name match (default: false)",
                    "default": False,
                },
                "include_details": {
                    "type": "boolean",
                    "description": "Return full contact records instead of names (default: false)",
                    "default": False,
                },
                "unlimited": {
                    "type": "boolean",
                    "description": (
                        f"With include_details, only the first {self._service.fetch_cap} contacts are read; "
                        "set to true to read the entire address book (may be slow)"
                    ),
                    "default": False,
                },
            },
            "required": ["name"],
            "additionalProperties": False,
        }

    async def execute(self, tool_input: dict[str, Any]) -> str:
        name = str(tool_input.get("name") or "").strip()
        if not name:
            return "A name to search for is required."
        exact = to_bool(tool_input.get("exact_match"))
        include_details = to_bool(tool_input.get("include_details"))
        unlimited = to_bool(tool_input.get("unlimited"))
        logger.info(f'Searching for contacts with name: "{name}" (exact={exact})')

        try:
            if include_details:
                contacts = await self._service.fetch_contacts(unlimited=unlimited)
                matches = [c for c in contacts if matches_field(c, "name", name, exact=exact)]
                note = ""
                if not unlimited and len(contacts) >= self._service.fetch_cap:
                    note = f"\n\n{capped_search_note(self._service.fetch_cap)}"
                if not matches:
                    return f'No contacts found with name "{name}".{note}'
                return f'Found {len(matches)} contacts with name "{name}":\n\n{format_contacts_json(matches)}{note}'

            names = await self._service.search_names(name, exact=exact)
        except ContactsError as ex:
            logger.error(f"Name search failed: {ex}")
            raise

        if not names:
            return f'No contacts found with name "{name}".'

        return f'Found {len(names)} contacts with name "{name}":\n\n{format_name_list(names)}\n\n{NATIVE_SEARCH_NOTE}'

from typing import Any

from loguru import logger

from apple_contacts_mcp.contact_index import ContactFilter, filter_contacts
from apple_contacts_mcp.contacts_service import ContactsService
from apple_contacts_mcp.errors import ContactsError
from apple_contacts_mcp.tools.contacts_formatter import (
    NATIVE_SEARCH_NOTE,
    capped_search_note,
    format_contacts_json,
    format_name_list,
)
from apple_contacts_mcp.tools.tool_input import clamp_int, optional_int, to_bool

DEFAULT_LIMIT = 50


def _describe(criteria: ContactFilter) -> str:
    parts = []
    for label in ("query", "name", "email", "organization", "phone"):
        value = getattr(criteria, label)
        if value:
            parts.append(f'{label} "{value}"')
    if criteria.has_birthday is not None:
        parts.append("with birthday" if criteria.has_birthday else "without birthday")
    if criteria.birthday_within_days is not None:
        parts.append(f"birthday within {criteria.birthday_within_days} days")
    return ", ".join(parts) or "no filters"


class SearchContactsTool:
    def __init__(self, service: ContactsService):
        self._service = service

    @property
    def name(self) -> str:
        return "search_contacts"

    @property
    def description(self) -> str:
        return (
            "Search contacts with various filters including name, email, organization, phone, and notes. "
            "A plain query is matched against names by the Contacts app itself and returns names only; "
            "field filters or include_details search full contact records."
        )

    @property
    def is_mutating(self) -> bool:
        return False

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "General search query that will be matched against name, email, organization, and notes",
                },
                "name": {
                    "type": "string",
                    "description": "Filter by name (partial match, case insensitive)",
                },
                "email": {
                    "type": "string",
                    "description": "Filter by email address (partial match, case insensitive)",
                },
                "organization": {
                    "type": "string",
                    "description": "Filter by organization/company (partial match, case insensitive)",
                },
                "phone": {
                    "type": "string",
                    "description": "Filter by phone number (partial match)",
                },
                "has_birthday": {
                    "type": "boolean",
                    "description": "Only return contacts that have birthday information (false applies no filter)",
                },
                "birthday_within_days": {
                    "type": "number",
                    "description": "Only contacts whose next birthday is within this many days (0 = today)",
                },
                "include_details": {
                    "type": "boolean",
                    "description": "Return full contact records instead of names (default: false)",
                    "default": False,
                },
                "unlimited": {
                    "type": "boolean",
                    "description": (
                        f"Filtered searches read the first {self._service.fetch_cap} contacts; "
                        "set to true to search the entire address book (may be slow)"
                    ),
                    "default": False,
                },
                "limit": {
                    "type": "number",
                    "description": f"Maximum number of results to return (default: {DEFAULT_LIMIT})",
                    "default": DEFAULT_LIMIT,
                },
            },
            "additionalProperties": False,
        }

    async def execute(self, tool_input: dict[str, Any]) -> str:
        limit = clamp_int(tool_input.get("limit"), DEFAULT_LIMIT, minimum=1)
        include_details = to_bool(tool_input.get("include_details"))
        unlimited = to_bool(tool_input.get("unlimited"))
        criteria = ContactFilter(
            query=tool_input.get("query") or None,
            name=tool_input.get("name") or None,
            email=tool_input.get("email") or None,
            organization=tool_input.get("organization") or None,
            phone=tool_input.get("phone") or None,
            has_birthday=True if to_bool(tool_input.get("has_birthday")) else None,
            birthday_within_days=optional_int(tool_input.get("birthday_within_days")),
        )
        logger.info(f"Searching contacts with {_describe(criteria)}")

        try:
            if include_details or criteria.has_field_filters:
                return await self._search_records(criteria, limit, include_details, unlimited)
            return await self._search_names(criteria.query, limit)
        except ContactsError as ex:
            logger.error(f"Contact search failed: {ex}")
            raise

    async def _search_names(self, query: str | None, limit: int) -> str:
        names = await self._service.search_names(query)
        shown = names[:limit]

        if not query:
            return f"First {len(shown)} contacts:\n\n{format_name_list(shown)}\n\n{NATIVE_SEARCH_NOTE}"

        if not names:
            return f'No contacts found matching "{query}".'

        header = f'Found {len(names)} contacts matching "{query}"'
        if len(names) > limit:
            header += f" (showing first {limit})"
        return f"{header}:\n\n{format_name_list(shown)}\n\n{NATIVE_SEARCH_NOTE}"

    async def _search_records(
        self, criteria: ContactFilter, limit: int, include_details: bool, unlimited: bool
    ) -> str:
        contacts = await self._service.fetch_contacts(unlimited=unlimited)
        matches = filter_contacts(contacts, criteria)
        logger.info(f"Filtered {len(contacts)} contacts down to {len(matches)}")

        # Reaching the cap means later contacts were never read.
        note = ""
        if not unlimited and len(contacts) >= self._service.fetch_cap:
            note = f"\n\n{capped_search_note(self._service.fetch_cap)}"

        if not matches:
            return f"No contacts found matching {_describe(criteria)}.{note}"

        shown = matches[:limit]
        header = f"Found {len(matches)} contacts matching {_describe(criteria)}"
        if len(matches) > limit:
            header += f" (showing first {limit})"

        if include_details:
            return f"{header}:\n\n{format_contacts_json(shown)}{note}"
        return f"{header}:\n\n{format_name_list([c.display_name for c in shown])}{note}"

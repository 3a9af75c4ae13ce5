from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

UNKNOWN_NAME = "Unknown"

# A text field that may be missing. Raw parsing coerces it to "", display
# formatting coerces it to None so it serializes as JSON null.
OptionalText = str | None


def text_or_empty(value: OptionalText) -> str:
    return value or ""


def text_or_absent(value: OptionalText) -> str | None:
    return value or None


@dataclass
class ContactRecord:
    name: str = ""
    first_name: str = ""
    last_name: str = ""
    organization: str = ""
    note: str = ""
    birthday: str = ""
    emails: list[str] = field(default_factory=list)
    phones: list[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.name or UNKNOWN_NAME


def format_contact(record: ContactRecord) -> dict[str, Any]:
    """Project a parsed record into the shape returned to MCP clients."""
    return {
        "name": record.name or UNKNOWN_NAME,
        "firstName": text_or_empty(record.first_name),
        "lastName": text_or_empty(record.last_name),
        "emails": list(record.emails),
        "phones": list(record.phones),
        "organization": text_or_absent(record.organization),
        "notes": text_or_absent(record.note),
        "birthday": text_or_absent(record.birthday),
    }

import json

from apple_contacts_mcp.models import ContactRecord, format_contact

NATIVE_SEARCH_NOTE = "(Searched entire address book using efficient AppleScript filtering)"


def format_name_list(names: list[str]) -> str:
    """Number names from 1, one per line."""
    return "\n".join(f"{index}. {name}" for index, name in enumerate(names, start=1))


def format_contacts_json(contacts: list[ContactRecord]) -> str:
    return json.dumps([format_contact(c) for c in contacts], indent=2, ensure_ascii=False)


def capped_search_note(fetch_cap: int) -> str:
    return (
        f"(Searched only the first {fetch_cap} contacts; "
        "set unlimited=true to search the entire address book)"
    )

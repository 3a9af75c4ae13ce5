import re

from loguru import logger

from apple_contacts_mcp.applescripts import FIELD_SEPARATOR, LIST_SEPARATOR
from apple_contacts_mcp.models import ContactRecord, text_or_empty

RECORD_FIELD_COUNT = 8

# AppleScript's `return` is a carriage return; accept any mix of CR/LF.
_LINE_BREAK_RE = re.compile(r"[\r\n]+")


def split_lines(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [line for line in _LINE_BREAK_RE.split(raw) if line.strip()]


def _split_list(value: str) -> list[str]:
    if not value:
        return []
    return [item for item in value.split(LIST_SEPARATOR) if item.strip()]


def parse_record(line: str) -> ContactRecord | None:
    """Build a record from one tab-delimited line, or None if it is too short."""
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) < RECORD_FIELD_COUNT:
        return None
    return ContactRecord(
        name=text_or_empty(fields[0]),
        first_name=text_or_empty(fields[1]),
        last_name=text_or_empty(fields[2]),
        organization=text_or_empty(fields[3]),
        note=text_or_empty(fields[4]),
        birthday=text_or_empty(fields[5]),
        emails=_split_list(fields[6]),
        phones=_split_list(fields[7]),
    )


def parse_contacts(raw: str | None) -> list[ContactRecord]:
    """Parse the line-per-contact dump produced by ``fetch_contacts_script``.

    Malformed lines are skipped and logged; they never stop the rest of the
    batch from being parsed.
    """
    contacts: list[ContactRecord] = []
    try:
        lines = split_lines(raw)
    except Exception as ex:
        logger.error(f"Contact parsing failed: {ex}")
        return contacts

    for line in lines:
        try:
            record = parse_record(line)
        except Exception as ex:
            logger.debug(f"Failed to parse contact line ({ex}): {line[:100]}...")
            continue
        if record is None:
            logger.debug(f"Skipping contact line with fewer than {RECORD_FIELD_COUNT} fields: {line[:100]}...")
            continue
        contacts.append(record)

    return contacts

"""Case-insensitive match predicates over parsed contact records."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime

from apple_contacts_mcp.models import ContactRecord

_BIRTHDAY_FORMATS = (
    "%A, %B %d, %Y at %I:%M:%S %p",
    "%A, %B %d, %Y at %H:%M:%S",
    "%A, %d %B %Y at %H:%M:%S",
    "%A, %B %d, %Y",
    "%B %d, %Y",
    "%d %B %Y",
    "%Y-%m-%d",
    "%m/%d/%Y",
)

# Also folds the narrow no-break space macOS puts before AM/PM.
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class ContactFilter:
    query: str | None = None
    name: str | None = None
    email: str | None = None
    organization: str | None = None
    phone: str | None = None
    has_birthday: bool | None = None
    birthday_within_days: int | None = None

    @property
    def has_field_filters(self) -> bool:
        """True when anything other than the free-text query is set."""
        return bool(
            self.name
            or self.email
            or self.organization
            or self.phone
            or self.has_birthday is not None
            or self.birthday_within_days is not None
        )


def matches_query(contact: ContactRecord, query: str | None) -> bool:
    if not query:
        return True

    search_text = query.lower()
    searchable = [
        contact.name,
        contact.first_name,
        contact.last_name,
        contact.organization,
        contact.note,
        *(contact.emails or []),
        *(contact.phones or []),
    ]
    return any(search_text in field.lower() for field in searchable if field)


def matches_field(contact: ContactRecord, field_name: str, value: str | None, exact: bool = False) -> bool:
    if not value:
        return True

    contact_value = getattr(contact, field_name, None)
    if not contact_value:
        return False

    search_value = value.lower()
    contact_value = str(contact_value).lower()
    return (contact_value == search_value) if exact else (search_value in contact_value)


def matches_array_field(contact: ContactRecord, field_name: str, value: str | None, exact: bool = False) -> bool:
    items = getattr(contact, field_name, None)
    if not value or items is None:
        return False

    search_value = value.lower()
    for item in items:
        item_value = (item if isinstance(item, str) else str(item)).lower()
        if (item_value == search_value) if exact else (search_value in item_value):
            return True
    return False


def parse_birthday(text: str) -> date | None:
    cleaned = _WHITESPACE_RE.sub(" ", text).strip()
    for fmt in _BIRTHDAY_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(cleaned).date()
    except ValueError:
        return None


def _on_year(birth: date, year: int) -> date:
    try:
        return birth.replace(year=year)
    except ValueError:
        # 29 February outside a leap year.
        return date(year, 2, 28)


def is_upcoming_birthday(birthday: str | None, days: int | None, now: datetime | None = None) -> bool:
    """True if the next occurrence of ``birthday`` is within ``days`` of ``now``.

    A window of 0 means "today". Unparsable dates never raise, they just
    don't match.
    """
    if not birthday or days is None or days < 0:
        return False

    try:
        birth = parse_birthday(birthday)
        if birth is None:
            return False

        today = (now or datetime.now()).date()
        upcoming = _on_year(birth, today.year)
        if upcoming < today:
            upcoming = _on_year(birth, today.year + 1)

        days_diff = (upcoming - today).days
        return 0 <= days_diff <= days
    except (TypeError, ValueError, OverflowError):
        return False


def matches_filter(contact: ContactRecord, criteria: ContactFilter) -> bool:
    if not matches_query(contact, criteria.query):
        return False
    if not matches_field(contact, "name", criteria.name):
        return False
    if not matches_field(contact, "organization", criteria.organization):
        return False
    if criteria.email and not matches_array_field(contact, "emails", criteria.email):
        return False
    if criteria.phone and not matches_array_field(contact, "phones", criteria.phone):
        return False
    if criteria.has_birthday is not None and bool(contact.birthday) != criteria.has_birthday:
        return False
    if criteria.birthday_within_days is not None and not is_upcoming_birthday(
        contact.birthday, criteria.birthday_within_days
    ):
        return False
    return True


def filter_contacts(contacts: list[ContactRecord], criteria: ContactFilter) -> list[ContactRecord]:
    return [contact for contact in contacts if matches_filter(contact, criteria)]

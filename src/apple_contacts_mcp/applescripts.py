"""AppleScript builders for the Contacts app.

Every value that comes from a tool caller is passed through
``escape_applescript_string`` before it is placed inside a double-quoted
AppleScript literal. Numeric values are coerced with ``int()``. No other
call site builds script text.
"""

# Scripts containing this marker walk every person in the address book and
# get the long timeout.
BULK_ITERATION_MARKER = "repeat with aPerson in people"

FIELD_SEPARATOR = "\t"
LIST_SEPARATOR = ";"


def escape_applescript_string(value: str) -> str:
    """Escape a value for inclusion inside an AppleScript "..." literal.

    Backslashes and double quotes are escaped. Line breaks and tabs are
    replaced with spaces since they would break the delimited output format.
    """
    result = value.replace("\\", "\\\\").replace('"', '\\"')
    return result.replace("\r", " ").replace("\n", " ").replace("\t", " ")


def quote_for_shell(script: str) -> str:
    """Wrap a script as a single-quoted shell argument.

    Each ' closes the quote, emits an escaped quote and reopens: ' -> '\\''.
    """
    return "'" + script.replace("'", "'\\''") + "'"


def _join_lines(list_var: str, result_var: str) -> str:
    return (
        "set AppleScript's text item delimiters to return\n"
        f"set {result_var} to {list_var} as text\n"
        "set AppleScript's text item delimiters to \"\"\n"
        f"return {result_var}"
    )


def bridge_probe_script() -> str:
    return 'tell application "System Events"\nreturn "System Events accessible"\nend tell'


def data_source_probe_script() -> str:
    return 'tell application "Contacts"\nreturn "Contacts accessible"\nend tell'


def count_script() -> str:
    return 'tell application "Contacts"\nreturn count of people\nend tell'


def first_names_script(limit: int) -> str:
    return (
        'tell application "Contacts"\n'
        "set nameList to {}\n"
        f"set maxCount to {int(limit)}\n"
        "set totalCount to count of people\n"
        "if totalCount < maxCount then set maxCount to totalCount\n"
        "repeat with i from 1 to maxCount\n"
        "try\n"
        "set end of nameList to (name of person i as text)\n"
        "end try\n"
        "end repeat\n"
        f"{_join_lines('nameList', 'nameText')}\n"
        "end tell"
    )


def all_names_script() -> str:
    return (
        'tell application "Contacts"\n'
        "set nameList to name of people\n"
        f"{_join_lines('nameList', 'nameText')}\n"
        "end tell"
    )


def names_matching_script(name: str, exact: bool = False) -> str:
    """Let Contacts do the traversal with a ``whose`` clause; returns names only."""
    operator = "=" if exact else "contains"
    return (
        'tell application "Contacts"\n'
        f'set nameList to name of (every person whose name {operator} "{escape_applescript_string(name)}")\n'
        f"{_join_lines('nameList', 'nameText')}\n"
        "end tell"
    )


# Field values may hold tabs or line breaks (notes especially), which would
# shift or split a record. Handlers live at top level, outside the tell block.
_FIELD_CLEANING_HANDLERS = """\
on replaceBreaks(fieldText, breakChars)
if fieldText is missing value then return ""
set savedDelimiters to AppleScript's text item delimiters
set AppleScript's text item delimiters to breakChars
set textItems to text items of (fieldText as text)
set AppleScript's text item delimiters to " "
set cleanText to textItems as text
set AppleScript's text item delimiters to savedDelimiters
return cleanText
end replaceBreaks

on cleanField(fieldText)
return replaceBreaks(fieldText, {tab, return, linefeed})
end cleanField

on cleanListItem(itemText)
return replaceBreaks(itemText, {tab, return, linefeed, ";"})
end cleanListItem"""

_PERSON_FIELDS = """\
set personName to ""
try
set personName to name of aPerson
end try
set firstName to ""
try
set firstName to first name of aPerson
end try
set lastName to ""
try
set lastName to last name of aPerson
end try
set org to ""
try
set org to organization of aPerson
end try
set noteText to ""
try
set noteText to note of aPerson
end try
set birthdayText to ""
try
set birthdayValue to birth date of aPerson
if birthdayValue is not missing value then
set birthdayText to birthdayValue as string
end if
end try
set emailText to ""
try
set emailList to {}
repeat with anEmail in emails of aPerson
set end of emailList to my cleanListItem(value of anEmail)
end repeat
set AppleScript's text item delimiters to ";"
set emailText to emailList as text
set AppleScript's text item delimiters to ""
end try
set phoneText to ""
try
set phoneList to {}
repeat with aPhone in phones of aPerson
set end of phoneList to my cleanListItem(value of aPhone)
end repeat
set AppleScript's text item delimiters to ";"
set phoneText to phoneList as text
set AppleScript's text item delimiters to ""
end try
set contactRecord to my cleanField(personName) & tab & my cleanField(firstName) & tab & my cleanField(lastName) & tab & my cleanField(org) & tab & my cleanField(noteText) & tab & my cleanField(birthdayText) & tab & emailText & tab & phoneText
set end of contactList to contactRecord"""


def fetch_contacts_script(max_contacts: int | None = None) -> str:
    """Dump every person as one tab-delimited line.

    Tabs and line breaks inside a value become spaces, as does ``;`` inside
    an email or phone value, so each person stays one 8-field line.

    With ``max_contacts`` the walk stops after that many records; ``None``
    walks the whole address book.
    """
    lines = [
        _FIELD_CLEANING_HANDLERS,
        "",
        'tell application "Contacts"',
        "set contactList to {}",
        "set contactCount to 0",
    ]
    if max_contacts is not None:
        lines.append(f"set maxContacts to {int(max_contacts)}")
    lines.append(BULK_ITERATION_MARKER)
    if max_contacts is not None:
        lines.append("if contactCount >= maxContacts then exit repeat")
    lines += [
        "try",
        _PERSON_FIELDS,
        "set contactCount to contactCount + 1",
        "end try",
        "end repeat",
        _join_lines("contactList", "contactText"),
        "end tell",
    ]
    return "\n".join(lines)


def processing_sample_script(sample_size: int) -> str:
    """Time field access on the first ``sample_size`` people, one report line each."""
    return (
        'tell application "Contacts"\n'
        "set testResults to {}\n"
        "set processedCount to 0\n"
        f"set maxSample to {int(sample_size)}\n"
        f"{BULK_ITERATION_MARKER}\n"
        "if processedCount >= maxSample then exit repeat\n"
        "try\n"
        "set startTime to current date\n"
        'set personName to ""\n'
        "try\n"
        "set personName to name of aPerson\n"
        "end try\n"
        "set emailCount to 0\n"
        "try\n"
        "set emailCount to count of emails of aPerson\n"
        "end try\n"
        "set phoneCount to 0\n"
        "try\n"
        "set phoneCount to count of phones of aPerson\n"
        "end try\n"
        'set orgName to ""\n'
        "try\n"
        "set orgName to organization of aPerson\n"
        "end try\n"
        "set processingTime to (current date) - startTime\n"
        'set end of testResults to "Contact " & (processedCount + 1) & ": " & personName & '
        '" (emails:" & emailCount & ", phones:" & phoneCount & ", time:" & processingTime & "s)"\n'
        "set processedCount to processedCount + 1\n"
        "on error errMsg\n"
        'set end of testResults to "Contact " & (processedCount + 1) & ": ERROR - " & errMsg\n'
        "set processedCount to processedCount + 1\n"
        "end try\n"
        "end repeat\n"
        f"{_join_lines('testResults', 'reportText')}\n"
        "end tell"
    )

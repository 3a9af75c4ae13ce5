from typing import Any


def optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def to_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off", ""}:
            return False
    return bool(value)


def clamp_int(value: Any, default: int, minimum: int, maximum: int | None = None) -> int:
    number = default if value is None or value == "" else int(value)
    number = max(minimum, number)
    if maximum is not None:
        number = min(maximum, number)
    return number

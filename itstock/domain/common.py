"""Id and timestamp helpers shared by the domain entities."""
from datetime import datetime, timezone
from uuid import uuid4


def new_id() -> str:
    return uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return value.isoformat()


def parse_timestamp(value) -> datetime:
    '''Accepts datetime objects or ISO-8601 strings (a trailing "Z" is read as UTC).'''
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid timestamp: {value!r}")
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def require_int(value, field: str) -> int:
    # bool is an int subclass; stored counts must be real integers
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{field}' must be an integer, got {value!r}")
    return value


def require_count(value, field: str, minimum: int = 0) -> int:
    value = require_int(value, field)
    if value < minimum:
        raise ValueError(f"'{field}' must be at least {minimum}, got {value}")
    return value


def require_text(value, field: str, required: bool = False) -> str:
    '''Stored text fields must be strings; a missing optional field reads as "".'''
    if value is None and not required:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"'{field}' must be a string, got {type(value).__name__}")
    if required and not value.strip():
        raise ValueError(f"'{field}' cannot be empty")
    return value

import re
import uuid

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_id() -> str:
    return uuid.uuid4().hex


def is_valid_id(value) -> bool:
    """Project and content ids are 32-char lowercase hex UUIDs."""
    return isinstance(value, str) and bool(_ID_PATTERN.match(value))

"""ObjectId parsing shared by the repositories."""

from bson import ObjectId
from bson.errors import InvalidId


def parse_object_id(value: str) -> ObjectId | None:
    """Return the ObjectId for a hex string, or None if it is not one."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def parse_object_ids(values: list[str]) -> dict[str, ObjectId]:
    """Map each parseable hex string to its ObjectId, dropping the rest."""
    parsed = {value: parse_object_id(value) for value in values}
    return {value: oid for value, oid in parsed.items() if oid is not None}

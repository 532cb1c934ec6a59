from bson import ObjectId
from typing import Optional, Union


def parse_objectid(value: Union[str, ObjectId, None]) -> Optional[ObjectId]:
    """Return an ObjectId, or None for malformed ids (callers map that to 404)."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None

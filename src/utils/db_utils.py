from typing import Any

from bson import ObjectId
from bson.errors import InvalidId

from src.domain.errors import InvalidQuizIdError


def to_object_id(quiz_id: Any) -> ObjectId:
    """
    Convert an external quiz id into MongoDB's native ObjectId.

    Only 24-character hex strings (or ObjectIds) are accepted; anything
    else raises InvalidQuizIdError.
    """
    if isinstance(quiz_id, ObjectId):
        return quiz_id
    if not isinstance(quiz_id, str):
        raise InvalidQuizIdError(quiz_id)
    try:
        return ObjectId(quiz_id)
    except (InvalidId, TypeError) as exc:
        raise InvalidQuizIdError(quiz_id) from exc


def from_object_id(value: Any) -> str:
    """Render a stored _id in its external string form."""
    return str(value)

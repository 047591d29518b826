from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List, Optional

from bson import ObjectId

from src.utils.db_utils import to_object_id, from_object_id


class Quiz(BaseModel):
    """A single quiz question as stored in the quiz collection."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id")
    question: str
    code_snippet: str = Field("", alias="codeSnippet")
    options: List[str] = Field(default_factory=list)
    correct_answer: str = Field(..., alias="correctAnswer")
    tag: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to its JSON-facing dictionary."""
        return self.model_dump(by_alias=True)

    def to_document(self) -> Dict[str, Any]:
        """Convert model to a MongoDB document with a native _id."""
        doc = self.model_dump(by_alias=True)
        # No id supplied: the store assigns a fresh one
        doc["_id"] = to_object_id(self.id) if self.id is not None else ObjectId()
        return doc

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Quiz":
        data = dict(doc)
        if data.get("_id") is not None:
            data["_id"] = from_object_id(data["_id"])
        return cls.model_validate(data)


class QuizUpdate(BaseModel):
    """Partial set of quiz fields to merge into stored documents."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    question: Optional[str] = None
    code_snippet: Optional[str] = Field(None, alias="codeSnippet")
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = Field(None, alias="correctAnswer")
    tag: Optional[str] = None

    def to_set_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class QuizFilter(QuizUpdate):
    """Partial quiz used as an equality filter; every given field must match."""

    id: Optional[str] = Field(None, alias="_id")

    def to_query(self) -> Dict[str, Any]:
        query = self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        if "_id" in query:
            query["_id"] = to_object_id(query["_id"])
        return query


# --- Write acknowledgments ---

class _Ack(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class InsertOneAck(_Ack):
    inserted_id: str = Field(..., alias="insertedId")


class InsertManyAck(_Ack):
    inserted_count: int = Field(..., alias="insertedCount")
    inserted_ids: List[str] = Field(default_factory=list, alias="insertedIds")


class DeleteAck(_Ack):
    deleted_count: int = Field(..., alias="deletedCount")


class UpdateAck(_Ack):
    matched_count: int = Field(..., alias="matchedCount")
    modified_count: int = Field(..., alias="modifiedCount")

from pydantic import BaseModel, Field
from typing import List

from .db_models import Quiz, QuizFilter, QuizUpdate


class InsertAllRequest(BaseModel):
    """Request model for the bulk insert endpoint (a bare JSON array)."""
    quizzes: List[Quiz] = Field(..., description="Quiz questions to insert in one batch.")


class UpdateAllRequest(BaseModel):
    """Request model for the bulk update endpoint."""
    filter: QuizFilter = Field(default_factory=QuizFilter, description="Fields every target document must match.")
    update: QuizUpdate = Field(..., description="Fields to merge into every matched document.")

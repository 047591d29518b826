from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Union
from ..models.db_models import (
    Quiz, QuizFilter, QuizUpdate, InsertOneAck, InsertManyAck, DeleteAck, UpdateAck,
)

class IQuizRepository(ABC):
    """Interface for a quiz repository."""
    @abstractmethod
    def get_all(self) -> List[Quiz]:
        pass

    @abstractmethod
    def get_by_id(self, quiz_id: str) -> Optional[Quiz]:
        pass

    @abstractmethod
    def get_by_filter(self, count: str, tags: Iterable[str]) -> List[Quiz]:
        pass

    @abstractmethod
    def insert_one(self, quiz: Quiz) -> InsertOneAck:
        pass

    @abstractmethod
    def insert_many(self, quizzes: List[Quiz]) -> InsertManyAck:
        pass

    @abstractmethod
    def delete_by_id(self, quiz_id: str) -> DeleteAck:
        pass

    @abstractmethod
    def delete_all(self) -> DeleteAck:
        pass

    @abstractmethod
    def update_one(self, target: Union[Quiz, str], update: QuizUpdate) -> UpdateAck:
        pass

    @abstractmethod
    def update_many(self, quiz_filter: QuizFilter, update: QuizUpdate) -> UpdateAck:
        pass

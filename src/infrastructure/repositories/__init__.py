import re
from contextlib import contextmanager
from typing import Iterable, List, Optional, Union

from pydantic import ValidationError
from pymongo.collection import Collection
from pymongo.errors import BulkWriteError, DuplicateKeyError, PyMongoError

from src.domain.errors import (
    BaseAppException,
    DuplicateQuizIdError,
    EmptyUpdateError,
    InvalidSampleSizeError,
    StoreError,
    StoreErrorKind,
)
from src.domain.repositories import IQuizRepository
from src.domain.models.db_models import (
    Quiz, QuizFilter, QuizUpdate, InsertOneAck, InsertManyAck, DeleteAck, UpdateAck,
)
from src.infrastructure.config import Settings
from src.utils.db_utils import to_object_id
from quiz_utils.logger_utils import logger

# Literal count meaning "every matching question"
ALL_QUESTIONS = "All"

DUPLICATE_KEY_CODE = 11000

_POSITIVE_INT = re.compile(r"[0-9]+")


def parse_sample_size(count) -> Optional[int]:
    """
    Parse a random-selection count.

    Returns None for "All" (no sampling), otherwise a positive integer.
    """
    if count == ALL_QUESTIONS:
        return None
    text = str(count).strip()
    if isinstance(count, bool) or not _POSITIVE_INT.fullmatch(text):
        raise InvalidSampleSizeError(count)
    size = int(text)
    if size <= 0:
        raise InvalidSampleSizeError(count)
    return size


def _is_duplicate_key(exc: PyMongoError) -> bool:
    if isinstance(exc, DuplicateKeyError):
        return True
    if isinstance(exc, BulkWriteError):
        write_errors = (exc.details or {}).get("writeErrors", [])
        return any(err.get("code") == DUPLICATE_KEY_CODE for err in write_errors)
    return False


@contextmanager
def _store_call(operation: str, kind: StoreErrorKind, **context):
    """Log every failure of a store call and surface it as a typed error."""
    log_extra = {"operation": operation, **context}
    try:
        yield
    except BaseAppException as exc:
        logger.error(f"MongoQuizRepository.{operation}.failed", extra={**log_extra, "error": str(exc)}, exc_info=True)
        raise
    except PyMongoError as exc:
        logger.error(f"MongoQuizRepository.{operation}.failed", extra={**log_extra, "error": str(exc)}, exc_info=True)
        if _is_duplicate_key(exc):
            raise DuplicateQuizIdError(str(exc)) from exc
        raise StoreError(str(exc), kind) from exc
    except ValidationError as exc:
        logger.error(f"MongoQuizRepository.{operation}.parse_error", extra={**log_extra, "error": str(exc)}, exc_info=True)
        raise StoreError(f"Stored quiz does not match the Quiz shape: {exc}", StoreErrorKind.QUERY) from exc


class MongoQuizRepository(IQuizRepository):
    """MongoDB implementation of the quiz repository."""

    def __init__(self, connection, settings: Settings):
        self.connection = connection
        self.settings = settings

    @property
    def collection(self) -> Collection:
        # Resolved on every call; only the client itself is shared
        client = self.connection.get_handle()
        return client[self.settings.MONGO_DB][self.settings.MONGO_COLLECTION]

    def get_all(self) -> List[Quiz]:
        with _store_call("get_all", StoreErrorKind.QUERY):
            return [Quiz.from_document(doc) for doc in self.collection.find({})]

    def get_by_id(self, quiz_id: str) -> Optional[Quiz]:
        with _store_call("get_by_id", StoreErrorKind.QUERY, quiz_id=quiz_id):
            object_id = to_object_id(quiz_id)
            logger.info(f"Fetching data with ObjectId: {object_id}")
            doc = self.collection.find_one({"_id": object_id})
            if doc is None:
                logger.info("MongoQuizRepository.get_by_id.missing", extra={"quiz_id": quiz_id})
                return None
            return Quiz.from_document(doc)

    def get_by_filter(self, count: str, tags: Iterable[str]) -> List[Quiz]:
        if isinstance(tags, str):
            tags = [tags]
        tag_list = sorted(set(tags))
        logger.info(f"Fetching {count} random questions", extra={"count": str(count), "tags": tag_list})
        with _store_call("get_by_filter", StoreErrorKind.QUERY, count=str(count), tags=tag_list):
            size = parse_sample_size(count)
            if not tag_list:
                return []

            pipeline = [{"$match": {"tag": {"$in": tag_list}}}]
            if size is not None:
                pipeline.append({"$sample": {"size": size}})
            logger.debug("Aggregation pipeline", extra={"pipeline": repr(pipeline)})

            results = [Quiz.from_document(doc) for doc in self.collection.aggregate(pipeline)]
        logger.info(f"Fetched {len(results)} random questions")
        return results

    def insert_one(self, quiz: Quiz) -> InsertOneAck:
        with _store_call("insert_one", StoreErrorKind.WRITE, quiz_id=quiz.id):
            result = self.collection.insert_one(quiz.to_document())
        logger.info(f"Inserted quiz with ID: {result.inserted_id}")
        return InsertOneAck(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id))

    def insert_many(self, quizzes: List[Quiz]) -> InsertManyAck:
        if not quizzes:
            # insert_many rejects an empty batch outright
            return InsertManyAck(inserted_count=0, inserted_ids=[])

        with _store_call("insert_many", StoreErrorKind.WRITE, batch_size=len(quizzes)):
            documents = [quiz.to_document() for quiz in quizzes]
            result = self.collection.insert_many(documents)
        inserted_ids = [str(oid) for oid in result.inserted_ids]
        logger.info(f"Inserted {len(inserted_ids)} quizzes")
        return InsertManyAck(
            acknowledged=result.acknowledged,
            inserted_count=len(inserted_ids),
            inserted_ids=inserted_ids,
        )

    def delete_by_id(self, quiz_id: str) -> DeleteAck:
        with _store_call("delete_by_id", StoreErrorKind.WRITE, quiz_id=quiz_id):
            result = self.collection.delete_one({"_id": to_object_id(quiz_id)})
        logger.info("MongoQuizRepository.delete_by_id.ok", extra={"quiz_id": quiz_id, "deleted_count": result.deleted_count})
        return DeleteAck(acknowledged=result.acknowledged, deleted_count=result.deleted_count)

    def delete_all(self) -> DeleteAck:
        with _store_call("delete_all", StoreErrorKind.WRITE):
            result = self.collection.delete_many({})
        logger.info(f"Deleted {result.deleted_count} quizzes")
        return DeleteAck(acknowledged=result.acknowledged, deleted_count=result.deleted_count)

    def update_one(self, target: Union[Quiz, str], update: QuizUpdate) -> UpdateAck:
        """Merge the given fields into the quiz identified by target (a Quiz or its id)."""
        quiz_id = target.id if isinstance(target, Quiz) else target
        with _store_call("update_one", StoreErrorKind.WRITE, quiz_id=quiz_id):
            fields = update.to_set_document()
            if not fields:
                raise EmptyUpdateError()
            result = self.collection.update_one({"_id": to_object_id(quiz_id)}, {"$set": fields})

        if result.matched_count == 0:
            logger.warning("MongoQuizRepository.update_one.not_found", extra={"quiz_id": quiz_id})
        return UpdateAck(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
        )

    def update_many(self, quiz_filter: QuizFilter, update: QuizUpdate) -> UpdateAck:
        with _store_call("update_many", StoreErrorKind.WRITE, quiz_filter=repr(quiz_filter.model_dump(by_alias=True, exclude_none=True))):
            fields = update.to_set_document()
            if not fields:
                raise EmptyUpdateError()
            result = self.collection.update_many(quiz_filter.to_query(), {"$set": fields})

        logger.info(
            "MongoQuizRepository.update_many.ok",
            extra={"matched_count": result.matched_count, "modified_count": result.modified_count},
        )
        return UpdateAck(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
        )

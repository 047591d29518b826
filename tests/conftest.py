import copy
import os
import random
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from pymongo.errors import BulkWriteError, DuplicateKeyError

# Required settings must exist before src.infrastructure.config is imported
os.environ.setdefault('MONGO_USER', 'quiz-user')
os.environ.setdefault('MONGO_PASSWORD', 'quiz-password')
os.environ.setdefault('MONGO_CLUSTER', 'QuizCluster')
os.environ.setdefault('MONGO_DB', 'quizdb')
os.environ.setdefault('MONGO_COLLECTION', 'questions')
os.environ.setdefault('FLASK_ENV', 'testing')


def _matches(doc, query):
    for key, expected in query.items():
        if isinstance(expected, dict) and "$in" in expected:
            if doc.get(key) not in expected["$in"]:
                return False
        elif doc.get(key) != expected:
            return False
    return True


class InMemoryCollection:
    """
    Collection double that understands the query shapes the quiz repository
    issues: equality filters, {"$in": [...]}, $match/$sample pipelines and $set.
    """

    def __init__(self):
        self.docs = {}

    def find(self, query=None):
        return [copy.deepcopy(d) for d in self.docs.values() if _matches(d, query or {})]

    def find_one(self, query):
        found = self.find(query)
        return found[0] if found else None

    def aggregate(self, pipeline):
        docs = [copy.deepcopy(d) for d in self.docs.values()]
        for stage in pipeline:
            if "$match" in stage:
                docs = [d for d in docs if _matches(d, stage["$match"])]
            elif "$sample" in stage:
                docs = random.sample(docs, min(stage["$sample"]["size"], len(docs)))
        return iter(docs)

    def insert_one(self, doc):
        if doc["_id"] in self.docs:
            raise DuplicateKeyError("E11000 duplicate key error", code=11000)
        self.docs[doc["_id"]] = copy.deepcopy(doc)
        return SimpleNamespace(acknowledged=True, inserted_id=doc["_id"])

    def insert_many(self, docs):
        inserted = []
        for index, doc in enumerate(docs):
            if doc["_id"] in self.docs:
                raise BulkWriteError({
                    "writeErrors": [{"index": index, "code": 11000, "errmsg": "E11000 duplicate key error"}],
                    "nInserted": len(inserted),
                })
            self.docs[doc["_id"]] = copy.deepcopy(doc)
            inserted.append(doc["_id"])
        return SimpleNamespace(acknowledged=True, inserted_ids=inserted)

    def delete_one(self, query):
        for key, doc in list(self.docs.items()):
            if _matches(doc, query):
                del self.docs[key]
                return SimpleNamespace(acknowledged=True, deleted_count=1)
        return SimpleNamespace(acknowledged=True, deleted_count=0)

    def delete_many(self, query):
        targets = [k for k, d in self.docs.items() if _matches(d, query)]
        for key in targets:
            del self.docs[key]
        return SimpleNamespace(acknowledged=True, deleted_count=len(targets))

    def _update(self, query, update, limit=None):
        matched = modified = 0
        for doc in self.docs.values():
            if not _matches(doc, query):
                continue
            matched += 1
            changes = {k: v for k, v in update["$set"].items() if doc.get(k) != v}
            if changes:
                doc.update(copy.deepcopy(changes))
                modified += 1
            if limit and matched >= limit:
                break
        return SimpleNamespace(acknowledged=True, matched_count=matched, modified_count=modified)

    def update_one(self, query, update):
        return self._update(query, update, limit=1)

    def update_many(self, query, update):
        return self._update(query, update)


class FakeConnection:
    """Stands in for MongoConnectionManager, serving one in-memory collection."""

    def __init__(self, collection):
        self.collection = collection
        self.client = MagicMock()
        self.client.__getitem__.return_value.__getitem__.return_value = collection
        self.ping = MagicMock()

    def get_handle(self):
        return self.client


@pytest.fixture
def collection():
    return InMemoryCollection()


@pytest.fixture
def fake_connection(collection):
    return FakeConnection(collection)


@pytest.fixture
def repository(fake_connection):
    from src.infrastructure.config import settings
    from src.infrastructure.repositories import MongoQuizRepository
    return MongoQuizRepository(fake_connection, settings)


@pytest.fixture
def app(fake_connection):
    """Create and configure a new app instance backed by the in-memory collection."""
    from app import create_app
    app = create_app(connection=fake_connection)
    app.config.update({
        "TESTING": True,
    })
    yield app


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def quiz_data():
    return {
        "_id": "65a1b2c3d4e5f6a7b8c9d0e1",
        "question": "Q1",
        "codeSnippet": "",
        "options": ["a", "b"],
        "correctAnswer": "a",
        "tag": "js",
    }

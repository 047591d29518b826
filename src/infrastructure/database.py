from typing import Optional

from flask import current_app
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi
from werkzeug.local import LocalProxy

from src.domain.errors import StoreConnectionError
from src.infrastructure.config import Settings
from quiz_utils.logger_utils import logger


class MongoConnectionManager:
    """
    Owns the single MongoClient used by the process.

    Disconnected until connect() succeeds; connect() and disconnect() are
    both idempotent. Use it as a context manager to guarantee the client is
    closed on shutdown.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._client: Optional[MongoClient] = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def connect(self) -> None:
        if self._client is not None:
            return

        logger.info(
            "Connecting to MongoDB Atlas",
            extra={"cluster": self._settings.MONGO_CLUSTER},
        )
        client = None
        try:
            client = MongoClient(
                self._settings.mongo_uri,
                server_api=ServerApi("1", strict=True, deprecation_errors=True),
            )
            # MongoClient connects lazily; force a round trip
            client.admin.command("ping")
        except PyMongoError as exc:
            if client is not None:
                client.close()
            logger.error(
                "Failed to connect to MongoDB Atlas",
                extra={"cluster": self._settings.MONGO_CLUSTER, "error": str(exc)},
                exc_info=True,
            )
            raise StoreConnectionError(f"Failed to connect to MongoDB Atlas: {exc}") from exc

        self._client = client
        logger.info("Connected to MongoDB Atlas")

    def disconnect(self) -> None:
        if self._client is None:
            return

        client, self._client = self._client, None
        try:
            client.close()
            logger.info("Disconnected from MongoDB Atlas")
        except Exception:
            # Shutdown carries on regardless
            logger.error("Failed to disconnect from MongoDB Atlas", exc_info=True)

    def get_handle(self) -> MongoClient:
        """Return the live client. Only valid after connect()."""
        if self._client is None:
            raise StoreConnectionError("MongoDB client is not connected")
        return self._client

    def ping(self) -> None:
        """Send a trivial round trip to the deployment."""
        try:
            self.get_handle().admin.command("ping")
        except PyMongoError as exc:
            logger.error("MongoDB ping failed", extra={"error": str(exc)}, exc_info=True)
            raise StoreConnectionError(f"MongoDB ping failed: {exc}") from exc
        logger.info("Pinged your deployment. You successfully connected to MongoDB!")

    def __enter__(self) -> "MongoConnectionManager":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()


def init_app(app, connection: MongoConnectionManager, settings: Settings):
    """Attach the connection and the quiz repository to the Flask app."""
    from src.infrastructure.repositories import MongoQuizRepository

    app.extensions['quiz_connection'] = connection
    app.extensions['quiz_repository'] = MongoQuizRepository(connection, settings)


def get_connection() -> MongoConnectionManager:
    return current_app.extensions['quiz_connection']


def get_quiz_repository():
    return current_app.extensions['quiz_repository']


# Proxies resolved against the current application context
connection = LocalProxy(get_connection)
quiz_repository = LocalProxy(get_quiz_repository)

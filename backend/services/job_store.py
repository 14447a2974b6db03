"""MongoDB Atlas job collection with an explicit connection lifecycle."""

import logging
import threading

from pymongo import MongoClient
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from services.errors import SearchError, StoreConnectionError, StoreOperationError

logger = logging.getLogger(__name__)


class JobStore:
    """Connection handle for the job postings collection.

    At most one client is live per handle, also when several threads open it
    at once. ``open()`` is idempotent and the collection is opened lazily on
    first use; ``close()`` releases the client and is safe to call repeatedly.
    """

    def __init__(
        self,
        uri: str,
        database: str,
        collection: str,
        timeout_ms: int = 10000,
    ):
        self.uri = uri
        self.database_name = database
        self.collection_name = collection
        self.timeout_ms = timeout_ms
        self.client: MongoClient | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "JobStore":
        return cls(
            uri=settings.mongo_connection_uri,
            database=settings.mongo_db,
            collection=settings.mongo_collection,
            timeout_ms=settings.mongo_timeout_ms,
        )

    def open(self) -> "JobStore":
        """Connect and ping the server. Raises StoreConnectionError on failure."""
        if self.client is not None:
            return self

        with self._lock:
            # Another thread may have connected while we waited
            if self.client is not None:
                return self

            client = None
            try:
                client = MongoClient(
                    self.uri,
                    server_api=ServerApi("1", strict=False, deprecation_errors=True),
                    serverSelectionTimeoutMS=self.timeout_ms,
                    connectTimeoutMS=self.timeout_ms,
                    socketTimeoutMS=self.timeout_ms,
                )
                client.admin.command("ping")
            except PyMongoError as e:
                if client is not None:
                    client.close()
                logger.error("Error connecting to MongoDB: %s", e)
                raise StoreConnectionError(f"Could not connect to MongoDB: {e}") from e

            self.client = client
        logger.info("Connected to MongoDB Atlas (%s.%s)", self.database_name, self.collection_name)
        return self

    def close(self) -> None:
        """Close the client connection."""
        with self._lock:
            if self.client is None:
                return
            self.client.close()
            self.client = None
        logger.info("MongoDB connection closed")

    @property
    def is_open(self) -> bool:
        return self.client is not None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def collection(self):
        self.open()
        return self.client[self.database_name][self.collection_name]

    def aggregate(self, pipeline: list[dict], max_time_ms: int | None = None) -> list[dict]:
        """Run an aggregation pipeline and return all documents in order."""
        collection = self.collection
        try:
            cursor = collection.aggregate(pipeline, maxTimeMS=max_time_ms or self.timeout_ms)
            return list(cursor)
        except PyMongoError as e:
            raise SearchError(f"Aggregation on {self.collection_name} failed: {e}") from e

    def insert_many(self, records: list[dict]) -> int:
        """Bulk insert documents. Returns the number inserted."""
        if not records:
            return 0
        collection = self.collection
        try:
            result = collection.insert_many(records)
        except PyMongoError as e:
            raise StoreOperationError(f"Insert into {self.collection_name} failed: {e}") from e
        return len(result.inserted_ids)

    def count_documents(self) -> int:
        collection = self.collection
        try:
            return collection.count_documents({})
        except PyMongoError as e:
            raise StoreOperationError(f"Count on {self.collection_name} failed: {e}") from e

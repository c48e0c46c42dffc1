"""
Employee Data Repository
Handles all employee database operations against MongoDB.

The repository is the only place where EmployeeRecord objects are converted to
and from stored documents. Filters arrive already built by the query builder;
no escaping happens here.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from employee_portal.config.settings import (
    MONGO_COLLECTION_NAME,
    MONGO_DB_NAME,
    MONGO_TIMEOUT_MS,
    MONGO_URI,
)
from employee_portal.models.employee_schema import EmployeeRecord, to_stored_changes
from employee_portal.models.errors import WriteFailure

logger = logging.getLogger(__name__)

Filter = Dict[str, Any]
SortSpec = List[Tuple[str, int]]


class EmployeeRepository:
    """Narrow CRUD + aggregate interface over one employee collection."""

    def __init__(self, collection: Collection):
        self._collection = collection

    def find_one(self, filter: Filter) -> Optional[EmployeeRecord]:
        try:
            doc = self._collection.find_one(filter)
        except PyMongoError as e:
            raise WriteFailure() from e
        return EmployeeRecord.from_document(doc) if doc is not None else None

    def find_many(
        self,
        filter: Filter,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> Iterator[EmployeeRecord]:
        """
        Lazily yield matching records. The iterator is single-use.
        A limit of 0 means no limit.
        """
        try:
            cursor = self._collection.find(filter)
            if sort:
                cursor = cursor.sort(sort)
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            for doc in cursor:
                yield EmployeeRecord.from_document(doc)
        except PyMongoError as e:
            raise WriteFailure() from e

    def insert_one(self, record: EmployeeRecord) -> str:
        """Insert a new record and return its store-assigned id."""
        try:
            result = self._collection.insert_one(record.to_document())
        except PyMongoError as e:
            raise WriteFailure("Employee could not be saved. Please try again.") from e
        logger.info("Inserted employee %s", record.external_id)
        return str(result.inserted_id)

    def update_one(self, filter: Filter, changes: Dict[str, Any]) -> int:
        """
        Apply `changes` (record field -> new value) to the first match.
        Returns the matched count.
        """
        try:
            result = self._collection.update_one(filter, {"$set": to_stored_changes(changes)})
        except PyMongoError as e:
            raise WriteFailure("Employee could not be updated. Please try again.") from e
        logger.info("Updated fields %s (matched=%d)", sorted(changes), result.matched_count)
        return result.matched_count

    def delete_one(self, filter: Filter) -> int:
        try:
            result = self._collection.delete_one(filter)
        except PyMongoError as e:
            raise WriteFailure("Employee could not be deleted. Please try again.") from e
        logger.info("Delete request removed %d document(s)", result.deleted_count)
        return result.deleted_count

    def aggregate_group_count(self, group_field: str) -> List[Tuple[Optional[str], int]]:
        """
        Count documents per distinct value of `group_field`.

        Returns (group value, count) pairs ordered by group value, with the
        group of documents missing the field (value None) last.
        """
        pipeline = [{"$group": {"_id": f"${group_field}", "count": {"$sum": 1}}}]
        try:
            groups = [(doc.get("_id"), doc.get("count", 0)) for doc in self._collection.aggregate(pipeline)]
        except PyMongoError as e:
            raise WriteFailure() from e
        return sorted(groups, key=lambda g: (g[0] is None, str(g[0] or "")))

    def count(self, filter: Optional[Filter] = None) -> int:
        try:
            return self._collection.count_documents(filter or {})
        except PyMongoError as e:
            raise WriteFailure() from e


@contextmanager
def open_employee_store(
    uri: str = MONGO_URI,
    db_name: str = MONGO_DB_NAME,
    collection_name: str = MONGO_COLLECTION_NAME,
    timeout_ms: int = MONGO_TIMEOUT_MS,
) -> Iterator[EmployeeRepository]:
    """
    Open the single client connection for the session and yield a repository.
    The client is closed exactly once, whatever way the block exits.

    Raises:
        WriteFailure: if the server cannot be reached at startup
    """
    client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
    try:
        try:
            client.admin.command("ping")
        except PyMongoError as e:
            raise WriteFailure(f"Could not connect to MongoDB at {uri}.") from e
        logger.info("Connected to MongoDB database '%s', collection '%s'", db_name, collection_name)
        yield EmployeeRepository(client[db_name][collection_name])
    finally:
        client.close()
        logger.info("MongoDB client closed")

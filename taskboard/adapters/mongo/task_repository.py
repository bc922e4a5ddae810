"""
Mongo Task Repository Adapter.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from taskboard.core.database import MongoDB
from taskboard.core.errors import InvalidRecordId, RecordNotFound, StorageUnavailable
from taskboard.core.logger import logger
from taskboard.domain.entities import TaskRecord, ensure_utc, utc_now
from taskboard.ports.repository import TaskOrder, TaskRepositoryPort
from taskboard.repositories.models import TaskDocument

PUBLIC_FIELDS = ("title", "completed", "created_at")


class MongoTaskRepository(TaskRepositoryPort):
    """MongoDB implementation of TaskRepositoryPort."""

    def __init__(self, database: MongoDB, clock: Callable[[], datetime] = utc_now):
        self.database = database
        self.clock = clock

    def _to_record(self, doc: Dict[str, Any]) -> TaskRecord:
        """Convert a raw MongoDB document to the storage-agnostic record."""
        model = TaskDocument.from_dict(doc)
        internal = {k: v for k, v in doc.items() if k not in PUBLIC_FIELDS}
        return TaskRecord(
            id=model.id,
            title=model.title,
            completed=model.completed,
            created_at=ensure_utc(model.created_at),
            internal=internal,
        )

    @staticmethod
    def _object_id(task_id: str) -> ObjectId:
        if not ObjectId.is_valid(task_id):
            raise InvalidRecordId(task_id)
        return ObjectId(task_id)

    async def find_all(self, order: TaskOrder = TaskOrder.NEWEST_FIRST) -> List[TaskRecord]:
        direction = DESCENDING if order is TaskOrder.NEWEST_FIRST else ASCENDING

        try:
            collection = await self.database.get_collection()
            cursor = collection.find({}).sort([("created_at", direction), ("_id", direction)])
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to list tasks: {e}")
            raise StorageUnavailable("find_all", e) from e

        logger.debug(f"Fetched {len(docs)} tasks from MongoDB")
        return [self._to_record(doc) for doc in docs]

    def _now(self) -> datetime:
        # BSON dates carry milliseconds only
        now = self.clock()
        return now.replace(microsecond=now.microsecond // 1000 * 1000)

    async def create(self, fields: Dict[str, Any]) -> TaskRecord:
        now = self._now()
        document = TaskDocument(
            title=fields["title"],
            completed=bool(fields.get("completed", False)),
            created_at=now,
            updated_at=now,
        )
        data = document.to_dict()

        try:
            collection = await self.database.get_collection()
            result = await collection.insert_one(data)
        except PyMongoError as e:
            logger.error(f"Failed to create task: {e}")
            raise StorageUnavailable("create", e) from e

        logger.debug(f"Inserted task document: _id={result.inserted_id}")
        return self._to_record({"_id": result.inserted_id, **data})

    async def update(self, task_id: str, fields: Dict[str, Any]) -> TaskRecord:
        oid = self._object_id(task_id)
        changes = {**fields, "updated_at": self._now()}

        try:
            collection = await self.database.get_collection()
            doc = await collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to update task {task_id}: {e}")
            raise StorageUnavailable("update", e) from e

        if doc is None:
            raise RecordNotFound(task_id)

        logger.debug(f"Updated task document: _id={task_id}, fields={sorted(fields)}")
        return self._to_record(doc)

    async def delete(self, task_id: str) -> None:
        oid = self._object_id(task_id)

        try:
            collection = await self.database.get_collection()
            result = await collection.delete_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"Failed to delete task {task_id}: {e}")
            raise StorageUnavailable("delete", e) from e

        if result.deleted_count == 0:
            raise RecordNotFound(task_id)

        logger.debug(f"Deleted task document: _id={task_id}")

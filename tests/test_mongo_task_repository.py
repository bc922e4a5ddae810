"""
MongoTaskRepository against mocked Motor collections.
No MongoDB server is needed; the mocks mirror Motor's async method surface.
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import ServerSelectionTimeoutError

from taskboard.adapters.mongo.task_repository import MongoTaskRepository
from taskboard.core.database import MongoDB
from taskboard.core.errors import InvalidRecordId, RecordNotFound, StorageUnavailable
from taskboard.ports.repository import TaskRepositoryPort

from .fakes import TickingClock

CREATED = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_doc(oid=None, title="Buy milk", completed=False, created_at=CREATED):
    return {
        "_id": oid or ObjectId(),
        "title": title,
        "completed": completed,
        "created_at": created_at,
        "updated_at": created_at,
    }


@pytest.fixture()
def collection():
    return MagicMock()


@pytest.fixture()
def repo(collection):
    database = MagicMock(spec=MongoDB)
    database.get_collection = AsyncMock(return_value=collection)
    return MongoTaskRepository(database, clock=TickingClock(start=CREATED))


def test_mongo_repository_implements_port():
    assert issubclass(MongoTaskRepository, TaskRepositoryPort)


@pytest.mark.asyncio
async def test_create_inserts_document_and_returns_record(repo, collection):
    oid = ObjectId()
    collection.insert_one = AsyncMock(return_value=SimpleNamespace(inserted_id=oid))

    record = await repo.create({"title": "Buy milk", "completed": False})

    inserted = collection.insert_one.await_args.args[0]
    assert inserted == {
        "title": "Buy milk",
        "completed": False,
        "created_at": CREATED,
        "updated_at": CREATED,
    }
    assert record.id == str(oid)
    assert record.created_at == CREATED
    assert record.internal["_id"] == oid


@pytest.mark.asyncio
async def test_create_stores_millisecond_timestamps(collection):
    database = MagicMock(spec=MongoDB)
    database.get_collection = AsyncMock(return_value=collection)
    precise = datetime(2025, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
    repo = MongoTaskRepository(database, clock=lambda: precise)
    collection.insert_one = AsyncMock(return_value=SimpleNamespace(inserted_id=ObjectId()))

    record = await repo.create({"title": "Buy milk"})

    expected = datetime(2025, 1, 1, 12, 0, 0, 123000, tzinfo=timezone.utc)
    inserted = collection.insert_one.await_args.args[0]
    assert inserted["created_at"] == expected
    assert inserted["updated_at"] == expected
    assert record.created_at == expected


@pytest.mark.asyncio
async def test_find_all_sorts_newest_first(repo, collection):
    docs = [make_doc(title="t3"), make_doc(title="t2")]
    cursor = collection.find.return_value.sort.return_value
    cursor.to_list = AsyncMock(return_value=docs)

    records = await repo.find_all()

    collection.find.assert_called_once_with({})
    collection.find.return_value.sort.assert_called_once_with(
        [("created_at", DESCENDING), ("_id", DESCENDING)]
    )
    assert [r.title for r in records] == ["t3", "t2"]
    assert [r.id for r in records] == [str(d["_id"]) for d in docs]


@pytest.mark.asyncio
async def test_update_sets_fields_and_update_time(repo, collection):
    oid = ObjectId()
    collection.find_one_and_update = AsyncMock(return_value=make_doc(oid, completed=True))

    record = await repo.update(str(oid), {"completed": True})

    args, kwargs = collection.find_one_and_update.await_args
    assert args[0] == {"_id": oid}
    assert args[1] == {"$set": {"completed": True, "updated_at": CREATED}}
    assert kwargs["return_document"] is ReturnDocument.AFTER
    assert record.completed is True
    assert record.title == "Buy milk"


@pytest.mark.asyncio
async def test_update_missing_raises_not_found(repo, collection):
    collection.find_one_and_update = AsyncMock(return_value=None)

    with pytest.raises(RecordNotFound):
        await repo.update(str(ObjectId()), {"completed": True})


@pytest.mark.asyncio
async def test_delete_missing_raises_not_found(repo, collection):
    collection.delete_one = AsyncMock(return_value=SimpleNamespace(deleted_count=0))

    with pytest.raises(RecordNotFound):
        await repo.delete(str(ObjectId()))


@pytest.mark.asyncio
async def test_delete_existing(repo, collection):
    oid = ObjectId()
    collection.delete_one = AsyncMock(return_value=SimpleNamespace(deleted_count=1))

    await repo.delete(str(oid))

    collection.delete_one.assert_awaited_once_with({"_id": oid})


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["42", "not-an-object-id", "0f8fad5b-d9cb-469f-a165-70867728950e"])
async def test_malformed_id_never_reaches_mongo(repo, collection, bad_id):
    collection.find_one_and_update = AsyncMock()
    collection.delete_one = AsyncMock()

    with pytest.raises(InvalidRecordId):
        await repo.update(bad_id, {"completed": True})
    with pytest.raises(InvalidRecordId):
        await repo.delete(bad_id)

    collection.find_one_and_update.assert_not_awaited()
    collection.delete_one.assert_not_awaited()


@pytest.mark.asyncio
async def test_driver_errors_become_storage_unavailable(repo, collection):
    collection.insert_one = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))

    with pytest.raises(StorageUnavailable):
        await repo.create({"title": "Buy milk"})


@pytest.mark.asyncio
async def test_mongodb_get_collection_requires_connection():
    database = MongoDB("mongodb://localhost:27017", "taskboard")

    with pytest.raises(RuntimeError):
        await database.get_collection()
    assert await database.health_check() is False

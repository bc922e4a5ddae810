from datetime import datetime, timezone

from bson import ObjectId

from taskboard.domain.entities import TaskRecord
from taskboard.mappers.task_mapper import to_dto, to_dtos

CREATED = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_record(task_id: str = "a1", **internal) -> TaskRecord:
    return TaskRecord(
        id=task_id,
        title="Buy milk",
        completed=False,
        created_at=CREATED,
        internal=internal,
    )


def test_dto_exposes_only_public_fields():
    record = make_record(_id=ObjectId(), updated_at=CREATED, revision=3)

    payload = to_dto(record).to_dict()

    assert set(payload) == {"id", "title", "completed", "createdAt"}
    assert payload["id"] == "a1"
    assert payload["title"] == "Buy milk"
    assert payload["completed"] is False


def test_created_at_serializes_as_iso_string():
    payload = to_dto(make_record()).to_dict()

    assert isinstance(payload["createdAt"], str)
    assert payload["createdAt"].startswith("2025-03-01T12:00:00")


def test_batch_conversion_keeps_order_and_semantics():
    records = [make_record("a"), make_record("b", revision=2), make_record("c")]

    dtos = to_dtos(records)

    assert [d.id for d in dtos] == ["a", "b", "c"]
    assert dtos[1] == to_dto(records[1])


def test_batch_conversion_of_nothing():
    assert to_dtos([]) == []

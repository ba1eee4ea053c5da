from datetime import datetime, timezone

import pytest

from school_api.errors import ConstraintViolation, RecordNotFound
from school_api.models import Course, Teacher
from school_api.services.query import IncludeNode
from school_api.services.resources import TEACHERS, ResourceService


class FakeRepository:
    """In-memory stand-in for ``Repository`` used to exercise the service alone."""

    def __init__(self, records=None, fail_with=None):
        self.records = {record.id: record for record in records or []}
        self.fail_with = fail_with
        self.calls = []

    def count(self):
        return len(self.records)

    def find_page(self, spec):
        self.calls.append(("find_page", spec))
        ordered = sorted(self.records.values(), key=lambda r: r.created_at, reverse=spec.direction.value == "DESC")
        return ordered[spec.offset : spec.offset + spec.limit]

    def get(self, record_id, includes=()):
        self.calls.append(("get", record_id, includes))
        return self.records.get(record_id)

    def add(self, data):
        if self.fail_with:
            raise self.fail_with
        record = Teacher(id=len(self.records) + 1, **data)
        self.records[record.id] = record
        return record

    def update(self, record, changes):
        for name, value in changes.items():
            setattr(record, name, value)
        return record

    def delete(self, record):
        self.records.pop(record.id)


def make_teacher(record_id, day):
    return Teacher(
        id=record_id, name=f"T{record_id}", department="Arts", created_at=datetime(2024, 1, day, tzinfo=timezone.utc)
    )


def test_list_builds_meta_from_count_and_limit():
    repo = FakeRepository([make_teacher(i, i) for i in range(1, 6)])
    service = ResourceService(repo, TEACHERS)
    page = service.list(service.fetch_spec(page="2", limit="2", sort="desc"))
    assert page.meta.total_items == 5
    assert page.meta.total_pages == 3
    assert [item["name"] for item in page.data] == ["T3", "T2"]


def test_get_requests_detail_includes():
    teacher = make_teacher(1, 1)
    teacher.courses = [Course(id=10, name="Painting", teacher_id=1)]
    repo = FakeRepository([teacher])
    body = ResourceService(repo, TEACHERS).get(1)
    assert repo.calls[-1] == ("get", 1, (IncludeNode("courses"),))
    assert body["Course"][0]["name"] == "Painting"


def test_missing_record_raises_not_found():
    service = ResourceService(FakeRepository(), TEACHERS)
    with pytest.raises(RecordNotFound):
        service.get(1)
    with pytest.raises(RecordNotFound):
        service.update(1, {"name": "x"})
    with pytest.raises(RecordNotFound):
        service.delete(1)


def test_constraint_violation_propagates_from_repository():
    service = ResourceService(FakeRepository(fail_with=ConstraintViolation("UNIQUE constraint failed")), TEACHERS)
    with pytest.raises(ConstraintViolation) as info:
        service.create({"name": "Ada", "department": "Maths"})
    assert info.value.to_body() == {"error": "UNIQUE constraint failed"}


def test_update_and_delete_go_through_repository():
    repo = FakeRepository([make_teacher(1, 1)])
    service = ResourceService(repo, TEACHERS)
    assert service.update(1, {"department": "Music"}).department == "Music"
    assert service.delete(1).message == "Deleted"
    assert repo.records == {}

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from sqlmodel import SQLModel

from .. import schemas
from ..errors import RecordNotFound
from ..logging_utils import OperationTimer, log_event
from ..models import Course, Student, Teacher
from .query import (
    COURSE_RELATIONS,
    DEFAULT_LIMIT,
    STUDENT_RELATIONS,
    TEACHER_RELATIONS,
    FetchSpec,
    IncludeNode,
    RelationMap,
    build_include_tree,
    parse_fetch_spec,
)
from .repository import Repository
from .serialization import serialize


@dataclass(frozen=True)
class ResourceConfig:
    name: str
    model: type
    relations: RelationMap
    detail_includes: Tuple[IncludeNode, ...]


TEACHERS = ResourceConfig(
    name="teacher",
    model=Teacher,
    relations=TEACHER_RELATIONS,
    detail_includes=build_include_tree(["CourseId"], TEACHER_RELATIONS),
)

STUDENTS = ResourceConfig(
    name="student",
    model=Student,
    relations=STUDENT_RELATIONS,
    detail_includes=build_include_tree(["CourseId"], STUDENT_RELATIONS),
)

COURSES = ResourceConfig(
    name="course",
    model=Course,
    relations=COURSE_RELATIONS,
    detail_includes=build_include_tree(["TeacherId"], COURSE_RELATIONS),
)


class ResourceService:
    """Create/list/get/update/delete for one resource, on top of an injected repository."""

    def __init__(self, repo: Repository, config: ResourceConfig) -> None:
        self.repo = repo
        self.config = config

    def fetch_spec(
        self,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        sort: Optional[str] = None,
        populate: Optional[str] = None,
        default_limit: int = DEFAULT_LIMIT,
    ) -> FetchSpec:
        return parse_fetch_spec(page, limit, sort, populate, self.config.relations, default_limit)

    def create(self, data: Dict[str, Any]) -> SQLModel:
        record = self.repo.add(data)
        log_event(self.config.name, "create", "record created", record_id=record.id)
        return record

    def list(self, spec: FetchSpec) -> schemas.Page:
        with OperationTimer(self.config.name, "list", f"page={spec.page} limit={spec.limit}"):
            total = self.repo.count()
            records = self.repo.find_page(spec)
        return schemas.Page(
            meta=schemas.PageMeta(
                total_items=total,
                page=spec.page,
                total_pages=spec.total_pages(total),
            ),
            data=[serialize(record, spec.includes) for record in records],
        )

    def _require(self, record_id: int, includes: Tuple[IncludeNode, ...] = ()) -> SQLModel:
        record = self.repo.get(record_id, includes)
        if record is None:
            raise RecordNotFound()
        return record

    def get(self, record_id: int) -> Dict[str, Any]:
        record = self._require(record_id, self.config.detail_includes)
        return serialize(record, self.config.detail_includes)

    def update(self, record_id: int, changes: Dict[str, Any]) -> SQLModel:
        record = self._require(record_id)
        record = self.repo.update(record, changes)
        log_event(self.config.name, "update", "record updated", record_id=record_id, fields=sorted(changes))
        return record

    def delete(self, record_id: int) -> schemas.MessageResponse:
        record = self._require(record_id)
        self.repo.delete(record)
        log_event(self.config.name, "delete", "record deleted", record_id=record_id)
        return schemas.MessageResponse(message="Deleted")

from typing import Optional, Type

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from .. import schemas
from ..config import Settings, get_settings
from ..services.resources import COURSES, STUDENTS, TEACHERS, ResourceConfig, ResourceService
from .deps import authenticate, service_for


def resource_router(
    prefix: str,
    config: ResourceConfig,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    read_schema: Type[BaseModel],
) -> APIRouter:
    """Bind create/list/get/update/delete for one resource, all behind ``authenticate``."""
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")], dependencies=[Depends(authenticate)])
    get_service = service_for(config)

    @router.post("", response_model=read_schema, status_code=status.HTTP_201_CREATED)
    def create_route(payload: create_schema, service: ResourceService = Depends(get_service)):
        record = service.create(payload.model_dump())
        return read_schema.model_validate(record)

    @router.get("", response_model=schemas.Page)
    def list_route(
        page: Optional[str] = Query(default=None),
        limit: Optional[str] = Query(default=None),
        sort: Optional[str] = Query(default=None, description="asc or desc, by creation time"),
        populate: Optional[str] = Query(default=None, description="Comma-separated relation tokens"),
        service: ResourceService = Depends(get_service),
        settings: Settings = Depends(get_settings),
    ):
        spec = service.fetch_spec(page, limit, sort, populate, settings.default_page_size)
        return service.list(spec)

    @router.get("/{record_id}")
    def read_route(record_id: int, service: ResourceService = Depends(get_service)):
        return service.get(record_id)

    @router.put("/{record_id}", response_model=read_schema)
    def update_route(
        record_id: int,
        payload: update_schema,
        service: ResourceService = Depends(get_service),
    ):
        record = service.update(record_id, payload.model_dump(exclude_unset=True))
        return read_schema.model_validate(record)

    @router.delete("/{record_id}", response_model=schemas.MessageResponse)
    def delete_route(record_id: int, service: ResourceService = Depends(get_service)):
        return service.delete(record_id)

    return router


teachers_router = resource_router(
    "/teachers", TEACHERS, schemas.TeacherCreate, schemas.TeacherUpdate, schemas.TeacherRead
)
students_router = resource_router(
    "/students", STUDENTS, schemas.StudentCreate, schemas.StudentUpdate, schemas.StudentRead
)
courses_router = resource_router(
    "/courses", COURSES, schemas.CourseCreate, schemas.CourseUpdate, schemas.CourseRead
)

router = APIRouter()
router.include_router(teachers_router)
router.include_router(students_router)
router.include_router(courses_router)

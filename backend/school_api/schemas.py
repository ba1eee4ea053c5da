from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class UserCreate(BaseModel):
    name: str
    email: str
    password: str


class UserLogin(BaseModel):
    email: str
    password: str


class UserRead(ORMModel):
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class RegisterResponse(BaseModel):
    message: str
    user_id: int = Field(serialization_alias="userId")


class TokenResponse(BaseModel):
    token: str


class TeacherCreate(BaseModel):
    name: str
    department: str


class TeacherUpdate(BaseModel):
    name: Optional[str] = None
    department: Optional[str] = None


class TeacherRead(ORMModel):
    id: int
    name: str
    department: str
    created_at: datetime
    updated_at: datetime


class CourseCreate(BaseModel):
    name: str
    description: Optional[str] = None
    teacher_id: Optional[int] = None


class CourseUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    teacher_id: Optional[int] = None


class CourseRead(ORMModel):
    id: int
    name: str
    description: Optional[str]
    teacher_id: Optional[int]
    created_at: datetime
    updated_at: datetime


class StudentCreate(BaseModel):
    name: str
    email: Optional[str] = None
    course_id: Optional[int] = None


class StudentUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    course_id: Optional[int] = None


class StudentRead(ORMModel):
    id: int
    name: str
    email: Optional[str]
    course_id: Optional[int]
    created_at: datetime
    updated_at: datetime


class PageMeta(BaseModel):
    total_items: int = Field(serialization_alias="totalItems")
    page: int
    total_pages: int = Field(serialization_alias="totalPages")


class Page(BaseModel):
    """List envelope; ``data`` items carry any included relations."""

    meta: PageMeta
    data: List[Dict[str, Any]]


class MessageResponse(BaseModel):
    message: str

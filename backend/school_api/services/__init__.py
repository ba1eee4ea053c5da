"""Service layer: query shaping, persistence client, controllers and auth."""

from . import auth
from .query import FetchSpec, IncludeNode, RelationMap, build_include_tree, parse_fetch_spec
from .repository import Repository
from .resources import COURSES, STUDENTS, TEACHERS, ResourceConfig, ResourceService
from .serialization import serialize

__all__ = [
    "auth",
    "build_include_tree",
    "COURSES",
    "FetchSpec",
    "IncludeNode",
    "parse_fetch_spec",
    "RelationMap",
    "Repository",
    "ResourceConfig",
    "ResourceService",
    "serialize",
    "STUDENTS",
    "TEACHERS",
]

"""Translate list query parameters into a normalized fetch specification.

Everything here is pure: no session, no models. A resource declares which
``populate`` tokens it understands through a :class:`RelationMap`, and
:func:`build_include_tree` merges the matching relation paths into a tree of
:class:`IncludeNode` that the repository turns into loader options.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1
ORDER_KEY = "created_at"

RelationPath = Tuple[str, ...]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class SortDirection(str, Enum):
    asc = "ASC"
    desc = "DESC"


@dataclass(frozen=True)
class IncludeNode:
    relation: str
    children: Tuple["IncludeNode", ...] = ()


@dataclass(frozen=True)
class RelationMap:
    """Recognized ``populate`` tokens of one resource."""

    paths: Mapping[str, RelationPath] = field(default_factory=dict)
    defaults: Tuple[RelationPath, ...] = ()


@dataclass(frozen=True)
class FetchSpec:
    limit: int
    page: int
    direction: SortDirection
    includes: Tuple[IncludeNode, ...] = ()
    order_by: str = ORDER_KEY

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total_items: int) -> int:
        return math.ceil(total_items / self.limit)


TEACHER_RELATIONS = RelationMap(
    paths={
        "CourseId": ("courses",),
        "StudentId": ("courses", "students"),
    },
)

STUDENT_RELATIONS = RelationMap(
    paths={
        "CourseId": ("course",),
        "TeacherId": ("course", "teacher"),
    },
    defaults=(("course",),),
)

COURSE_RELATIONS = RelationMap(
    paths={
        "TeacherId": ("teacher",),
        "StudentId": ("students",),
    },
)


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Read the leading integer of ``raw``; fall back to ``default`` when it is missing or not positive."""
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if not match:
        return default
    value = int(match.group(1))
    return value if value > 0 else default


def parse_sort(raw: Optional[str]) -> SortDirection:
    return SortDirection.desc if raw == "desc" else SortDirection.asc


def split_populate(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [token.strip() for token in raw.split(",") if token.strip()]


def build_include_tree(tokens: Iterable[str], relations: RelationMap) -> Tuple[IncludeNode, ...]:
    """Merge the relation paths selected by ``tokens`` into one include tree.

    Default paths are always merged. Unknown tokens are ignored. Children are
    sorted by relation name, so the result does not depend on token order and
    repeating a token changes nothing.
    """
    paths: List[RelationPath] = list(relations.defaults)
    for token in tokens:
        path = relations.paths.get(token)
        if path:
            paths.append(path)

    tree: Dict[str, dict] = {}
    for path in paths:
        level = tree
        for relation in path:
            level = level.setdefault(relation, {})
    return _freeze(tree)


def _freeze(level: Dict[str, dict]) -> Tuple[IncludeNode, ...]:
    return tuple(
        IncludeNode(relation=relation, children=_freeze(children))
        for relation, children in sorted(level.items())
    )


def parse_fetch_spec(
    page: Optional[str],
    limit: Optional[str],
    sort: Optional[str],
    populate: Optional[str],
    relations: RelationMap,
    default_limit: int = DEFAULT_LIMIT,
) -> FetchSpec:
    return FetchSpec(
        limit=parse_positive_int(limit, default_limit),
        page=parse_positive_int(page, DEFAULT_PAGE),
        direction=parse_sort(sort),
        includes=build_include_tree(split_populate(populate), relations),
    )

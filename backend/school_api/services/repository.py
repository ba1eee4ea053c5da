from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, SQLModel, select

from ..errors import ConstraintViolation, PersistenceFailure
from ..models import utc_now
from .query import FetchSpec, IncludeNode, SortDirection

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


def loader_options(model: Type[SQLModel], includes: Sequence[IncludeNode], parent=None) -> List[Any]:
    """Turn an include tree into chained ``selectinload`` options."""
    options: List[Any] = []
    for node in includes:
        attribute = getattr(model, node.relation)
        loader = selectinload(attribute) if parent is None else parent.selectinload(attribute)
        if node.children:
            target = attribute.property.mapper.class_
            options.extend(loader_options(target, node.children, loader))
        else:
            options.append(loader)
    return options


class Repository(Generic[ModelT]):
    """Persistence client for one table, bound to a request-scoped session."""

    def __init__(self, session: Session, model: Type[ModelT]) -> None:
        self.session = session
        self.model = model

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            self.session.rollback()
            logger.warning("%s %s rejected by constraint: %s", self.model.__name__, action, exc.orig)
            raise ConstraintViolation(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("%s %s failed", self.model.__name__, action)
            raise PersistenceFailure(str(exc)) from exc
        except OverflowError as exc:
            self.session.rollback()
            logger.warning("%s %s got an out-of-range value: %s", self.model.__name__, action, exc)
            raise PersistenceFailure(str(exc)) from exc

    def count(self) -> int:
        with self._guard("count"):
            return self.session.exec(select(func.count(self.model.id))).one()

    def find_page(self, spec: FetchSpec) -> List[ModelT]:
        order_column = getattr(self.model, spec.order_by)
        tie_breaker = self.model.id
        if spec.direction == SortDirection.desc:
            ordering = (order_column.desc(), tie_breaker.desc())
        else:
            ordering = (order_column.asc(), tie_breaker.asc())
        statement = (
            select(self.model)
            .options(*loader_options(self.model, spec.includes))
            .order_by(*ordering)
            .offset(spec.offset)
            .limit(spec.limit)
        )
        with self._guard("find_page"):
            return list(self.session.exec(statement).all())

    def find_all(self) -> List[ModelT]:
        with self._guard("find_all"):
            return list(self.session.exec(select(self.model).order_by(self.model.id)).all())

    def get(self, record_id: int, includes: Sequence[IncludeNode] = ()) -> Optional[ModelT]:
        statement = (
            select(self.model)
            .where(self.model.id == record_id)
            .options(*loader_options(self.model, includes))
        )
        with self._guard("get"):
            return self.session.exec(statement).first()

    def find_one_by(self, **filters: Any) -> Optional[ModelT]:
        statement = select(self.model)
        for name, value in filters.items():
            statement = statement.where(getattr(self.model, name) == value)
        with self._guard("find_one_by"):
            return self.session.exec(statement).first()

    def add(self, data: Dict[str, Any]) -> ModelT:
        record = self.model(**data)
        with self._guard("add"):
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        return record

    def update(self, record: ModelT, changes: Dict[str, Any]) -> ModelT:
        with self._guard("update"):
            for name, value in changes.items():
                setattr(record, name, value)
            if hasattr(record, "updated_at"):
                record.updated_at = utc_now()
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        return record

    def delete(self, record: ModelT) -> None:
        with self._guard("delete"):
            self.session.delete(record)
            self.session.commit()

"""Soft-delete aware query entry points.

Every read of Recipe, Tag or Equipment goes through `active()`, which ANDs
`is_deleted = false` into the query. `including_deleted()` is the explicit
escape hatch.
"""

from typing import TypeVar

from sqlalchemy.orm import Query, Session
from sqlalchemy.sql import false

from ..models import Recipe, Tag, Equipment

T = TypeVar("T", Recipe, Tag, Equipment)


def active(db: Session, model: type[T]) -> Query:
    return db.query(model).filter(model.is_deleted == false())


def including_deleted(db: Session, model: type[T]) -> Query:
    return db.query(model)

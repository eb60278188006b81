"""
import_engine.repository - Category lookups used by the importer.

Lookups return a tagged result instead of a bare Optional so the
"found" and "build a new one" branches stay explicit at the call site:

    match find_by_id(session, 5):
        case Found(category):  ...
        case NotFound():       ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models import Category


@dataclass(frozen=True)
class Found:
    category: Category


@dataclass(frozen=True)
class NotFound:
    pass


CategoryMatch = Union[Found, NotFound]


def _wrap(category: Category | None) -> CategoryMatch:
    return Found(category) if category is not None else NotFound()


def find_by_id(session: Session, category_id: int) -> CategoryMatch:
    return _wrap(session.get(Category, category_id))


def find_by_parent_and_name(
    session: Session, parent_id: int, name: str,
) -> CategoryMatch:
    """
    First category stored under *parent_id* with exactly *name*.

    Heuristic match only - nothing in the schema makes (parent, name)
    unique, so the lowest id wins when duplicates exist.
    """
    stmt = (
        select(Category)
        .where(Category.parent_id == parent_id, Category.name == name)
        .order_by(Category.id)
        .limit(1)
    )
    return _wrap(session.execute(stmt).scalars().first())

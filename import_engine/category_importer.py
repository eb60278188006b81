"""
import_engine.category_importer - Import one legacy category record.

CategoryImporter turns a flat legacy record into a Category row plus its
s_categories_attributes row, and links articles to categories.  Session
lifetime is the caller's business; the importer commits after each
write step so every record lands independently.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import insert, literal, select, Integer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.models import ArticleCategory, Category, CategoryAttributes
from import_engine.field_map import (
    ATTRIBUTE_KEY_PREFIX, ATTRIBUTE_NESTED_KEY, CATEGORY_FIELDS, LEGACY_KEYS,
    to_int,
)
from import_engine.repository import (
    Found, NotFound, find_by_id, find_by_parent_and_name,
)
from services.denormalization import CategoryDenormalization
import config


class LinkOutcome(enum.Enum):
    """Result of assign_articles_to_category()."""
    SKIPPED = "skipped"        # zero / non-numeric id, nothing executed
    FAILED = "failed"          # INSERT raised, savepoint rolled back
    LINKED = "linked"          # one new pair stored
    UNCHANGED = "unchanged"    # statement ran, pair existed or category missing


def prepare_category_data(record: Mapping[str, Any]) -> dict[str, Any]:
    """Copy *record* with legacy keys renamed to their canonical names."""
    category = dict(record)
    for original, new in LEGACY_KEYS.items():
        if category.get(original) is not None:
            category[new] = category.pop(original)
    return category


def _nested_slot(nested: Any, index: int) -> Any:
    if isinstance(nested, Mapping):
        value = nested.get(index)
        return value if value is not None else nested.get(str(index))
    if isinstance(nested, Sequence) and not isinstance(nested, (str, bytes)):
        return nested[index] if index < len(nested) else None
    return None


def prepare_category_attributes_data(category: Mapping[str, Any]) -> dict[str, str]:
    """
    Collect attribute slots 1..ATTRIBUTE_SLOTS.

    `ac_attr{i}` wins over `attr[i]`; a slot missing from both is left
    out so an update never blanks a column the record did not mention.
    """
    attributes: dict[str, str] = {}
    nested = category.get(ATTRIBUTE_NESTED_KEY)
    for i in range(1, config.ATTRIBUTE_SLOTS + 1):
        value = category.get(f"{ATTRIBUTE_KEY_PREFIX}{i}")
        if value is None and nested is not None:
            value = _nested_slot(nested, i)
        if value is not None:
            attributes[f"attribute{i}"] = str(value)
    return attributes


def apply_category_fields(model: Category, category: Mapping[str, Any]) -> None:
    """Copy every known canonical key onto *model*; unknown keys are ignored."""
    for key, (attr, convert) in CATEGORY_FIELDS.items():
        if key in category:
            value = category[key]
            setattr(model, attr, convert(value) if value is not None else None)


class CategoryImporter:
    """
    Imports legacy category records and article assignments.

    Parameters
    ----------
    session : open SQLAlchemy session, owned by the caller
    denormalization : collaborator told about every article assignment
    logger : optional logger, defaults to this module's logger
    """

    def __init__(
        self,
        session: Session,
        denormalization: CategoryDenormalization,
        logger: logging.Logger | None = None,
    ):
        self._session = session
        self._denormalization = denormalization
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    # ── Categories ─────────────────────────────────────────────────────

    def import_category(self, record: Mapping[str, Any]) -> int | None:
        """
        Create or update one category and its attribute row.

        Returns the category id, or None when the referenced parent does
        not exist (nothing is written in that case).
        """
        category = prepare_category_data(record)
        parent = category.get("parent")
        name = category.get("name")

        model: Category | None = None
        if parent is not None and name is not None:
            match find_by_parent_and_name(self._session, to_int(parent), str(name)):
                case Found(existing):
                    model = existing
                case NotFound():
                    pass
        if model is None:
            model = Category()

        parent_model: Category | None = None
        if parent is not None:
            match find_by_id(self._session, to_int(parent)):
                case Found(found):
                    parent_model = found
                case NotFound():
                    self._logger.error(f"Parent category {parent} not found!")
                    return None

        apply_category_fields(model, category)
        model.parent = parent_model

        self._session.add(model)
        self._session.commit()

        self.upsert_attributes(model.id, prepare_category_attributes_data(category))
        return model.id

    def upsert_attributes(self, category_id: int, attributes: Mapping[str, str]) -> None:
        """Insert the attribute row for *category_id*, or update the given columns."""
        if not attributes:
            return

        row = self._session.execute(
            select(CategoryAttributes)
            .where(CategoryAttributes.category_id == category_id)
        ).scalar_one_or_none()

        if row is None:
            row = CategoryAttributes(category_id=category_id)
            self._session.add(row)
        for column, value in attributes.items():
            setattr(row, column, value)
        self._session.commit()

        category = self._session.get(Category, category_id)
        if category is not None:
            self._session.expire(category, ["attributes"])

    # ── Article assignments ────────────────────────────────────────────

    def assign_articles_to_category(self, article_id: Any, category_id: Any) -> LinkOutcome:
        """
        Link an article to a category, then notify the denormalization
        collaborator.

        The pair is inserted only when the category exists and the pair
        is not stored yet.  The collaborator is notified whenever the
        statement itself succeeded, whether or not a row was added.
        """
        category_id = to_int(category_id)
        article_id = to_int(article_id)
        if not category_id or not article_id:
            return LinkOutcome.SKIPPED

        links = ArticleCategory.__table__
        already_linked = (
            select(ArticleCategory.id)
            .where(ArticleCategory.article_id == article_id,
                   ArticleCategory.category_id == category_id)
            .correlate(None)
            .exists()
        )
        source = (
            select(literal(article_id, Integer), Category.id)
            .where(Category.id == category_id, ~already_linked)
        )
        stmt = insert(links).from_select(
            [links.c.articleID, links.c.categoryID], source,
        )

        # A failed INSERT rolls back only its own savepoint, never the
        # caller's pending writes.
        try:
            with self._session.begin_nested():
                inserted = self._session.execute(stmt).rowcount
            self._session.commit()
        except (SQLAlchemyError, OverflowError) as exc:
            if not self._session.is_active:
                self._session.rollback()
            self._logger.warning(
                f"Linking article {article_id} to category {category_id} failed: {exc}"
            )
            return LinkOutcome.FAILED

        self._denormalization.add_assignment(article_id, category_id)
        self._denormalization.disable_transactions()

        return LinkOutcome.LINKED if inserted else LinkOutcome.UNCHANGED

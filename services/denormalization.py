"""
services.denormalization - Maintain s_articles_categories_ro.

For every article assigned to a category, the storefront reads one row
per ancestor of that category so a listing on any tree level finds the
article without walking the tree at query time.

While transactions are enabled, writes are only flushed and join
whatever transaction the caller has open.  disable_transactions()
switches to committing after every assignment.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models import ArticleCategoryRO, Category

logger = logging.getLogger(__name__)


class CategoryDenormalization:

    def __init__(self, session: Session):
        self._session = session
        self._transactions = True

    @property
    def transactions_enabled(self) -> bool:
        return self._transactions

    def enable_transactions(self) -> None:
        self._transactions = True

    def disable_transactions(self) -> None:
        self._transactions = False

    def category_path(self, category_id: int) -> list[int]:
        """
        Ids from *category_id* up to the root, the category itself first.
        Empty if the category does not exist.  Stops at the first repeated
        id since parent links are not validated for cycles.
        """
        path: list[int] = []
        current = category_id
        while current is not None and current not in path:
            parent_id = self._session.execute(
                select(Category.parent_id).where(Category.id == current)
            ).first()
            if parent_id is None:
                break
            path.append(current)
            current = parent_id[0]
        return path

    def add_assignment(self, article_id: int, category_id: int) -> int:
        """Write the read-only rows for one assignment.  Returns rows added."""
        existing = set(self._session.execute(
            select(ArticleCategoryRO.category_id).where(
                ArticleCategoryRO.article_id == article_id,
                ArticleCategoryRO.parent_category_id == category_id,
            )
        ).scalars())

        added = 0
        for ancestor_id in self.category_path(category_id):
            if ancestor_id in existing:
                continue
            self._session.add(ArticleCategoryRO(
                article_id=article_id,
                category_id=ancestor_id,
                parent_category_id=category_id,
            ))
            added += 1

        if self._transactions:
            self._session.flush()
        else:
            self._session.commit()

        if added:
            logger.debug(f"Denormalized article {article_id} into "
                         f"{added} categories below {category_id}")
        return added

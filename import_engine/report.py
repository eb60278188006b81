"""
import_engine.report - Outcome of one batch of category records or
article assignments.

`row` in each error is the 1-based position of the record in the batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportReport:
    total_rows: int = 0
    imported: int = 0
    skipped: int = 0
    errors: list[dict] = field(default_factory=list)   # [{row, reason}]
    category_ids: list[int] = field(default_factory=list)

    def add_imported(self, category_id: int | None = None):
        self.imported += 1
        if category_id is not None:
            self.category_ids.append(category_id)

    def add_error(self, row: int, reason: str):
        self.errors.append({"row": row, "reason": reason})
        self.skipped += 1

    def to_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "imported": self.imported,
            "skipped": self.skipped,
            "errors": self.errors,
            "category_ids": self.category_ids,
        }

"""
import_engine.importer - Batch drivers.

Feed records (or article/category pairs) through CategoryImporter one
at a time and collect a structured ImportReport.  A failing record is
recorded and the run moves on to the next one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy.orm import Session

from db.engine import get_session
from import_engine.category_importer import CategoryImporter, LinkOutcome
from import_engine.report import ImportReport
from services.denormalization import CategoryDenormalization

logger = logging.getLogger(__name__)


def run_import(
    records: Iterable[Mapping[str, Any]],
    *,
    session: Session | None = None,
) -> ImportReport:
    """
    Import category records in order.

    Parameters
    ----------
    records : flat legacy category records
    session : optional open session; a private one is opened (and
              closed) when omitted

    Returns
    -------
    ImportReport; `row` in errors is the 1-based record position
    """
    report = ImportReport()
    own_session = session is None
    session = session or get_session()
    importer = CategoryImporter(session, CategoryDenormalization(session))

    try:
        for row_idx, record in enumerate(records, start=1):
            report.total_rows += 1
            try:
                category_id = importer.import_category(record)
            except Exception as exc:
                session.rollback()
                logger.exception(f"Record {row_idx} failed")
                report.add_error(row_idx, f"Unexpected: {exc}")
                continue

            if category_id is None:
                report.add_error(row_idx, f"Parent category {record.get('parent')} not found")
            else:
                report.add_imported(category_id)
    finally:
        if own_session:
            session.close()

    logger.info(f"Category import: {report.imported} imported, "
                f"{report.skipped} skipped / {report.total_rows} records")
    return report


def run_assignments(
    pairs: Iterable[tuple[Any, Any]],
    *,
    session: Session | None = None,
) -> ImportReport:
    """
    Link (article_id, category_id) pairs.  SKIPPED and FAILED pairs are
    reported as errors; LINKED and UNCHANGED both count as imported.
    """
    report = ImportReport()
    own_session = session is None
    session = session or get_session()
    denormalization = CategoryDenormalization(session)
    importer = CategoryImporter(session, denormalization)

    try:
        for row_idx, (article_id, category_id) in enumerate(pairs, start=1):
            report.total_rows += 1
            outcome = importer.assign_articles_to_category(article_id, category_id)
            if outcome in (LinkOutcome.SKIPPED, LinkOutcome.FAILED):
                report.add_error(
                    row_idx,
                    f"Article {article_id} → category {category_id}: {outcome.value}",
                )
            else:
                report.add_imported()
        # Pending denormalization writes from the first assignment
        session.commit()
    finally:
        if own_session:
            session.close()

    return report

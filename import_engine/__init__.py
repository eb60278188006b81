"""
import_engine - Legacy category import.

Public API:
    CategoryImporter(session, denormalization)  → per-record import / linking
    run_import(records)                          → ImportReport
    run_assignments(pairs)                       → ImportReport
    parse_records(raw, content_type)             → list of records
"""

from import_engine.category_importer import CategoryImporter, LinkOutcome   # noqa: F401
from import_engine.importer import run_import, run_assignments              # noqa: F401
from import_engine.record_parser import parse_records, RecordParseError    # noqa: F401
from import_engine.report import ImportReport                                # noqa: F401

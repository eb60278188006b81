"""
import_engine.record_parser - Turn an upload into flat category records.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG)
  • JSON: one object or a list of objects
  • CSV: header whitespace stripping, empty cells dropped so they count
    as "not supplied" rather than as empty strings
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any


class RecordParseError(ValueError):
    """Raised when an upload cannot be turned into records."""
    pass


def parse_records(raw: str | bytes, content_type: str = "") -> list[dict[str, Any]]:
    """
    Parse *raw* according to *content_type* (JSON unless it mentions csv).
    Raises RecordParseError on malformed input.
    """
    text = _decode(raw)
    if not text or not text.strip():
        raise RecordParseError("empty body")

    if "csv" in (content_type or "").lower():
        return _parse_csv(text)
    return _parse_json(text)


def _parse_json(text: str) -> list[dict[str, Any]]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RecordParseError(f"invalid JSON: {exc.msg}") from exc

    if isinstance(data, dict):
        data = data["categories"] if "categories" in data else [data]
    if not isinstance(data, list):
        raise RecordParseError("expected an object or a list of objects")

    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            raise RecordParseError(f"record {idx} is not an object")
    return data


def _parse_csv(text: str) -> list[dict[str, Any]]:
    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames is None:
        raise RecordParseError("CSV has no header row")

    # Strip whitespace from every header
    reader.fieldnames = [h.strip() for h in reader.fieldnames]

    records = []
    for row in reader:
        record = {
            k: v.strip() for k, v in row.items()
            if k and isinstance(v, str) and v.strip()
        }
        if record:
            records.append(record)
    return records


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode("utf-8", errors="replace")
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw

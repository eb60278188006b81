"""
import_engine.field_map - Legacy key ↔ model-attribute mapping.

Legacy exports use the old API's lower-case keys; the import works on
canonical camelCase keys.  Only keys listed in CATEGORY_FIELDS are
copied onto a Category, everything else is ignored.
"""

from __future__ import annotations

import re
from typing import Any, Callable


# Legacy record key  →  canonical record key
LEGACY_KEYS: dict[str, str] = {
    "description":     "name",
    "cmsheadline":     "cmsHeadline",
    "metakeywords":    "metaKeywords",
    "metadescription": "metaDescription",
}

_FALSE_STRINGS = frozenset({"", "0", "false", "no", "off"})


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


# Signed 64-bit range of the id columns; larger values saturate
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def to_int(value: Any) -> int:
    """
    Integer coercion for legacy ids.

    Strings contribute their leading digits ("12abc" → 12, "3.5" → 3),
    anything non-numeric is 0, and results are clamped to INT_MIN..INT_MAX.
    """
    if isinstance(value, str):
        m = _LEADING_INT.match(value)
        number = int(m.group(1)) if m else 0
    else:
        try:
            number = int(value)
        except (TypeError, ValueError, OverflowError):
            return 0
    return max(INT_MIN, min(INT_MAX, number))


# Canonical record key  →  (Category attribute, converter)
CATEGORY_FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "name":             ("name",               str),
    "position":         ("position",           to_int),
    "active":           ("active",             to_bool),
    "metaTitle":        ("meta_title",         str),
    "metaKeywords":     ("meta_keywords",      str),
    "metaDescription":  ("meta_description",   str),
    "cmsHeadline":      ("cms_headline",       str),
    "cmsText":          ("cms_text",           str),
    "template":         ("template",           str),
    "blog":             ("blog",               to_bool),
    "external":         ("external",           str),
    "externalTarget":   ("external_target",    str),
    "hideFilter":       ("hide_filter",        to_bool),
    "hideTop":          ("hide_top",           to_bool),
    "productBoxLayout": ("product_box_layout", str),
}

# Attribute slots: flat "ac_attr1" … or nested record["attr"][1] …
ATTRIBUTE_KEY_PREFIX = "ac_attr"
ATTRIBUTE_NESTED_KEY = "attr"

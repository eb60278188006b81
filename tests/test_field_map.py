import pytest

from db.models import CategoryAttributes
from import_engine.field_map import INT_MAX, INT_MIN, to_bool, to_int


@pytest.mark.parametrize("value, expected", [
    (5, 5),
    ("12", 12),
    (" 12abc", 12),
    ("3.5", 3),
    (3.9, 3),
    ("-4x", -4),
    ("abc", 0),
    ("", 0),
    (None, 0),
    (float("inf"), 0),
    (2 ** 64, INT_MAX),
    ("9" * 25, INT_MAX),
    (-(2 ** 70), INT_MIN),
])
def test_to_int_reads_leading_digits_and_saturates(value, expected):
    assert to_int(value) == expected


@pytest.mark.parametrize("value, expected", [
    ("1", True), ("yes", True), (1, True),
    ("0", False), ("", False), (" Off ", False), (0, False),
])
def test_to_bool(value, expected):
    assert to_bool(value) is expected


def test_attribute_row_serialises_every_slot():
    row = CategoryAttributes(category_id=1, attribute2="XL")
    assert row.to_dict() == {
        "attribute1": None, "attribute2": "XL", "attribute3": None,
        "attribute4": None, "attribute5": None, "attribute6": None,
    }

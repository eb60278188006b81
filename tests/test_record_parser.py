import pytest

from import_engine.record_parser import parse_records, RecordParseError


def test_json_object_and_list():
    assert parse_records('{"description": "A"}') == [{"description": "A"}]
    assert parse_records(b'[{"a": 1}, {"b": 2}]', "application/json") == [{"a": 1}, {"b": 2}]
    assert parse_records('{"categories": [{"a": 1}]}') == [{"a": 1}]


def test_csv_drops_empty_cells_and_strips_bom():
    raw = "\ufeffdescription , parent,ac_attr1,ac_attr2\nShoes,1,red,\n,,,\n".encode("utf-8")
    assert parse_records(raw, "text/csv") == [
        {"description": "Shoes", "parent": "1", "ac_attr1": "red"},
    ]


@pytest.mark.parametrize("raw, content_type", [
    ("", "application/json"),
    ("{not json", "application/json"),
    ("42", "application/json"),
    ('[{"a": 1}, 3]', "application/json"),
    ("   ", "text/csv"),
])
def test_malformed_input_raises(raw, content_type):
    with pytest.raises(RecordParseError):
        parse_records(raw, content_type)

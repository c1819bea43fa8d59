from __future__ import annotations

import math

import pytest

from activity_mapper.sheets.fields import Field, cell_text, get_field, normalize_header_cell


@pytest.mark.parametrize(
    "column",
    ["First Name", "first name", "FIRST_NAME", "  firstname ", "First_Name", "FirstName"],
)
def test_get_field_ignores_case_whitespace_underscores(column):
    record = {column: "Jane"}
    assert get_field(record, Field.FIRST_NAME) == "Jane"
    assert get_field(record, ["first name"]) == "Jane"


def test_get_field_returns_empty_string_when_missing():
    assert get_field({"Foo": "bar"}, Field.LAST_NAME) == ""


def test_candidate_order_gives_priority():
    record = {"Neighborhood": "Second", "Focus Neighbourhood": "First"}
    assert get_field(record, Field.NEIGHBORHOOD) == "First"


def test_record_insertion_order_breaks_ties_within_a_candidate():
    record = {"first_name": "A", "First Name": "B"}
    assert get_field(record, ["First Name"]) == "A"


def test_blank_cells_read_as_empty():
    assert get_field({"Address": None}, Field.ADDRESS) == ""
    assert get_field({"Address": math.nan}, Field.ADDRESS) == ""


def test_get_field_rejects_none_record():
    with pytest.raises(TypeError):
        get_field(None, Field.ADDRESS)  # type: ignore[arg-type]


def test_normalize_header_cell():
    assert normalize_header_cell(" Focus Neighbourhood ") == "focusneighbourhood"
    assert normalize_header_cell("Postal_Code") == "postalcode"
    assert normalize_header_cell(None) == ""


def test_cell_text():
    assert cell_text("  x ") == "x"
    assert cell_text(None) == ""
    assert cell_text(12345) == "12345"

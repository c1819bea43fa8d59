from __future__ import annotations

from activity_mapper.sheets.fields import ACTIVITIES_HEADER_CANONICAL, INDIVIDUALS_HEADER_CANONICAL
from activity_mapper.sheets.header import (
    find_activities_header_row,
    find_header_row,
    find_individuals_header_row,
    header_found,
)


def test_header_on_first_row():
    rows = [["First Name", "Last Name", "Address"], ["Jane", "Doe", "1 Main St"]]
    assert find_individuals_header_row(rows) == 0


def test_header_after_leading_blank_and_metadata_rows():
    rows = [
        [],
        ["", "", ""],
        ["Individuals export", "generated 2024-01-01"],
        ["Report for: Downtown"],
        ["First_Name", "LAST NAME", "Address", "Focus Neighbourhood"],
        ["Jane", "Doe", "1 Main St", "Downtown"],
    ]
    assert find_individuals_header_row(rows) == 4


def test_first_qualifying_row_wins():
    rows = [
        ["title"],
        ["Type", "Name", "Facilitators"],
        ["Type", "Name", "Facilitators"],
    ]
    assert find_activities_header_row(rows) == 1


def test_single_match_below_threshold_is_ignored():
    rows = [
        ["Name", "something else"],  # only one canonical cell
        ["Activity Type", "Name", "Facilitators"],
    ]
    assert find_header_row(rows, ACTIVITIES_HEADER_CANONICAL, 2) == 1


def test_custom_threshold():
    rows = [["Name", "Type"], ["Activity Type", "Name", "Facilitators"]]
    assert find_header_row(rows, ACTIVITIES_HEADER_CANONICAL, 3) == 1


def test_no_header_falls_back_to_zero():
    rows = [["foo", "bar"], ["1", "2"]]
    assert find_header_row(rows, INDIVIDUALS_HEADER_CANONICAL) == 0
    assert header_found(rows, INDIVIDUALS_HEADER_CANONICAL) is False


def test_empty_input_falls_back_to_zero():
    assert find_individuals_header_row([]) == 0


def test_non_list_rows_are_skipped():
    rows = [None, "not a row", ("firstname", "lastname")]
    assert find_individuals_header_row(rows) == 2  # type: ignore[arg-type]


def test_none_cells_do_not_match():
    rows = [[None, None, "Address"], [None, "Postal Code", "Address"]]
    assert find_individuals_header_row(rows) == 1

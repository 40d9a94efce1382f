"""Tests for dataset row parsing."""

from conftest import make_row

from recipe_catalog.parser import (
    ParsedRecipe,
    RowRejection,
    extract_category_name,
    parse_row,
    split_pseudo_list,
)


def test_parse_example_row():
    parsed = parse_row(make_row(), line_number=2)

    assert isinstance(parsed, ParsedRecipe)
    assert parsed.title == "Pasta Salad"
    assert parsed.cook_time == 25
    assert parsed.description == "A simple salad."
    assert parsed.category_name == "30-minutes-or-less"
    assert parsed.ingredient_names == ["pasta", "tomato", "pasta"]


def test_fields_are_taken_verbatim():
    row = make_row(title="  Spaced Title ", description="  keeps  spacing ")
    parsed = parse_row(row)

    assert parsed.title == "  Spaced Title "
    assert parsed.description == "  keeps  spacing "


def test_ten_field_row_is_rejected():
    result = parse_row(make_row()[:10], line_number=7)

    assert isinstance(result, RowRejection)
    assert result.line_number == 7
    assert "insufficient columns" in result.reason


def test_extra_columns_are_ignored():
    parsed = parse_row(make_row() + ["extra", "more"])

    assert isinstance(parsed, ParsedRecipe)
    assert parsed.description == "A simple salad."


def test_non_integer_cook_time_is_rejected():
    for minutes in ("abc", "12.5", "", "25 min"):
        result = parse_row(make_row(minutes=minutes))
        assert isinstance(result, RowRejection), minutes
        assert "invalid cook time" in result.reason


def test_negative_cook_time_is_rejected():
    assert isinstance(parse_row(make_row(minutes="-5")), RowRejection)


def test_zero_cook_time_is_accepted():
    parsed = parse_row(make_row(minutes="0"))
    assert isinstance(parsed, ParsedRecipe)
    assert parsed.cook_time == 0


def test_blank_title_is_rejected():
    result = parse_row(make_row(title="   "))
    assert isinstance(result, RowRejection)
    assert result.reason == "missing title"


def test_split_pseudo_list_strips_brackets_and_quotes():
    assert split_pseudo_list("['a', \"b\" ,  'c d']") == ["a", "b", "c d"]


def test_split_pseudo_list_drops_empty_tokens():
    assert split_pseudo_list("[]") == []
    assert split_pseudo_list("['', , 'x',]") == ["x"]
    assert split_pseudo_list("") == []


def test_split_pseudo_list_removes_quotes_inside_tokens():
    # Apostrophes are delimiters too, so "mom's" loses its quote.
    assert split_pseudo_list("['mom's sauce', 'b']") == ["moms sauce", "b"]


def test_split_pseudo_list_trims_control_characters():
    assert split_pseudo_list("['\tbasil\x01', '\x00']") == ["basil"]


def test_split_pseudo_list_keeps_case():
    assert split_pseudo_list("['Pasta', 'pasta']") == ["Pasta", "pasta"]


def test_category_falls_back_to_general():
    assert extract_category_name("[]") == "General"
    assert extract_category_name("['', '  ']") == "General"
    assert parse_row(make_row(tags="[]")).category_name == "General"


def test_category_is_first_non_empty_tag():
    assert extract_category_name("['', 'dessert', 'easy']") == "dessert"


def test_cook_time_must_be_plain_digits():
    for minutes in ("1_000", " 25", "25\n", "\t25"):
        result = parse_row(make_row(minutes=minutes))
        assert isinstance(result, RowRejection), repr(minutes)


def test_signed_cook_time():
    assert parse_row(make_row(minutes="+25")).cook_time == 25
    assert parse_row(make_row(minutes="-0")).cook_time == 0

# tests/test_lines.py
import pytest

from sparsematrix.lines import TABS_IN_LINE, ltrim, normalize_line, rtrim, split_fields, trim


@pytest.mark.parametrize(
    "text, expected_left, expected_right, expected_both",
    [
        ("  abc  ", "abc  ", "  abc", "abc"),
        ("\t\nabc", "abc", "\t\nabc", "abc"),
        ("abc", "abc", "abc", "abc"),
        ("   ", "", "", ""),
        ("", "", "", ""),
        (" a b ", "a b ", " a b", "a b"),
    ],
    ids=["spaces", "tabs_newlines", "nothing_to_trim", "only_whitespace", "empty", "inner_space_kept"],
)
def test_trim(text, expected_left, expected_right, expected_both):
    """Test trimming from the left, the right and both ends."""
    assert ltrim(text) == expected_left
    assert rtrim(text) == expected_right
    assert trim(text) == expected_both


@pytest.mark.parametrize(
    "line, expected",
    [
        ("1\t2\t3\n", "1\t2\t3"),
        ("1\t2\t3\r\n", "1\t2\t3"),
        ("a\r\tb\n\tc", "a\tb\tc"),
        ("\t\t", "\t\t"),
    ],
    ids=["lf", "crlf", "embedded_breaks", "empty_fields"],
)
def test_normalize_line(line, expected):
    """Test that line breaks are removed and valid lines pass through."""
    assert normalize_line(line) == expected


@pytest.mark.parametrize(
    "line, count",
    [("1\t2\n", 1), ("1 2 3", 0), ("1\t2\t3\t4", 3)],
    ids=["too_few", "none", "too_many"],
)
def test_normalize_line_bad_tab_count(line, count):
    """Test that a wrong number of tabs raises ValueError naming the count."""
    with pytest.raises(ValueError, match=f"expected {TABS_IN_LINE}, line has {count}"):
        normalize_line(line)


def test_normalize_line_custom_tab_count():
    assert normalize_line("a\tb\n", tabs=1) == "a\tb"
    with pytest.raises(ValueError):
        normalize_line("a\tb\tc", tabs=1)


def test_split_fields():
    """Test splitting a normalized line into fields."""
    assert split_fields("3\t4\t-7\r\n") == ["3", "4", "-7"]
    assert split_fields("\t\t") == ["", "", ""]

    with pytest.raises(ValueError):
        split_fields("3 4 -7")

"""Unit tests for :mod:`charview.core.title`."""

import pytest

from charview.core.title import extract_title, parse_title_directive, split_lines


def test_quoted_title_is_extracted() -> None:
    assert extract_title('title: "Hello"\nABC') == ("Hello", ["ABC"])


def test_unquoted_title_is_extracted() -> None:
    assert extract_title("title: Hello\nABC") == ("Hello", ["ABC"])


def test_leading_blank_lines_are_kept_when_title_follows() -> None:
    assert extract_title("\n\ntitle: Hello") == ("Hello", ["", ""])


def test_plain_text_is_untouched() -> None:
    assert extract_title("Hello World") == (None, ["Hello World"])


def test_blank_lines_kept_when_first_line_is_not_a_title() -> None:
    assert extract_title("\n  \nABC\ntitle: late") == (None, ["", "  ", "ABC", "title: late"])


def test_only_first_non_blank_line_is_examined() -> None:
    title, lines = extract_title("ABC\ntitle: Hello")
    assert title is None
    assert lines == ["ABC", "title: Hello"]


def test_crlf_is_one_line_break() -> None:
    assert extract_title("title: x\r\nA\r\nB") == ("x", ["A", "B"])


def test_empty_source_has_no_lines() -> None:
    assert extract_title("") == (None, [])
    assert split_lines("") == []


def test_whitespace_only_source() -> None:
    assert extract_title("\n") == (None, ["", ""])
    assert extract_title("   ") == (None, ["   "])


@pytest.mark.parametrize(
    "line, expected",
    [
        ('title:"My title here"', "My title here"),
        ('TITLE : "  padded  "  ', "padded"),
        ("Title:plain text", "plain text"),
        ("  title  :   spaced out   ", "spaced out"),
        ('title: "unterminated', '"unterminated'),
        ('title: "a" and "b"', '"a" and "b"'),
        ("title:", None),
        ("titles: nope", None),
        ("subtitle: nope", None),
    ],
)
def test_parse_title_directive(line: str, expected) -> None:
    assert parse_title_directive(line) == expected


def test_title_line_is_removed_from_middle_of_leading_blanks() -> None:
    title, lines = extract_title("\ntitle: \"T\"\n\nX")
    assert title == "T"
    assert lines == ["", "", "X"]

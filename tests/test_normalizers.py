from resume_parsing.config import Config
from resume_parsing.normalizers import (
    dedupe,
    format_duration,
    normalize_single_line,
    normalize_text,
    parse_month_year,
)


def test_markup_and_entities():
    assert normalize_text("<p>Jane&nbsp;Smith &amp; Co</p>") == "Jane Smith & Co"
    # unknown entities are dropped, not kept as literal text
    assert normalize_text("Tom&foo; Lee") == "Tom Lee"


def test_bullets_quotes_and_dashes():
    txt = normalize_text("• Led team\n◦ Shipped “v2”\nJan 2020 – Present")
    assert txt.splitlines() == ["- Led team", '- Shipped "v2"', "Jan 2020 - Present"]


def test_hyphenation_and_control_chars():
    assert normalize_text("develop-\nment") == "development"
    assert normalize_text("Jane\x00Smith") == "Jane Smith"
    assert normalize_text("Jane" + chr(0x200B) + "Smith") == "Jane Smith"


def test_whitespace_collapse_keeps_paragraphs():
    assert normalize_text("a   b \n\n\n\n  c\r\nd") == "a b\n\nc\nd"
    assert normalize_single_line("  a \n b\t c ") == "a b c"


def test_none_and_input_limit(monkeypatch):
    assert normalize_text(None) == ""
    monkeypatch.setattr(Config, "MAX_INPUT_CHARS", 5)
    assert normalize_text("abcdefghij") == "abcde"


def test_month_year():
    assert parse_month_year("January 2020") == "Jan 2020"
    assert parse_month_year("March 2021") == "Mar 2021"
    assert parse_month_year("2019") == "2019"
    assert parse_month_year("current") == "Present"
    assert parse_month_year("") is None


def test_format_duration():
    assert format_duration("Jan 2019", "Present") == "Jan 2019 - Present"
    assert format_duration("2019", "2021") == "2019 - 2021"


def test_dedupe_is_case_insensitive_and_ordered():
    assert dedupe(["Python", "python", "Go", "PYTHON"]) == ["Python", "Go"]

import logging
import re
import time

from resume_parsing.fields import (
    DEFAULT_EMAIL,
    DEFAULT_TITLE,
    extract_email,
    extract_links,
    extract_name,
    extract_phone,
    extract_summary,
    extract_title,
    is_valid_name,
)
from resume_parsing.rules import PatternRule, first_lines, first_match, head


def test_name_cascade():
    assert extract_name("Jane Smith\nSenior Backend Engineer") == "Jane Smith"
    assert extract_name("JOHN DOE\nData Analyst") == "John Doe"
    assert extract_name("Name: maria garcia\nPhone: 555 123 4567") == "Maria Garcia"
    # a plain two-word line sitting right above the contact line
    assert extract_name("RESUME\nAnna Lee\nanna@lee.io") == "Anna Lee"


def test_name_rejects_document_words_and_roles():
    assert extract_name("Curriculum Vitae\nSoftware Engineer") == ""
    assert extract_name("Resume\nSoftware Engineer") == ""
    assert not is_valid_name("Page One")
    assert not is_valid_name("X")


def test_no_name_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="resume_parsing")
    assert extract_name("") == ""
    assert "no valid name" in caplog.text


def test_title_rules():
    assert extract_title("Jane Smith\nSenior Backend Engineer") == "Senior Backend Engineer"
    assert extract_title("Jane\nProduct Manager") == "Product Manager"
    # found in running prose, lower case
    assert extract_title("I work as a lead data engineer today") == "Lead Data Engineer"
    assert extract_title("") == DEFAULT_TITLE


def test_email():
    assert extract_email("Email: jane@site.io.") == "jane@site.io"
    assert extract_email("reach me at j.smith+cv@example.co.uk") == "j.smith+cv@example.co.uk"
    assert extract_email("no contact details") == DEFAULT_EMAIL


def test_phone():
    assert extract_phone("Phone: +1 (555) 123-4567") == "+1 (555) 123-4567"
    # a year range is not a phone number
    assert extract_phone("2019 - 2021") == ""
    assert extract_phone("") == ""


def test_links_are_normalized_and_unique():
    text = "linkedin.com/in/jane, https://github.com/jane. https://github.com/jane"
    assert extract_links(text) == ["https://linkedin.com/in/jane", "https://github.com/jane"]


def test_summary():
    text = "ABOUT ME\nFull-stack developer who enjoys building tools for small teams.\nSKILLS\nPython"
    assert extract_summary(text) == "Full-stack developer who enjoys building tools for small teams."
    assert extract_summary("SUMMARY\nShort text here.\n") == ""
    assert extract_summary("SUMMARY\n%PDF-1.4 obj endobj stream xref trailer data here\n") == ""
    assert extract_summary("no headings at all") == ""


def test_rule_table_order_and_scope():
    rules = [
        PatternRule("late", re.compile(r"b\d"), scope=head(4)),
        PatternRule("named", re.compile(r"a(?P<n>\d)"), "n", validator=lambda v: v != "0"),
    ]
    assert first_match(rules, "a0 a1 b2") == "1"
    assert first_match(rules, "b2 a0") == "b2"
    assert first_match(rules, "zzz", default="none") == "none"
    assert first_lines(2)("\none\n\ntwo\nthree") == "one\ntwo"


def test_phone_short_groupings():
    assert extract_phone("Call (555) 123-4567 after 5pm") == "(555) 123-4567"
    assert extract_phone("555.123.4567") == "555.123.4567"


def test_email_after_punctuation():
    assert extract_email("Contact:jane@site.io") == "jane@site.io"
    assert extract_email("<jane@site.io>") == "jane@site.io"


def test_email_scan_is_linear_on_long_runs():
    started = time.perf_counter()
    assert extract_email("A" * 200_000) == DEFAULT_EMAIL
    assert extract_email("a.b-" * 50_000 + " @") == DEFAULT_EMAIL
    assert time.perf_counter() - started < 2

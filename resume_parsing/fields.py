"""
Single-value fields: name, title, email, phone, links, summary.

Every extractor walks an ordered PatternRule table; the tables are listed in
priority order and the first validated candidate wins.
"""

from __future__ import annotations

import logging
import re
from typing import List

from .normalizers import dedupe
from .rules import PatternRule, first_lines, first_match, head
from .sections import SUMMARY_HEADINGS, find_section

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Software Engineer"
DEFAULT_EMAIL = "user@example.com"

NAME_SCOPE_CHARS = 500
TITLE_SCOPE_CHARS = 800

# anchored at the start of the local part so a long run without "@" is scanned once
EMAIL_RE = re.compile(r"(?<![A-Za-z0-9._%+-])[A-Za-z0-9._%+-]{1,64}@[A-Za-z0-9.-]{1,255}\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"(?:(?:\+\d{1,3}[\s.-]?)?(?:\(\d{1,4}\)[\s.-]?)?\d[\d\s.-]{5,}\d)")
URL_RE = re.compile(
    r"https?://[^\s)<>\"',]+|(?:www\.)?linkedin\.com/[^\s)<>\"',]+|(?:www\.)?github\.com/[^\s)<>\"',]+",
    re.IGNORECASE,
)
YEAR_RANGE_RE = re.compile(r"^(?:19|20)\d{2}\s*-\s*(?:19|20)\d{2}$")

NAME_TOKEN = r"[A-Z][a-z]+(?:['-][A-Z]?[a-z]+)?"
NAME_SHAPE_RE = re.compile(rf"{NAME_TOKEN}(?: [A-Z]\.)?(?: {NAME_TOKEN}){{1,2}}")
NAME_REJECT_RE = re.compile(
    r"\b(?:engineer|developer|manager|analyst|specialist|designer|consultant|scientist|intern"
    r"|resume|r[ée]sum[ée]|cv|document|curriculum|vitae|page"
    r"|summary|profile|objective|experience|education|skills|projects|contact|portfolio)\b",
    re.IGNORECASE,
)
SUMMARY_ARTIFACT_RE = re.compile(r"endobj|\bobj\b|xmp|%PDF|/Type\b|/Filter\b", re.IGNORECASE)
LEADING_BULLET_RE = re.compile(r"^\s*[-*•]+\s*", re.MULTILINE)
WS_RE = re.compile(r"\s+")

SUMMARY_MIN_CHARS = 30
SUMMARY_MAX_CHARS = 2000


# ───────────────────────────────────────── name ──
def is_valid_name(candidate: str) -> bool:
    if not 4 <= len(candidate) <= 49:
        return False
    if not NAME_SHAPE_RE.fullmatch(candidate):
        return False
    return not NAME_REJECT_RE.search(candidate)


def _tidy_name(raw: str) -> str:
    name = WS_RE.sub(" ", raw).strip()
    if name.isupper() or name.islower():
        name = name.title()
    return name


NAME_RULES: List[PatternRule] = [
    PatternRule(
        "title-case-at-start",
        re.compile(r"\A\s*(?P<name>[A-Z][a-z]+(?:[ \t]+[A-Z]\.)?(?:[ \t]+[A-Z][a-z]+(?:['-][A-Z]?[a-z]+)?){1,2})[ \t]*(?:\n|\Z)"),
        "name", head(NAME_SCOPE_CHARS), _tidy_name, is_valid_name,
    ),
    PatternRule(
        "all-caps-at-start",
        re.compile(r"\A\s*(?P<name>[A-Z]{2,}(?:['-][A-Z]+)?(?:[ \t]+[A-Z]{2,}(?:['-][A-Z]+)?){1,2})[ \t]*(?:\n|\Z)"),
        "name", head(NAME_SCOPE_CHARS), _tidy_name, is_valid_name,
    ),
    PatternRule(
        "labeled",
        re.compile(
            r"^[ \t]*(?:full[ \t]+)?name[ \t]*[:\-][ \t]*(?P<name>[A-Za-z][A-Za-z'-]+(?:[ \t]+[A-Za-z][A-Za-z'.-]*){1,2})[ \t]*$",
            re.IGNORECASE | re.MULTILINE,
        ),
        "name", head(NAME_SCOPE_CHARS), _tidy_name, is_valid_name,
    ),
    PatternRule(
        "before-contact-line",
        re.compile(
            r"^[ \t]*(?P<name>[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+){1,2})[ \t]*\n[^\n]*(?:@|\+\d|\(\d{3}\)|\d{3}[ .-]\d{3})",
            re.MULTILINE,
        ),
        "name", head(NAME_SCOPE_CHARS), _tidy_name, is_valid_name,
    ),
    PatternRule(
        "first-two-lines",
        re.compile(
            r"^[ \t]*(?P<name>[A-Z][a-zA-Z'-]+(?:[ \t]+[A-Z][a-zA-Z'-]+){1,2})[ \t]*(?:[|•,]|[ \t]-[ \t]|$)",
            re.MULTILINE,
        ),
        "name", first_lines(2), _tidy_name, is_valid_name,
    ),
]


def extract_name(text: str) -> str:
    """Name from the top of the document, or '' when nothing looks like one.

    Only document content is considered; callers must not substitute the
    upload's filename.
    """
    name = first_match(NAME_RULES, text or "")
    if not name:
        logger.debug("no valid name in document head")
    return name


# ───────────────────────────────────────── title ──
_SENIORITY = r"(?:senior|junior|lead|principal|staff|sr\.?|jr\.?)"
_DISCIPLINE = (
    r"(?:software|web|full[ -]?stack|front[ -]?end|back[ -]?end|mobile|ios|android|data|machine[ \t]+learning"
    r"|ml|ai|devops|cloud|platform|security|qa|test|embedded|game|systems?)"
)
_ROLE = r"(?:engineer|developer|programmer|scientist|analyst|architect)"

TITLE_RULES: List[PatternRule] = [
    PatternRule(
        "seniority-discipline-role",
        re.compile(rf"\b{_SENIORITY}[ \t]+{_DISCIPLINE}[ \t]+{_ROLE}\b", re.IGNORECASE),
        scope=head(TITLE_SCOPE_CHARS),
    ),
    PatternRule(
        "discipline-role",
        re.compile(rf"\b{_DISCIPLINE}[ \t]+{_ROLE}\b", re.IGNORECASE),
        scope=head(TITLE_SCOPE_CHARS),
    ),
    PatternRule(
        "data-ml-role",
        re.compile(r"\b(?:data|machine[ \t]+learning|ai|ml)[ \t]+(?:scientist|engineer|analyst)\b", re.IGNORECASE),
        scope=head(TITLE_SCOPE_CHARS),
    ),
    PatternRule(
        "manager",
        re.compile(rf"\b(?:{_SENIORITY}[ \t]+)?(?:product|project|program|engineering|marketing|account)[ \t]+manager\b", re.IGNORECASE),
        scope=head(TITLE_SCOPE_CHARS),
    ),
    PatternRule(
        "devops-cloud",
        re.compile(r"\b(?:devops|cloud|infrastructure|site[ \t]+reliability)[ \t]+engineer\b", re.IGNORECASE),
        scope=head(TITLE_SCOPE_CHARS),
    ),
    PatternRule(
        "designer",
        re.compile(rf"\b(?:{_SENIORITY}[ \t]+)?(?:ui/ux|ux/ui|ux|ui|product|graphic|visual|web|interaction)[ \t]+designer\b", re.IGNORECASE),
        scope=head(TITLE_SCOPE_CHARS),
    ),
    PatternRule(
        "isolated-role-line",
        re.compile(
            r"^[ \t]*(?P<title>[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*[ \t]+"
            r"(?:Engineer|Developer|Manager|Analyst|Designer|Scientist|Architect|Consultant|Accountant|Specialist))[ \t]*$",
            re.MULTILINE,
        ),
        "title", head(TITLE_SCOPE_CHARS),
    ),
    PatternRule(
        "common-title",
        re.compile(r"\b(?:Software Engineer|Web Developer|Data Scientist|Product Manager|DevOps Engineer)\b", re.IGNORECASE),
        scope=head(TITLE_SCOPE_CHARS),
    ),
]


def extract_title(text: str) -> str:
    title = first_match(TITLE_RULES, text or "")
    if not title:
        logger.debug("no role title near the top; using %r", DEFAULT_TITLE)
        return DEFAULT_TITLE
    title = WS_RE.sub(" ", title)
    # matched inside running prose
    if title.islower():
        title = title.title()
    return title


# ───────────────────────────────────────── contact ──
EMAIL_RULES: List[PatternRule] = [
    PatternRule(
        "labeled",
        re.compile(rf"\be-?mail[ \t]*[:\-]?[ \t]*(?P<email>{EMAIL_RE.pattern})", re.IGNORECASE),
        "email",
    ),
    PatternRule("bare", EMAIL_RE),
]


def extract_email(text: str) -> str:
    return first_match(EMAIL_RULES, text or "", DEFAULT_EMAIL).rstrip(".")


def _is_phone(candidate: str) -> bool:
    if YEAR_RANGE_RE.match(candidate):
        return False
    digits = re.sub(r"\D", "", candidate)
    minimum = 8 if candidate.startswith("+") else 10
    return minimum <= len(digits) <= 15


PHONE_RULES: List[PatternRule] = [PatternRule("phone", PHONE_RE, validator=_is_phone)]


def extract_phone(text: str) -> str:
    return first_match(PHONE_RULES, text or "")


def extract_links(text: str) -> List[str]:
    links = []
    for raw in URL_RE.findall(text or ""):
        link = raw.rstrip(".,;:")
        if not link.lower().startswith("http"):
            link = "https://" + link
        links.append(link)
    return dedupe(links)


# ───────────────────────────────────────── summary ──
def is_valid_summary(summary: str) -> bool:
    if not SUMMARY_MIN_CHARS <= len(summary) <= SUMMARY_MAX_CHARS:
        return False
    if SUMMARY_ARTIFACT_RE.search(summary):
        return False
    visible = [c for c in summary if not c.isspace()]
    letters = sum(c.isalpha() for c in visible)
    # prose is mostly letters; leaked binary is mostly punctuation and digits
    return letters >= 0.6 * len(visible)


def clean_summary(section: str) -> str:
    return WS_RE.sub(" ", LEADING_BULLET_RE.sub("", section)).strip()


def extract_summary(text: str) -> str:
    """Body of the SUMMARY/ABOUT/OBJECTIVE/PROFILE section, or '' when none is usable."""
    section = find_section(text or "", SUMMARY_HEADINGS)
    if not section:
        return ""
    summary = clean_summary(section)
    if not is_valid_summary(summary):
        logger.debug("rejected summary candidate (%d chars)", len(summary))
        return ""
    return summary

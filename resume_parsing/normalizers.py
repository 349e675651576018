import html
import re
import unicodedata
from typing import Iterable, List, Optional

import dateparser

from .config import Config

TAG_RE = re.compile(r"<[^<>\n]{0,200}>")
ENTITY_RE = re.compile(r"&(?:#\d{1,7}|#[xX][0-9a-fA-F]{1,6}|[A-Za-z][A-Za-z0-9]{1,31});")
CONTROL_RE = re.compile(
    r"[\x00-\x08\x0b-\x1f\x7f-\x9f\u00ad\u200b-\u200f\u2028-\u202e\u2060-\u206f"
    r"\ud800-\udfff\ue000-\uf8ff\ufeff\ufff9-\ufffd]"
)
HYPHEN_RE = re.compile(r"(\w)-\n(\w)")
BULLET_VARIANTS = ["•", "◦", "▪", "▫", "●", "○", "■", "□", "‣", "∙", "·", "►", "➢", "✓", "-", "*"]
BULLET_RE = re.compile(r"^[ \t]*[" + "".join(re.escape(b) for b in BULLET_VARIANTS) + r"][ \t]*", re.MULTILINE)
MULTISPACES_RE = re.compile(r"[ \t\f\v]+")
LINE_EDGES_RE = re.compile(r" *\n *")
NEWLINES_RE = re.compile(r"\n{3,}")
WHITESPACE_RE = re.compile(r"\s+")
SMART_QUOTES = {
    "\u2018": "'", "\u2019": "'", "\u201a": "'", "\u201c": '"', "\u201d": '"', "\u201e": '"',
    "\u2010": "-", "\u2011": "-", "\u2012": "-", "\u2013": "-", "\u2014": "-", "\u2015": "-",
    "\u2212": "-",
}

MONTHS = (
    "january|february|march|april|may|june|july|august|september|october|november|december"
    "|jan|feb|mar|apr|jun|jul|aug|sept|sep|oct|nov|dec"
)
ONGOING = {"present", "current", "now", "today", "ongoing"}
DATEPARSER_SETTINGS = {
    "PREFER_DAY_OF_MONTH": "first",
    "REQUIRE_PARTS": ["month", "year"],
}


def strip_markup(txt: str) -> str:
    """Drop tag-like runs and entity references left over from HTML/XML text layers."""
    txt = TAG_RE.sub(" ", txt)
    return ENTITY_RE.sub(_resolve_entity, txt)


def _resolve_entity(m: "re.Match[str]") -> str:
    resolved = html.unescape(m.group())
    if resolved.isspace():
        return " "
    if resolved == m.group() or not resolved.isprintable():
        return ""
    return resolved


def normalize_quotes_dashes(txt: str) -> str:
    for k, v in SMART_QUOTES.items():
        txt = txt.replace(k, v)
    return txt


def fix_hyphenation(txt: str) -> str:
    return HYPHEN_RE.sub(r"\1\2", txt)


def strip_control_chars(txt: str) -> str:
    return CONTROL_RE.sub(" ", txt)


def unify_bullets(txt: str) -> str:
    # Replace any bullet char at line start with a single '- '
    return BULLET_RE.sub("- ", txt)


def collapse_whitespace(txt: str) -> str:
    txt = MULTISPACES_RE.sub(" ", txt)
    txt = LINE_EDGES_RE.sub("\n", txt)
    txt = NEWLINES_RE.sub("\n\n", txt)
    return txt.strip()


def normalize_text(txt: Optional[str]) -> str:
    """Multi-line normalization; keeps line breaks for section segmentation."""
    txt = (txt or "")[: Config.MAX_INPUT_CHARS]
    txt = txt.replace("\r\n", "\n").replace("\r", "\n")
    txt = strip_markup(txt)
    txt = unicodedata.normalize("NFKC", txt)
    txt = strip_control_chars(fix_hyphenation(normalize_quotes_dashes(txt)))
    return collapse_whitespace(unify_bullets(txt))


def normalize_single_line(txt: Optional[str]) -> str:
    return WHITESPACE_RE.sub(" ", normalize_text(txt)).strip()


def dedupe(xs: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for x in xs:
        xl = x.lower()
        if xl not in seen:
            out.append(x)
            seen.add(xl)
    return out


def parse_month_year(token: str) -> Optional[str]:
    """'January 2020' -> 'Jan 2020'. Bare years are returned untouched.

    Only tokens that carry both a month and a year go through dateparser, so
    the result never depends on today's date.
    """
    token = WHITESPACE_RE.sub(" ", (token or "").strip(" .,"))
    if not token:
        return None
    if re.fullmatch(r"\d{4}", token):
        return token
    if token.lower() in ONGOING:
        return "Present"
    dt = dateparser.parse(token, languages=["en"], settings=DATEPARSER_SETTINGS)
    if not dt:
        return None
    return dt.strftime("%b %Y")


def format_duration(start: str, end: str) -> str:
    start_fmt = parse_month_year(start) or start.strip()
    end_fmt = parse_month_year(end) or end.strip()
    return f"{start_fmt} - {end_fmt}"

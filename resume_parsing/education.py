"""
Education: degree, school and year per entry of the EDUCATION section.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .models import EducationEntry
from .sections import EDUCATION_HEADINGS, find_section

logger = logging.getLogger(__name__)

MAX_EDUCATION_ENTRIES = 5

DEGREE_TOKENS = (
    "bsc", "msc", "mba", "ba", "bs", "ma", "ms", "phd", "ph\\.d\\.?", "bba", "beng", "meng", "bcom",
    "bachelor(?:'s)?", "master(?:'s)?", "associate(?:'s)?", "doctorate", "diploma", "degree", "certificate",
    "b\\.sc\\.?", "m\\.sc\\.?", "b\\.a\\.?", "m\\.a\\.?", "b\\.s\\.?", "m\\.s\\.?",
)
# word-bounded so "Ba" in "Barcelona" or "ms" in "systems" never count
DEGREE_RE = re.compile(r"(?<![A-Za-z])(?:" + "|".join(DEGREE_TOKENS) + r")(?![A-Za-z])", re.IGNORECASE)
SCHOOL_RE = re.compile(r"\b(?:university|college|school|institute|institut|academy|polytechnic)\b", re.IGNORECASE)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
YEAR_SPAN_RE = re.compile(r"[\s,|(-]*\b(?:19|20)\d{2}\b\)?")
CHUNK_SPLIT_RE = re.compile(r"\n\s*\n")


def _strip_years(line: str) -> str:
    return re.sub(r"\s{2,}", " ", YEAR_SPAN_RE.sub(" ", line)).strip(" -|,")


def is_degree_line(line: str) -> bool:
    return bool(DEGREE_RE.search(line))


def split_education_chunks(section: str) -> List[List[str]]:
    """Blank lines separate entries; so does a degree line once the current entry already has one."""
    chunks: List[List[str]] = []
    for para in CHUNK_SPLIT_RE.split(section):
        current: List[str] = []
        has_degree = False
        for raw in para.splitlines():
            line = raw.strip()
            if not line:
                continue
            if is_degree_line(line) and has_degree:
                chunks.append(current)
                current, has_degree = [], False
            current.append(line)
            has_degree = has_degree or is_degree_line(line)
        if current:
            chunks.append(current)
    return chunks


def parse_education_chunk(lines: List[str]) -> Optional[EducationEntry]:
    assert lines, "education chunk must have at least one line"

    degree = next((l for l in lines if is_degree_line(l)), "")
    school = next((l for l in lines if SCHOOL_RE.search(l)), "")
    if not degree and not school:
        return None
    years = YEAR_RE.findall(" ".join(lines))
    return EducationEntry(
        degree=_strip_years(degree),
        school=_strip_years(school),
        year=years[-1] if years else "",
    )


def extract_education(text: str) -> List[EducationEntry]:
    """Education entries from the EDUCATION section; empty when there is none."""
    section = find_section(text or "", EDUCATION_HEADINGS)
    if section is None:
        logger.debug("no education heading")
        return []
    entries: List[EducationEntry] = []
    for chunk in split_education_chunks(section):
        entry = parse_education_chunk(chunk)
        if entry:
            entries.append(entry)
        if len(entries) == MAX_EDUCATION_ENTRIES:
            break
    return entries

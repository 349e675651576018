"""
Work history: split the experience section into job blocks and read each one.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from .models import ExperienceEntry
from .normalizers import MONTHS, format_duration
from .sections import EXPERIENCE_HEADINGS, find_section

logger = logging.getLogger(__name__)

MAX_EXPERIENCE_ENTRIES = 5

DEFAULT_COMPANY = "Tech Company"
DEFAULT_DURATION = "2020 - Present"
DEFAULT_LOCATION = "Remote"
DEFAULT_DESCRIPTION = "Developing scalable applications"
DEFAULT_ACHIEVEMENTS = ("Built modern web applications",)

DEFAULT_EXPERIENCE = ExperienceEntry(
    title="Software Engineer",
    company=DEFAULT_COMPANY,
    duration=DEFAULT_DURATION,
    location=DEFAULT_LOCATION,
    description=DEFAULT_DESCRIPTION,
    achievements=DEFAULT_ACHIEVEMENTS,
)

ROLE_NOUNS = (
    "Engineer", "Developer", "Programmer", "Manager", "Analyst", "Specialist", "Consultant", "Director",
    "Lead", "Designer", "Architect", "Scientist", "Intern", "Coordinator", "Administrator", "Accountant",
    "Officer", "Associate", "Assistant", "Technician", "Representative", "Executive", "Founder", "Head",
    "Researcher", "Teacher", "Instructor", "Supervisor", "Strategist", "Writer", "Editor", "Owner",
)
ROLE_NOUN_RE = re.compile(r"\b(?:" + "|".join(ROLE_NOUNS) + r")\b")

_DATE = rf"(?:\b(?:{MONTHS})\.?,?\s+)?(?:19|20)\d{{2}}"
DURATION_RE = re.compile(
    rf"(?P<start>{_DATE})\s*(?:-|to)\s*(?P<end>{_DATE}|present|current|now|today|ongoing)\b",
    re.IGNORECASE,
)
US_STATES = {
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA", "HI", "ID", "IL", "IN", "IA", "KS", "KY",
    "LA", "ME", "MD", "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ", "NM", "NY", "NC", "ND",
    "OH", "OK", "OR", "PA", "RI", "SC", "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY", "DC",
}
CITY_STATE_RE = re.compile(r"\b[A-Z][a-zA-Z.]+(?:[ \t][A-Z][a-zA-Z.]+)*,[ \t]*(?P<state>[A-Z]{2})\b")
WORK_MODE_RE = re.compile(r"\b(?:Remote|Hybrid|On-?site)\b", re.IGNORECASE)
LOC_LINE_RE = re.compile(r"^[A-Z][a-zA-Z\-' ]+,\s*[A-Z][a-zA-Z\-' ]+$")
HEADER_SPLIT_RE = re.compile(r"\s+(?:at|@)\s+|\s+[-|]\s+|\s*\|\s*", re.IGNORECASE)
BULLET_LINE_RE = re.compile(r"^[-*•]\s*")
LEFTOVER_SEPARATORS = " \t,|-"


def is_bullet(line: str) -> bool:
    return bool(BULLET_LINE_RE.match(line))


def is_job_start(line: str) -> bool:
    """A capitalized, non-bullet, heading-sized line naming a role."""
    line = line.strip()
    if not line or not line[0].isupper() or is_bullet(line):
        return False
    if len(line) > 100 or line.endswith("."):
        return False
    return bool(ROLE_NOUN_RE.search(line))


def find_duration(line: str) -> Optional[Tuple[str, "re.Match[str]"]]:
    m = DURATION_RE.search(line)
    if not m:
        return None
    return format_duration(m.group("start"), m.group("end")), m


def find_location(line: str) -> Optional[str]:
    for m in CITY_STATE_RE.finditer(line):
        if m.group("state") in US_STATES:
            return m.group().strip()
    m = WORK_MODE_RE.search(line)
    if m:
        return m.group().capitalize() if m.group().islower() else m.group()
    if LOC_LINE_RE.match(line.strip()):
        return line.strip()
    return None


def _remove(line: str, fragment: Optional[str]) -> str:
    if fragment:
        line = line.replace(fragment, " ", 1)
    line = re.sub(r"\(\s*\)", " ", line)
    return re.sub(r"\s{2,}", " ", line).strip(LEFTOVER_SEPARATORS)


def split_header(header: str) -> Tuple[str, str, str]:
    """'Title at Company', 'Title - Company | City, ST' -> (title, company, location)."""
    parts = [p.strip(LEFTOVER_SEPARATORS) for p in HEADER_SPLIT_RE.split(header)]
    parts = [p for p in parts if p]
    if not parts:
        return "", "", ""
    title, company, location = parts[0], "", ""
    for part in parts[1:]:
        loc = find_location(part)
        if loc and not location and (loc == part or not company):
            location = loc
            part = _remove(part, loc)
        if part and not company:
            company = part
    return title, company, location


def parse_job_block(lines: List[str]) -> Optional[ExperienceEntry]:
    assert lines, "job block must have at least one line"

    header = lines[0]
    duration = ""
    found = find_duration(header)
    if found:
        duration, m = found
        header = _remove(header, m.group())
    title, company, location = split_header(header)
    if not title:
        return None

    description = ""
    achievements: List[str] = []
    for idx, line in enumerate(lines[1:]):
        if is_bullet(line):
            bullet = BULLET_LINE_RE.sub("", line).strip()
            if re.search(r"[A-Za-z]", bullet):
                achievements.append(bullet)
            continue
        if achievements and line[:1].islower():
            # wrapped bullet
            achievements[-1] = f"{achievements[-1]} {line}"
            continue

        rest = line
        found = find_duration(rest)
        if found:
            if not duration:
                duration = found[0]
            rest = _remove(rest, found[1].group())
        loc = find_location(rest) if len(rest) <= 60 else None
        if loc:
            if not location:
                location = loc
            rest = _remove(rest, loc)

        if idx == 0 and not company and rest and len(rest) <= 60 and not rest.endswith("."):
            company = rest
        elif not description and len(rest) >= 30 and rest == line:
            description = rest

    return ExperienceEntry(
        title=title,
        company=company or DEFAULT_COMPANY,
        duration=duration or DEFAULT_DURATION,
        location=location or DEFAULT_LOCATION,
        description=description or DEFAULT_DESCRIPTION,
        achievements=tuple(achievements) or DEFAULT_ACHIEVEMENTS,
    )


def split_job_blocks(section: str, whole_document: bool = False) -> List[List[str]]:
    lines = [ln.strip() for ln in section.splitlines() if ln.strip()]
    blocks: List[List[str]] = []
    prefix: List[str] = []
    for line in lines:
        if is_job_start(line):
            blocks.append([line])
        elif blocks:
            blocks[-1].append(line)
        else:
            prefix.append(line)
    # a section without recognizable role lines is read as a single job
    if not blocks and prefix and not whole_document:
        blocks.append(prefix)
    return [b for b in blocks if len(b) >= 2 and len(" ".join(b)) > 20]


def extract_experience(text: str) -> List[ExperienceEntry]:
    """Job entries in document order, at most five; a placeholder when none parse."""
    text = text or ""
    section = find_section(text, EXPERIENCE_HEADINGS)
    if section is None:
        logger.debug("no experience heading; scanning whole document")
    blocks = split_job_blocks(section if section is not None else text, whole_document=section is None)

    entries: List[ExperienceEntry] = []
    for block in blocks:
        entry = parse_job_block(block)
        if entry:
            entries.append(entry)
        if len(entries) == MAX_EXPERIENCE_ENTRIES:
            break
    if not entries:
        logger.debug("no job blocks parsed; using placeholder entry")
        return [DEFAULT_EXPERIENCE]
    return entries

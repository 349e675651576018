"""
Projects: split the projects section into per-project blocks and read each one.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .experience import DURATION_RE, is_bullet, is_job_start
from .models import ProjectEntry
from .normalizers import dedupe
from .sections import PROJECTS_HEADINGS, find_section
from .skills import find_skill_keywords, split_skill_tokens

logger = logging.getLogger(__name__)

MAX_PROJECT_ENTRIES = 5
TECH_SCAN_CHARS = 200
MAX_DESCRIPTION_LINES = 3

DEFAULT_PROJECT_DESCRIPTION = "Project showcasing technical skills"
DEFAULT_TECHNOLOGIES = ("React", "TypeScript")
PLACEHOLDER_LINK = "https://github.com/username/{slug}"

DEFAULT_PROJECT = ProjectEntry(
    title="Portfolio Website",
    description="Modern portfolio showcasing technical skills",
    technologies=DEFAULT_TECHNOLOGIES,
    link="https://github.com/username/portfolio",
)

PROJECT_NOUNS = (
    "Project", "App", "Application", "Website", "Site", "System", "Platform", "Tool", "Dashboard", "Bot",
    "API", "Game", "Tracker", "Engine",
)
NOUN_START_RE = re.compile(r"^(?=[A-Z])[^\n]{0,61}?\b(?:" + "|".join(PROJECT_NOUNS) + r")\b")
LABEL_START_RE = re.compile(r"^(?:project|title)\s*:\s*(?=\S)", re.IGNORECASE)
BULLET_LABEL_RE = re.compile(r"^-\s*(?P<label>[A-Z][^:\n]{2,60}):\s*\S")
TECH_LINE_RE = re.compile(
    r"^(?:-\s*)?(?:technologies|technology|tech stack|tech|stack|tools|built with|built using)\s*[:\-]\s*(?P<list>.+)$"
    r"|\bbuilt (?:with|using)\s+(?P<inline>[^\n]+?)(?:\.(?:\s|$)|$)",
    re.IGNORECASE,
)
URL_RE = re.compile(r"https?://[^\s)>\]]+", re.IGNORECASE)
BARE_REPO_RE = re.compile(r"\b(?:www\.)?github\.com/[^\s)>\]]+", re.IGNORECASE)
TITLE_SEP_RE = re.compile(r"\s+[-|]\s+|:\s+")
TRAILING_PAREN_RE = re.compile(r"\s*\([^)]*\)\s*$")
TRAILING_YEAR_RE = re.compile(r"[\s,|-]*\b(?:19|20)\d{2}\s*$")


def _is_tech_line(line: str) -> bool:
    m = TECH_LINE_RE.search(line)
    return bool(m and m.group("list"))


def is_project_start(line: str, whole_document: bool = False) -> bool:
    line = line.strip()
    if not line:
        return False
    if LABEL_START_RE.match(line):
        return True
    m = BULLET_LABEL_RE.match(line)
    if m:
        return not _is_tech_line(line)
    if is_bullet(line) or not NOUN_START_RE.match(line):
        return False
    if whole_document and is_job_start(line):
        return False
    return (len(line) <= 80 and not line.endswith(".")) or bool(TITLE_SEP_RE.search(line))


def split_project_blocks(section: str, whole_document: bool = False) -> List[List[str]]:
    blocks: List[List[str]] = []
    paragraph_break = False
    for raw in section.splitlines():
        line = raw.strip()
        if not line:
            paragraph_break = True
            continue
        starts = is_project_start(line, whole_document)
        if not starts and not whole_document:
            # inside a projects section, the first line and every new paragraph open a project
            starts = not blocks or (
                paragraph_break and not is_bullet(line) and not _is_tech_line(line) and not URL_RE.match(line)
            )
        if starts:
            blocks.append([line])
        elif blocks:
            blocks[-1].append(line)
        paragraph_break = False
    return [b for b in blocks if len(" ".join(b)) > 10]


def slugify(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-") or "project"


def _tech_items(raw: str) -> List[str]:
    return split_skill_tokens(re.sub(r"\s+(?:and|&)\s+", ", ", raw))


def _clean_link(raw: str) -> str:
    link = raw.rstrip(".,;:")
    return link if link.lower().startswith("http") else "https://" + link


def parse_project_block(lines: List[str]) -> Optional[ProjectEntry]:
    assert lines, "project block must have at least one line"

    first = re.sub(r"^-\s*", "", lines[0])
    first = LABEL_START_RE.sub("", first)
    link = ""
    m = URL_RE.search(first) or BARE_REPO_RE.search(first)
    if m:
        link = _clean_link(m.group())
        first = first.replace(m.group(), " ").strip(" -|")

    parts = TITLE_SEP_RE.split(first, maxsplit=1)
    title = DURATION_RE.sub("", parts[0])
    title = TRAILING_YEAR_RE.sub("", TRAILING_PAREN_RE.sub("", title)).strip(" -|,")
    if not 3 <= len(title) <= 60 or "experience" in title.lower():
        return None

    descriptions: List[str] = []
    if len(parts) > 1 and parts[1].strip():
        descriptions.append(parts[1].strip())
    technologies: List[str] = []
    for line in lines[1:]:
        tech = TECH_LINE_RE.search(line)
        if tech:
            technologies.extend(_tech_items(tech.group("list") or tech.group("inline")))
        url = URL_RE.search(line) or BARE_REPO_RE.search(line)
        if url and not link:
            link = _clean_link(url.group())
        if (tech and tech.group("list")) or (url and len(line) - len(url.group()) < 20):
            continue
        text = re.sub(r"^-\s*", "", line)
        if len(text) > 20 and len(descriptions) < MAX_DESCRIPTION_LINES:
            descriptions.append(text)

    nearby = " ".join(lines)[:TECH_SCAN_CHARS]
    technologies = dedupe(technologies + find_skill_keywords(nearby))

    return ProjectEntry(
        title=title,
        description=" ".join(descriptions) or DEFAULT_PROJECT_DESCRIPTION,
        technologies=tuple(technologies) or DEFAULT_TECHNOLOGIES,
        link=link or PLACEHOLDER_LINK.format(slug=slugify(title)),
    )


def extract_projects(text: str) -> List[ProjectEntry]:
    """Projects in document order, at most five; a placeholder when none parse."""
    text = text or ""
    section = find_section(text, PROJECTS_HEADINGS)
    if section is None:
        logger.debug("no projects heading; scanning whole document")
    blocks = split_project_blocks(section if section is not None else text, whole_document=section is None)

    projects: List[ProjectEntry] = []
    for block in blocks:
        project = parse_project_block(block)
        if project:
            projects.append(project)
        if len(projects) == MAX_PROJECT_ENTRIES:
            break
    if not projects:
        logger.debug("no project blocks parsed; using placeholder project")
        return [DEFAULT_PROJECT]
    return projects

import re
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Sequence

# Heading aliases are regex fragments, tried in order. A heading line may
# carry one qualifier word in front ("Technical Skills", "Work Experience").
SUMMARY_HEADINGS = ("summary", "about me", "about", "objective", "profile")
SKILLS_HEADINGS = ("skills", "technologies", "competencies", "tech stack", "expertise")
EXPERIENCE_HEADINGS = ("experience", "work history", "employment history", "employment", "career history")
PROJECTS_HEADINGS = ("projects", "portfolio")
EDUCATION_HEADINGS = ("education", "academic background", "academics", "qualifications")
OTHER_HEADINGS = (
    "certifications?", "certificates?", "awards?", "honou?rs", "languages?", "interests", "hobbies",
    "references", "publications", "volunteering", "activities", "contact", "courses",
)

SECTION_HEADINGS: Dict[str, Sequence[str]] = {
    "summary": SUMMARY_HEADINGS,
    "skills": SKILLS_HEADINGS,
    "experience": EXPERIENCE_HEADINGS,
    "projects": PROJECTS_HEADINGS,
    "education": EDUCATION_HEADINGS,
    "other": OTHER_HEADINGS,
}

HEADING_WORDS = {
    "summary", "profile", "objective", "about", "skills", "technologies", "competencies", "expertise",
    "experience", "employment", "work", "history", "projects", "portfolio", "education", "academic",
    "qualifications", "certifications", "certificates", "awards", "honors", "honours", "languages",
    "interests", "hobbies", "references", "publications", "volunteer", "volunteering", "activities",
    "achievements", "contact", "courses", "training", "strengths", "leadership", "affiliations",
    "additional", "information", "extracurricular",
}

MIN_SECTION_CHARS = 10

# Words allowed in front of an alias in an ordinary title-case heading.
# ALL CAPS headings and headings ending in ':' may carry any one word.
SECTION_QUALIFIERS: Dict[str, Sequence[str]] = {
    "summary": ("professional", "personal", "career", "executive"),
    "skills": ("technical", "core", "key", "professional", "relevant", "computer"),
    "experience": ("work", "professional", "relevant", "industry", "research", "teaching", "internship"),
    "projects": ("personal", "academic", "selected", "key", "relevant", "side", "featured", "notable", "technical"),
    "education": ("formal",),
    "other": ("professional", "relevant", "additional"),
}
# "Personal Portfolio" is far more often a project title than a heading
BARE_ONLY_ALIASES = ("portfolio",)

_QUALIFIER = r"(?:(?!(?:linkedin|github)\b)(?P<qual>[A-Za-z]+)[ \t]+)?"
_ALIAS_SECTION = {alias: key for key, aliases in SECTION_HEADINGS.items() for alias in aliases}
ALL_CAPS_RE = re.compile(r"[A-Z][A-Z&/ ]*[A-Z]")
# "Portfolio: https://jane.dev" is a contact label, not a section
CONTACT_INLINE_RE = re.compile(r"://|www\.|@|\b[\w-]+\.(?:com|dev|io|me|org|net|app)\b", re.IGNORECASE)


@lru_cache(maxsize=None)
def _heading_re(alias: str) -> "re.Pattern[str]":
    return re.compile(
        rf"^[ \t]*{_QUALIFIER}(?P<alias>{alias})[ \t]*(?P<colon>:[ \t]*(?P<inline>[^\n]*))?$",
        re.IGNORECASE | re.MULTILINE,
    )


def _qualifier_allowed(section: Optional[str], alias: str, qualifier: Optional[str], colon: bool) -> bool:
    if not qualifier:
        return True
    if colon or (qualifier.isupper() and alias.isupper()):
        return True
    if any(re.fullmatch(a, alias, re.IGNORECASE) for a in BARE_ONLY_ALIASES):
        return False
    return qualifier.lower() in SECTION_QUALIFIERS.get(section or "", ())


def section_key(line: str) -> Optional[str]:
    """Which known section a heading line opens, if any."""
    s = line.strip()
    colon = s.endswith(":")
    s = s.rstrip(":").strip()
    for key, aliases in SECTION_HEADINGS.items():
        m = re.fullmatch(rf"{_QUALIFIER}(?P<alias>{'|'.join(aliases)})", s, re.IGNORECASE)
        if m and _qualifier_allowed(key, m.group("alias"), m.group("qual"), colon):
            return key
    return None


def is_heading_like(line: str) -> bool:
    s = line.strip().rstrip(":").strip()
    if not s or len(s) > 50:
        return False
    if section_key(line):
        return True
    if not ALL_CAPS_RE.fullmatch(s):
        return False
    words = re.split(r"[ &/]+", s.lower())
    return len(words) <= 5 and any(w in HEADING_WORDS for w in words)


def _collect_body(rest: str, keep: Optional[Callable[[str], bool]] = None) -> str:
    body: List[str] = []
    # rest starts right after the heading line, so lines[0] is its tail
    for line in rest.split("\n")[1:]:
        if is_heading_like(line) and not (keep and keep(line)):
            break
        body.append(line)
    return "\n".join(body).strip()


def find_section(
    text: str, heading_aliases: Sequence[str], keep: Optional[Callable[[str], bool]] = None
) -> Optional[str]:
    """Content under the first alias whose heading carries enough text, else None.

    ``keep`` marks heading-like lines that belong to the section body (skills
    sub-headings such as "SOFT SKILLS") instead of ending it.
    """
    for alias in heading_aliases:
        for m in _heading_re(alias).finditer(text):
            if not _qualifier_allowed(_ALIAS_SECTION.get(alias), m.group("alias"), m.group("qual"), bool(m.group("colon"))):
                continue
            inline = (m.group("inline") or "").strip()
            if inline and CONTACT_INLINE_RE.search(inline):
                continue
            body = _collect_body(text[m.end():], keep)
            content = "\n".join(part for part in (inline, body) if part).strip()
            if len(content) > MIN_SECTION_CHARS:
                return content
    return None


def split_sections(text: str) -> Dict[str, str]:
    """Bucket every line under the last heading seen. Lines before the first heading go to 'header'."""
    buckets: Dict[str, List[str]] = {"header": []}
    current = "header"
    for line in text.splitlines():
        if is_heading_like(line):
            current = section_key(line) or "other"
            buckets.setdefault(current, [])
            # add a visual separator in bucket
            if buckets[current] and buckets[current][-1] != "":
                buckets[current].append("")
            continue
        if line.strip():
            buckets[current].append(line.strip())
    return {k: "\n".join(v).strip() for k, v in buckets.items() if any(v)}

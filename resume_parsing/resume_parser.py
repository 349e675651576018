import logging
from typing import List, Optional

from .education import extract_education
from .experience import DEFAULT_EXPERIENCE, extract_experience
from .fields import (
    DEFAULT_EMAIL,
    DEFAULT_TITLE,
    extract_email,
    extract_links,
    extract_name,
    extract_phone,
    extract_summary,
    extract_title,
)
from .models import ResumeProfile
from .normalizers import normalize_text
from .projects import DEFAULT_PROJECT, extract_projects
from .sections import split_sections
from .skills import DEFAULT_SKILLS, extract_skills

logger = logging.getLogger(__name__)


def extract_resume_profile(raw_text: Optional[str], filename: Optional[str] = None) -> ResumeProfile:
    """Turn decoded resume text into a portfolio-ready profile.

    ``filename`` is only used in log lines; it never feeds any field.
    Missing information falls back to fixed defaults and is listed in ``notes``.
    """
    text = normalize_text(raw_text or "")

    name = extract_name(text)
    title = extract_title(text)
    email = extract_email(text)
    summary = extract_summary(text)
    skills = extract_skills(text)
    experience = extract_experience(text)
    projects = extract_projects(text)
    education = extract_education(text)

    confidence_notes: List[str] = []
    if not name:
        confidence_notes.append("No name detected at the top of the document.")
    if email == DEFAULT_EMAIL:
        confidence_notes.append("No email address found; using a placeholder.")
    if title == DEFAULT_TITLE and DEFAULT_TITLE.lower() not in text.lower():
        confidence_notes.append("No job title detected; using a default title.")
    if not summary:
        confidence_notes.append("No usable summary section.")
    if tuple(skills) == DEFAULT_SKILLS:
        confidence_notes.append("No skills detected; using default skills.")
    if experience == [DEFAULT_EXPERIENCE]:
        confidence_notes.append("No clear experience section detected; using a placeholder role.")
    if projects == [DEFAULT_PROJECT]:
        confidence_notes.append("No projects detected; using a placeholder project.")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "parsed %s: sections=%s skills=%d experience=%d projects=%d education=%d notes=%d",
            filename or "<text>",
            sorted(split_sections(text)),
            len(skills),
            len(experience),
            len(projects),
            len(education),
            len(confidence_notes),
        )

    return ResumeProfile(
        name=name,
        title=title,
        email=email,
        summary=summary,
        skills=tuple(skills),
        experience=tuple(experience),
        projects=tuple(projects),
        phone=extract_phone(text),
        links=tuple(extract_links(text)),
        education=tuple(education),
        notes=tuple(confidence_notes),
    )

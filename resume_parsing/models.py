"""
Immutable records produced by the extraction pipeline.

``ResumeProfile.to_dict()`` gives the plain JSON shape the portfolio editor
works on; edited copies are the editor's business, not ours.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Skill:
    name: str
    category: str


@dataclass(frozen=True)
class ExperienceEntry:
    title: str
    company: str
    duration: str
    location: str
    description: str
    achievements: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProjectEntry:
    title: str
    description: str
    technologies: Tuple[str, ...] = ()
    link: Optional[str] = None


@dataclass(frozen=True)
class EducationEntry:
    degree: str
    school: str
    year: str = ""


@dataclass(frozen=True)
class ResumeProfile:
    """Everything extracted from one resume.

    Attributes:
        name: Candidate name from the document head; '' when none validated.
        title: Role label, never empty.
        email: Contact email or a fixed placeholder.
        summary: About-section prose; '' when none validated.
        skills: Never empty.
        experience: Never empty, document order.
        projects: Never empty, document order.
        phone: Contact phone or ''.
        links: Profile URLs found anywhere in the text.
        education: May be empty.
        notes: Which fields fell back to defaults, for the review screen.
    """

    name: str
    title: str
    email: str
    summary: str
    skills: Tuple[Skill, ...]
    experience: Tuple[ExperienceEntry, ...]
    projects: Tuple[ProjectEntry, ...]
    phone: str = ""
    links: Tuple[str, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    notes: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        # round-trip through json turns every tuple into a list
        return json.loads(json.dumps(asdict(self)))

import pytest

from resume_parsing.models import Skill
from resume_parsing.skills import (
    DEFAULT_SKILLS,
    SKILL_CATEGORIES,
    categorize_skill,
    category_for_label,
    extract_skills,
    find_skill_keywords,
    is_skills_subheading,
    parse_skills_section,
    split_skill_tokens,
    subheading_category,
)


@pytest.mark.parametrize(
    "name, category",
    [
        ("Python", "Programming Languages"),
        ("C++", "Programming Languages"),
        ("Swift", "Programming Languages"),
        ("React.js", "Frontend"),
        ("Django", "Backend"),
        ("PostgreSQL 14", "Database"),
        ("SQL", "Database"),
        ("Kubernetes", "Cloud & DevOps"),
        ("Flutter", "Mobile"),
        ("Tableau", "Data & Analytics"),
        ("Financial Modeling", "Finance & Accounting"),
        ("Lead Generation", "Marketing & Sales"),
        ("Figma", "Design & Creative"),
        ("SolidWorks", "Engineering & CAD"),
        ("Scrum", "Project Management"),
        ("Public Speaking", "Communication & Languages"),
        ("Excel", "Tools & Software"),
        ("Leadership", "Soft Skills"),
        ("Basket weaving", "Professional Skills"),
    ],
)
def test_categorize_skill(name, category):
    assert categorize_skill(name) == category


def test_category_totality():
    odd = ["x", "???", "C--", "12345", "日本語", "a" * 500, " spaced  out ", "Node.js 18.2"]
    for s in odd:
        assert categorize_skill(s) in SKILL_CATEGORIES


def test_labels():
    assert category_for_label("Frontend") == "Frontend"
    assert category_for_label("Programming Languages") == "Programming Languages"
    assert category_for_label("Soft Skills") == "Soft Skills"
    assert category_for_label("Databases") == "Database"
    # generic labels do not name a category
    assert category_for_label("Frameworks") is None
    assert category_for_label("Languages") is None


def test_labeled_lines_bind_category():
    skills = parse_skills_section("Frontend: React, Vue\nBackend: Django")
    assert skills == [Skill("React", "Frontend"), Skill("Vue", "Frontend"), Skill("Django", "Backend")]


def test_unknown_label_falls_back_to_auto_category():
    skills = parse_skills_section("Frameworks: Django, React\nPython, SQL")
    assert skills == [
        Skill("Django", "Backend"),
        Skill("React", "Frontend"),
        Skill("Python", "Programming Languages"),
        Skill("SQL", "Database"),
    ]


def test_section_dedupes_case_insensitively():
    assert [s.name for s in parse_skills_section("Python, python\nPYTHON")] == ["Python"]


def test_token_splitting():
    assert split_skill_tokens("Python (Django, Flask), and Go") == ["Python", "Django", "Flask", "Go"]
    # stopwords and numbers are not skills
    assert split_skill_tokens("5, strong, Excel, 2024") == ["Excel"]


def test_keyword_scan_respects_word_boundaries():
    found = find_skill_keywords("Built with React.js and Node.js on AWS; go to market with JavaScript")
    assert found == ["JavaScript", "React", "Node.js", "AWS"]
    # Java is not found inside JavaScript, Go only when capitalized
    assert "Java" not in found
    assert "Go" not in found


def test_extract_skills_cascade():
    assert [s.name for s in extract_skills("SKILLS\nPython, Go, Kubernetes")] == ["Python", "Go", "Kubernetes"]
    assert [s.name for s in extract_skills("I write Python and Docker daily")] == ["Python", "Docker"]
    assert extract_skills("") == list(DEFAULT_SKILLS)
    assert [s.name for s in DEFAULT_SKILLS] == ["JavaScript", "React", "Node.js"]


def test_subheadings_bind_following_lines():
    skills = extract_skills("SKILLS\nProgramming Languages\nPython, Java, Haskell\nFrontend: React")
    assert skills == [
        Skill("Python", "Programming Languages"),
        Skill("Java", "Programming Languages"),
        Skill("Haskell", "Programming Languages"),
        Skill("React", "Frontend"),
    ]


def test_caps_subheadings_stay_in_section():
    text = (
        "SKILLS\nPROGRAMMING LANGUAGES\nPython, Haskell\nSOFT SKILLS\nMentoring, Public Speaking\n\n"
        "EXPERIENCE\nSenior Engineer\nAcme Corp\n2019 - Present"
    )
    assert extract_skills(text) == [
        Skill("Python", "Programming Languages"),
        Skill("Haskell", "Programming Languages"),
        Skill("Mentoring", "Soft Skills"),
        Skill("Public Speaking", "Soft Skills"),
    ]


def test_subheading_detection():
    assert is_skills_subheading("SOFT SKILLS")
    assert is_skills_subheading("PROGRAMMING LANGUAGES")
    assert not is_skills_subheading("PROFESSIONAL EXPERIENCE")
    assert not is_skills_subheading("ADDITIONAL INFORMATION")
    # a skill that happens to match a label is still a skill
    assert subheading_category("Communication") is None
    assert subheading_category("Backend: Django") is None


def test_proficiency_labels_keep_the_skill():
    assert parse_skills_section("Python: advanced\nGo: 3 years") == [
        Skill("Python", "Programming Languages"),
        Skill("Go", "Programming Languages"),
    ]

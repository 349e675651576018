import pytest

from resume_parsing.experience import (
    DEFAULT_EXPERIENCE,
    extract_experience,
    find_location,
    is_job_start,
    parse_job_block,
    split_header,
)
from resume_parsing.normalizers import normalize_text

SAMPLE = """
EXPERIENCE
Senior Software Engineer at Globex | Austin, TX
Jan 2020 – Present
Led the migration of billing services to event-driven architecture.
• Cut deploy time by 40%
• Mentored four engineers across
  two teams

Data Analyst - Initech
2017 - 2019
- Built weekly revenue dashboards

EDUCATION
BSc Computer Science, State University, 2017
"""


def test_parser_reads_both_jobs():
    jobs = extract_experience(normalize_text(SAMPLE))
    assert len(jobs) == 2

    globex = jobs[0]
    assert globex.title == "Senior Software Engineer"
    assert globex.company == "Globex"
    assert globex.location == "Austin, TX"
    assert globex.duration == "Jan 2020 - Present"
    assert globex.description.startswith("Led the migration")
    # wrapped bullet is joined back
    assert globex.achievements == ("Cut deploy time by 40%", "Mentored four engineers across two teams")

    initech = jobs[1]
    assert (initech.title, initech.company, initech.duration) == ("Data Analyst", "Initech", "2017 - 2019")
    assert initech.location == "Remote"
    assert initech.achievements == ("Built weekly revenue dashboards",)


def test_job_start_lines():
    assert is_job_start("Senior Backend Engineer")
    assert not is_job_start("- Engineer of the month")
    assert not is_job_start("Worked closely with the Engineering Manager.")
    # "Associates" in a company name is not a role
    assert not is_job_start("Smith & Associates")


def test_split_header():
    assert split_header("Product Manager @ Hooli - San Francisco, CA") == ("Product Manager", "Hooli", "San Francisco, CA")
    assert split_header("Designer") == ("Designer", "", "")


def test_find_location():
    assert find_location("New York, NY") == "New York, NY"
    assert find_location("remote") == "Remote"
    assert find_location("Paris, France") == "Paris, France"
    assert find_location("Acme Corp") is None


def test_missing_fields_take_defaults():
    job = parse_job_block(["Backend Developer", "- Wrote services"])
    assert job.company == DEFAULT_EXPERIENCE.company
    assert job.duration == DEFAULT_EXPERIENCE.duration
    assert job.description == DEFAULT_EXPERIENCE.description
    assert job.achievements == ("Wrote services",)


def test_empty_block_is_a_defect():
    with pytest.raises(AssertionError):
        parse_job_block([])


def test_no_experience_gives_placeholder():
    assert extract_experience("") == [DEFAULT_EXPERIENCE]
    assert extract_experience("Just some words about me") == [DEFAULT_EXPERIENCE]


def test_at_most_five_entries():
    text = "EXPERIENCE\n" + "\n".join(f"Engineer {i}\n- Did thing number {i}" for i in range(7))
    assert [j.title for j in extract_experience(text)] == [f"Engineer {i}" for i in range(5)]

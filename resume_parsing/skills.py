"""
Skills: section parsing, keyword-scan fallback, and the category taxonomy.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .models import Skill
from .sections import HEADING_WORDS, SKILLS_HEADINGS, find_section, section_key

logger = logging.getLogger(__name__)

PROGRAMMING_LANGUAGES = "Programming Languages"
FRONTEND = "Frontend"
BACKEND = "Backend"
DATABASE = "Database"
CLOUD_DEVOPS = "Cloud & DevOps"
MOBILE = "Mobile"
DATA_ANALYTICS = "Data & Analytics"
FINANCE_ACCOUNTING = "Finance & Accounting"
MARKETING_SALES = "Marketing & Sales"
DESIGN_CREATIVE = "Design & Creative"
ENGINEERING_CAD = "Engineering & CAD"
PROJECT_MANAGEMENT = "Project Management"
COMMUNICATION_LANGUAGES = "Communication & Languages"
TOOLS_SOFTWARE = "Tools & Software"
SOFT_SKILLS = "Soft Skills"
PROFESSIONAL_SKILLS = "Professional Skills"

SKILL_CATEGORIES = (
    PROGRAMMING_LANGUAGES, FRONTEND, BACKEND, DATABASE, CLOUD_DEVOPS, MOBILE, DATA_ANALYTICS,
    FINANCE_ACCOUNTING, MARKETING_SALES, DESIGN_CREATIVE, ENGINEERING_CAD, PROJECT_MANAGEMENT,
    COMMUNICATION_LANGUAGES, TOOLS_SOFTWARE, SOFT_SKILLS, PROFESSIONAL_SKILLS,
)


@dataclass(frozen=True)
class CategoryRule:
    category: str
    pattern: "re.Pattern[str]"

    def matches(self, key: str) -> bool:
        return bool(self.pattern.fullmatch(key))


def _rule(category: str, alternatives: str) -> CategoryRule:
    return CategoryRule(category, re.compile(alternatives, re.IGNORECASE))


# First match wins, so order matters (Swift is a language before it is Mobile).
CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    _rule(PROGRAMMING_LANGUAGES,
          r"python|java|javascript|js|typescript|ts|c|c\+\+|c#|go|golang|rust|ruby|php|swift|kotlin|scala"
          r"|perl|r|matlab|bash|shell( scripting)?|powershell|lua|haskell|elixir|erlang|dart|objective-c"
          r"|vba|assembly|fortran|cobol|julia|groovy|clojure|f#|solidity"),
    _rule(FRONTEND,
          r"react(\.?js)?|angular(\.?js)?|vue(\.?js)?|svelte|next(\.?js)?|nuxt(\.?js)?|html5?|css3?|scss|sass"
          r"|less|tailwind( css)?|bootstrap|jquery|redux|webpack|vite|gatsby|ember(\.?js)?|material ui|mui"
          r"|chakra ui|web components|responsive design"),
    _rule(BACKEND,
          r"node(\.?js)?|express(\.?js)?|django|flask|fastapi|spring( boot)?|laravel|(ruby on )?rails"
          r"|asp\.net( core)?|\.net( core)?|nest\.?js|graphql|rest( apis?)?|restful( apis?)?|grpc|microservices"
          r"|rabbitmq|kafka|apache kafka|celery|hibernate|symfony|gin|koa"),
    _rule(DATABASE,
          r"sql|nosql|mysql|postgres(ql)?|mongo(db)?|redis|sqlite|oracle( db)?|sql server|ms ?sql|dynamodb"
          r"|cassandra|elasticsearch|mariadb|firebase|firestore|neo4j|couchdb|supabase|database design"),
    _rule(CLOUD_DEVOPS,
          r"aws|amazon web services|azure|microsoft azure|gcp|google cloud( platform)?|docker|kubernetes|k8s"
          r"|terraform|ansible|jenkins|gitlab( ci)?|github actions|circleci|ci/cd|helm|prometheus|grafana"
          r"|nginx|heroku|vercel|netlify|cloudformation|serverless|(aws )?lambda|ec2|s3|openshift|devops"),
    _rule(MOBILE,
          r"react native|flutter|ios|android|xamarin|swiftui|jetpack compose|ionic|expo|mobile development"),
    _rule(DATA_ANALYTICS,
          r"pandas|numpy|scipy|scikit-learn|sklearn|tensorflow|pytorch|keras|(apache )?spark|pyspark|hadoop"
          r"|tableau|power ?bi|looker|snowflake|bigquery|machine learning|deep learning|data analysis"
          r"|data analytics|data science|data visualization|statistics|nlp|natural language processing"
          r"|computer vision|etl|airflow|dbt|jupyter|matplotlib|a/b testing"),
    _rule(FINANCE_ACCOUNTING,
          r".*\b(accounting|bookkeeping|financial|finance|budget(ing)?|forecasting|audit(ing)?|tax(ation)?"
          r"|payroll|gaap|ifrs|quickbooks|xero|accounts (payable|receivable)|reconciliation|valuation"
          r"|investment|cpa)\b.*"),
    _rule(MARKETING_SALES,
          r".*\b(marketing|seo|sem|sales|crm|salesforce|hubspot|google analytics|google ads|social media"
          r"|content strategy|copywriting|branding|lead generation|advertising|public relations"
          r"|market research|b2b|b2c|cold calling)\b.*"),
    _rule(DESIGN_CREATIVE,
          r"figma|sketch|adobe xd|photoshop|illustrator|indesign|after effects|premiere( pro)?|canva"
          r"|ui/ux|ux/ui|user research|wireframing|prototyping|typography|blender|adobe creative (suite|cloud)"
          r"|.*\b(graphic|visual|ui|ux|web|interaction|motion|product) design\b.*"),
    _rule(ENGINEERING_CAD,
          r"autocad|solidworks|catia|revit|fusion 360|ansys|creo|inventor|simulink|cad|cam|fea|cfd|plc"
          r"|labview|altium|pcb design|gd&t|3d modeling|3d printing"
          r"|.*\b(mechanical|electrical|civil|structural|chemical) engineering\b.*"),
    _rule(PROJECT_MANAGEMENT,
          r"agile|scrum|kanban|waterfall|pmp|prince2|lean|(lean )?six sigma|sprint planning|roadmapping|okrs?"
          r"|.*\b(project|program|product|stakeholder|risk|change) management\b.*"),
    _rule(COMMUNICATION_LANGUAGES,
          r"english|spanish|french|german|mandarin|chinese|japanese|korean|hindi|arabic|portuguese|italian"
          r"|russian|dutch|polish|turkish|swedish|bilingual|multilingual"
          r"|.*\b(communication|public speaking|presentations?|writing|negotiation|translation)\b.*"),
    _rule(TOOLS_SOFTWARE,
          r"git|github|bitbucket|jira|confluence|slack|trello|asana|notion|linux|unix|windows|macos|vs ?code"
          r"|visual studio|intellij|postman|(microsoft |ms )?(excel|word|powerpoint|outlook|office)"
          r"|google workspace|sharepoint|zoom|vim"),
    _rule(SOFT_SKILLS,
          r"leadership|team ?work|collaboration|problem[- ]solving|critical thinking|time management|adaptability"
          r"|creativity|attention to detail|mentor(ing|ship)|organi[sz]ation(al skills)?|interpersonal skills"
          r"|decision[- ]making|conflict resolution|emotional intelligence|work ethic|self[- ]motivated"
          r"|analytical (thinking|skills)|customer service"),
)

VERSION_SUFFIX_RE = re.compile(r"\s+v?\d+(?:\.\d+)*$")


def categorize_skill(name: str) -> str:
    """Taxonomy bucket for a skill name; 'Professional Skills' when nothing matches."""
    key = VERSION_SUFFIX_RE.sub("", " ".join((name or "").lower().split()))
    for rule in CATEGORY_RULES:
        if rule.matches(key):
            return rule.category
    return PROFESSIONAL_SKILLS


# Labels people put in front of skill lists ("Frontend: React, Vue").
LABEL_RULES: Tuple[CategoryRule, ...] = (
    _rule(SOFT_SKILLS, r".*\b(soft|interpersonal|personal)\b.*"),
    _rule(PROGRAMMING_LANGUAGES, r".*\b(programming|coding|scripting)\b.*"),
    _rule(FRONTEND, r".*\b(front[ -]?end|client[ -]side)\b.*"),
    _rule(BACKEND, r".*\b(back[ -]?end|server[ -]side|apis?)\b.*"),
    _rule(DATABASE, r".*\b(databases?|data stores?|storage)\b.*"),
    _rule(CLOUD_DEVOPS, r".*\b(cloud|devops|infrastructure|ci/cd)\b.*"),
    _rule(MOBILE, r".*\bmobile\b.*"),
    _rule(DATA_ANALYTICS, r".*\b(data|analytics|machine learning|ml|ai)\b.*"),
    _rule(FINANCE_ACCOUNTING, r".*\b(finance|financial|accounting)\b.*"),
    _rule(MARKETING_SALES, r".*\b(marketing|sales)\b.*"),
    _rule(DESIGN_CREATIVE, r".*\b(design|creative)\b.*"),
    _rule(ENGINEERING_CAD, r".*\b(cad|cam|mechanical|electrical|civil)\b.*"),
    _rule(PROJECT_MANAGEMENT, r".*\b(project management|management|methodolog(y|ies)|agile)\b.*"),
    _rule(COMMUNICATION_LANGUAGES, r".*\b(communication|spoken|foreign|human)\b.*"),
    _rule(TOOLS_SOFTWARE, r".*\b(tools?|software|platforms?)\b.*"),
    _rule(PROFESSIONAL_SKILLS, r".*\b(professional|other|general|misc\.?|additional)\b.*"),
)


def category_for_label(label: str) -> Optional[str]:
    """Category named by an explicit 'Label:' prefix, or None if the label is not a category."""
    key = " ".join(label.lower().split())
    for rule in LABEL_RULES:
        if rule.matches(key):
            return rule.category
    return None


# ───────────────────────────────────────── tokens ──
STOPWORDS = {
    "and", "or", "with", "using", "including", "in", "of", "the", "a", "an", "to", "for", "on", "etc",
    "experience", "experienced", "years", "year", "proficient", "familiar", "knowledge", "strong",
    "excellent", "good", "basic", "advanced", "intermediate", "expert", "skills", "skill", "other",
}
SHORT_SKILLS = {"C", "R"}
SPLIT_RE = re.compile(r"[,;•·|\n]|\s{2,}|\s/\s")
BRACKETS_RE = re.compile(r"[()\[\]{}]")
LABEL_LINE_RE = re.compile(r"^(?P<label>[A-Za-z][A-Za-z &/+.-]{1,40}?)\s*:\s*(?!//)(?P<items>.+)$")
LEADING_JUNK_RE = re.compile(r"^(?:[-*•\s]+|(?:and|or|&)\s+)+", re.IGNORECASE)
DURATION_TOKEN_RE = re.compile(r"\d+\+?\s*(?:years?|yrs?|months?)", re.IGNORECASE)


def is_valid_skill(token: str) -> bool:
    if token in SHORT_SKILLS:
        return True
    if not 2 <= len(token) < 30:
        return False
    if token.lower() in STOPWORDS:
        return False
    if token.isdigit() or DURATION_TOKEN_RE.fullmatch(token):
        return False
    return bool(re.search(r"[A-Za-z]", token))


def clean_token(raw: str) -> str:
    token = LEADING_JUNK_RE.sub("", raw.strip())
    return token.strip().rstrip(".:").strip()


def split_skill_tokens(text: str) -> List[str]:
    items = SPLIT_RE.split(BRACKETS_RE.sub(",", text))
    return [t for t in (clean_token(i) for i in items) if is_valid_skill(t)]


def subheading_category(line: str) -> Optional[str]:
    """Category named by a bare sub-heading line ("Programming Languages", "SOFT SKILLS").

    A line that is itself a known skill ("Communication", "Project Management")
    is not a sub-heading.
    """
    s = line.strip().rstrip(":").strip()
    if not s or ":" in s or SPLIT_RE.search(s) or len(s.split()) > 4:
        return None
    category = category_for_label(s)
    if category is None or categorize_skill(s) != PROFESSIONAL_SKILLS:
        return None
    return category


def is_skills_subheading(line: str) -> bool:
    """Heading-like lines that stay inside the skills section."""
    if subheading_category(line) is None or section_key(line) not in (None, "skills", "other"):
        return False
    words = re.split(r"[ &/]+", line.strip().rstrip(":").lower())
    return not all(w in HEADING_WORDS for w in words)


def parse_skills_section(section: str) -> List[Skill]:
    skills: List[Skill] = []
    heading_bound = None
    for line in section.splitlines():
        line = LEADING_JUNK_RE.sub("", line.strip())
        if not line:
            continue
        sub = subheading_category(line)
        if sub:
            heading_bound = sub
            continue
        bound = heading_bound
        m = LABEL_LINE_RE.match(line)
        if m:
            label = m.group("label").strip()
            # unknown labels ("Frameworks:") are dropped and the items auto-categorized
            bound = category_for_label(label)
            line = m.group("items")
            if bound is None and categorize_skill(label) != PROFESSIONAL_SKILLS:
                # "Python: advanced" names the skill itself
                skills.append(Skill(label, categorize_skill(label)))
        for token in split_skill_tokens(line):
            skills.append(Skill(token, bound or categorize_skill(token)))
    return _dedupe_skills(skills)


# ───────────────────────────────────────── keyword scan ──
SKILL_KEYWORDS = (
    "Python", "JavaScript", "TypeScript", "Java", "C++", "C#", "Go", "Rust", "PHP", "Ruby", "Swift",
    "Kotlin", "SQL", "React", "Angular", "Vue", "Next.js", "HTML", "CSS", "Tailwind", "Bootstrap",
    "Node.js", "Express", "Django", "Flask", "FastAPI", "Spring", ".NET", "GraphQL", "PostgreSQL",
    "MySQL", "MongoDB", "Redis", "SQLite", "AWS", "Azure", "GCP", "Docker", "Kubernetes", "Terraform",
    "Jenkins", "Git", "Linux", "React Native", "Flutter", "Pandas", "NumPy", "TensorFlow", "PyTorch",
    "Tableau", "Power BI", "Excel", "Spark", "Machine Learning", "Figma", "Photoshop", "AutoCAD",
    "SolidWorks", "Jira", "Agile", "Scrum", "Salesforce", "SEO", "QuickBooks", "Leadership",
    "Communication", "Teamwork", "Problem Solving", "Project Management",
)
# Ordinary English words: only the capitalized form counts.
CASE_SENSITIVE_KEYWORDS = {"Go", "Rust", "Ruby", "Swift", "Express", "Spring", "Flask", "Excel", "Spark", "Agile"}
# Frameworks often written with a .js suffix
JS_SUFFIXED = {"React", "Angular", "Vue", "Express"}


def _keyword_re(keyword: str) -> "re.Pattern[str]":
    body = re.escape(keyword).replace(r"\ ", r"[ \t-]?")
    if keyword in JS_SUFFIXED:
        body += r"(?:\.?js)?"
    flags = 0 if keyword in CASE_SENSITIVE_KEYWORDS else re.IGNORECASE
    return re.compile(rf"(?<![A-Za-z0-9+#.]){body}(?![A-Za-z0-9+#])", flags)


KEYWORD_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = tuple((kw, _keyword_re(kw)) for kw in SKILL_KEYWORDS)


def find_skill_keywords(text: str, keywords: Sequence[str] = SKILL_KEYWORDS) -> List[str]:
    """Keywords present in text, in keyword-table order."""
    wanted = set(keywords)
    return [kw for kw, rx in KEYWORD_PATTERNS if kw in wanted and rx.search(text)]


def scan_for_skills(text: str) -> List[Skill]:
    return [Skill(kw, categorize_skill(kw)) for kw in find_skill_keywords(text)]


DEFAULT_SKILLS: Tuple[Skill, ...] = tuple(
    Skill(name, categorize_skill(name)) for name in ("JavaScript", "React", "Node.js")
)


def _dedupe_skills(skills: List[Skill]) -> List[Skill]:
    seen = set()
    out = []
    for s in skills:
        if s.name.lower() not in seen:
            out.append(s)
            seen.add(s.name.lower())
    return out


def extract_skills(text: str) -> List[Skill]:
    """Skills from the skills section, else a keyword scan, else a fixed default set."""
    text = text or ""
    section = find_section(text, SKILLS_HEADINGS, keep=is_skills_subheading)
    if section:
        skills = parse_skills_section(section)
        if skills:
            logger.debug("parsed %d skills from section", len(skills))
            return skills
    skills = scan_for_skills(text)
    if skills:
        logger.debug("keyword scan found %d skills", len(skills))
        return skills
    logger.debug("no skills found; using defaults")
    return list(DEFAULT_SKILLS)

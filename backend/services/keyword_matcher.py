"""Keyword matching of job-description keywords against resume text.

Each keyword is tried against three tiers in order, first hit wins:
exact (word-boundary search), fuzzy (Porter stems and rapidfuzz ratio
over resume n-grams), and semantic (controlled synonym vocabulary).
"""

import logging
import re

from nltk.stem import PorterStemmer
from pydantic import ValidationError as PydanticValidationError
from rapidfuzz import fuzz, process

from models.schemas.keywords import CountPair, ExtractedKeyword, KeywordAnalysisResult
from services.bullet_extractor import BULLET_MARKERS
from services.errors import InvalidInputError
from services.scoring.keyword_score import calculate_keyword_score
from services.scoring.rounding import round_half_up
from services.section_parser import parse_sections

logger = logging.getLogger(__name__)

_stemmer = PorterStemmer()

# ---------------------------------------------------------------------------
# Skill synonym mapping: aliases -> canonical form
# Two terms with the same canonical form are a semantic match
# ---------------------------------------------------------------------------
SKILL_SYNONYMS: dict[str, str] = {
    # JavaScript ecosystem
    "js": "javascript", "es6": "javascript", "ecmascript": "javascript",
    "ts": "typescript",
    "react.js": "react", "reactjs": "react",
    "vue.js": "vue", "vuejs": "vue",
    "angular.js": "angular", "angularjs": "angular",
    "node": "node.js", "nodejs": "node.js",
    "next": "next.js", "nextjs": "next.js",
    "express.js": "express", "expressjs": "express",
    # Python ecosystem
    "py": "python", "python3": "python",
    "sklearn": "scikit-learn",
    "tensor flow": "tensorflow",
    "torch": "pytorch",
    "fast api": "fastapi",
    # Cloud & DevOps
    "k8s": "kubernetes", "kube": "kubernetes",
    "amazon web services": "aws", "amazon aws": "aws",
    "google cloud": "gcp", "google cloud platform": "gcp",
    "microsoft azure": "azure",
    "cicd": "ci/cd", "ci cd": "ci/cd",
    "continuous integration": "ci/cd", "continuous delivery": "ci/cd",
    "continuous deployment": "ci/cd",
    "github action": "github actions", "gh actions": "github actions",
    "docker compose": "docker",
    "infrastructure as code": "iac",
    # Databases
    "postgres": "postgresql", "pg": "postgresql",
    "mongo": "mongodb", "mongo db": "mongodb",
    "my sql": "mysql",
    "ms sql": "sql server", "mssql": "sql server",
    "dynamo": "dynamodb", "dynamo db": "dynamodb",
    # Languages
    "c sharp": "c#", "csharp": "c#",
    "cpp": "c++", "c plus plus": "c++",
    "golang": "go",
    "rb": "ruby",
    # AI/ML
    "ml": "machine learning", "ai/ml": "machine learning",
    "dl": "deep learning",
    "nlp": "natural language processing",
    "cv": "computer vision",
    "gen ai": "generative ai", "genai": "generative ai",
    "large language model": "llm", "large language models": "llm", "llms": "llm",
    # Tools & methodologies
    "vs code": "vscode", "visual studio code": "vscode",
    "rest api": "rest", "restful": "rest", "rest apis": "rest", "restful apis": "rest",
    "graph ql": "graphql",
    "pm": "project management", "project mgmt": "project management",
    "agile methodology": "agile", "agile/scrum": "agile",
    "oop": "object-oriented programming",
    "object oriented programming": "object-oriented programming",
    "ux": "user experience", "ui": "user interface",
}

# Aliases that are also everyday words or abbreviations ("next release",
# "2 PM", "my CV"). They resolve a JD keyword but never count as resume evidence.
AMBIGUOUS_ALIASES: frozenset[str] = frozenset({
    "node", "next", "ts", "py", "torch", "pg", "dynamo", "rb",
    "ml", "dl", "cv", "pm", "ux", "ui",
})

# Concept groups: a keyword is satisfied semantically when any member appears
RELATED_TERMS: dict[str, frozenset[str]] = {
    "agile": frozenset({"scrum", "kanban", "sprint planning", "sprints"}),
    "cloud computing": frozenset({"aws", "azure", "gcp", "cloud"}),
    "containerization": frozenset({"docker", "kubernetes", "containers"}),
    "version control": frozenset({"git", "github", "gitlab", "bitbucket"}),
    "relational databases": frozenset({"postgresql", "mysql", "sql server", "oracle", "sqlite"}),
    "nosql": frozenset({"mongodb", "dynamodb", "cassandra", "redis", "couchbase"}),
    "frontend development": frozenset({"react", "vue", "angular", "svelte"}),
    "automated testing": frozenset({"pytest", "jest", "junit", "unit tests", "integration tests"}),
    "iac": frozenset({"terraform", "cloudformation", "pulumi", "ansible"}),
    "leadership": frozenset({"led", "mentored", "managed a team", "team lead"}),
    "communication": frozenset({"presented", "stakeholders", "cross-functional"}),
    "problem-solving": frozenset({"troubleshooting", "debugging", "root cause"}),
    "data analysis": frozenset({"analytics", "pandas", "sql", "tableau", "power bi"}),
    "machine learning": frozenset({"scikit-learn", "tensorflow", "pytorch", "xgboost"}),
}

# Fuzzy match threshold (0-100). 85+ catches "Postgres" -> "PostgreSQL"
# without pairing ordinary words such as "reach" with "react".
FUZZY_THRESHOLD = 85
_MIN_FUZZY_LENGTH = 3
_CONTEXT_CHARS = 120


def _normalize(text: str) -> str:
    """Lower-case, drop punctuation except tech-term characters."""
    # Strip sentence-ending periods but keep dots in tech terms like "node.js"
    text = re.sub(r"\.(\s|$)", " ", text.lower())
    return re.sub(r"[^a-z0-9.#+/ -]", " ", text)


def _canonicalize(term: str) -> str:
    """Resolve a term to its canonical form via synonym dictionary."""
    lower = " ".join(term.lower().split())
    return SKILL_SYNONYMS.get(lower, lower)


def _canonicalize_resume_term(term: str) -> str:
    lower = " ".join(term.lower().split())
    if lower in AMBIGUOUS_ALIASES:
        return lower
    return SKILL_SYNONYMS.get(lower, lower)


def _stem_phrase(phrase: str) -> str:
    return " ".join(_stemmer.stem(w) for w in phrase.split())


def _exact_pattern(keyword: str) -> re.Pattern:
    """Case-insensitive, word-boundary-aware pattern for a keyword.

    Boundaries are checked with lookarounds so terms ending in symbols
    ("c++", "c#", "node.js") still match.
    """
    parts = [re.escape(p) for p in keyword.strip().split()]
    body = r"\s+".join(parts)
    return re.compile(rf"(?<![A-Za-z0-9]){body}(?![A-Za-z0-9+#])", re.IGNORECASE)


class _ResumeIndex:
    """Pre-computed views of one resume used by every keyword lookup."""

    def __init__(self, resume_text: str):
        self.text = resume_text
        self.sections = parse_sections(resume_text) if resume_text.strip() else {}
        words = _normalize(resume_text).split()
        self.ngrams: dict[int, list[str]] = {}
        for n in (1, 2, 3):
            self.ngrams[n] = [" ".join(words[i:i + n]) for i in range(len(words) - n + 1)]
        self.stemmed: set[str] = {
            _stem_phrase(term) for grams in self.ngrams.values() for term in grams
        }
        self.canonical: set[str] = {
            _canonicalize_resume_term(term) for grams in self.ngrams.values() for term in grams
        }

    def find(self, term: str) -> re.Match | None:
        return _exact_pattern(term).search(self.text)


# ---------------------------------------------------------------------------
# Tier lookups. Each returns the resume term that satisfied the keyword.
# ---------------------------------------------------------------------------

def _match_exact(keyword: str, index: _ResumeIndex) -> str | None:
    match = index.find(keyword)
    return match.group() if match else None


def _match_fuzzy(keyword: str, index: _ResumeIndex) -> str | None:
    normalized = " ".join(_normalize(keyword).split())
    if not normalized:
        return None

    n_words = len(normalized.split())
    candidates = index.ngrams.get(n_words, [])

    # 1. Stemmed phrase match ("optimizing" ~ "optimized")
    stemmed = _stem_phrase(normalized)
    if stemmed in index.stemmed:
        for term in candidates:
            if _stem_phrase(term) == stemmed:
                return term

    # 2. Levenshtein ratio for typos and close variants
    if len(normalized) >= _MIN_FUZZY_LENGTH:
        pool = [t for t in candidates if len(t) >= _MIN_FUZZY_LENGTH]
        # "java script" vs "javascript": also compare against n+1 grams joined
        if n_words == 1:
            pool += [t.replace(" ", "") for t in index.ngrams.get(2, [])]
        best = process.extractOne(
            normalized, pool, scorer=fuzz.ratio, score_cutoff=FUZZY_THRESHOLD
        )
        if best is not None:
            return best[0]
    return None


def _match_semantic(keyword: str, index: _ResumeIndex) -> str | None:
    canon = _canonicalize(keyword)

    # Shared canonical form ("K8s" ~ "Kubernetes")
    if canon in index.canonical:
        if index.find(canon):
            return canon
        for alias, target in SKILL_SYNONYMS.items():
            if target == canon and alias not in AMBIGUOUS_ALIASES and index.find(alias):
                return alias

    # Concept group membership ("Agile" ~ "Scrum")
    for related in sorted(RELATED_TERMS.get(canon, ())):
        if index.find(related):
            return related
    return None


_TIERS = (
    ("exact", _match_exact),
    ("fuzzy", _match_fuzzy),
    ("semantic", _match_semantic),
)

_SECTION_PLACEMENT = {
    "skills": "skills_section",
    "summary": "summary",
    "education": "education",
    "projects": "projects",
}


def _locate(term: str, index: _ResumeIndex) -> tuple[str | None, str]:
    """Return (context line, placement) for a matched resume term."""
    pattern = _exact_pattern(term)
    match = pattern.search(index.text)
    if match is None:
        return None, "other"

    line_start = index.text.rfind("\n", 0, match.start()) + 1
    line_end = index.text.find("\n", match.end())
    line = index.text[line_start: line_end if line_end != -1 else len(index.text)].strip()
    context = line[:_CONTEXT_CHARS]

    for section_name, body in index.sections.items():
        if pattern.search(body) is None:
            continue
        if section_name == "experience":
            stripped = line.lstrip()
            is_bullet = bool(stripped) and stripped[0] in BULLET_MARKERS
            return context, "experience_bullet" if is_bullet else "experience_paragraph"
        return context, _SECTION_PLACEMENT.get(section_name, "other")
    return context, "other"


def _coerce_keywords(job_keywords) -> list[ExtractedKeyword]:
    if not isinstance(job_keywords, (list, tuple)):
        raise InvalidInputError("Job keywords must be a list")
    keywords = []
    for item in job_keywords:
        if isinstance(item, ExtractedKeyword):
            keywords.append(item)
            continue
        try:
            keywords.append(ExtractedKeyword.model_validate(item))
        except PydanticValidationError as e:
            raise InvalidInputError(f"Invalid keyword entry: {item!r}") from e
    return keywords


def match_keywords(job_keywords, resume_text: str) -> KeywordAnalysisResult:
    """Classify every job keyword as matched (exact/fuzzy/semantic) or missing.

    Raises InvalidInputError when resume_text is not a string or a keyword
    entry does not validate. Input keywords are never mutated; matched
    entries are annotated copies.
    """
    if not isinstance(resume_text, str):
        raise InvalidInputError(
            f"Resume text must be a string, got {type(resume_text).__name__}"
        )
    keywords = _coerce_keywords(job_keywords)
    if not keywords:
        return KeywordAnalysisResult(matched=[], missing=[], match_rate=0)

    index = _ResumeIndex(resume_text)
    matched: list[ExtractedKeyword] = []
    missing: list[ExtractedKeyword] = []

    tiers = _TIERS if resume_text.strip() else ()

    for kw in keywords:
        hit = None
        for match_type, finder in tiers:
            term = finder(kw.keyword, index)
            if term is not None:
                hit = (match_type, term)
                break

        if hit is None:
            missing.append(kw.model_copy(update={"match_type": None, "placement": None}))
            continue

        match_type, term = hit
        context, placement = _locate(term, index)
        matched.append(
            kw.model_copy(update={"match_type": match_type, "context": context, "placement": placement})
        )

    total = len(keywords)
    required = [k for k in keywords if k.requirement == "required"]
    preferred = [k for k in keywords if k.requirement == "preferred"]
    result = KeywordAnalysisResult(
        matched=matched,
        missing=missing,
        match_rate=round_half_up(100 * len(matched) / total),
        required_count=CountPair(
            matched=sum(1 for k in matched if k.requirement == "required"),
            total=len(required),
        ),
        preferred_count=CountPair(
            matched=sum(1 for k in matched if k.requirement == "preferred"),
            total=len(preferred),
        ),
    )
    result.keyword_score = calculate_keyword_score(result).score

    logger.debug(
        "Matched %d/%d keywords (%s)",
        len(matched),
        total,
        ", ".join(f"{k.keyword}:{k.match_type}" for k in matched),
    )
    return result

"""Regex signal extraction from résumé text.

Pulls four independent signal classes out of (normalized) résumé text:
section keywords, job titles, technologies and years of experience.
Job-title and technology vocabularies are plain data tables so they can be
extended without touching the matching code.
"""

import logging
import re
from dataclasses import dataclass

from models.schemas.extracted_signals import ExtractedSignals

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VocabularyEntry:
    """A regex (without word boundaries) and the canonical label it yields."""
    pattern: str
    label: str


# ---------------------------------------------------------------------------
# Section keywords
# Each section runs from its label to the next recognised label or end of text
# ---------------------------------------------------------------------------
SECTION_LABELS: dict[str, str] = {
    "skills": r"skills?",
    "education": r"education",
    "experience": r"experience",
    "projects": r"projects?",
}

_SECTION_COMPILED: dict[str, re.Pattern] = {}
for _section, _label in SECTION_LABELS.items():
    _terminators = "|".join(p for s, p in SECTION_LABELS.items() if s != _section)
    _SECTION_COMPILED[_section] = re.compile(
        rf"{_label}:?(.+?)(?:{_terminators}|\Z)", re.IGNORECASE | re.DOTALL
    )

_TOKEN_SPLIT_RE = re.compile(r"[,\s]+")

STOP_WORDS: frozenset[str] = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "has", "he",
    "in", "is", "it", "its", "of", "on", "that", "the", "to", "was", "were",
    "will", "with", "i", "am",
    # Resume filler
    "years", "year", "experience", "using", "used", "developed", "created",
})

# ---------------------------------------------------------------------------
# Job titles: seniority/domain prefix x role suffix
# ---------------------------------------------------------------------------
_TITLE_PREFIXES: tuple[tuple[str, str], ...] = (
    ("frontend", r"front[\s-]?end"),
    ("backend", r"back[\s-]?end"),
    ("full stack", r"full[\s-]?stack"),
    ("software", r"software"),
    ("web", r"web"),
)
_TITLE_ROLES: tuple[str, ...] = ("developer", "engineer")

JOB_TITLE_VOCABULARY: tuple[VocabularyEntry, ...] = tuple(
    VocabularyEntry(rf"{prefix_pattern}\s+{role}s?", f"{prefix} {role}")
    for prefix, prefix_pattern in _TITLE_PREFIXES
    for role in _TITLE_ROLES
)

# ---------------------------------------------------------------------------
# Technologies
# ---------------------------------------------------------------------------
TECHNOLOGY_VOCABULARY: tuple[VocabularyEntry, ...] = (
    VocabularyEntry(r"react(?:\.?js)?", "react"),
    VocabularyEntry(r"node(?:\.?js)?", "node"),
    VocabularyEntry(r"express(?:\.?js)?", "express"),
    VocabularyEntry(r"javascript", "javascript"),
    VocabularyEntry(r"html5?", "html"),
    VocabularyEntry(r"css3?", "css"),
    VocabularyEntry(r"mongo(?:db)?", "mongodb"),
    VocabularyEntry(r"firebase", "firebase"),
    VocabularyEntry(r"git", "git"),
    VocabularyEntry(r"github", "github"),
    VocabularyEntry(r"tailwind(?:css)?", "tailwind"),
    VocabularyEntry(r"redux", "redux"),
    VocabularyEntry(r"next\.?js", "next.js"),
)

# "3.5 years of experience", "10 yrs experience", "5+ years experience"
YEARS_OF_EXPERIENCE_RE = re.compile(
    r"(\d+(?:\.\d+)?)\+?\s*(?:years?|yrs?)\s*(?:of)?\s*experience",
    re.IGNORECASE,
)


def compile_vocabulary(
    entries: tuple[VocabularyEntry, ...] | list[VocabularyEntry],
) -> list[tuple[re.Pattern, str]]:
    """Compile vocabulary entries into word-bounded, case-insensitive patterns."""
    return [
        (re.compile(rf"\b(?:{entry.pattern})\b", re.IGNORECASE), entry.label)
        for entry in entries
    ]


_JOB_TITLE_COMPILED = compile_vocabulary(JOB_TITLE_VOCABULARY)
_TECHNOLOGY_COMPILED = compile_vocabulary(TECHNOLOGY_VOCABULARY)


def _dedupe(items: list[str]) -> tuple[str, ...]:
    """Deduplicate keeping first-seen order."""
    return tuple(dict.fromkeys(items))


def match_vocabulary(text: str, compiled: list[tuple[re.Pattern, str]]) -> tuple[str, ...]:
    """Return labels of all non-overlapping vocabulary matches in text order.

    Where two entries overlap, the one starting first wins, then the longer.
    """
    spans: list[tuple[int, int, str]] = []
    for pattern, label in compiled:
        for match in pattern.finditer(text):
            spans.append((match.start(), match.end(), label))
    spans.sort(key=lambda s: (s[0], -(s[1] - s[0])))

    labels: list[str] = []
    last_end = -1
    for start, end, label in spans:
        if start < last_end:
            continue
        labels.append(label)
        last_end = end
    return _dedupe(labels)


def _tokenize_section(section_text: str) -> list[str]:
    tokens = (t.strip() for t in _TOKEN_SPLIT_RE.split(section_text))
    return [t for t in tokens if len(t) > 1 and t not in STOP_WORDS]


def extract_section_keywords(text: str) -> tuple[str, ...]:
    """Collect keywords from the skills, education, experience and projects sections.

    Sections are matched independently on the first occurrence of each
    label, so text can be captured by more than one section.
    """
    lowered = text.lower()
    keywords: list[str] = []
    for section, pattern in _SECTION_COMPILED.items():
        match = pattern.search(lowered)
        if match:
            keywords.extend(_tokenize_section(match.group(1)))
    return _dedupe(keywords)


def extract_job_titles(text: str) -> tuple[str, ...]:
    """Extract canonical job titles such as 'backend developer'."""
    return match_vocabulary(text.lower(), _JOB_TITLE_COMPILED)


def extract_technologies(text: str) -> tuple[str, ...]:
    """Extract known technologies such as 'react' or 'next.js'."""
    return match_vocabulary(text.lower(), _TECHNOLOGY_COMPILED)


def extract_years_of_experience(text: str) -> float | None:
    """Return the first stated years of experience, or None.

    Only the first match counts, even if the text states several.
    """
    match = YEARS_OF_EXPERIENCE_RE.search(text)
    return float(match.group(1)) if match else None


def extract_signals(text: str) -> ExtractedSignals:
    """Extract all résumé signals from normalized text."""
    lowered = text.lower()
    signals = ExtractedSignals(
        job_titles=extract_job_titles(lowered),
        technologies=extract_technologies(lowered),
        years_of_experience=extract_years_of_experience(lowered),
        raw_section_keywords=extract_section_keywords(lowered),
    )
    logger.debug(
        "Extracted %d titles, %d technologies, years=%s, %d section keywords",
        len(signals.job_titles),
        len(signals.technologies),
        signals.years_of_experience,
        len(signals.raw_section_keywords),
    )
    return signals

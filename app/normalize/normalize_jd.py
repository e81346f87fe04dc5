from __future__ import annotations

import re

from app.schemas.normalized import NormalizedJD

from .utils import enumerate_lines, normalize_line, normalize_phrase, strip_bullet_prefix

_TITLE_MARKER_RE = re.compile(
    r"^\s*(?:job\s+title|position|role|title)\s*:\s*(?P<title>[^\n.;|]+)",
    re.IGNORECASE | re.MULTILINE,
)
_SEEKING_RE = re.compile(
    r"\bseeking\s+(?:an?\s+|the\s+)?(?P<title>[A-Za-z][\w/&+#\- ]*?)"
    r"(?=\s+(?:to|who|with|for|that|in|at|on)\b|[\n.,;:!]|$)",
    re.IGNORECASE,
)
# A "seeking ..." phrase only names a title when it ends in one of these.
_ROLE_NOUNS = frozenset(
    {
        "accountant", "administrator", "analyst", "architect", "assistant", "associate", "consultant",
        "coordinator", "designer", "developer", "director", "editor", "engineer", "executive", "head",
        "intern", "lead", "manager", "officer", "owner", "programmer", "recruiter", "representative",
        "researcher", "scientist", "specialist", "strategist", "technician", "tester", "writer",
    }
)
# Header form ("Requirements:") starts a bulleted block; inline form carries its items.
_REQUIRED_MARKER_RE = re.compile(
    r"^(?:required(?:\s+(?:skills|qualifications|technologies))?"
    r"|requirements"
    r"|must[\s-]+haves?"
    r"|must\s+have(?:\s+skills)?)\s*(?::\s*(?P<items>.*))?$",
    re.IGNORECASE,
)
_ITEM_SPLIT_RE = re.compile(r",|;|\band\b|\bor\b|&", re.IGNORECASE)
_FILLER_WORDS = frozenset(
    {
        "a", "an", "the", "of", "in", "with", "on", "at", "for", "to", "s", "plus", "years", "year",
        "experience", "experienced", "knowledge", "proficiency", "proficient", "familiarity", "familiar",
        "understanding", "expertise", "skills", "skill", "ability", "working", "hands", "strong", "solid",
        "good", "excellent", "deep", "proven", "demonstrated", "extensive", "advanced", "minimum", "least",
        "practical", "professional", "relevant", "related",
    }
)
_MAX_PHRASE_TOKENS = 3
_MAX_TITLE_WORDS = 8


def _clean_title(raw: str) -> str | None:
    title = normalize_line(raw).strip(" -:")
    if not title or len(title.split()) > _MAX_TITLE_WORDS:
        return None
    return title


def extract_job_title(text: str) -> str | None:
    """Return the job title phrase when the posting names it explicitly."""
    match = _TITLE_MARKER_RE.search(text)
    if match:
        title = _clean_title(match.group("title"))
        if title:
            return title
    match = _SEEKING_RE.search(text)
    if match:
        title = _clean_title(match.group("title"))
        if title and title.split()[-1].lower() in _ROLE_NOUNS:
            return title
    return None


def required_item_terms(raw: str) -> tuple[str, ...]:
    """Reduce one requirement item to the terms a resume must contain.

    Short clean items stay a phrase ("machine learning"). Prose such as
    "3+ years of experience with Python" loses its filler and numbers, and
    whatever remains is matched token by token.
    """
    tokens = normalize_phrase(raw).split()
    kept = [token for token in tokens if token not in _FILLER_WORDS and not token.isdigit()]
    if not kept:
        return ()
    if len(kept) == len(tokens) and len(kept) <= _MAX_PHRASE_TOKENS:
        return (" ".join(kept),)
    return tuple(kept)


def extract_required_terms(text: str) -> tuple[str, ...]:
    """Collect terms from explicitly marked requirement lists, first-seen order."""
    terms: list[str] = []
    seen: set[str] = set()
    in_block = False
    for _, raw_line in enumerate_lines(text):
        normalized = normalize_line(raw_line)
        if not normalized:
            continue
        line = strip_bullet_prefix(normalized)
        match = _REQUIRED_MARKER_RE.match(line)
        if match:
            items = (match.group("items") or "").strip()
            in_block = not items
        elif in_block and line != normalized:
            items = line
        else:
            in_block = False
            continue

        for fragment in _ITEM_SPLIT_RE.split(items):
            for term in required_item_terms(fragment):
                if term in seen:
                    continue
                seen.add(term)
                terms.append(term)
    return tuple(terms)


def normalize_jd(text: str | None) -> NormalizedJD | None:
    if text is None or not text.strip():
        return None
    return NormalizedJD(
        text=text,
        title=extract_job_title(text),
        required_terms=extract_required_terms(text),
    )

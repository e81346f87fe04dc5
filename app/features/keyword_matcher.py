from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

from app.normalize.utils import strip_punctuation
from app.schemas.normalized import KeywordStats

TokenEquals = Callable[[str, str], bool]

DEFAULT_STOP_WORDS = frozenset(
    {
        "a", "an", "and", "or", "but", "the", "in", "on", "at", "to", "for", "with", "by", "of",
        "is", "are", "was", "were", "will", "be", "have", "has", "had", "can", "should", "would",
        "could", "may", "must", "shall",
    }
)


def tokenize(text: str, stop_words: Iterable[str] = ()) -> tuple[str, ...]:
    """Lower-case, strip punctuation, split on whitespace, drop stop words, dedupe in order."""
    excluded = set(stop_words)
    tokens: list[str] = []
    seen: set[str] = set()
    for token in strip_punctuation(text or "").split():
        if token in excluded or token in seen:
            continue
        seen.add(token)
        tokens.append(token)
    return tuple(tokens)


@dataclass(frozen=True)
class KeywordMatcher:
    stop_words: frozenset[str] = DEFAULT_STOP_WORDS
    max_missing_keywords: int = 10
    token_equals: TokenEquals | None = field(default=None, compare=False)

    def keyword_set(self, job_description: str) -> tuple[str, ...]:
        return tokenize(job_description, self.stop_words)

    def document_tokens(self, document_text: str) -> tuple[str, ...]:
        return tokenize(document_text, self.stop_words)

    def _contains(self, keyword: str, document_tokens: tuple[str, ...], token_set: frozenset[str]) -> bool:
        if self.token_equals is None:
            return keyword in token_set
        return any(self.token_equals(keyword, token) for token in document_tokens)

    def match(self, job_description: str, document_text: str) -> KeywordStats:
        keywords = self.keyword_set(job_description)
        if not keywords:
            return KeywordStats()

        document_tokens = self.document_tokens(document_text)
        token_set = frozenset(document_tokens)
        found: list[str] = []
        missing: list[str] = []
        for keyword in keywords:
            if self._contains(keyword, document_tokens, token_set):
                found.append(keyword)
            else:
                missing.append(keyword)

        return KeywordStats(
            keywords=keywords,
            found=tuple(found),
            missing=tuple(missing[: max(self.max_missing_keywords, 0)]),
            match_ratio=len(found) / len(keywords),
        )

    def contains_phrase(self, phrase: str, document_text: str) -> bool:
        """True when every token of ``phrase`` appears in the document, in order."""
        phrase_tokens = strip_punctuation(phrase).split()
        if not phrase_tokens:
            return False
        document_tokens = strip_punctuation(document_text).split()
        width = len(phrase_tokens)
        for start in range(len(document_tokens) - width + 1):
            window = document_tokens[start:start + width]
            if all(self._tokens_equal(expected, actual) for expected, actual in zip(phrase_tokens, window)):
                return True
        return False

    def _tokens_equal(self, left: str, right: str) -> bool:
        if self.token_equals is None:
            return left == right
        return self.token_equals(left, right)

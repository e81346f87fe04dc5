from __future__ import annotations

import re

_BULLET_CHARS = "•◦▪▫●○■□◆◇▶►-–—*·"
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]|(?:\d+[\.\)]))\s+")
_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_END_RE = re.compile(r"[.!?]+(?=\s|$)")
_WORD_RE = re.compile(r"\S+")


def enumerate_lines(text: str) -> list[tuple[int, str]]:
    return [(index + 1, line) for index, line in enumerate(text.splitlines())]


def normalize_line(line: str) -> str:
    return _WHITESPACE_RE.sub(" ", line).strip()


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line).strip()


def strip_punctuation(text: str) -> str:
    """Lower-case text and replace every non-word character with a space."""
    return _PUNCTUATION_RE.sub(" ", text.lower())


def normalize_phrase(text: str) -> str:
    return normalize_line(strip_punctuation(text))


def split_sentences(text: str) -> list[str]:
    parts = _SENTENCE_END_RE.split(text or "")
    return [normalize_line(part) for part in parts if normalize_line(part)]


def count_words(text: str) -> int:
    return len(_WORD_RE.findall(text or ""))

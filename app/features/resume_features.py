from __future__ import annotations

import math
import re
from datetime import date

from pydantic import BaseModel, ConfigDict

from app.normalize.normalize_resume import document_text, rendered_section_order
from app.normalize.utils import count_words, split_sentences
from app.schemas.normalized import ResumeDocument, WorkExperienceEntry

_QUANTIFIED_RE = re.compile(r"\d|%")


class ResumeFeatures(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    word_count: int
    estimated_pages: int
    summary_sentence_count: int
    quantified_achievement_count: int
    skill_count: int
    section_order: tuple[str, ...]
    chronological: bool


def is_quantified(achievement: str) -> bool:
    return bool(_QUANTIFIED_RE.search(achievement))


def _recency_key(entry: WorkExperienceEntry) -> date:
    if entry.is_current:
        return date.max
    return entry.end_date or date.min


def is_reverse_chronological(entries: tuple[WorkExperienceEntry, ...]) -> bool:
    keys = [_recency_key(entry) for entry in entries]
    return all(earlier >= later for earlier, later in zip(keys, keys[1:]))


def estimate_pages(word_count: int, words_per_page: int) -> int:
    if word_count <= 0:
        return 0
    return math.ceil(word_count / max(words_per_page, 1))


def build_resume_features(document: ResumeDocument, *, words_per_page: int = 500) -> ResumeFeatures:
    text = document_text(document)
    word_count = count_words(text)
    quantified = sum(
        1
        for entry in document.work_experience
        for achievement in entry.achievements
        if is_quantified(achievement)
    )

    return ResumeFeatures(
        text=text,
        word_count=word_count,
        estimated_pages=estimate_pages(word_count, words_per_page),
        summary_sentence_count=len(split_sentences(document.summary_text)),
        quantified_achievement_count=quantified,
        skill_count=len(document.skills.flat()),
        section_order=rendered_section_order(document),
        chronological=is_reverse_chronological(document.work_experience),
    )

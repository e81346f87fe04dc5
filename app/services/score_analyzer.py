from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from app.schemas.ats import BandLevel, BandRange, Benchmarks, Issue, ScoreAnalysis

_MAX_KEYWORDS_IN_ADVICE = 10


@dataclass(frozen=True)
class Band:
    key: str
    level: BandLevel
    min: int
    max: int
    description: str
    recommendations: tuple[str, ...]
    next_steps: tuple[str, ...]

    def contains(self, score: int) -> bool:
        return self.min <= score <= self.max


_BAND_TEXT: dict[str, tuple[BandLevel, str, tuple[str, ...], tuple[str, ...]]] = {
    "excellent": (
        "Excellent",
        "Your CV is highly optimized for ATS systems and should pass most automated screenings successfully.",
        (
            "Your CV is in excellent shape for ATS systems",
            "Consider minor tweaks based on specific job descriptions",
            "Keep updating content for different roles",
        ),
        (
            "Tailor keywords for each application",
            "Keep content fresh and updated",
            "Monitor application success rates",
        ),
    ),
    "good": (
        "Good",
        "Your CV is well-optimized for ATS but has room for improvement in certain areas.",
        (
            "Address any keyword gaps identified",
            "Improve quantification of achievements",
            "Optimize professional summary",
        ),
        (
            "Review and address flagged issues",
            "Add more relevant keywords",
            "Enhance achievement descriptions",
        ),
    ),
    "fair": (
        "Fair",
        "Your CV needs significant improvements to be fully ATS-compatible.",
        (
            "Focus on keyword optimization",
            "Improve content structure and formatting",
            "Add more quantified achievements",
        ),
        (
            "Restructure CV sections",
            "Add missing keywords from job descriptions",
            "Quantify all achievements with numbers",
        ),
    ),
    "poor": (
        "Needs Improvement",
        "Your CV requires major revisions to pass ATS screening effectively.",
        (
            "Complete restructuring needed",
            "Add essential keywords and skills",
            "Improve formatting for ATS compatibility",
        ),
        (
            "Start with a fresh ATS-optimized template",
            "Research industry keywords thoroughly",
            "Follow ATS formatting guidelines strictly",
        ),
    ),
}


def build_bands(thresholds: Mapping[str, int]) -> tuple[Band, ...]:
    """Contiguous bands from the excellent/good/fair lower bounds, highest first."""
    lower_bounds = {
        "excellent": thresholds["excellent"],
        "good": thresholds["good"],
        "fair": thresholds["fair"],
        "poor": 0,
    }
    bands: list[Band] = []
    upper = 100
    for key in ("excellent", "good", "fair", "poor"):
        level, description, recommendations, next_steps = _BAND_TEXT[key]
        bands.append(
            Band(
                key=key,
                level=level,
                min=lower_bounds[key],
                max=upper,
                description=description,
                recommendations=recommendations,
                next_steps=next_steps,
            )
        )
        upper = lower_bounds[key] - 1
    return tuple(bands)


class ScoreAnalyzer:
    def __init__(self, thresholds: Mapping[str, int]):
        self._bands = build_bands(thresholds)

    @property
    def bands(self) -> tuple[Band, ...]:
        return self._bands

    def band_for(self, score: int) -> Band:
        if isinstance(score, bool) or not isinstance(score, int):
            raise ValueError(f"score must be an integer, got {score!r}")
        if not 0 <= score <= 100:
            raise ValueError(f"score must be between 0 and 100, got {score}")
        for band in self._bands:
            if score >= band.min:
                return band
        return self._bands[-1]

    def benchmarks(self) -> Benchmarks:
        ranges = {band.key: BandRange(min=band.min, max=band.max) for band in self._bands}
        return Benchmarks(**ranges)

    def analyze(self, score: int) -> ScoreAnalysis:
        band = self.band_for(score)
        return ScoreAnalysis(
            score=score,
            level=band.level,
            description=band.description,
            recommendations=list(band.recommendations),
            next_steps=list(band.next_steps),
            benchmarks=self.benchmarks(),
        )

    def recommendations(
        self,
        score: int,
        issues: Iterable[Issue] = (),
        missing_keywords: Iterable[str] = (),
    ) -> list[str]:
        """Issue-specific advice first, then the band's generic recommendations."""
        issue_list = list(issues)
        missing = list(missing_keywords)[:_MAX_KEYWORDS_IN_ADVICE]
        ordered: list[str] = []
        if missing and any(issue.category == "Keywords" for issue in issue_list):
            ordered.append(f"Add missing keywords from the job description: {', '.join(missing)}")
        ordered.extend(issue.solution for issue in issue_list)
        ordered.extend(self.band_for(score).recommendations)
        return list(dict.fromkeys(ordered))

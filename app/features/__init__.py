from .keyword_matcher import KeywordMatcher, tokenize
from .resume_features import ResumeFeatures, build_resume_features, is_quantified, is_reverse_chronological

__all__ = [
    "KeywordMatcher",
    "tokenize",
    "ResumeFeatures",
    "build_resume_features",
    "is_quantified",
    "is_reverse_chronological",
]

"""Detection services package - crisis signal extractors."""

from haven.services.detection.keyword_extractor import (
    KeywordSignalExtractor,
    contains_phrase,
    normalize_text,
)
from haven.services.detection.sentiment_scorer import LexicalSentimentScorer
from haven.services.detection.pattern_analyzer import PatternHistoryAnalyzer

__all__ = [
    "KeywordSignalExtractor",
    "LexicalSentimentScorer",
    "PatternHistoryAnalyzer",
    "contains_phrase",
    "normalize_text",
]

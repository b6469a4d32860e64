"""
Pattern History Analyzer

Inspects recent user turns for repeated distress themes and
escalating distress density.

CLINICAL_VALIDATION_REQUIRED: Theme lists, windows and the
escalation density threshold need psychologist input.
"""

from typing import Optional, Sequence

from haven.config.settings import DetectionSettings
from haven.domain.enums.crisis_type import PatternType
from haven.domain.models.crisis_assessment import PatternResult
from haven.services.detection.keyword_extractor import normalize_text


class PatternHistoryAnalyzer:
    """
    Cross-turn distress pattern detection.

    Two independent checks, both additive to the pattern score:
    1. Repeated theme: a theme in the current text that also appears
       in enough recent turns
    2. Escalation: distress density strictly rising over the most
       recent turns (overrides the repeated-theme type)
    """

    DISTRESS_THEMES: dict[str, tuple[str, ...]] = {
        "loneliness": ("alone", "lonely", "isolated", "nobody"),
        "hopelessness": ("hopeless", "no point", "give up", "useless"),
        "physical_pain": ("pain", "hurt", "ache", "sick"),
        "anxiety": ("anxious", "worried", "scared", "panic"),
        "depression": ("sad", "depressed", "empty", "numb"),
    }

    DISTRESS_WORDS: frozenset[str] = frozenset({
        "sad", "depressed", "anxious", "worried", "scared", "hopeless",
        "alone", "tired", "overwhelmed", "stressed", "pain", "hurt",
    })

    REPEATED_THEME_SCORE = 0.3
    ESCALATION_SCORE = 0.4

    def __init__(self, settings: Optional[DetectionSettings] = None) -> None:
        """
        Initialize analyzer.

        Args:
            settings: Detection settings (windows and thresholds)
        """
        settings = settings or DetectionSettings()
        self._window = settings.pattern_window
        self._theme_repeat_threshold = settings.theme_repeat_threshold
        self._escalation_window = settings.escalation_window
        self._escalation_min_density = settings.escalation_min_density

    def analyze(
        self,
        text: str,
        history: Optional[Sequence[str]] = None,
    ) -> PatternResult:
        """
        Analyze the current text against prior user turns.

        Args:
            text: Normalized current text
            history: Prior user utterances, oldest first

        Returns:
            PatternResult with score and dominant pattern type
        """
        if not history:
            return PatternResult()

        recent = [normalize_text(message) for message in history[-self._window:]]

        score = 0.0
        pattern_type = PatternType.NONE

        for theme in self.extract_themes(text):
            keywords = self.DISTRESS_THEMES[theme]
            occurrences = sum(
                1 for message in recent
                if any(keyword in message for keyword in keywords)
            )
            if occurrences >= self._theme_repeat_threshold:
                score += self.REPEATED_THEME_SCORE
                pattern_type = PatternType.REPEATED_DISTRESS

        densities = [self.distress_density(message) for message in recent]
        if self.is_escalating(densities):
            score += self.ESCALATION_SCORE
            pattern_type = PatternType.ESCALATING_DISTRESS

        return PatternResult(
            pattern_score=min(1.0, score),
            pattern_type=pattern_type,
        )

    def extract_themes(self, text: str) -> list[str]:
        """Distress themes present in text."""
        return [
            theme for theme, keywords in self.DISTRESS_THEMES.items()
            if any(keyword in text for keyword in keywords)
        ]

    def distress_density(self, text: str) -> float:
        """Share of tokens that are distress words."""
        tokens = text.split()
        if not tokens:
            return 0.0
        count = sum(1 for token in tokens if token in self.DISTRESS_WORDS)
        return count / len(tokens)

    def is_escalating(self, densities: Sequence[float]) -> bool:
        """
        Check the most recent densities for escalation.

        Requires at least escalation_window values, strictly increasing,
        with the last one above the minimum density.
        """
        if len(densities) < self._escalation_window:
            return False

        tail = densities[-self._escalation_window:]
        rising = all(a < b for a, b in zip(tail, tail[1:]))
        return rising and tail[-1] > self._escalation_min_density

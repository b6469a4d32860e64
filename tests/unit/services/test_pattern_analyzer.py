"""
Unit Tests for Pattern History Analyzer

Tests repeated-theme and escalation detection.
"""

import pytest

from haven.config.settings import DetectionSettings
from haven.domain.enums.crisis_type import PatternType
from haven.services.detection.pattern_analyzer import PatternHistoryAnalyzer


LONELY_HISTORY = [
    "I feel so alone",
    "Nobody understands me",
    "I am always alone",
    "I feel isolated from everyone",
    "I am so lonely",
]


class TestPatternHistoryAnalyzer:
    """Test suite for PatternHistoryAnalyzer."""

    @pytest.fixture
    def analyzer(self) -> PatternHistoryAnalyzer:
        """Create analyzer with default settings."""
        return PatternHistoryAnalyzer(DetectionSettings())

    @pytest.mark.parametrize("history", [None, []])
    def test_no_history(self, analyzer: PatternHistoryAnalyzer, history) -> None:
        """Test that missing history gives no pattern."""
        result = analyzer.analyze("i feel alone", history)

        assert result.pattern_score == 0.0
        assert result.pattern_type == PatternType.NONE

    def test_repeated_theme(self, analyzer: PatternHistoryAnalyzer) -> None:
        """Test a theme recurring in recent turns."""
        result = analyzer.analyze("i feel alone again", LONELY_HISTORY)

        assert result.pattern_score == pytest.approx(0.3)
        assert result.pattern_type == PatternType.REPEATED_DISTRESS

    def test_theme_not_in_current_text(self, analyzer: PatternHistoryAnalyzer) -> None:
        """Test history themes alone do not count."""
        result = analyzer.analyze("the weather is nice", LONELY_HISTORY)

        assert result.pattern_score == 0.0

    def test_escalation(self, analyzer: PatternHistoryAnalyzer) -> None:
        """Test strictly rising distress density."""
        history = ["i am fine today thanks", "i feel sad", "sad and anxious"]

        result = analyzer.analyze("ok", history)

        assert result.pattern_score == pytest.approx(0.4)
        assert result.pattern_type == PatternType.ESCALATING_DISTRESS

    def test_escalation_overrides_repeated_type(self, analyzer: PatternHistoryAnalyzer) -> None:
        """Test both checks add up and escalation names the pattern."""
        history = ["sad day", "so sad", "i am fine", "i feel sad", "sad and anxious"]

        result = analyzer.analyze("i am so sad", history)

        assert result.pattern_score == pytest.approx(0.7)
        assert result.pattern_type == PatternType.ESCALATING_DISTRESS

    def test_flat_density_not_escalating(self, analyzer: PatternHistoryAnalyzer) -> None:
        """Test equal densities are not escalation."""
        result = analyzer.analyze("fine", ["sad", "sad", "sad"])

        assert result.pattern_type == PatternType.NONE

    def test_too_few_turns_for_escalation(self, analyzer: PatternHistoryAnalyzer) -> None:
        """Test escalation needs three prior turns."""
        result = analyzer.analyze("fine", ["i am ok", "sad anxious"])

        assert result.pattern_score == 0.0

    def test_only_recent_window_counts(self, analyzer: PatternHistoryAnalyzer) -> None:
        """Test turns older than the window are ignored."""
        history = LONELY_HISTORY[:3] + ["the weather is nice"] * 10

        result = analyzer.analyze("i feel alone", history)

        assert result.pattern_score == 0.0

    def test_custom_repeat_threshold(self) -> None:
        """Test the repeat threshold comes from settings."""
        analyzer = PatternHistoryAnalyzer(DetectionSettings(theme_repeat_threshold=1))

        result = analyzer.analyze("i feel alone", ["nobody calls me"])

        assert result.pattern_type == PatternType.REPEATED_DISTRESS

    def test_distress_density(self, analyzer: PatternHistoryAnalyzer) -> None:
        """Test density helper."""
        assert analyzer.distress_density("sad and anxious") == pytest.approx(2 / 3)
        assert analyzer.distress_density("") == 0.0

"""Tests for the Achievement entity."""

import pytest

from talkbuddy.domain.common.exceptions import InvariantViolationError, ValidationError
from talkbuddy.domain.common.value_objects import AccuracyRate, AchievementId
from talkbuddy.domain.progress.entities import ACCURACY_CRITERION, Achievement


class TestAchievement:
    """Test suite for the best-accuracy achievement."""

    def test_for_accuracy_formats_texts(self) -> None:
        achievement = Achievement.for_accuracy(AccuracyRate(2 / 3))

        assert achievement.title == "Best accuracy 66.67%"
        assert achievement.description == "Answered 66.67% of recent problems correctly."
        assert achievement.level == pytest.approx(2 / 3)
        assert achievement.criterion == ACCURACY_CRITERION
        assert achievement.id.is_transient

    def test_is_surpassed_only_by_strictly_higher_rate(self) -> None:
        achievement = Achievement.for_accuracy(AccuracyRate(0.5))

        assert achievement.is_surpassed_by(AccuracyRate(0.51))
        assert not achievement.is_surpassed_by(AccuracyRate(0.5))
        assert not achievement.is_surpassed_by(AccuracyRate(0.2))

    def test_raise_level_rewrites_texts(self) -> None:
        achievement = Achievement.for_accuracy(AccuracyRate(0.5))

        achievement.raise_level(AccuracyRate(0.75))

        assert achievement.level == 0.75
        assert achievement.title == "Best accuracy 75.00%"
        assert achievement.description == "Answered 75.00% of recent problems correctly."

    def test_raise_level_refuses_to_lower(self) -> None:
        achievement = Achievement.for_accuracy(AccuracyRate(0.8))

        with pytest.raises(InvariantViolationError):
            achievement.raise_level(AccuracyRate(0.4))

        assert achievement.level == 0.8
        assert achievement.title == "Best accuracy 80.00%"

    def test_raise_level_refuses_equal_rate(self) -> None:
        achievement = Achievement.for_accuracy(AccuracyRate(0.8))

        with pytest.raises(InvariantViolationError):
            achievement.raise_level(AccuracyRate(0.8))

    def test_level_outside_unit_interval_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Achievement(id=AchievementId(1), title="t", description="d", level=1.5)

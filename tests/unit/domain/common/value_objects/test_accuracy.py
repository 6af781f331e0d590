"""Tests for OutcomeCounts and AccuracyRate value objects."""

import pytest

from talkbuddy.domain.common.exceptions import ValidationError
from talkbuddy.domain.common.value_objects import AccuracyRate, OutcomeCounts


class TestOutcomeCounts:
    """Test suite for OutcomeCounts value object."""

    def test_from_outcomes_counts_correct_and_total(self) -> None:
        counts = OutcomeCounts.from_outcomes([True, False, True])
        assert counts == OutcomeCounts(correct=2, total=3)

    def test_ungraded_outcomes_count_toward_total_only(self) -> None:
        counts = OutcomeCounts.from_outcomes([True, None, None])
        assert counts.correct == 1
        assert counts.total == 3

    def test_from_outcomes_accepts_generators(self) -> None:
        counts = OutcomeCounts.from_outcomes(x for x in [False, False])
        assert counts == OutcomeCounts(correct=0, total=2)

    def test_empty_history_has_zero_accuracy(self) -> None:
        assert OutcomeCounts.from_outcomes([]).accuracy == AccuracyRate(0.0)

    def test_accuracy_is_ratio(self) -> None:
        assert OutcomeCounts(correct=1, total=4).accuracy.value == pytest.approx(0.25)

    def test_negative_counts_rejected(self) -> None:
        with pytest.raises(ValidationError):
            OutcomeCounts(correct=-1, total=3)

    def test_correct_cannot_exceed_total(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            OutcomeCounts(correct=4, total=3)
        assert exc_info.value.field == "correct"

    def test_is_frozen(self) -> None:
        counts = OutcomeCounts(correct=1, total=1)
        with pytest.raises(AttributeError):
            counts.total = 2  # type: ignore[misc]


class TestAccuracyRate:
    """Test suite for AccuracyRate value object."""

    @pytest.mark.parametrize("value", [0.0, 0.5, 1.0])
    def test_accepts_unit_interval(self, value: float) -> None:
        assert AccuracyRate(value).value == value

    @pytest.mark.parametrize("value", [-0.01, 1.01])
    def test_rejects_values_outside_unit_interval(self, value: float) -> None:
        with pytest.raises(ValidationError):
            AccuracyRate(value)

    def test_from_counts_with_no_attempts_is_zero(self) -> None:
        assert AccuracyRate.from_counts(OutcomeCounts(correct=0, total=0)).value == 0.0

    def test_as_percentage_rounds_to_two_decimals(self) -> None:
        rate = AccuracyRate.from_counts(OutcomeCounts(correct=2, total=3))
        assert rate.as_percentage() == "66.67%"

    def test_as_percentage_of_whole_numbers(self) -> None:
        assert AccuracyRate(1.0).as_percentage() == "100.00%"
        assert AccuracyRate(0.0).as_percentage() == "0.00%"

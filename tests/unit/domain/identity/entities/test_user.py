"""Tests for the User entity."""

from datetime import date

import pytest

from talkbuddy.domain.common.exceptions import ValidationError
from talkbuddy.domain.common.value_objects import UserId
from talkbuddy.domain.identity.entities.user import User


def make_user(**overrides: object) -> User:
    values: dict[str, object] = {
        "id": UserId(1),
        "email": "learner@test.com",
        "birth_date": date(2016, 3, 14),
        "interests": ["dinosaurs", "space"],
    }
    values.update(overrides)
    return User(**values)  # type: ignore[arg-type]


class TestUserAge:
    """Age is counted in whole calendar months."""

    def test_age_in_months(self) -> None:
        user = make_user()
        assert user.age_in_months(date(2026, 10, 18)) == 127

    def test_day_of_month_is_ignored(self) -> None:
        user = make_user(birth_date=date(2016, 3, 31))
        assert user.age_in_months(date(2016, 4, 1)) == 1

    def test_same_month_is_zero(self) -> None:
        user = make_user(birth_date=date(2026, 10, 1))
        assert user.age_in_months(date(2026, 10, 30)) == 0

    def test_age_is_absolute(self) -> None:
        user = make_user(birth_date=date(2026, 12, 1))
        assert user.age_in_months(date(2026, 10, 18)) == 2


class TestUserInterests:
    """Interests are normalized tags."""

    def test_interests_as_text(self) -> None:
        assert make_user().interests_as_text() == "dinosaurs, space"

    def test_blank_tags_are_dropped(self) -> None:
        user = make_user(interests=["  music ", "", "   "])
        assert user.interests == ["music"]
        assert user.interests_as_text() == "music"

    def test_no_interests_is_empty_text(self) -> None:
        assert make_user(interests=[]).interests_as_text() == ""


class TestUserValidation:
    def test_empty_email_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_user(email="")

    def test_overlong_email_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_user(email="a" * 101)

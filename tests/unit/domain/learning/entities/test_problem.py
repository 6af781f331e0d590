"""Tests for the Problem entity."""

import pytest

from talkbuddy.domain.common.exceptions import DomainError
from talkbuddy.domain.common.value_objects import ProblemId, UserId
from talkbuddy.domain.learning.entities.problem import Problem


class TestProblem:
    def test_create_strips_question(self) -> None:
        problem = Problem.create(
            id=ProblemId("p-1"),
            user_id=UserId(1),
            question="  What is this?  ",
            answer={"text": "a cat"},
        )
        assert problem.question == "What is this?"
        assert problem.answer == {"text": "a cat"}

    def test_blank_question_rejected(self) -> None:
        with pytest.raises(DomainError):
            Problem.create(id=ProblemId("p-1"), user_id=UserId(1), question="   ", answer=None)

    def test_blank_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="ProblemId cannot be empty"):
            ProblemId(" ")

"""DTOs for learning use cases."""

from talkbuddy.application.learning.use_cases.dtos.problem_dtos import ProblemSummary

__all__ = ["ProblemSummary"]

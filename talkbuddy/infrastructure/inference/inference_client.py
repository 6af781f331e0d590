"""HTTP client for the external inference service."""

import json
from typing import Any

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from talkbuddy.application.learning.protocols.inference_service import (
    GeneratedProblem,
    GradedAnswer,
    LearnerProfile,
)
from talkbuddy.exceptions import UpstreamServiceError
from talkbuddy.infrastructure.inference.schemas import (
    GeneratedProblemEnvelope,
    GenerateProblemRequest,
    GradedAnswerEnvelope,
    UserInfoPayload,
)

logger = structlog.get_logger(__name__)


class InferenceClient:
    """HTTP client for the inference service.

    Every call is a single attempt: failures are reported as
    UpstreamServiceError and never retried.
    """

    def __init__(
        self,
        base_url: str,
        path_prefix: str = "",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.path_prefix = path_prefix.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def generate_problem(self, profile: LearnerProfile) -> GeneratedProblem:
        """Request a new problem for the given learner profile."""
        body = GenerateProblemRequest(
            user_info=UserInfoPayload(
                age=profile.age_months,
                accuracy=profile.accuracy,
                interests=profile.interests,
                language_level=profile.language_level,
                language_goals=profile.language_goals,
                feedback=profile.feedback_history,
            )
        )
        response = await self._post(
            "generate_problem", json=body.model_dump(mode="json", by_alias=True)
        )
        try:
            data = GeneratedProblemEnvelope.model_validate(response.json()).data
        except (PydanticValidationError, ValueError) as e:
            raise self._malformed("generate_problem", e) from e

        return GeneratedProblem(
            id=data.id,
            question=data.question,
            answer=data.answer,
            image=data.image,
            image_path=data.image_path,
            whole_text=data.whole_text,
        )

    async def generate_feedback(
        self,
        problem_id: str,
        answer: Any,  # noqa: ANN401
        voice: bytes,
        filename: str,
    ) -> GradedAnswer:
        """Submit a recorded answer for grading."""
        response = await self._post(
            "generate_feedback",
            data={"problemId": problem_id, "answer": json.dumps(answer, ensure_ascii=False)},
            files={"voice": (filename, voice)},
        )
        try:
            body = response.json()
            data = GradedAnswerEnvelope.model_validate(body).data
        except (PydanticValidationError, ValueError) as e:
            raise self._malformed("generate_feedback", e) from e

        return GradedAnswer(
            is_correct=data.is_correct,
            feedback=data.feedback,
            voice_path=data.voice_path,
            raw=body["data"],
        )

    async def _post(self, operation: str, **kwargs: Any) -> httpx.Response:  # noqa: ANN401
        path = f"{self.path_prefix}/{operation}"
        try:
            response = await self._client.post(path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(
                "inference_request_failed",
                operation=operation,
                error=str(e) or e.__class__.__name__,
            )
            raise UpstreamServiceError(
                f"Inference service unreachable: {e!s}", operation=operation
            ) from e

        if response.is_error:
            message = self._error_message(response)
            logger.error(
                "inference_request_rejected",
                operation=operation,
                status_code=response.status_code,
                error=message,
            )
            raise UpstreamServiceError(
                message, operation=operation, upstream_status=response.status_code
            )
        return response

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for key in ("message", "detail", "error"):
                if body.get(key):
                    return str(body[key])
        return response.text or f"Inference service returned {response.status_code}"

    @staticmethod
    def _malformed(operation: str, error: Exception) -> UpstreamServiceError:
        logger.error("inference_response_malformed", operation=operation, error=str(error))
        return UpstreamServiceError(
            "Inference service returned an unexpected response", operation=operation
        )

"""
HTTP client for the grading backend.

Only the calls that carry a student's answer (and the problem it answers) live
here. Answers are sent exactly as prepared, as a JSON string field.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, TypedDict, Union

import httpx

from core.config import settings
from core.logger import logger


class Intervention(TypedDict, total=False):
    type: str
    message: str
    redirect_topic: str


class Problem(TypedDict, total=False):
    problem_id: str
    topic_id: str
    difficulty: int
    statement: str
    intervention: Optional[Intervention]


class AnswerResult(TypedDict, total=False):
    correct: bool
    correct_answer: str
    solution_steps: List[str]
    mastery_changed: bool
    new_mastery: Optional[str]
    topic_id: str
    difficulty: int


class PlacementProblem(TypedDict, total=False):
    placement_active: bool
    question_number: int
    problem_id: Optional[str]
    topic_id: Optional[str]
    difficulty: Optional[int]
    statement: Optional[str]
    total_questions: int
    previous_correct: bool


class PlacementResult(TypedDict, total=False):
    placement_active: bool
    completed: bool
    questions_asked: int
    placements: Dict[str, Dict[str, Any]]


class ApiError(Exception):
    """Non-2xx response from the backend."""

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class TutorApiClient:
    """Thin JSON client; one httpx.Client per instance."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.api_timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> "TutorApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        logger.debug("%s %s%s", method, self.base_url, path)
        resp = self._client.request(method, path, **kwargs)
        try:
            data = resp.json()
        except ValueError:
            data = None

        if resp.is_error:
            message = None
            if isinstance(data, dict):
                message = data.get("message")
            message = message or f"Request failed: {resp.status_code}"
            logger.warning("Backend error %s on %s %s: %s", resp.status_code, method, path, message)
            raise ApiError(message, resp.status_code)
        return data

    # --- Problems ---

    def get_next_problem(self, student_id: str) -> Problem:
        return self._request("GET", "/problems/next", params={"student_id": student_id})

    def check_answer(
        self,
        student_id: str,
        session_id: str,
        problem_id: str,
        answer: str,
    ) -> AnswerResult:
        return self._request(
            "POST",
            "/problems/check",
            json={
                "student_id": student_id,
                "session_id": session_id,
                "problem_id": problem_id,
                "answer": answer,
            },
        )

    # --- Placement ---

    def submit_placement_answer(
        self,
        student_id: str,
        problem_id: str,
        answer: str,
    ) -> Union[PlacementProblem, PlacementResult]:
        return self._request(
            "POST",
            "/placement/answer",
            json={
                "student_id": student_id,
                "problem_id": problem_id,
                "answer": answer,
            },
        )

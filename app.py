"""Application entry point: HTTP service around answer normalization and math rendering."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core.config import settings
from core.logger import init_logging, logger
from services.api_client import ApiError, TutorApiClient
from services.input_mode import (
    AnswerInput,
    InputMode,
    PreferenceStore,
    load_input_mode,
    save_input_mode,
)
from services.latex_to_plain import latex_to_plain, trace_latex_to_plain
from services.math_text_renderer import MathTextRenderer
from utils.file_utils import ensure_directories


class CanonicalizeRequest(BaseModel):
    latex: str
    trace: bool = False


class RenderRequest(BaseModel):
    text: str
    display: bool = False


class InputModeBody(BaseModel):
    mode: InputMode


class AnswerCheckRequest(BaseModel):
    student_id: str
    session_id: str
    problem_id: str
    answer: str
    mode: Optional[InputMode] = None


def create_app(
    api_client: Optional[TutorApiClient] = None,
    store: Optional[PreferenceStore] = None,
    renderer: Optional[MathTextRenderer] = None,
) -> FastAPI:
    """Create FastAPI app; collaborators can be injected for tests."""
    app = FastAPI(title="Math Tutor Client", version="0.1.0")

    store = store or PreferenceStore()
    renderer = renderer or MathTextRenderer()
    client = api_client or TutorApiClient()

    @app.on_event("startup")
    async def startup_event() -> None:
        init_logging()
        ensure_directories()
        logger.info("Math tutor service started (backend=%s)", client.base_url)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        client.close()

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/canonicalize")
    async def canonicalize(body: CanonicalizeRequest) -> Dict[str, Any]:
        """Convert math-editor LaTeX into the backend's answer dialect."""
        result: Dict[str, Any] = {"answer": latex_to_plain(body.latex)}
        if body.trace:
            steps: List[Dict[str, str]] = [
                {"step": name, "result": text}
                for name, text in trace_latex_to_plain(body.latex)
            ]
            result["steps"] = steps
        return result

    @app.post("/render")
    async def render(body: RenderRequest) -> Dict[str, str]:
        return {"html": renderer.render(body.text, display=body.display)}

    @app.get("/preferences/input-mode")
    async def get_input_mode() -> Dict[str, str]:
        return {"mode": load_input_mode(store)}

    @app.put("/preferences/input-mode")
    async def put_input_mode(body: InputModeBody) -> Dict[str, str]:
        save_input_mode(store, body.mode)
        logger.info("Answer input mode set to %s", body.mode)
        return {"mode": body.mode}

    @app.post("/answers/check")
    def check_answer(body: AnswerCheckRequest) -> JSONResponse:
        """Prepare the student's answer and forward it to the grading backend."""
        answer_input = AnswerInput(body.mode or load_input_mode(store))
        answer = answer_input.prepare(body.answer)
        if answer is None:
            raise HTTPException(status_code=422, detail="Answer is empty")

        try:
            result = client.check_answer(
                body.student_id, body.session_id, body.problem_id, answer
            )
        except ApiError as exc:
            return JSONResponse(
                {"status": "error", "message": exc.message},
                status_code=exc.status,
            )

        payload = dict(result or {})
        payload["submitted_answer"] = answer
        return JSONResponse(payload)

    return app


def main() -> None:
    """Entry point for CLI; starts the FastAPI server."""
    init_logging()
    ensure_directories()
    logger.info("Starting FastAPI server at %s:%s", settings.host, settings.port)
    uvicorn.run(create_app(), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

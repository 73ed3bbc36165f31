"""Tests for the HTTP service."""
from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from services.api_client import TutorApiClient
from services.input_mode import PreferenceStore, save_input_mode


@pytest.fixture
def backend_calls():
    return []


@pytest.fixture
def store(prefs_path):
    return PreferenceStore(prefs_path)


@pytest.fixture
def client(backend_calls, store):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        backend_calls.append(body)
        if body["problem_id"] == "missing":
            return httpx.Response(404, json={"status": "error", "message": "Problem not found"})
        return httpx.Response(200, json={"correct": body["answer"] == "3/4", "correct_answer": "3/4"})

    api_client = TutorApiClient(base_url="http://backend.test/api", transport=httpx.MockTransport(handler))
    return TestClient(create_app(api_client=api_client, store=store))


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_canonicalize(client) -> None:
    resp = client.post("/canonicalize", json={"latex": "\\log_{10}\\left(x\\right)"})
    assert resp.status_code == 200
    assert resp.json() == {"answer": "log_10(x)"}


def test_canonicalize_trace(client) -> None:
    resp = client.post("/canonicalize", json={"latex": "x^{2}", "trace": True})
    data = resp.json()
    assert data["answer"] == "x^2"
    assert data["steps"][0] == {"step": "trim", "result": "x^{2}"}
    assert data["steps"][-1]["result"] == "x^2"


def test_render(client) -> None:
    resp = client.post("/render", json={"text": "Compute $\\frac{1}{2}$\nplease"})
    html = resp.json()["html"]
    assert html.startswith("Compute ")
    assert 'class="math-inline"' in html
    assert html.endswith("<br>please")


def test_render_display_hint(client) -> None:
    resp = client.post("/render", json={"text": "\\frac{1}{2}", "display": True})
    assert 'class="math-display"' in resp.json()["html"]


def test_input_mode_roundtrip(client) -> None:
    assert client.get("/preferences/input-mode").json() == {"mode": "math"}
    assert client.put("/preferences/input-mode", json={"mode": "text"}).json() == {"mode": "text"}
    assert client.get("/preferences/input-mode").json() == {"mode": "text"}


def test_input_mode_rejects_unknown(client) -> None:
    resp = client.put("/preferences/input-mode", json={"mode": "voice"})
    assert resp.status_code == 422


def test_check_answer_math_mode(client, backend_calls) -> None:
    resp = client.post(
        "/answers/check",
        json={"student_id": "s1", "session_id": "x1", "problem_id": "p1", "answer": "\\dfrac{3}{4}"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["submitted_answer"] == "\\frac{3}{4}"
    assert data["correct"] is False
    assert backend_calls[-1]["answer"] == "\\frac{3}{4}"


def test_check_answer_uses_stored_text_mode(client, backend_calls, store) -> None:
    save_input_mode(store, "text")
    resp = client.post(
        "/answers/check",
        json={"student_id": "s1", "session_id": "x1", "problem_id": "p1", "answer": " 3/4 "},
    )
    assert resp.json()["correct"] is True
    assert backend_calls[-1]["answer"] == "3/4"


def test_check_answer_mode_override(client, backend_calls) -> None:
    client.post(
        "/answers/check",
        json={"student_id": "s1", "session_id": "x1", "problem_id": "p1", "answer": "\\sqrt{4}", "mode": "text"},
    )
    assert backend_calls[-1]["answer"] == "\\sqrt{4}"


def test_check_answer_blank(client, backend_calls) -> None:
    resp = client.post(
        "/answers/check",
        json={"student_id": "s1", "session_id": "x1", "problem_id": "p1", "answer": "   "},
    )
    assert resp.status_code == 422
    assert backend_calls == []


def test_check_answer_backend_error(client) -> None:
    resp = client.post(
        "/answers/check",
        json={"student_id": "s1", "session_id": "x1", "problem_id": "missing", "answer": "1"},
    )
    assert resp.status_code == 404
    assert resp.json() == {"status": "error", "message": "Problem not found"}

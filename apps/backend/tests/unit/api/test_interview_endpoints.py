"""
Name: Interview Coach Endpoint Tests

Responsibilities:
  - /api/interview/reply and /api/interview/feedback behind a session
  - Provider outage -> 503 LLM_ERROR, unparseable evaluation -> 502
"""

from unittest.mock import Mock

import pytest
from facecounter.crosscutting.exceptions import LLMError, LLMOutputError

pytestmark = pytest.mark.unit

HISTORY = [
    {"role": "ai", "content": "Please introduce yourself."},
    {"role": "user", "content": "I'm Alex, a data analyst."},
]


@pytest.fixture
def signed_in_client(api_client):
    api_client.post("/api/auth/signup", json={"email": "a@x.com", "password": "pw1"})
    api_client.post(
        "/api/user/profile", json={"profile": {"name": "Alex", "targetJob": "PM"}}
    )
    return api_client


def test_reply_requires_session(api_client):
    response = api_client.post("/api/interview/reply", json={"messages": HISTORY})

    assert response.status_code == 401


def test_reply_greeting_for_empty_history(signed_in_client):
    response = signed_in_client.post("/api/interview/reply", json={"messages": []})

    assert response.status_code == 200
    message = response.json()["message"]
    assert message["role"] == "ai"
    assert "introducing yourself" in message["content"]


def test_reply_next_turn(signed_in_client):
    response = signed_in_client.post(
        "/api/interview/reply", json={"messages": HISTORY, "role": "Product Manager"}
    )

    assert response.status_code == 200
    assert response.json()["message"]["content"].endswith("team collaboration?")


def test_reply_rejects_empty_content(signed_in_client):
    response = signed_in_client.post(
        "/api/interview/reply",
        json={"messages": [*HISTORY, {"role": "user", "content": ""}]},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_feedback(signed_in_client):
    response = signed_in_client.post("/api/interview/feedback", json={"messages": HISTORY})

    assert response.status_code == 200
    feedback = response.json()["feedback"]
    assert feedback["score"] == 60
    assert len(feedback["strengths"]) == 3
    assert len(feedback["improvements"]) == 2
    assert feedback["summary"]


def test_feedback_requires_messages(signed_in_client):
    response = signed_in_client.post("/api/interview/feedback", json={"messages": []})

    assert response.status_code == 400


def test_provider_outage_is_503(signed_in_client, llm_service, monkeypatch):
    monkeypatch.setattr(
        llm_service, "generate_reply", Mock(side_effect=LLMError("quota exceeded"))
    )

    response = signed_in_client.post("/api/interview/reply", json={"messages": HISTORY})

    assert response.status_code == 503
    problem = response.json()
    assert problem["code"] == "LLM_ERROR"
    assert "quota" not in problem["detail"]


def test_unparseable_feedback_is_502(signed_in_client, llm_service, monkeypatch):
    monkeypatch.setattr(
        llm_service, "generate_feedback", Mock(side_effect=LLMOutputError("bad json"))
    )

    response = signed_in_client.post("/api/interview/feedback", json={"messages": HISTORY})

    assert response.status_code == 502
    assert response.json()["code"] == "LLM_ERROR"

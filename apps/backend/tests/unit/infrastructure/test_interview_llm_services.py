"""
Name: Interview Coach Adapter Tests

Responsibilities:
  - parse_feedback: envelope and flat shapes, invalid JSON/shape
  - to_gemini_contents: role mapping
  - GoogleInterviewLLMService with a mocked genai client (no network)
  - FakeInterviewLLMService determinism
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from facecounter.crosscutting.exceptions import LLMError, LLMOutputError
from facecounter.domain.entities import InterviewMessage
from facecounter.infrastructure.services import (
    FakeInterviewLLMService,
    GoogleInterviewLLMService,
)
from facecounter.infrastructure.services.llm.google_llm_service import (
    parse_feedback,
    to_gemini_contents,
)

pytestmark = pytest.mark.unit

HISTORY = [
    InterviewMessage(role="ai", content="Tell me about yourself."),
    InterviewMessage(role="user", content="I build data pipelines."),
]


def _no_retry(fn):
    return fn


def _service(client: MagicMock) -> GoogleInterviewLLMService:
    return GoogleInterviewLLMService(
        client=client, model_id="gemini-test", retry_decorator=_no_retry
    )


# ============================================================================
# parse_feedback
# ============================================================================


def test_parse_feedback_envelope():
    raw = (
        '{"feedback": {"score": 82.6, "strengths": ["a", " "], '
        '"improvements": ["b"], "summary": " ok "}}'
    )

    feedback = parse_feedback(raw)

    assert feedback.score == 83
    assert feedback.strengths == ["a"]
    assert feedback.improvements == ["b"]
    assert feedback.summary == "ok"


def test_parse_feedback_flat_object():
    raw = '{"score": 70, "strengths": [], "improvements": [], "summary": "s"}'

    assert parse_feedback(raw).score == 70


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "not json",
        '{"feedback": {"score": 1}}',
        "[]",
        '{"score": NaN, "strengths": [], "improvements": [], "summary": "s"}',
        '{"score": Infinity, "strengths": [], "improvements": [], "summary": "s"}',
    ],
)
def test_parse_feedback_rejects_bad_output(raw):
    with pytest.raises(LLMOutputError):
        parse_feedback(raw)


# ============================================================================
# Gemini adapter
# ============================================================================


def test_to_gemini_contents_maps_roles():
    contents = to_gemini_contents(HISTORY)

    assert [c.role for c in contents] == ["model", "user"]
    assert contents[1].parts[0].text == "I build data pipelines."


def test_requires_api_key_or_client():
    with pytest.raises(LLMError):
        GoogleInterviewLLMService(api_key="")


def test_generate_reply_passes_system_instruction():
    client = MagicMock()
    client.models.generate_content.return_value = SimpleNamespace(
        text=" Next question? "
    )

    reply = _service(client).generate_reply(HISTORY, "You are a coach.")

    assert reply == "Next question?"
    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-test"
    assert kwargs["config"].system_instruction == "You are a coach."
    assert len(kwargs["contents"]) == 2


def test_generate_feedback_uses_json_mode():
    client = MagicMock()
    client.models.generate_content.return_value = SimpleNamespace(
        text='{"feedback": {"score": 90, "strengths": ["x"], '
        '"improvements": ["y"], "summary": "z"}}'
    )

    feedback = _service(client).generate_feedback(HISTORY, "Data Engineer")

    assert feedback.score == 90
    config = client.models.generate_content.call_args.kwargs["config"]
    assert config.response_mime_type == "application/json"
    assert "Data Engineer" in client.models.generate_content.call_args.kwargs["contents"]


def test_provider_failure_is_llm_error():
    client = MagicMock()
    client.models.generate_content.side_effect = RuntimeError("quota")

    with pytest.raises(LLMError):
        _service(client).generate_reply(HISTORY, "coach")


def test_invalid_feedback_json_is_output_error():
    client = MagicMock()
    client.models.generate_content.return_value = SimpleNamespace(text="sure! 85/100")

    with pytest.raises(LLMOutputError):
        _service(client).generate_feedback(HISTORY, "PM")


# ============================================================================
# Fake
# ============================================================================


def test_fake_is_deterministic(llm_service):
    first = llm_service.generate_reply(HISTORY, "coach")
    second = FakeInterviewLLMService().generate_reply(HISTORY, "coach")

    assert first == second
    assert first.endswith("?")


def test_fake_feedback_scales_with_answers(llm_service):
    one = llm_service.generate_feedback(HISTORY, "PM")
    many = llm_service.generate_feedback(HISTORY * 10, "PM")

    assert one.score == 60
    assert many.score == 100
    assert len(one.strengths) == 3
    assert len(one.improvements) == 2

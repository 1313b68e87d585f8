"""Tests for response normalization."""

import json

import pytest

from nagoyabae.llm.normalize import normalize, parse_json_text, strip_fences
from nagoyabae.llm.types import (
    AnalysisResult,
    Failure,
    FailureKind,
    StructuredPayload,
    Success,
    TextPayload,
)
from tests.conftest import ANALYSIS, ANALYSIS_JSON


def _result(payload) -> AnalysisResult:
    outcome = normalize(payload, AnalysisResult)
    assert isinstance(outcome, Success), outcome
    return outcome.value


def _failure(payload) -> Failure:
    outcome = normalize(payload, AnalysisResult)
    assert isinstance(outcome, Failure)
    assert outcome.kind == FailureKind.MALFORMED_RESPONSE
    return outcome


class TestStripFences:
    """Tests for strip_fences."""

    @pytest.mark.parametrize(
        "text",
        [
            f"```json\n{ANALYSIS_JSON}\n```",
            f"```\n{ANALYSIS_JSON}\n```",
            f"  ```JSON\r\n{ANALYSIS_JSON}\r\n```  \n",
            f"```json\n{ANALYSIS_JSON}",
            f"```json\n{ANALYSIS_JSON}\n```\nHope this helps!",
            f"```json\r\n{ANALYSIS_JSON}\r\n```\r\n\r\nLet me know if you want another look.",
        ],
    )
    def test_strips_fence(self, text):
        assert strip_fences(text) == ANALYSIS_JSON

    def test_unfenced_text_unchanged(self):
        assert strip_fences(f"  {ANALYSIS_JSON}\n") == ANALYSIS_JSON

    def test_idempotent(self):
        once = strip_fences(f"```json\n{ANALYSIS_JSON}\n```")
        assert strip_fences(once) == once

    def test_trailing_prose_after_fence_normalizes(self):
        text = f"```json\n{ANALYSIS_JSON}\n```\n\nThat gold jacket really is peak Nagoya."
        assert _result(TextPayload(text)) == _result(TextPayload(ANALYSIS_JSON))

    def test_keeps_inner_content(self):
        body = '{"comment": "uses ``` inside"}'
        assert strip_fences(f"```json\n{body}\n```") == body


class TestParseJsonText:
    """Tests for parse_json_text."""

    def test_empty_fence_raises(self):
        with pytest.raises(ValueError, match="empty"):
            parse_json_text("```json\n```")

    def test_invalid_json_raises(self):
        with pytest.raises(ValueError):
            parse_json_text("score: 88")


class TestNormalize:
    """Tests for normalize against AnalysisResult."""

    def test_structured_payload(self):
        result = _result(StructuredPayload(dict(ANALYSIS)))
        assert result.score == 88
        assert result.vibe_tags == tuple(ANALYSIS["vibe_tags"])

    def test_fenced_json_matches_unwrapped(self):
        fenced = _result(TextPayload(f"```json\n{ANALYSIS_JSON}\n```"))
        plain_fence = _result(TextPayload(f"```\n{ANALYSIS_JSON}\n```"))
        unwrapped = _result(TextPayload(ANALYSIS_JSON))
        assert fenced == unwrapped == plain_fence

    def test_text_and_structured_agree(self):
        assert _result(TextPayload(ANALYSIS_JSON)) == _result(
            StructuredPayload(dict(ANALYSIS))
        )

    def test_camel_case_tags_accepted(self):
        data = dict(ANALYSIS)
        data["vibeTags"] = data.pop("vibe_tags")
        assert _result(StructuredPayload(data)).vibe_tags == tuple(ANALYSIS["vibe_tags"])

    @pytest.mark.parametrize("score", ["75", 75.0, True])
    def test_score_must_be_an_integer(self, score):
        failure = _failure(StructuredPayload({**ANALYSIS, "score": score}))
        assert "score" in failure.message

    def test_to_response_is_flat(self):
        response = _result(StructuredPayload(dict(ANALYSIS))).to_response()
        assert response == ANALYSIS

    def test_not_json(self):
        failure = _failure(TextPayload("I would give this 88 points dagane"))
        assert "not JSON" in failure.message

    def test_not_an_object(self):
        failure = _failure(TextPayload(json.dumps([ANALYSIS])))
        assert "JSON object" in failure.message

    def test_missing_field(self):
        data = {key: value for key, value in ANALYSIS.items() if key != "title"}
        failure = _failure(StructuredPayload(data))
        assert "title" in failure.message

    @pytest.mark.parametrize("score", [-1, 101, 88.5, "high", True, None])
    def test_bad_score(self, score):
        failure = _failure(StructuredPayload({**ANALYSIS, "score": score}))
        assert "score" in failure.message

    @pytest.mark.parametrize(
        "tags",
        [
            ["#one", "#two"],
            ["#one", "#two", "#three", "#four"],
            "#one #two #three",
            [],
        ],
    )
    def test_tags_must_be_three(self, tags):
        _failure(StructuredPayload({**ANALYSIS, "vibe_tags": tags}))

    def test_every_result_is_in_range(self):
        for score in (0, 1, 50, 99, 100):
            result = _result(StructuredPayload({**ANALYSIS, "score": score}))
            assert 0 <= result.score <= 100
            assert len(result.vibe_tags) == 3

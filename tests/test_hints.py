import json
from unittest.mock import Mock, patch

import pytest

from vocamaster.hints import FALLBACK_HINT, HintProvider


def fake_response(text):
    response = Mock()
    response.text = text
    return response


@pytest.mark.unit
def test_missing_api_key_returns_fallback():
    with patch("vocamaster.hints.genai") as mock_genai:
        hint = HintProvider(api_key="").get_hint("persist", "to continue")

    assert hint == FALLBACK_HINT
    mock_genai.GenerativeModel.assert_not_called()


@pytest.mark.unit
def test_hint_is_parsed_from_json_response():
    payload = {
        "example_sentence": "She persisted despite the rain.",
        "translation": "She kept going even though it rained.",
        "tips": "per + sist: stand through.",
    }
    with patch("vocamaster.hints.genai") as mock_genai:
        mock_genai.GenerativeModel.return_value.generate_content.return_value = fake_response(
            json.dumps(payload)
        )
        hint = HintProvider(api_key="test_key", model_name="test-model").get_hint(
            "persist", "to continue"
        )

    assert hint.example_sentence == payload["example_sentence"]
    assert hint.tips == payload["tips"]
    mock_genai.configure.assert_called_once_with(api_key="test_key")
    mock_genai.GenerativeModel.assert_called_once_with("test-model")
    prompt = mock_genai.GenerativeModel.return_value.generate_content.call_args[0][0]
    assert "persist" in prompt and "to continue" in prompt


@pytest.mark.unit
def test_sdk_error_returns_fallback():
    with patch("vocamaster.hints.genai") as mock_genai:
        mock_genai.GenerativeModel.return_value.generate_content.side_effect = RuntimeError("quota")
        hint = HintProvider(api_key="test_key").get_hint("persist", "to continue")

    assert hint == FALLBACK_HINT


@pytest.mark.unit
@pytest.mark.parametrize("text", ["not json", '{"example_sentence": "only one field"}', ""])
def test_malformed_response_returns_fallback(text):
    with patch("vocamaster.hints.genai") as mock_genai:
        mock_genai.GenerativeModel.return_value.generate_content.return_value = fake_response(text)
        hint = HintProvider(api_key="test_key").get_hint("persist", "to continue")

    assert hint == FALLBACK_HINT

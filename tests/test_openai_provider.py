"""Tests for OpenAI client."""

import io
import os
import pytest
from unittest.mock import Mock, patch
from requests.exceptions import Timeout, RequestException

from nogodey.errors import BackendError
from nogodey.prompts.translate import SYSTEM_PROMPT
from nogodey.providers.openai import OpenAIClient
from nogodey.run_logging import RunLogger


def ok_response(content, total_tokens=42):
    response = Mock()
    response.status_code = 200
    response.ok = True
    response.json.return_value = {
        "choices": [{"message": {"content": content}}],
        "usage": {"total_tokens": total_tokens}
    }
    return response


def error_response(status_code, text="error"):
    response = Mock()
    response.status_code = status_code
    response.ok = False
    response.text = text
    return response


def test_openai_client_init_from_env():
    """Test OpenAIClient initialization from environment variables."""
    with patch.dict(os.environ, {
        "OPENAI_API_KEY": "test-key-123",
        "OPENAI_BASE_URL": "https://custom.openai.com/v1/"
    }):
        client = OpenAIClient()
        assert client.api_key == "test-key-123"
        assert client.base_url == "https://custom.openai.com/v1"


def test_openai_client_init_defaults():
    """Test OpenAIClient initialization with defaults."""
    with patch.dict(os.environ, {}, clear=True):
        client = OpenAIClient(api_key="param-key")
        assert client.api_key == "param-key"
        assert client.base_url == "https://api.openai.com/v1"
        assert client.max_tokens == 2000
        assert client.temperature == 0.3


def test_openai_client_init_missing_api_key():
    """Test OpenAIClient initialization fails without API key."""
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ValueError, match="API key required"):
            OpenAIClient()


@patch("nogodey.providers.openai.requests.post")
def test_openai_client_complete_success(mock_post):
    """Test a successful call returns the first choice and sends the request shape."""
    mock_post.return_value = ok_response('greeting: "How far"')
    client = OpenAIClient(api_key="test-key")

    result = client.complete("Translate this", "gpt-4", timeout=30.0)

    assert result == 'greeting: "How far"'
    args, kwargs = mock_post.call_args
    assert args[0] == "https://api.openai.com/v1/chat/completions"
    assert kwargs["timeout"] == 30.0
    assert kwargs["headers"]["Authorization"] == "Bearer test-key"
    payload = kwargs["json"]
    assert payload["model"] == "gpt-4"
    assert payload["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "Translate this"}
    ]
    assert payload["max_tokens"] == 2000
    assert payload["temperature"] == 0.3


@patch("nogodey.providers.openai.requests.post")
def test_openai_client_does_not_retry(mock_post):
    """Test that the client makes one request per call."""
    mock_post.return_value = error_response(500, "server error")
    client = OpenAIClient(api_key="test-key")

    with pytest.raises(BackendError, match=r"OpenAI API error \(500\)"):
        client.complete("prompt", "gpt-4")

    assert mock_post.call_count == 1


@patch("nogodey.providers.openai.requests.post")
def test_openai_client_no_choices(mock_post):
    """Test that zero choices is a backend error."""
    response = ok_response("")
    response.json.return_value = {"choices": []}
    mock_post.return_value = response
    client = OpenAIClient(api_key="test-key")

    with pytest.raises(BackendError, match="no response choices"):
        client.complete("prompt", "gpt-4")


@pytest.mark.parametrize("status_code,message", [
    (401, "authentication failed"),
    (403, "permission denied"),
    (429, "rate limit exceeded"),
])
@patch("nogodey.providers.openai.requests.post")
def test_openai_client_http_errors(mock_post, status_code, message):
    """Test HTTP error handling."""
    mock_post.return_value = error_response(status_code)
    client = OpenAIClient(api_key="test-key")

    with pytest.raises(BackendError, match=message) as exc_info:
        client.complete("prompt", "gpt-4")

    assert exc_info.value.stage == "backend"


@patch("nogodey.providers.openai.requests.post")
def test_openai_client_timeout(mock_post):
    """Test that a timed-out call fails with a BackendError."""
    mock_post.side_effect = Timeout("Request timeout")
    client = OpenAIClient(api_key="test-key")

    with pytest.raises(BackendError, match="timed out") as exc_info:
        client.complete("prompt", "gpt-4", timeout=60.0)

    assert isinstance(exc_info.value.cause, Timeout)


@patch("nogodey.providers.openai.requests.post")
def test_openai_client_connection_error(mock_post):
    """Test that transport errors are wrapped."""
    mock_post.side_effect = RequestException("connection refused")
    client = OpenAIClient(api_key="test-key")

    with pytest.raises(BackendError, match="request failed"):
        client.complete("prompt", "gpt-4")


@patch("nogodey.providers.openai.requests.post")
def test_openai_client_invalid_json_body(mock_post):
    """Test that an undecodable body is a backend error."""
    response = ok_response("")
    response.json.side_effect = ValueError("Expecting value")
    mock_post.return_value = response
    client = OpenAIClient(api_key="test-key")

    with pytest.raises(BackendError, match="invalid JSON"):
        client.complete("prompt", "gpt-4")


@patch("nogodey.providers.openai.requests.post")
def test_openai_client_logs_usage(mock_post):
    """Test that response length and token usage are logged."""
    mock_post.return_value = ok_response("a: \"A\"", total_tokens=77)
    stream = io.StringIO()
    client = OpenAIClient(api_key="test-key", logger=RunLogger(stream=stream))

    client.complete("prompt", "gpt-4")

    output = stream.getvalue()
    assert '"msg": "received LLM response"' in output
    assert '"usage_tokens": 77' in output
    assert '"response_length": 6' in output


@pytest.mark.parametrize("body", [
    ["not", "an", "object"],
    {"choices": {"message": {"content": "a: \"A\""}}},
    {"choices": ["a: \"A\""]},
    {"choices": [{"message": "a: \"A\""}]},
    {"choices": [{"message": {"content": ["a"]}}]},
])
@patch("nogodey.providers.openai.requests.post")
def test_openai_client_unexpected_response_shape(mock_post, body):
    """Test that a well-formed JSON body of the wrong shape is a backend error."""
    response = ok_response("")
    response.json.return_value = body
    mock_post.return_value = response
    client = OpenAIClient(api_key="test-key")

    with pytest.raises(BackendError, match="unexpected response shape") as exc_info:
        client.complete("prompt", "gpt-4")

    assert exc_info.value.stage == "backend"

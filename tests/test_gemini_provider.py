"""
Tests for the Gemini client against a mocked HTTP transport.
"""
import json

import httpx
import pytest

from app.core.errors import ExternalServiceError
from app.llm.gemini_provider import GeminiClient


BASE_URL = "https://gemini.test/v1beta"


def gemini_body(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_client(handler, **kwargs):
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return GeminiClient("test-key", base_url=BASE_URL, http_client=http_client, **kwargs)


def test_generate_sends_gemini_envelope():
    """One POST to models/{model}:generateContent with key query and JSON mime type."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=gemini_body('{"ok": true}'))

    client = make_client(handler)
    text = client.generate("Hello", temperature=0.3, json_mode=True)

    assert text == '{"ok": true}'
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/gemini-2.0-flash:generateContent"
    assert request.url.params["key"] == "test-key"
    body = json.loads(request.content)
    assert body == {
        "contents": [{"parts": [{"text": "Hello"}]}],
        "generationConfig": {"temperature": 0.3, "responseMimeType": "application/json"},
    }


def test_generate_defaults_without_json_mode():
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return httpx.Response(200, json=gemini_body("plain"))

    client = make_client(handler)
    assert client.generate("Hi", model="gemini-1.5-pro") == "plain"
    assert seen[0]["generationConfig"] == {"temperature": 0.7}


def test_custom_model_in_url():
    paths = []

    def handler(request):
        paths.append(request.url.path)
        return httpx.Response(200, json=gemini_body("x"))

    make_client(handler).generate("Hi", model="gemini-1.5-pro")
    assert paths == ["/v1beta/models/gemini-1.5-pro:generateContent"]


def test_http_error_includes_status_and_body():
    client = make_client(lambda request: httpx.Response(500, text="upstream exploded"))

    with pytest.raises(ExternalServiceError) as exc_info:
        client.generate("Hi")

    assert "500" in exc_info.value.message
    assert "upstream exploded" in exc_info.value.message
    assert exc_info.value.status == 500
    assert exc_info.value.retryable is True


def test_client_error_is_not_retryable():
    client = make_client(lambda request: httpx.Response(400, json={"error": "bad request"}))

    with pytest.raises(ExternalServiceError) as exc_info:
        client.generate("Hi")

    assert "Gemini API returned 400" in exc_info.value.message
    assert exc_info.value.retryable is False


def test_no_candidates():
    client = make_client(lambda request: httpx.Response(200, json={"candidates": []}))

    with pytest.raises(ExternalServiceError) as exc_info:
        client.generate("Hi")

    assert exc_info.value.message == "No response from Gemini"


def test_malformed_body():
    client = make_client(lambda request: httpx.Response(200, text="<html>not json</html>"))

    with pytest.raises(ExternalServiceError) as exc_info:
        client.generate("Hi")

    assert "Failed to parse Gemini response" in exc_info.value.message


def test_transport_failure_hides_api_key():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)

    with pytest.raises(ExternalServiceError) as exc_info:
        client.generate("Hi")

    assert exc_info.value.message.startswith("Gemini API error:")
    assert "test-key" not in exc_info.value.message
    assert exc_info.value.retryable is True


def test_retries_retryable_failures_when_enabled():
    responses = [httpx.Response(503, text="busy"), httpx.Response(200, json=gemini_body("done"))]

    client = make_client(lambda request: responses.pop(0), max_retries=1, backoff_seconds=0)

    assert client.generate("Hi") == "done"
    assert responses == []


def test_single_attempt_by_default():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503, text="busy")

    with pytest.raises(ExternalServiceError):
        make_client(handler).generate("Hi")

    assert len(calls) == 1


def test_extract_skills_uses_low_temperature_and_json_mode():
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return httpx.Response(200, json=gemini_body('{"technical_skills": []}'))

    make_client(handler).extract_skills("Python developer")

    config = seen[0]["generationConfig"]
    assert config == {"temperature": 0.3, "responseMimeType": "application/json"}
    assert "Python developer" in seen[0]["contents"][0]["parts"][0]["text"]


def test_missing_api_key_rejected():
    with pytest.raises(ValueError):
        GeminiClient("")

"""Tests for the chat completion client using httpx.MockTransport."""

import asyncio
import json
import os
import sys

import httpx
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lib.completion_client import CompletionClient
from lib.errors import CompletionTimeoutError, UpstreamError
from lib.models import Message, Role

URL = "https://llm.example.test/v1/chat/completions"

TRANSCRIPT = [
    Message(Role.SYSTEM, "You are HintTutor."),
    Message(Role.USER, "Problem:\nWhat is 2+2?"),
]


def _complete(handler, timeout: float = 60.0, **kwargs):
    """Run one completion against a mock transport."""

    async def run():
        client = CompletionClient(
            api_key="test-key",
            model="test-model",
            url=URL,
            timeout=timeout,
            transport=httpx.MockTransport(handler),
        )
        try:
            return await client.complete(TRANSCRIPT, **kwargs)
        finally:
            await client.close()

    return asyncio.run(run())


def _ok(content):
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


class TestRequest:

    def test_request_shape(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            seen["body"] = json.loads(request.content)
            return _ok("Think about addition.")

        text = _complete(handler, max_tokens=200, temperature=0.5)

        assert text == "Think about addition."
        assert seen["url"] == URL
        assert seen["auth"] == "Bearer test-key"
        assert seen["body"] == {
            "model": "test-model",
            "messages": [
                {"role": "system", "content": "You are HintTutor."},
                {"role": "user", "content": "Problem:\nWhat is 2+2?"},
            ],
            "max_tokens": 200,
            "temperature": 0.5,
        }

    def test_default_parameters(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["body"] = json.loads(request.content)
            return _ok("hint")

        _complete(handler)
        assert seen["body"]["max_tokens"] == 256
        assert seen["body"]["temperature"] == 0.7


class TestFailures:

    def test_non_success_status(self):
        def handler(request):
            return httpx.Response(429, text="rate limited")

        with pytest.raises(UpstreamError) as exc_info:
            _complete(handler)
        assert exc_info.value.upstream_status == 429
        assert exc_info.value.upstream_body == "rate limited"

    def test_non_json_body(self):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(UpstreamError):
            _complete(handler)

    @pytest.mark.parametrize("payload", [
        {},
        {"choices": []},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": ""}}]},
        {"choices": [{"message": {"content": None}}]},
    ])
    def test_missing_content(self, payload):
        def handler(request):
            return httpx.Response(200, json=payload)

        with pytest.raises(UpstreamError):
            _complete(handler)

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(CompletionTimeoutError):
            _complete(handler)

    def test_timeout_is_upstream_error(self):
        assert issubclass(CompletionTimeoutError, UpstreamError)

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(UpstreamError):
            _complete(handler)

    def test_slow_upstream_hits_overall_deadline(self):
        async def handler(request):
            await asyncio.sleep(1.0)
            return _ok("too late")

        with pytest.raises(CompletionTimeoutError):
            _complete(handler, timeout=0.05)

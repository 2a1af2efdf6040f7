"""
Completion Client - Forwards transcripts to an OpenAI-style chat completion endpoint.

Handles authentication, request formatting, response parsing and the request deadline.
"""

import asyncio
import logging
from typing import Optional, Sequence

import httpx

from lib.errors import CompletionTimeoutError, UpstreamError
from lib.models.session import Message

logger = logging.getLogger(__name__)


class CompletionClient:
    """Client for a single chat completion endpoint."""

    DEFAULT_URL = "https://api.openai.com/v1/chat/completions"
    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        url: str = DEFAULT_URL,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the completion client.

        Args:
            api_key: Bearer token for the endpoint. Requests still go out without one.
            model: Model identifier sent with every request.
            url: Full URL of the chat completion endpoint.
            timeout: Deadline in seconds for one completion call.
            transport: Optional httpx transport (used by tests).
        """
        self.api_key = api_key
        self.model = model
        self.url = url
        self.timeout = timeout
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def complete(
        self,
        messages: Sequence[Message],
        max_tokens: int = 256,
        temperature: float = 0.7,
    ) -> str:
        """
        Generate the next assistant message for a transcript.

        Args:
            messages: Ordered transcript, normally starting with a system message
            max_tokens: Output token cap
            temperature: Sampling temperature

        Returns:
            Generated text

        Raises:
            CompletionTimeoutError: If the deadline passes
            UpstreamError: On transport failure, non-success status or unusable payload
        """
        request_body = {
            "model": self.model,
            "messages": [m.to_dict() for m in messages],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        try:
            # httpx limits each phase separately; wait_for bounds the whole call
            response = await asyncio.wait_for(
                self._client.post(
                    self.url,
                    json=request_body,
                    headers={
                        "Content-Type": "application/json",
                        "Authorization": f"Bearer {self.api_key or ''}",
                    },
                ),
                timeout=self.timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error("LLM request timed out after %.1fs: %s", self.timeout, e)
            raise CompletionTimeoutError(f"LLM request timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            logger.error("LLM request failed: %s", e)
            raise UpstreamError(f"LLM request failed: {e}") from e

        return self._parse_response(response)

    def _parse_response(self, response: httpx.Response) -> str:
        """Extract choices[0].message.content from the endpoint response."""
        if not response.is_success:
            logger.error("LLM error: %s %s", response.status_code, response.text)
            raise UpstreamError(
                f"LLM error: {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error("LLM returned non-JSON body: %s", response.text[:500])
            raise UpstreamError(
                "LLM returned a non-JSON body",
                status_code=response.status_code,
                body=response.text,
            ) from e

        content = None
        if isinstance(data, dict):
            choices = data.get("choices") or []
            if choices and isinstance(choices[0], dict):
                content = (choices[0].get("message") or {}).get("content")

        if not isinstance(content, str) or not content:
            logger.error("LLM returned no content: %s", response.text[:500])
            raise UpstreamError(
                "LLM returned no content",
                status_code=response.status_code,
                body=response.text,
            )

        return content

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()

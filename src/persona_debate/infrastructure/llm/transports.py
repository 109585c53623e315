"""Transports that carry completion requests to the text-generation service."""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import litellm
from litellm.exceptions import AuthenticationError, RateLimitError, Timeout

from persona_debate.domain.exceptions import CompletionFailure
from persona_debate.infrastructure.llm.exceptions import LLMTimeoutError
from persona_debate.infrastructure.llm.retry import RATE_LIMIT_STATUS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Status and parsed body of one completion attempt.

    Attributes:
        status_code: HTTP status (or its equivalent for non-HTTP backends).
        body: Parsed JSON body of a successful response, else None.
        reason: Short reason phrase or error text.
    """

    status_code: int
    body: Any = None
    reason: str = ""


class CompletionTransport(Protocol):
    """Sends one completion request and reports the outcome as a status."""

    async def send(
        self, payload: dict[str, Any], headers: dict[str, str]
    ) -> TransportResponse:
        """Send a request.

        Args:
            payload: ``{messages, max_tokens, temperature}``.
            headers: Extra request headers (tracing).

        Returns:
            Response status and body.

        Raises:
            CompletionFailure: The request could not be delivered.
        """
        ...

    async def close(self) -> None:
        """Release underlying connections."""
        ...


class HttpxCompletionTransport:
    """POSTs the payload as JSON to an OpenAI-style chat endpoint."""

    def __init__(
        self,
        endpoint_url: str,
        *,
        api_key: str | None = None,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            endpoint_url: Completion endpoint URL.
            api_key: Bearer credential, sent only when set.
            timeout_seconds: Per-request timeout.
            client: Preconfigured client (tests inject a MockTransport).
        """
        self._endpoint_url = endpoint_url
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds)
        )

    async def send(
        self, payload: dict[str, Any], headers: dict[str, str]
    ) -> TransportResponse:
        request_headers = dict(headers)
        if self._api_key:
            request_headers["Authorization"] = f"Bearer {self._api_key}"

        try:
            response = await self._client.post(
                self._endpoint_url, json=payload, headers=request_headers
            )
        except httpx.TimeoutException as e:
            raise LLMTimeoutError(f"Completion request timed out: {e}") from e
        except httpx.RequestError as e:
            raise CompletionFailure(f"Completion request failed: {e}") from e

        body = None
        if response.is_success:
            try:
                body = response.json()
            except ValueError:
                logger.warning("Completion endpoint returned non-JSON body")
        return TransportResponse(
            status_code=response.status_code,
            body=body,
            reason=response.reason_phrase,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class LiteLLMCompletionTransport:
    """Routes completion requests through LiteLLM.

    LiteLLM raises exceptions instead of returning statuses, so they are
    translated back into the status the retry policy expects.
    """

    def __init__(
        self,
        model: str,
        *,
        api_base: str | None = None,
        api_key: str | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._model = model
        self._api_base = api_base
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds

    async def send(
        self, payload: dict[str, Any], headers: dict[str, str]
    ) -> TransportResponse:
        params: dict[str, Any] = {
            "model": self._model,
            "timeout": self._timeout_seconds,
            **payload,
        }
        if self._api_base:
            params["api_base"] = self._api_base
        if self._api_key:
            params["api_key"] = self._api_key
        if headers:
            params["extra_headers"] = headers

        logger.debug("LLM request: model=%s", self._model)

        try:
            response = await litellm.acompletion(**params)
        except RateLimitError as e:
            return TransportResponse(status_code=RATE_LIMIT_STATUS, reason=str(e))
        except AuthenticationError as e:
            return TransportResponse(status_code=401, reason=str(e))
        except Timeout as e:
            raise LLMTimeoutError(f"Completion request timed out: {e}") from e
        except Exception as e:
            status_code = getattr(e, "status_code", None)
            if not isinstance(status_code, int):
                status_code = 500
            logger.error("LLM error: %s", e)
            return TransportResponse(status_code=status_code, reason=str(e))

        choices = [
            {"message": {"content": choice.message.content}}
            for choice in response.choices
        ]
        return TransportResponse(status_code=200, body={"choices": choices})

    async def close(self) -> None:
        return None

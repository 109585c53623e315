"""Completion client with rate-limit retry."""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import Any

from persona_debate.config import CompletionConfig
from persona_debate.domain.exceptions import CompletionFailure, RateLimitedError
from persona_debate.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMResponseFormatError,
)
from persona_debate.infrastructure.llm.retry import CallState, RetryPolicy, StatusClass
from persona_debate.infrastructure.llm.transports import (
    CompletionTransport,
    TransportResponse,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
AUTHENTICATION_STATUSES = (401, 403)


class ResilientCompletionClient:
    """Completion client that retries rate-limited calls.

    Every attempt is preceded by a random jitter. A rate-limited attempt
    ``n`` is followed by a ``base ** n`` second backoff until the retry
    ceiling is reached. Other error statuses fail at once. Retries resend
    the full request, which is safe because text generation has no side
    effects.
    """

    def __init__(
        self,
        transport: CompletionTransport,
        config: CompletionConfig,
        *,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        random_func: Callable[[], float] = random.random,
        debug_llm_messages: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            transport: Transport that delivers requests.
            config: Completion configuration (temperature, max_tokens, retry).
            policy: Retry policy; built from ``config.retry`` when omitted.
            sleep: Async sleep used for jitter and backoff.
            random_func: Source of ``[0, 1)`` values for jitter.
            debug_llm_messages: If True, log LLM messages at INFO level.
        """
        self._transport = transport
        self._config = config
        self._policy = policy or RetryPolicy.from_config(config.retry)
        self._sleep = sleep
        self._random = random_func
        self._debug_llm_messages = debug_llm_messages

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def complete(
        self,
        messages: list[dict[str, str]],
        correlation_id: str | None = None,
    ) -> str:
        """Execute chat completion.

        Args:
            messages: OpenAI-format message list.
            correlation_id: Sent as the ``X-Correlation-ID`` header.

        Returns:
            Generated text.

        Raises:
            CompletionFailure: Non-retryable status, malformed response,
                transport failure, or rate limiting past the retry ceiling.
        """
        payload = {
            "messages": messages,
            "max_tokens": self._config.max_tokens,
            "temperature": self._config.temperature,
        }
        headers: dict[str, str] = {}
        if correlation_id:
            headers[CORRELATION_HEADER] = correlation_id

        if self._should_log():
            self._log_messages(messages)

        state = CallState.PREPARING
        attempt = 0
        while True:
            state = self._transition(state, CallState.WAITING_JITTER, correlation_id)
            await self._sleep(self._policy.jitter_delay(self._random()))

            state = self._transition(state, CallState.CALLING, correlation_id)
            response = await self._transport.send(payload, headers)
            status_class = self._policy.classify(response.status_code)

            if status_class is StatusClass.SUCCESS:
                text = self._extract_text(response)
                self._transition(state, CallState.SUCCESS, correlation_id)
                if self._should_log():
                    self._log_response(text)
                return text

            if status_class is StatusClass.FAIL:
                self._transition(state, CallState.HARD_FAILURE, correlation_id)
                logger.error(
                    "Completion endpoint returned %d: %s (correlation_id=%s)",
                    response.status_code,
                    response.reason,
                    correlation_id,
                )
                message = (
                    f"AI service returned {response.status_code}: {response.reason}"
                )
                if response.status_code in AUTHENTICATION_STATUSES:
                    raise LLMAuthenticationError(
                        message, status_code=response.status_code
                    )
                raise CompletionFailure(message, status_code=response.status_code)

            attempt += 1
            state = self._transition(state, CallState.RATE_LIMITED, correlation_id)
            rate_limited = RateLimitedError(response.status_code, attempt)
            if self._policy.is_exhausted(attempt):
                self._transition(state, CallState.HARD_FAILURE, correlation_id)
                logger.error(
                    "Rate limit exceeded after %d attempts (correlation_id=%s)",
                    attempt,
                    correlation_id,
                )
                raise CompletionFailure(
                    f"AI service rate limit exceeded after {attempt} attempts",
                    status_code=response.status_code,
                ) from rate_limited

            delay = self._policy.backoff_delay(attempt)
            logger.warning(
                "Rate limited (%d), retrying in %.1fs (attempt %d/%d, "
                "correlation_id=%s)",
                response.status_code,
                delay,
                attempt,
                self._policy.max_attempts,
                correlation_id,
            )
            state = self._transition(state, CallState.BACKOFF, correlation_id)
            await self._sleep(delay)

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    @staticmethod
    def _extract_text(response: TransportResponse) -> str:
        """Extract ``choices[0].message.content`` from a response body.

        Raises:
            LLMResponseFormatError: The payload is missing or malformed.
        """
        try:
            content = response.body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMResponseFormatError(
                "AI service response has no message content",
                status_code=response.status_code,
            ) from e
        if not isinstance(content, str):
            raise LLMResponseFormatError(
                "AI service response has no message content",
                status_code=response.status_code,
            )
        return content

    @staticmethod
    def _transition(
        current: CallState, new: CallState, correlation_id: str | None
    ) -> CallState:
        logger.debug(
            "Completion call %s -> %s (correlation_id=%s)",
            current.value,
            new.value,
            correlation_id,
        )
        return new

    def _should_log(self) -> bool:
        """Check if logging should occur."""
        return self._debug_llm_messages or logger.isEnabledFor(logging.DEBUG)

    def _log_messages(self, messages: list[dict[str, str]]) -> None:
        """Log LLM request messages."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Request Messages ===")
        for i, msg in enumerate(messages):
            log_func("[%d] role=%s", i, msg.get("role", "unknown"))
            log_func("    content: %s", msg.get("content", ""))
        log_func("=== End of Messages ===")

    def _log_response(self, response: str) -> None:
        """Log LLM response."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Response ===")
        log_func("response: %s", response)
        log_func("=== End of Response ===")

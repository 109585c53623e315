"""Tests for ResilientCompletionClient."""

import logging
from typing import Any

import pytest

from persona_debate.config import CompletionConfig
from persona_debate.domain.exceptions import CompletionFailure, RateLimitedError
from persona_debate.infrastructure.llm import (
    CORRELATION_HEADER,
    LLMAuthenticationError,
    LLMResponseFormatError,
    ResilientCompletionClient,
    TransportResponse,
)

PROMPT = [
    {"role": "system", "content": "You are a tester."},
    {"role": "user", "content": "Say something."},
]


def ok_response(content: str) -> TransportResponse:
    """Create a successful transport response."""
    return TransportResponse(
        status_code=200,
        body={"choices": [{"message": {"content": content}}]},
        reason="OK",
    )


def rate_limited_response() -> TransportResponse:
    return TransportResponse(status_code=429, reason="Too Many Requests")


class ScriptedTransport:
    """Transport that replays a fixed list of responses.

    The last response repeats once the list runs out.
    """

    def __init__(self, responses: list[TransportResponse]) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[dict[str, Any], dict[str, str]]] = []
        self.closed = False

    async def send(
        self, payload: dict[str, Any], headers: dict[str, str]
    ) -> TransportResponse:
        self.calls.append((payload, headers))
        if len(self._responses) == 1:
            return self._responses[0]
        return self._responses.pop(0)

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Records requested sleeps instead of waiting."""

    def __init__(self) -> None:
        self.sleeps: list[float] = []

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_client(
    transport: ScriptedTransport,
    config: CompletionConfig,
    clock: FakeClock,
    random_value: float = 0.25,
) -> ResilientCompletionClient:
    return ResilientCompletionClient(
        transport,
        config,
        sleep=clock.sleep,
        random_func=lambda: random_value,
    )


class TestComplete:
    """complete() tests."""

    async def test_success_first_attempt(
        self, completion_config: CompletionConfig, clock: FakeClock
    ) -> None:
        """Test that a 200 returns the content after one jitter."""
        transport = ScriptedTransport([ok_response("Hello")])
        client = make_client(transport, completion_config, clock)

        result = await client.complete(PROMPT)

        assert result == "Hello"
        assert len(transport.calls) == 1
        assert clock.sleeps == [0.125]

    async def test_payload_and_headers(
        self, completion_config: CompletionConfig, clock: FakeClock
    ) -> None:
        transport = ScriptedTransport([ok_response("Hello")])
        client = make_client(transport, completion_config, clock)

        await client.complete(PROMPT, correlation_id="req-42")

        payload, headers = transport.calls[0]
        assert payload == {
            "messages": PROMPT,
            "max_tokens": 300,
            "temperature": 0.5,
        }
        assert headers == {CORRELATION_HEADER: "req-42"}

    async def test_no_correlation_header_without_id(
        self, completion_config: CompletionConfig, clock: FakeClock
    ) -> None:
        transport = ScriptedTransport([ok_response("Hello")])
        client = make_client(transport, completion_config, clock)

        await client.complete(PROMPT)

        assert transport.calls[0][1] == {}

    @pytest.mark.parametrize("rate_limits", [1, 2, 5, 9])
    async def test_retries_rate_limits_then_succeeds(
        self,
        completion_config: CompletionConfig,
        clock: FakeClock,
        rate_limits: int,
    ) -> None:
        """Test that k rate limits followed by success take k + 1 attempts."""
        transport = ScriptedTransport(
            [rate_limited_response()] * rate_limits + [ok_response("Finally")]
        )
        client = make_client(transport, completion_config, clock)

        result = await client.complete(PROMPT)

        assert result == "Finally"
        assert len(transport.calls) == rate_limits + 1

    async def test_sleep_schedule(
        self, completion_config: CompletionConfig, clock: FakeClock
    ) -> None:
        """Test jitter before every attempt and doubling backoff between them."""
        transport = ScriptedTransport(
            [rate_limited_response(), rate_limited_response(), ok_response("ok")]
        )
        client = make_client(transport, completion_config, clock)

        await client.complete(PROMPT)

        assert clock.sleeps == [0.125, 2.0, 0.125, 4.0, 0.125]

    async def test_gives_up_after_ten_attempts(
        self, completion_config: CompletionConfig, clock: FakeClock
    ) -> None:
        """Test that persistent rate limiting fails after exactly ten attempts."""
        transport = ScriptedTransport([rate_limited_response()])
        client = make_client(transport, completion_config, clock)

        with pytest.raises(CompletionFailure) as exc_info:
            await client.complete(PROMPT)

        assert len(transport.calls) == 10
        assert "after 10 attempts" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RateLimitedError)
        backoffs = [s for s in clock.sleeps if s != 0.125]
        assert backoffs == [2.0**n for n in range(1, 10)]

    async def test_custom_retry_ceiling(
        self, completion_config: CompletionConfig, clock: FakeClock
    ) -> None:
        completion_config.retry.max_attempts = 3
        transport = ScriptedTransport([rate_limited_response()])
        client = make_client(transport, completion_config, clock)

        with pytest.raises(CompletionFailure):
            await client.complete(PROMPT)

        assert len(transport.calls) == 3

    @pytest.mark.parametrize("status_code", [400, 404, 500, 502, 503])
    async def test_other_errors_fail_immediately(
        self,
        completion_config: CompletionConfig,
        clock: FakeClock,
        status_code: int,
    ) -> None:
        """Test that non-rate-limit errors are not retried."""
        transport = ScriptedTransport(
            [TransportResponse(status_code=status_code, reason="Boom")]
        )
        client = make_client(transport, completion_config, clock)

        with pytest.raises(CompletionFailure) as exc_info:
            await client.complete(PROMPT)

        assert len(transport.calls) == 1
        assert exc_info.value.status_code == status_code
        assert str(exc_info.value) == f"AI service returned {status_code}: Boom"
        assert not isinstance(exc_info.value, LLMAuthenticationError)

    @pytest.mark.parametrize("status_code", [401, 403])
    async def test_authentication_errors(
        self,
        completion_config: CompletionConfig,
        clock: FakeClock,
        status_code: int,
    ) -> None:
        transport = ScriptedTransport(
            [TransportResponse(status_code=status_code, reason="Unauthorized")]
        )
        client = make_client(transport, completion_config, clock)

        with pytest.raises(LLMAuthenticationError):
            await client.complete(PROMPT)

        assert len(transport.calls) == 1

    @pytest.mark.parametrize(
        "body",
        [
            None,
            {},
            {"choices": []},
            {"choices": [{"message": {}}]},
            {"choices": [{"message": {"content": None}}]},
        ],
    )
    async def test_malformed_success_body(
        self,
        completion_config: CompletionConfig,
        clock: FakeClock,
        body: object,
    ) -> None:
        """Test that a 200 without message content is a failure."""
        transport = ScriptedTransport([TransportResponse(status_code=200, body=body)])
        client = make_client(transport, completion_config, clock)

        with pytest.raises(LLMResponseFormatError):
            await client.complete(PROMPT)

    async def test_transport_failure_propagates(
        self, completion_config: CompletionConfig, clock: FakeClock
    ) -> None:
        class BrokenTransport(ScriptedTransport):
            async def send(self, payload, headers):  # type: ignore[override]
                raise CompletionFailure("connection refused")

        client = make_client(BrokenTransport([]), completion_config, clock)

        with pytest.raises(CompletionFailure, match="connection refused"):
            await client.complete(PROMPT)


class TestLogging:
    """LLM message logging tests."""

    async def test_debug_llm_messages_logs_at_info(
        self,
        completion_config: CompletionConfig,
        clock: FakeClock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        transport = ScriptedTransport([ok_response("Logged reply")])
        client = ResilientCompletionClient(
            transport,
            completion_config,
            sleep=clock.sleep,
            random_func=lambda: 0.0,
            debug_llm_messages=True,
        )

        with caplog.at_level(logging.INFO):
            await client.complete(PROMPT)

        assert "=== LLM Request Messages ===" in caplog.text
        assert "Say something." in caplog.text
        assert "Logged reply" in caplog.text

    async def test_rate_limit_logged_as_warning(
        self,
        completion_config: CompletionConfig,
        clock: FakeClock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        transport = ScriptedTransport([rate_limited_response(), ok_response("ok")])
        client = make_client(transport, completion_config, clock)

        with caplog.at_level(logging.WARNING):
            await client.complete(PROMPT, correlation_id="req-7")

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "req-7" in warnings[0].getMessage()


async def test_close_closes_transport(
    completion_config: CompletionConfig, clock: FakeClock
) -> None:
    transport = ScriptedTransport([ok_response("ok")])
    client = make_client(transport, completion_config, clock)

    await client.close()

    assert transport.closed

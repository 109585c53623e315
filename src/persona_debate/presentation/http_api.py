"""HTTP API handlers."""

import json
import logging
import uuid
from typing import Any, TypeVar

from aiohttp import web
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from persona_debate.application.use_cases import (
    CreateConversationUseCase,
    GenerateTurnUseCase,
    GetConversationUseCase,
    ListConversationsUseCase,
    SummarizeConversationUseCase,
)
from persona_debate.domain.exceptions import DebateError, ValidationError
from persona_debate.infrastructure.http import HealthCheck
from persona_debate.presentation.schemas import (
    CreateConversationRequest,
    GenerateResponseRequest,
    SummarizeRequest,
)

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Expose-Headers": REQUEST_ID_HEADER,
}
PREFLIGHT_MAX_AGE_SECONDS = 600

_RequestT = TypeVar("_RequestT", bound=BaseModel)


def _preflight_response(request: web.Request) -> web.Response:
    allowed_headers = request.headers.get(
        "Access-Control-Request-Headers", f"Content-Type, {REQUEST_ID_HEADER}"
    )
    return web.Response(
        status=204,
        headers={
            **CORS_HEADERS,
            "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
            "Access-Control-Allow-Headers": allowed_headers,
            "Access-Control-Max-Age": str(PREFLIGHT_MAX_AGE_SECONDS),
        },
    )


@web.middleware
async def cors_middleware(request: web.Request, handler: Any) -> web.StreamResponse:
    """Answer CORS preflight and add CORS headers to every response.

    Preflight is answered for any existing path. Unknown paths still 404.
    """
    if (
        request.method == "OPTIONS"
        and "Access-Control-Request-Method" in request.headers
        and not isinstance(request.match_info.http_exception, web.HTTPNotFound)
    ):
        return _preflight_response(request)

    try:
        response = await handler(request)
    except web.HTTPException as e:
        e.headers.update(CORS_HEADERS)
        raise
    response.headers.update(CORS_HEADERS)
    return response


@web.middleware
async def error_middleware(request: web.Request, handler: Any) -> web.StreamResponse:
    """Map domain errors to JSON responses."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except DebateError as e:
        if e.is_client_error:
            logger.info("Rejected %s %s: %s", request.method, request.path, e)
        else:
            logger.error("Failed %s %s: %s", request.method, request.path, e)
        body: dict[str, Any] = {"message": str(e)}
        if e.details is not None:
            body["details"] = e.details
        return web.json_response(body, status=e.http_status)
    except Exception:
        logger.exception("Unhandled error in %s %s", request.method, request.path)
        return web.json_response({"message": "Internal server error"}, status=500)


async def _parse_body(request: web.Request, model: type[_RequestT]) -> _RequestT:
    """Parse and validate a JSON request body.

    Raises:
        ValidationError: Invalid JSON or schema violation.
    """
    try:
        data = await request.json()
    except ValueError as e:
        raise ValidationError("Invalid JSON in request body") from e

    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            "Validation error", details=json.loads(e.json(include_url=False))
        ) from e


def _correlation_id(request: web.Request) -> str:
    return request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())


class ConversationHandlers:
    """Request handlers for the conversation endpoints."""

    def __init__(
        self,
        create_conversation: CreateConversationUseCase,
        get_conversation: GetConversationUseCase,
        list_conversations: ListConversationsUseCase,
        generate_turn: GenerateTurnUseCase,
        summarize_conversation: SummarizeConversationUseCase,
    ) -> None:
        self._create_conversation = create_conversation
        self._get_conversation = get_conversation
        self._list_conversations = list_conversations
        self._generate_turn = generate_turn
        self._summarize_conversation = summarize_conversation

    async def create_conversation(self, request: web.Request) -> web.Response:
        """POST /conversations"""
        body = await _parse_body(request, CreateConversationRequest)
        conversation_id = await self._create_conversation.execute(
            initial_message=body.initial_message,
            personas=body.personas.to_entity(),
        )
        return web.json_response({"conversationId": conversation_id}, status=201)

    async def list_conversations(self, request: web.Request) -> web.Response:
        """GET /conversations"""
        conversation_ids = await self._list_conversations.execute()
        return web.json_response(
            {"conversations": conversation_ids, "count": len(conversation_ids)}
        )

    async def get_conversation(self, request: web.Request) -> web.Response:
        """GET /conversations/{id}"""
        conversation = await self._get_conversation.execute(
            request.match_info["id"]
        )
        return web.json_response(conversation.to_dict())

    async def generate_response(self, request: web.Request) -> web.Response:
        """POST /generate-response"""
        body = await _parse_body(request, GenerateResponseRequest)
        correlation_id = _correlation_id(request)
        message = await self._generate_turn.execute(
            body.conversation_id, body.turn, correlation_id=correlation_id
        )
        return web.json_response(
            message.to_dict(), headers={REQUEST_ID_HEADER: correlation_id}
        )

    async def summarize(self, request: web.Request) -> web.Response:
        """POST /summarize"""
        body = await _parse_body(request, SummarizeRequest)
        correlation_id = _correlation_id(request)
        summary = await self._summarize_conversation.execute(
            body.conversation_id, correlation_id=correlation_id
        )
        return web.json_response(
            {"conversationId": body.conversation_id, "summary": summary},
            headers={REQUEST_ID_HEADER: correlation_id},
        )


def create_app(
    handlers: ConversationHandlers,
    health_check: HealthCheck | None = None,
) -> web.Application:
    """Create the aiohttp application.

    Args:
        handlers: Conversation endpoint handlers.
        health_check: Adds /live and /ready when given.

    Returns:
        Configured application.
    """
    app = web.Application(middlewares=[cors_middleware, error_middleware])
    app.router.add_post("/conversations", handlers.create_conversation)
    app.router.add_get("/conversations", handlers.list_conversations)
    app.router.add_get("/conversations/{id}", handlers.get_conversation)
    app.router.add_post("/generate-response", handlers.generate_response)
    app.router.add_post("/summarize", handlers.summarize)
    if health_check is not None:
        health_check.register(app)
    return app

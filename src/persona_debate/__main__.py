"""Application entry point."""

import asyncio
import logging
import os
import signal
import sys
from pathlib import Path

from persona_debate.application.use_cases import (
    CreateConversationUseCase,
    GenerateTurnUseCase,
    GetConversationUseCase,
    ListConversationsUseCase,
    SummarizeConversationUseCase,
)
from persona_debate.config import ConfigError, LoggingConfig, load_config
from persona_debate.domain.services import ConversationLocks
from persona_debate.infrastructure.http import HealthCheck, HttpServer
from persona_debate.infrastructure.llm import (
    JinjaPromptBuilder,
    ResilientCompletionClient,
    create_transport,
)
from persona_debate.infrastructure.persistence import (
    DatabaseManager,
    SQLiteConversationRepository,
)
from persona_debate.presentation import ConversationHandlers, create_app

CONFIG_PATH_ENV = "PERSONA_DEBATE_CONFIG"

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    root_logger = logging.getLogger()
    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


async def main() -> None:
    """Start the API server."""
    config_path = Path(os.environ.get(CONFIG_PATH_ENV, "config.yaml"))
    if not config_path.exists():
        logger.error("%s not found", config_path)
        sys.exit(1)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        logger.error("Failed to load config: %s", e)
        sys.exit(1)

    configure_logging(config.logging)

    db_manager = DatabaseManager(config.storage.database_path)
    await db_manager.create_tables()
    conversation_repository = SQLiteConversationRepository(db_manager.get_session)

    debug_llm_messages = bool(config.logging and config.logging.debug_llm_messages)
    completion_client = ResilientCompletionClient(
        create_transport(config.completion),
        config.completion,
        debug_llm_messages=debug_llm_messages,
    )
    prompt_builder = JinjaPromptBuilder(
        max_response_chars=config.prompt.max_response_chars
    )

    # Serializes turns per conversation
    locks = ConversationLocks()
    handlers = ConversationHandlers(
        create_conversation=CreateConversationUseCase(conversation_repository),
        get_conversation=GetConversationUseCase(conversation_repository),
        list_conversations=ListConversationsUseCase(conversation_repository),
        generate_turn=GenerateTurnUseCase(
            conversation_repository, prompt_builder, completion_client, locks
        ),
        summarize_conversation=SummarizeConversationUseCase(
            conversation_repository, prompt_builder, completion_client
        ),
    )
    app = create_app(handlers, health_check=HealthCheck(db_manager))

    server = HttpServer(app, host=config.server.host, port=config.server.port)
    logger.info(
        "Starting API server (completion backend: %s)...", config.completion.backend
    )
    await server.start()

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def shutdown_handler() -> None:
        logger.info("Received shutdown signal...")
        stop_event.set()

    loop.add_signal_handler(signal.SIGINT, shutdown_handler)
    loop.add_signal_handler(signal.SIGTERM, shutdown_handler)

    await stop_event.wait()

    logger.info("Shutting down...")
    await server.stop()
    await completion_client.close()
    await db_manager.close()
    logger.info("Shutdown complete")


def run() -> None:
    """Run the async main function."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()

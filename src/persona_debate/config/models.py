"""Configuration dataclasses."""

from dataclasses import dataclass, field


@dataclass
class RetryConfig:
    """Retry policy for rate-limited completion calls.

    Attributes:
        max_attempts: Attempts before giving up on rate limiting.
        backoff_base_seconds: Backoff after attempt ``n`` is ``base ** n``.
        max_jitter_ms: Upper bound (exclusive) of the pre-attempt jitter.
    """

    max_attempts: int = 10
    backoff_base_seconds: float = 2.0
    max_jitter_ms: int = 500


@dataclass
class CompletionConfig:
    """Completion endpoint settings."""

    backend: str = "http"
    endpoint_url: str | None = None
    api_key: str | None = None
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 500
    timeout_seconds: float = 30.0
    retry: RetryConfig = field(default_factory=RetryConfig)


@dataclass
class PromptConfig:
    """Prompt settings."""

    max_response_chars: int = 200


@dataclass
class StorageConfig:
    """Conversation store settings."""

    database_path: str


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = 8080


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None
    debug_llm_messages: bool = False


@dataclass
class Config:
    """Application configuration."""

    completion: CompletionConfig
    storage: StorageConfig
    prompt: PromptConfig = field(default_factory=PromptConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig | None = None

"""Configuration management."""

from persona_debate.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from persona_debate.config.models import (
    CompletionConfig,
    Config,
    LoggingConfig,
    PromptConfig,
    RetryConfig,
    ServerConfig,
    StorageConfig,
)

__all__ = [
    "CompletionConfig",
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "EnvironmentVariableError",
    "LoggingConfig",
    "PromptConfig",
    "RetryConfig",
    "ServerConfig",
    "StorageConfig",
    "expand_env_vars",
    "load_config",
]

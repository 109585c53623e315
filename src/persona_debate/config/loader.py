"""YAML config loading with environment variable expansion."""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from persona_debate.config.models import (
    CompletionConfig,
    Config,
    LoggingConfig,
    PromptConfig,
    RetryConfig,
    ServerConfig,
    StorageConfig,
)

COMPLETION_BACKENDS = ("http", "litellm")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Invalid or missing configuration value."""


class EnvironmentVariableError(ConfigError):
    """Referenced environment variable is not set."""


# ${VAR_NAME} or ${VAR_NAME:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def expand_env_vars(value: str) -> str:
    """Replace ``${VAR}`` and ``${VAR:-default}`` with environment values.

    Args:
        value: String to expand.

    Returns:
        Expanded string.

    Raises:
        EnvironmentVariableError: A variable without default is not set.
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name, default = match.group(1), match.group(2)
        env_value = os.environ.get(var_name)
        if env_value is None:
            if default is not None:
                return default
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _validate_required_field(data: dict[str, Any], field: str, parent: str = "") -> Any:
    """Return a required field's value.

    Args:
        data: Mapping to read from.
        field: Field name.
        parent: Parent path for the error message.

    Returns:
        The field value.

    Raises:
        ConfigValidationError: The field is missing or null.
    """
    if field not in data or data[field] is None:
        full_path = f"{parent}.{field}" if parent else field
        raise ConfigValidationError(f"Required field '{full_path}' is missing")
    return data[field]


def _load_completion(data: dict[str, Any]) -> CompletionConfig:
    backend = data.get("backend", "http")
    if backend not in COMPLETION_BACKENDS:
        raise ConfigValidationError(
            f"completion.backend must be one of {', '.join(COMPLETION_BACKENDS)}"
        )

    endpoint_url = data.get("endpoint_url") or None
    if backend == "http" and endpoint_url is None:
        raise ConfigValidationError(
            "Required field 'completion.endpoint_url' is missing"
        )

    retry_data = data.get("retry") or {}
    retry = RetryConfig(
        max_attempts=retry_data.get("max_attempts", 10),
        backoff_base_seconds=retry_data.get("backoff_base_seconds", 2.0),
        max_jitter_ms=retry_data.get("max_jitter_ms", 500),
    )
    if retry.max_attempts < 1:
        raise ConfigValidationError("completion.retry.max_attempts must be >= 1")

    return CompletionConfig(
        backend=backend,
        endpoint_url=endpoint_url,
        # Empty string means "no key" (e.g. ${AI_API_KEY:-})
        api_key=data.get("api_key") or None,
        model=data.get("model", "gpt-4o-mini"),
        temperature=data.get("temperature", 0.7),
        max_tokens=data.get("max_tokens", 500),
        timeout_seconds=data.get("timeout_seconds", 30.0),
        retry=retry,
    )


def load_config(path: str | Path) -> Config:
    """Load the configuration file.

    Args:
        path: Path to config.yaml.

    Returns:
        Config instance.

    Raises:
        FileNotFoundError: The file does not exist.
        ConfigValidationError: A required value is missing or invalid.
        EnvironmentVariableError: A referenced variable is not set.
        yaml.YAMLError: The file is not valid YAML.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f) or {}

    data = _expand_recursive(raw_data)

    completion = _load_completion(_validate_required_field(data, "completion"))

    storage_data = _validate_required_field(data, "storage")
    storage = StorageConfig(
        database_path=_validate_required_field(
            storage_data, "database_path", "storage"
        ),
    )

    prompt_data = data.get("prompt") or {}
    prompt = PromptConfig(
        max_response_chars=prompt_data.get("max_response_chars", 200),
    )

    server_data = data.get("server") or {}
    server = ServerConfig(
        host=server_data.get("host", "0.0.0.0"),
        port=int(server_data.get("port", 8080)),
    )

    logging_config: LoggingConfig | None = None
    logging_data = data.get("logging")
    if logging_data:
        logging_config = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get(
                "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ),
            loggers=logging_data.get("loggers"),
            debug_llm_messages=logging_data.get("debug_llm_messages", False),
        )

    return Config(
        completion=completion,
        storage=storage,
        prompt=prompt,
        server=server,
        logging=logging_config,
    )

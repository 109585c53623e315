"""Jinja2 template utilities for LLM prompts."""

from jinja2 import Environment, PackageLoader, select_autoescape


def create_jinja_env() -> Environment:
    """Create Jinja2 environment for LLM templates.

    Templates are loaded from the persona_debate.infrastructure.llm
    ``templates`` package directory.

    Returns:
        Configured Jinja2 environment.
    """
    return Environment(
        loader=PackageLoader("persona_debate.infrastructure.llm", "templates"),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )

"""Message formatting for prompts."""

from collections.abc import Iterable

from persona_debate.domain.entities import Message


def format_message(message: Message) -> str:
    """Format a message as a ``from: message`` transcript line.

    Args:
        message: Message to format.

    Returns:
        Transcript line.
    """
    return f"{message.speaker.value}: {message.message}"


def format_transcript(messages: Iterable[Message]) -> str:
    """Format messages as a transcript, one line per message in order.

    Args:
        messages: Messages in turn order.

    Returns:
        Transcript text.
    """
    return "\n".join(format_message(message) for message in messages)

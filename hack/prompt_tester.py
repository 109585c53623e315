#!/usr/bin/env python3
"""Prompt tester script for persona-debate.

Shows the prompts built for a stored conversation and optionally sends
them to the configured completion endpoint. Nothing is written back.

Usage:
    uv run python hack/prompt_tester.py list
    uv run python hack/prompt_tester.py --dry-run turn \
        --conversation ID --turn responder
    uv run python hack/prompt_tester.py summarize --conversation ID
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

# Add the project src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def load_dotenv(env_path: Path) -> None:
    """Minimal .env loader.

    Args:
        env_path: Path to the .env file.
    """
    if not env_path.exists():
        return

    with open(env_path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if (value.startswith('"') and value.endswith('"')) or (
                    value.startswith("'") and value.endswith("'")
                ):
                    value = value[1:-1]
                # Existing environment variables win
                if key not in os.environ:
                    os.environ[key] = value


from persona_debate.config.loader import load_config  # noqa: E402
from persona_debate.domain.entities import Conversation, Turn  # noqa: E402
from persona_debate.infrastructure.llm import (  # noqa: E402
    JinjaPromptBuilder,
    ResilientCompletionClient,
    create_transport,
)
from persona_debate.infrastructure.persistence import (  # noqa: E402
    DatabaseManager,
    SQLiteConversationRepository,
)


def print_prompt(title: str, messages: list[dict[str, str]]) -> None:
    """Print a role-tagged prompt."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    for i, message in enumerate(messages):
        print(f"[{i}] {message['role']}:")
        print(f"    {message['content']}")
    print("=" * 60 + "\n")


def print_response(title: str, response: str) -> None:
    """Print the completion text."""
    print("\n" + "-" * 60)
    print(f"  {title}")
    print("-" * 60)
    print(response)
    print("-" * 60 + "\n")


async def load_or_exit(
    repository: SQLiteConversationRepository, conversation_id: str
) -> Conversation:
    conversation = await repository.get(conversation_id)
    if conversation is None:
        print(f"Error: Conversation not found: {conversation_id}", file=sys.stderr)
        sys.exit(1)
    return conversation


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="persona-debate prompt tester")
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to config.yaml",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print prompts only, do not call the completion endpoint",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    subparsers.add_parser("list", help="List stored conversations")

    turn_parser = subparsers.add_parser("turn", help="Test the turn prompt")
    turn_parser.add_argument("--conversation", required=True, help="Conversation ID")
    turn_parser.add_argument(
        "--turn",
        required=True,
        choices=[turn.value for turn in Turn],
        help="Side that speaks next",
    )

    summarize_parser = subparsers.add_parser(
        "summarize", help="Test the summary prompt"
    )
    summarize_parser.add_argument(
        "--conversation", required=True, help="Conversation ID"
    )

    return parser


async def main() -> None:
    """Main entry point."""
    project_root = Path(__file__).parent.parent
    load_dotenv(project_root / ".env")

    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)

    config = load_config(config_path)

    db_path = config.storage.database_path
    if db_path != ":memory:" and not Path(db_path).exists():
        print(f"Error: Database file not found: {db_path}", file=sys.stderr)
        sys.exit(1)

    db_manager = DatabaseManager(db_path)
    repository = SQLiteConversationRepository(db_manager.get_session)
    prompt_builder = JinjaPromptBuilder(
        max_response_chars=config.prompt.max_response_chars
    )
    client = ResilientCompletionClient(
        create_transport(config.completion), config.completion
    )

    try:
        if args.command == "list":
            for conversation_id in await repository.list_ids():
                conversation = await repository.get(conversation_id)
                if conversation is not None:
                    print(
                        json.dumps(
                            {
                                "id": conversation.id,
                                "messages": len(conversation.messages),
                                "summary": conversation.summary is not None,
                            }
                        )
                    )
            return

        conversation = await load_or_exit(repository, args.conversation)
        if args.command == "turn":
            prompt = prompt_builder.build_turn_prompt(
                conversation, Turn.parse(args.turn)
            )
            print_prompt(f"Turn Prompt ({args.turn})", prompt)
        else:
            prompt = prompt_builder.build_summary_prompt(conversation)
            print_prompt("Summary Prompt", prompt)

        if not args.dry_run:
            print("Calling completion endpoint...")
            print_response("Generated Text", await client.complete(prompt))

    finally:
        await client.close()
        await db_manager.close()


if __name__ == "__main__":
    asyncio.run(main())

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Dict

from dotenv import load_dotenv

from toolbridge.config import configure_logging, load_app_config
from toolbridge.core.agent import ToolAgent
from toolbridge.core.prompts import PromptManager
from toolbridge.core.router import ModelRouter
from toolbridge.models.anthropic_provider import AnthropicProvider
from toolbridge.models.base import ModelRegistry
from toolbridge.models.openai_provider import OpenAIProvider
from toolbridge.tools.base import UnknownToolError
from toolbridge.tools.manager import ToolManager

PROVIDER_CLASSES = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}


# --------------------------------------------------------------------------------------
# Builders
# --------------------------------------------------------------------------------------


def build_model_registry(cfg: Dict[str, Any]) -> ModelRegistry:
    """
    Build and register all enabled model providers and their models.

    Each provider section must set `enabled: true` and list its models;
    every model entry needs at least a `name` key with the provider's
    model identifier.
    """
    registry = ModelRegistry()
    for provider_name, provider_cfg in (cfg.get("providers") or {}).items():
        provider_cls = PROVIDER_CLASSES.get(provider_name)
        if provider_cls is None or not provider_cfg.get("enabled", False):
            continue
        registry.register_provider(provider_cls.from_config(provider_name, provider_cfg))
    return registry


def build_tool_manager(cfg: Dict[str, Any]) -> ToolManager:
    """Build the tool manager with built-in tools configured from `tools:`."""
    return ToolManager(cfg.get("tools") or {})


# --------------------------------------------------------------------------------------
# Interactive chat loop
# --------------------------------------------------------------------------------------


def interactive_chat(agent: ToolAgent, provider_name: str, model_name: str) -> None:
    """
    Simple terminal chat loop.

    The session keeps running until the user types /exit or /quit or
    presses Ctrl+C.
    """
    print("\n[Interactive chat started]")
    print("Provider:", provider_name)
    print("Model   :", model_name)
    print("Type /exit or press Ctrl+C to end the session.\n")

    while True:
        try:
            user_input = input("You> ").strip()
            if not user_input:
                continue
            if user_input.lower() in {"/exit", "/quit"}:
                print("Bye")
                break
            reply = asyncio.run(agent.run_task(user_input))
            print("Assistant> ", reply)
        except KeyboardInterrupt:
            print("\n[Session interrupted by user, exiting chat]")
            break


# --------------------------------------------------------------------------------------
# CLI
# --------------------------------------------------------------------------------------


def _add_model_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--provider",
        required=True,
        help="Provider name (openai or anthropic).",
    )
    parser.add_argument(
        "--model",
        required=True,
        help="Model key as defined in config.yaml for the chosen provider.",
    )


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Function-calling tool dispatcher with single-task and interactive agent modes."
    )
    parser.add_argument(
        "--config",
        required=True,
        help="Path to config.yaml file.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("tools", help="Print the tool declarations as JSON.")

    call_parser = subparsers.add_parser("call", help="Dispatch a single function call.")
    call_parser.add_argument("name", help="Function name, e.g. get_weather_on_date.")
    call_parser.add_argument(
        "--args",
        default="{}",
        help="JSON object with the call arguments.",
    )
    call_parser.add_argument("--id", default="cli-call", help="Call identifier.")

    agent_parser = subparsers.add_parser("agent", help="Run a single agent task (with tools).")
    _add_model_args(agent_parser)
    agent_parser.add_argument(
        "--max-steps",
        type=int,
        default=4,
        help="Maximum tool-calling steps for the agent.",
    )
    agent_parser.add_argument("task", help="Task description for the agent.")

    chat_parser = subparsers.add_parser("chat", help="Interactive chat session with the tool-using agent.")
    _add_model_args(chat_parser)
    chat_parser.add_argument(
        "--max-steps",
        type=int,
        default=4,
        help="Maximum tool-calling steps per chat turn.",
    )

    return parser.parse_args(argv)


# --------------------------------------------------------------------------------------
# main()
# --------------------------------------------------------------------------------------


def main() -> None:
    # Load environment variables from .env (if present)
    load_dotenv()

    args = parse_args(sys.argv[1:])
    config = load_app_config(args.config)
    configure_logging(config.get("logging"))

    tools = build_tool_manager(config)

    if args.command == "tools":
        print(json.dumps(tools.list_declarations(), indent=2))
        return

    if args.command == "call":
        try:
            call_args = json.loads(args.args)
        except json.JSONDecodeError as exc:
            raise SystemExit(f"--args must be a JSON object: {exc}")
        try:
            envelope = asyncio.run(
                tools.dispatch({"name": args.name, "args": call_args, "id": args.id})
            )
        except UnknownToolError as exc:
            raise SystemExit(str(exc))
        print(json.dumps(envelope, indent=2, default=str))
        return

    router = ModelRouter(build_model_registry(config))
    prompts = PromptManager(config.get("prompts", {}))

    agent = ToolAgent(
        router=router,
        prompts=prompts,
        tools=tools,
        provider_name=args.provider,
        model_name=args.model,
        max_steps=args.max_steps,
    )

    if args.command == "chat":
        interactive_chat(agent, args.provider, args.model)
        return

    if args.command == "agent":
        print(asyncio.run(agent.run_task(args.task)))
        return

    # Should never reach here
    raise SystemExit(f"Unknown command: {args.command!r}")


if __name__ == "__main__":
    main()

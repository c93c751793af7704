"""
Anthropic provider implementation.

This provider wraps the Claude API via the official `anthropic` SDK.
It translates OpenAI-style chat messages, including assistant tool
calls and `tool` role results, into the content blocks expected by
Anthropic's Claude models, and reports `tool_use` blocks as call
requests.
"""

import json
import os
from typing import Any, Dict, List, Optional, Tuple

import anthropic

from toolbridge.models.base import BaseProvider, ChatResponse, ModelInfo, ProviderError


class AnthropicProvider(BaseProvider):
    """
    AnthropicProvider wraps the Claude messages API via the official anthropic SDK.
    """

    def __init__(
        self,
        name: str,
        api_key_env: str,
        models: Dict[str, ModelInfo],
        max_tokens: int = 2048,
    ) -> None:
        super().__init__(name=name)
        self.api_key_env = api_key_env
        self.models = models
        self.max_tokens = max_tokens

    @classmethod
    def from_config(cls, name: str, cfg: Dict[str, Any]) -> "AnthropicProvider":
        api_key_env = cfg.get("api_key_env", "ANTHROPIC_API_KEY")
        models = {
            model_key: ModelInfo.from_config(mcfg, default_context=200000)
            for model_key, mcfg in (cfg.get("models") or {}).items()
        }
        return cls(
            name=name,
            api_key_env=api_key_env,
            models=models,
            max_tokens=int(cfg.get("max_tokens", 2048)),
        )

    def _client(self) -> anthropic.Anthropic:
        api_key = os.getenv(self.api_key_env)
        if not api_key:
            raise ProviderError(
                f"Environment variable '{self.api_key_env}' is not set for provider '{self.name}'."
            )
        return anthropic.Anthropic(api_key=api_key)

    @staticmethod
    def convert_messages(messages: List[Dict[str, Any]]) -> Tuple[str, List[Dict[str, Any]]]:
        """Convert OpenAI chat format to an Anthropic system prompt and messages."""
        system_prompt = ""
        converted: List[Dict[str, Any]] = []
        for msg in messages:
            role = msg.get("role")
            content = msg.get("content") or ""
            if role == "system":
                system_prompt += content + "\n"
            elif role == "assistant" and msg.get("tool_calls"):
                blocks: List[Dict[str, Any]] = []
                if content:
                    blocks.append({"type": "text", "text": content})
                for tc in msg["tool_calls"]:
                    blocks.append(
                        {
                            "type": "tool_use",
                            "id": tc["id"],
                            "name": tc["function"]["name"],
                            "input": json.loads(tc["function"].get("arguments") or "{}"),
                        }
                    )
                converted.append({"role": "assistant", "content": blocks})
            elif role == "tool":
                block = {
                    "type": "tool_result",
                    "tool_use_id": msg["tool_call_id"],
                    "content": content,
                }
                # All results for one assistant turn go in a single user message
                last = converted[-1] if converted else None
                if (
                    last is not None
                    and last["role"] == "user"
                    and isinstance(last["content"], list)
                    and all(b.get("type") == "tool_result" for b in last["content"])
                ):
                    last["content"].append(block)
                else:
                    converted.append({"role": "user", "content": [block]})
            elif role == "assistant":
                converted.append({"role": "assistant", "content": content})
            else:
                converted.append({"role": "user", "content": content})
        return system_prompt, converted

    def chat(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
    ) -> ChatResponse:
        client = self._client()
        system_prompt, converted = self.convert_messages(messages)
        kwargs: Dict[str, Any] = {
            "model": model,
            "system": system_prompt,
            "messages": converted,
            "max_tokens": self.max_tokens,
        }
        if tools:
            kwargs["tools"] = [
                {
                    "name": decl["name"],
                    "description": decl.get("description", ""),
                    "input_schema": decl.get("parameters", {"type": "object", "properties": {}}),
                }
                for decl in tools
            ]
        try:
            resp = client.messages.create(**kwargs)
        except Exception as exc:  # noqa: BLE001
            raise ProviderError(f"Anthropic provider error: {exc}") from exc

        parts: List[str] = []
        tool_calls: List[Dict[str, Any]] = []
        for block in resp.content:
            block_type = getattr(block, "type", "")
            if block_type == "text":
                parts.append(block.text)
            elif block_type == "tool_use":
                tool_calls.append({"name": block.name, "args": dict(block.input or {}), "id": block.id})
        return ChatResponse(text="\n".join(parts), raw=resp, tool_calls=tool_calls)

"""
OpenAI provider implementation.

Wraps the OpenAI Chat Completions API using the official SDK. Function
declarations are offered to the model as `tools`, and any tool calls in
the reply are returned as call requests. The provider configuration
must specify the environment variable containing the API key, the base
URL for the API, and a list of models with their capabilities.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from openai import OpenAI

from toolbridge.models.base import BaseProvider, ChatResponse, ModelInfo, ProviderError

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseProvider):
    """
    OpenAIProvider wraps the OpenAI Chat Completions API via the official SDK.
    """

    def __init__(
        self,
        name: str,
        api_key_env: str,
        base_url: str,
        models: Dict[str, ModelInfo],
    ) -> None:
        super().__init__(name=name)
        self.api_key_env = api_key_env
        self.base_url = base_url
        self.models = models

    @classmethod
    def from_config(cls, name: str, cfg: Dict[str, Any]) -> "OpenAIProvider":
        api_key_env = cfg.get("api_key_env", "OPENAI_API_KEY")
        base_url = cfg.get("base_url", "https://api.openai.com/v1")
        models = {
            model_key: ModelInfo.from_config(mcfg)
            for model_key, mcfg in (cfg.get("models") or {}).items()
        }
        return cls(
            name=name,
            api_key_env=api_key_env,
            base_url=base_url,
            models=models,
        )

    def _client(self) -> OpenAI:
        api_key = os.getenv(self.api_key_env)
        if not api_key:
            raise ProviderError(
                f"Environment variable '{self.api_key_env}' is not set for provider '{self.name}'."
            )
        return OpenAI(api_key=api_key, base_url=self.base_url)

    @staticmethod
    def _tool_specs(tools: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return [
            {
                "type": "function",
                "function": {
                    "name": decl["name"],
                    "description": decl.get("description", ""),
                    "parameters": decl.get("parameters", {"type": "object", "properties": {}}),
                },
            }
            for decl in tools
        ]

    @staticmethod
    def _parse_tool_calls(message: Any) -> List[Dict[str, Any]]:
        calls: List[Dict[str, Any]] = []
        for tc in getattr(message, "tool_calls", None) or []:
            try:
                args = json.loads(tc.function.arguments or "{}")
            except json.JSONDecodeError:
                logger.warning(
                    "Tool call %s had non-JSON arguments: %r", tc.function.name, tc.function.arguments
                )
                args = {}
            calls.append({"name": tc.function.name, "args": args, "id": tc.id})
        return calls

    def chat(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
    ) -> ChatResponse:
        client = self._client()
        kwargs: Dict[str, Any] = {"model": model, "messages": messages}
        if tools:
            kwargs["tools"] = self._tool_specs(tools)
        try:
            resp = client.chat.completions.create(**kwargs)
        except Exception as exc:  # noqa: BLE001
            raise ProviderError(f"OpenAI provider error: {exc}") from exc
        message = resp.choices[0].message
        return ChatResponse(
            text=message.content or "",
            raw=resp,
            tool_calls=self._parse_tool_calls(message),
        )

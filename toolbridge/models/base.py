"""
Provider types shared by the model adapters.

Every provider accepts OpenAI-format chat messages plus an optional
list of function declarations, and reports the function calls the
model asks for as `{name, args, id}` call requests, the same shape
`ToolManager.dispatch` consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class ChatResponse:
    """
    One model reply.

    `text` is the assistant text (possibly empty when the model only
    calls tools); `tool_calls` holds the requested call requests in the
    order the model emitted them; `raw` keeps the SDK response object.
    """

    text: str
    raw: Any
    tool_calls: List[Dict[str, Any]] = field(default_factory=list)


class ProviderError(Exception):
    """Raised when a provider cannot be resolved or its API call fails."""


class BaseProvider:
    """
    Adapter for one model API.

    Subclasses build themselves with `from_config` and fill `models`
    with the model keys they serve.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.models: Dict[str, ModelInfo] = {}

    def chat(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
    ) -> ChatResponse:
        raise NotImplementedError

    @classmethod
    def from_config(cls, name: str, cfg: Dict[str, Any]) -> "BaseProvider":
        raise NotImplementedError


@dataclass
class ModelInfo:
    """API model identifier and whether it may be offered tools."""

    name: str
    supports_tools: bool = False
    max_context_tokens: int = 8192

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], default_context: int = 8192) -> "ModelInfo":
        return cls(
            name=cfg["name"],
            supports_tools=bool(cfg.get("supports_tools", False)),
            max_context_tokens=int(cfg.get("max_context_tokens", default_context)),
        )


class ModelRegistry:
    """Maps provider names and `(provider, model key)` pairs to their objects."""

    def __init__(self) -> None:
        self.providers: Dict[str, BaseProvider] = {}
        self.models: Dict[Tuple[str, str], ModelInfo] = {}

    def register_provider(self, provider: BaseProvider) -> None:
        """Add a provider together with every model it was configured with."""
        self.providers[provider.name] = provider
        for model_key, model_info in provider.models.items():
            self.models[(provider.name, model_key)] = model_info

    def resolve(self, provider_name: str, model_key: str) -> Tuple[BaseProvider, ModelInfo]:
        provider = self.providers.get(provider_name)
        if provider is None:
            raise ProviderError(f"Provider '{provider_name}' not registered.")
        model_info = self.models.get((provider_name, model_key))
        if model_info is None:
            raise ProviderError(
                f"Model '{model_key}' not registered for provider '{provider_name}'."
            )
        return provider, model_info

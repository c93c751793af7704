"""
Model routing.

`ModelRouter` looks up the provider and model for a chat request and
decides whether the tool declarations go along with it: models not
configured with `supports_tools` never see them.
"""

from typing import Any, Dict, List, Optional

from toolbridge.models.base import ChatResponse, ModelRegistry


class ModelRouter:
    """Send chat requests to a registered provider/model pair."""

    def __init__(self, model_registry: ModelRegistry) -> None:
        self.model_registry = model_registry

    def chat(
        self,
        provider_name: str,
        model_name: str,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
    ) -> ChatResponse:
        """
        Args:
            provider_name: The registered provider name.
            model_name: The model key under that provider.
            messages: OpenAI-format messages, including assistant
                `tool_calls` and `tool` results from earlier steps.
            tools: Flattened function declarations from the ToolManager.

        Raises:
            ProviderError: If the pair is not registered or the API call fails.
        """
        provider, model_info = self.model_registry.resolve(provider_name, model_name)
        offered = tools if model_info.supports_tools else None
        return provider.chat(model=model_info.name, messages=messages, tools=offered)

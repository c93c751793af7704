"""
Tests for the agent loop and model router.
"""

import json

import pytest
from unittest.mock import MagicMock

from toolbridge.core.agent import ToolAgent
from toolbridge.core.prompts import PromptManager
from toolbridge.core.router import ModelRouter
from toolbridge.models.base import BaseProvider, ChatResponse, ModelInfo, ModelRegistry, ProviderError
from toolbridge.tools.manager import ToolManager


@pytest.fixture
def prompts():
    return PromptManager({})


@pytest.fixture
def router():
    router = MagicMock(spec=ModelRouter)
    return router


def weather_call(call_id="call-1"):
    return {
        "name": "get_weather_on_date",
        "args": {"location": "Manila", "date": "2024-03-01"},
        "id": call_id,
    }


class TestModelRouter:
    """Provider and model resolution."""

    def make_registry(self, supports_tools):
        provider = MagicMock(spec=BaseProvider)
        provider.name = "fake"
        provider.models = {"m": ModelInfo(name="fake-model", supports_tools=supports_tools)}
        provider.chat.return_value = ChatResponse(text="hi", raw=None)
        registry = ModelRegistry()
        registry.register_provider(provider)
        return registry, provider

    def test_forwards_tools(self):
        registry, provider = self.make_registry(supports_tools=True)
        tools = [{"name": "t"}]
        ModelRouter(registry).chat("fake", "m", [{"role": "user", "content": "x"}], tools=tools)
        provider.chat.assert_called_once_with(
            model="fake-model", messages=[{"role": "user", "content": "x"}], tools=tools
        )

    def test_drops_tools_when_unsupported(self):
        registry, provider = self.make_registry(supports_tools=False)
        ModelRouter(registry).chat("fake", "m", [], tools=[{"name": "t"}])
        assert provider.chat.call_args.kwargs["tools"] is None

    def test_unknown_provider(self):
        with pytest.raises(ProviderError):
            ModelRouter(ModelRegistry()).chat("missing", "m", [])


class TestToolAgent:
    """Function-calling loop."""

    @pytest.mark.asyncio
    async def test_text_reply_ends_loop(self, router, prompts):
        router.chat.return_value = ChatResponse(text="done", raw=None)
        agent = ToolAgent(router, prompts, ToolManager(), "fake", "m")

        assert await agent.run_task("hello") == "done"
        tools = router.chat.call_args.kwargs["tools"]
        assert [t["name"] for t in tools] == ["web_search", "get_weather_on_date", "sendEmail"]

    @pytest.mark.asyncio
    async def test_tool_call_results_fed_back(self, router, prompts):
        router.chat.side_effect = [
            ChatResponse(text="", raw=None, tool_calls=[weather_call()]),
            ChatResponse(text="It will be fine.", raw=None),
        ]
        agent = ToolAgent(router, prompts, ToolManager(), "fake", "m")

        assert await agent.run_task("weather in Manila?") == "It will be fine."

        messages = router.chat.call_args.kwargs["messages"]
        assistant, tool_msg = messages[-2], messages[-1]
        assert assistant["tool_calls"][0]["function"]["name"] == "get_weather_on_date"
        assert tool_msg["role"] == "tool"
        assert tool_msg["tool_call_id"] == "call-1"
        assert json.loads(tool_msg["content"])["output"]["location"] == "Manila"

    @pytest.mark.asyncio
    async def test_unknown_tool_reported_to_model(self, router, prompts):
        router.chat.side_effect = [
            ChatResponse(text="", raw=None, tool_calls=[{"name": "nope", "args": {}, "id": "z"}]),
            ChatResponse(text="Sorry.", raw=None),
        ]
        agent = ToolAgent(router, prompts, ToolManager(), "fake", "m")

        assert await agent.run_task("do something") == "Sorry."
        tool_msg = router.chat.call_args.kwargs["messages"][-1]
        assert json.loads(tool_msg["content"]) == {"error": "Tool 'nope' is not available."}

    @pytest.mark.asyncio
    async def test_max_steps(self, router, prompts):
        router.chat.return_value = ChatResponse(text="", raw=None, tool_calls=[weather_call()])
        agent = ToolAgent(router, prompts, ToolManager(), "fake", "m", max_steps=2)

        result = await agent.run_task("loop forever")

        assert result == "Maximum tool-calling steps reached without a final answer."
        assert router.chat.call_count == 2

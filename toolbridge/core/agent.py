"""
High-level agent implementations.

`ToolAgent` runs the function-calling loop: it offers the tool
declarations to the model and routes every call the model makes
through the `ToolManager`.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List

from toolbridge.core.prompts import PromptManager
from toolbridge.core.router import ModelRouter
from toolbridge.models.base import ChatResponse
from toolbridge.tools.base import UnknownToolError
from toolbridge.tools.manager import ToolManager

logger = logging.getLogger(__name__)


class ToolAgent:
    """
    Function-calling agent.

    Each step sends the conversation plus the tool declarations to the
    model. If the model asks for tool calls, every call is dispatched
    and its response envelope is appended as a `tool` message; a reply
    without tool calls is the final answer.
    """

    def __init__(
        self,
        router: ModelRouter,
        prompts: PromptManager,
        tools: ToolManager,
        provider_name: str,
        model_name: str,
        max_steps: int = 4,
    ) -> None:
        self.router = router
        self.prompts = prompts
        self.tools = tools
        self.provider_name = provider_name
        self.model_name = model_name
        self.max_steps = max_steps

    async def call_tool(self, call: Dict[str, Any]) -> Dict[str, Any]:
        """
        Dispatch one call, reporting unknown tools back as an error response.
        """
        try:
            return await self.tools.dispatch(call)
        except UnknownToolError as exc:
            logger.warning("Model requested an unavailable tool: %s", exc)
            return {
                "functionResponses": [
                    {"response": {"error": f"Tool '{call.get('name')}' is not available."}, "id": call.get("id")}
                ]
            }

    async def run_task(self, task: str) -> str:
        """
        Run a task using the function-calling loop.
        """
        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": self.prompts.get_agent_system_prompt()},
            {"role": "user", "content": task},
        ]
        declarations = self.tools.function_declarations()

        for _ in range(self.max_steps):
            response: ChatResponse = await asyncio.to_thread(
                self.router.chat,
                provider_name=self.provider_name,
                model_name=self.model_name,
                messages=messages,
                tools=declarations,
            )
            if not response.tool_calls:
                return response.text

            messages.append(
                {
                    "role": "assistant",
                    "content": response.text,
                    "tool_calls": [
                        {
                            "id": call["id"],
                            "type": "function",
                            "function": {"name": call["name"], "arguments": json.dumps(call["args"])},
                        }
                        for call in response.tool_calls
                    ],
                }
            )
            envelopes = await asyncio.gather(*(self.call_tool(call) for call in response.tool_calls))
            for call, envelope in zip(response.tool_calls, envelopes):
                entry = envelope["functionResponses"][0]
                messages.append(
                    {
                        "role": "tool",
                        "tool_call_id": call["id"],
                        "content": json.dumps(entry["response"], default=str),
                    }
                )

        return "Maximum tool-calling steps reached without a final answer."

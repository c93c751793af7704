"""
Tool manager.

The manager owns the registry of tool plugins, aggregates their
function declarations for the model, and routes incoming function
calls to the tool that serves them. Failures raised inside a tool are
converted into error responses so that one misbehaving tool never
breaks the conversation loop; only calls naming an unknown tool fail
outright.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

from toolbridge.tools.base import (
    Declaration,
    InvalidToolError,
    Tool,
    ToolConflictError,
    ToolResult,
    UnknownToolError,
    is_tool,
)
from toolbridge.tools.mail import EmailTool
from toolbridge.tools.weather import WeatherTool
from toolbridge.tools.web import WebSearchTool

logger = logging.getLogger(__name__)


class ToolManager:
    """
    Registers tools by name and dispatches function calls to them.

    Lifecycle: the constructor registers the built-in tools, after which
    further tools may be registered at any time. Entries are never
    removed.

    Example:
        manager = ToolManager()
        envelope = await manager.dispatch(
            {"name": "get_weather_on_date", "args": {"location": "Manila"}, "id": "1"}
        )
    """

    def __init__(self, tools_cfg: Optional[Dict[str, Any]] = None) -> None:
        self.tools_cfg = tools_cfg or {}
        self._tools: Dict[str, Tool] = {}
        self._aliases: Dict[str, str] = {}
        self._lock = threading.Lock()
        self.register_builtins()

    def register_builtins(self) -> None:
        """Register the default tools under their fixed names."""
        self.register(
            "web_search", WebSearchTool.from_config(self.tools_cfg.get("web_search") or {})
        )
        self.register("weather", WeatherTool.from_config(self.tools_cfg.get("weather") or {}))
        self.register("email", EmailTool.from_config(self.tools_cfg.get("email") or {}))

    def register(self, name: str, tool: Tool) -> None:
        """
        Register a tool under `name`, along with the aliases it declares.

        Raises:
            ToolConflictError: If `name` or one of the tool's aliases is
                already registered.
            InvalidToolError: If `tool` lacks `describe` or `execute`.
        """
        if not is_tool(tool):
            raise InvalidToolError(
                f'Invalid tool instance for "{name}". Tool must have "describe" and "execute" methods.'
            )
        aliases = tuple(getattr(tool, "aliases", ()) or ())

        with self._lock:
            if name in self._tools:
                raise ToolConflictError(f'Tool "{name}" is already registered.')
            if name in self._aliases:
                raise ToolConflictError(
                    f'Name "{name}" is already an alias for tool "{self._aliases[name]}".'
                )
            for alias in aliases:
                if alias == name:
                    continue
                if alias in self._tools:
                    raise ToolConflictError(f'Alias "{alias}" is already a registered tool name.')
                owner = self._aliases.get(alias)
                if owner is not None:
                    raise ToolConflictError(
                        f'Alias "{alias}" is already registered for tool "{owner}".'
                    )
            self._tools[name] = tool
            for alias in aliases:
                self._aliases[alias] = name

        logger.info('Tool "%s" registered successfully.', name)

    def register_alias(self, alias: str, name: str) -> None:
        """
        Route calls named `alias` to the tool registered under `name`.

        Raises:
            UnknownToolError: If no tool is registered under `name`.
            ToolConflictError: If `alias` already routes to a tool.
        """
        with self._lock:
            if name not in self._tools:
                raise UnknownToolError(f'Unknown tool: "{name}".')
            if alias in self._aliases:
                raise ToolConflictError(
                    f'Alias "{alias}" is already registered for tool "{self._aliases[alias]}".'
                )
            if alias in self._tools and alias != name:
                raise ToolConflictError(f'Alias "{alias}" is already a registered tool name.')
            self._aliases[alias] = name
        logger.info('Alias "%s" now routes to tool "%s".', alias, name)

    def resolve(self, name: str) -> Optional[Tool]:
        """Find the tool serving `name`, checking aliases before registry keys."""
        key = self._aliases.get(name, name)
        return self._tools.get(key)

    def list_tools(self) -> List[str]:
        return list(self._tools)

    def list_declarations(self) -> List[Dict[str, Any]]:
        """
        Collect the declarations of every registered tool.

        Tools whose `describe` raises or returns nothing are logged and
        left out; this method itself never fails.

        Returns:
            A list of `{"name": ..., "declaration": ...}` entries in
            registration order.
        """
        declarations: List[Dict[str, Any]] = []
        for name, tool in list(self._tools.items()):
            try:
                declaration = tool.describe()
            except Exception:  # noqa: BLE001
                logger.exception('Failed to get declaration for tool "%s".', name)
                continue
            if not declaration:
                logger.warning('Tool "%s" returned an empty declaration.', name)
                continue
            declarations.append({"name": name, "declaration": declaration})
        return declarations

    def function_declarations(self) -> List[Declaration]:
        """Flatten the declaration aggregate into a plain list of functions."""
        functions: List[Declaration] = []
        for entry in self.list_declarations():
            declaration = entry["declaration"]
            if isinstance(declaration, (list, tuple)):
                functions.extend(declaration)
            else:
                functions.append(declaration)
        return functions

    async def dispatch(self, function_call: Dict[str, Any]) -> Dict[str, Any]:
        """
        Execute a function call from the model.

        Args:
            function_call: Mapping with `name`, `args` and `id` keys.

        Returns:
            A response envelope:
            `{"functionResponses": [{"response": {"output" | "error": ...}, "id": ...}]}`.

        Raises:
            UnknownToolError: If no tool serves the requested name.
        """
        name = function_call.get("name")
        args = function_call.get("args") or {}
        call_id = function_call.get("id")
        logger.info('Handling tool call: "%s" args=%s', name, args)

        tool = self.resolve(name)
        if tool is None:
            raise UnknownToolError(f'Unknown tool: "{name}".')

        result = await self._execute(name, tool, args)
        return {"functionResponses": [{"response": result.to_response(), "id": call_id}]}

    async def _execute(self, name: str, tool: Tool, args: Dict[str, Any]) -> ToolResult:
        try:
            output = await tool.execute(args)
        except Exception as exc:  # noqa: BLE001
            logger.error('Tool "%s" execution failed: %s', name, exc, exc_info=True)
            return ToolResult.failure(str(exc) or type(exc).__name__)
        logger.info('Tool "%s" executed successfully.', name)
        return ToolResult.success(output)

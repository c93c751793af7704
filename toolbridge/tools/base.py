"""
Base classes for tool plugins.

Tools are self-contained capabilities the model can request through
function calls. Each tool describes itself with one or more function
declarations and executes asynchronously with the arguments the model
supplies. Tools are registered in a `ToolManager` for lookup by name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

Declaration = Dict[str, Any]
DeclarationPayload = Union[Declaration, List[Declaration]]


class ToolError(Exception):
    """Base class for all tool and dispatcher errors."""


class ToolConflictError(ToolError):
    """Raised when a tool or alias name is already registered."""


class InvalidToolError(ToolError):
    """Raised when an object does not implement the tool contract."""


class UnknownToolError(ToolError):
    """Raised when a call names a tool that is not registered."""


class ToolExecutionError(ToolError):
    """Raised by a tool when its input is invalid or its action fails."""


class Tool:
    """
    Represents a capability the agent can invoke.

    Subclasses implement `describe`, returning the function declaration
    (or a list of declarations) shown to the model, and `execute`, which
    runs the tool with the call arguments. `aliases` lists external
    function names that do not match the registry key but should still
    route to this tool.
    """

    aliases: Tuple[str, ...] = ()

    def describe(self) -> Optional[DeclarationPayload]:
        raise NotImplementedError

    async def execute(self, args: Dict[str, Any]) -> Any:
        raise NotImplementedError

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "Tool":
        raise NotImplementedError


def is_tool(obj: Any) -> bool:
    """Return True if `obj` exposes callable `describe` and `execute`."""
    if obj is None:
        return False
    return callable(getattr(obj, "describe", None)) and callable(
        getattr(obj, "execute", None)
    )


def require_args(args: Dict[str, Any], *names: str) -> None:
    """
    Check that every named argument is a non-empty string.

    Raises:
        ToolExecutionError: Naming the missing or non-string fields.
    """
    missing = [
        name
        for name in names
        if args.get(name) is None or (isinstance(args[name], str) and not args[name].strip())
    ]
    if missing:
        raise ToolExecutionError(
            f"Missing required fields: {', '.join(missing)}."
        )
    malformed = [name for name in names if not isinstance(args[name], str)]
    if malformed:
        raise ToolExecutionError(
            f"Fields must be strings: {', '.join(malformed)}."
        )


@dataclass
class ToolResult:
    """
    Outcome of a single tool execution.

    Exactly one of `output` and `error` is meaningful: `error` is None
    on success and holds the failure message otherwise.
    """

    output: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, output: Any) -> "ToolResult":
        return cls(output=output)

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_response(self) -> Dict[str, Any]:
        if self.ok:
            return {"output": self.output}
        return {"error": self.error}

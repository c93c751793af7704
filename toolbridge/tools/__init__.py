"""
Tool plugin system.

Tools implement specific capabilities the model can call, such as
performing web searches, producing weather forecasts and sending
email. Tools are registered in the `ToolManager`, which aggregates
their declarations for the model and dispatches function calls.
"""

__all__ = [
    "base",
    "manager",
    "mail",
    "weather",
    "web",
]

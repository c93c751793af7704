"""
toolbridge package root.

This package provides configuration loading utilities, the tool
manager that dispatches model function calls to tool plugins, the
agent loop and routing logic, and model providers.
"""

__all__ = [
    "config",
    "core",
    "models",
    "tools",
]

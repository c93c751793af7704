"""
Model provider implementations.

This package collects base types and helper classes in `base.py` and
concrete provider implementations for OpenAI and Anthropic. Adding a
new provider involves creating a new module that subclasses
`BaseProvider` and reports tool calls in its `ChatResponse`.
"""

__all__ = [
    "base",
    "openai_provider",
    "anthropic_provider",
]

"""
Core logic for the agent.

This subpackage provides the router, which directs requests to
appropriate model providers, the high-level agent classes that run
the function-calling loop, and prompt management utilities.
"""

__all__ = [
    "router",
    "agent",
    "prompts",
]

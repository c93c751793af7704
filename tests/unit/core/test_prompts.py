"""
Tests for PromptManager defaults and overrides.
"""

from toolbridge.core.prompts import DEFAULT_PROMPTS, PromptManager


def test_default_prompt():
    assert PromptManager(None).get_agent_system_prompt() == DEFAULT_PROMPTS["agent_system"]


def test_override_and_persona():
    prompts = PromptManager({"agent_system": "Use tools.", "persona": "Your name is Daisy.\n"})
    assert prompts.get_agent_system_prompt() == "Use tools.\n\nYour name is Daisy."


def test_persona_appended_to_default():
    prompts = PromptManager({"persona": "Keep answers short."})
    assert prompts.get_agent_system_prompt().endswith("\n\nKeep answers short.")

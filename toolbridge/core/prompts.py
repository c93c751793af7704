"""
Prompt management.

The system prompt lives under the `prompts` key of the YAML configuration.
`PromptManager` falls back to a built-in default when the configuration leaves it
out, and can append a persona text (the `prompts.persona` key).
"""

from typing import Dict

DEFAULT_PROMPTS: Dict[str, str] = {
    "agent_system": (
        "You are a helpful assistant that can call functions. Use the provided "
        "tools to search the web, look up weather forecasts, and send email when "
        "the user asks for it. If a tool returns an error, explain the problem to "
        "the user in plain language or try again with corrected arguments."
    ),
}


class PromptManager:
    """
    Build the system prompt for the function-calling agent.
    """

    def __init__(self, prompts_cfg: Dict) -> None:
        self.prompts_cfg = prompts_cfg or {}

    def _prompt(self, key: str) -> str:
        text = self.prompts_cfg.get(key) or DEFAULT_PROMPTS[key]
        persona = self.prompts_cfg.get("persona")
        if persona:
            text = f"{text.rstrip()}\n\n{persona.strip()}"
        return text

    def get_agent_system_prompt(self) -> str:
        """Prompt for the function-calling agent; tool schemas are sent separately."""
        return self._prompt("agent_system")

"""LLM client abstraction for running prompts against Gemini or Claude."""

from __future__ import annotations

import logging
from typing import Optional

from tripgraph.config import get_api_key

logger = logging.getLogger(__name__)

DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "claude": "claude-haiku-4-5",
}

THINKING_BUDGETS = {
    "off": -1,
    "minimal": 128,
    "low": 1024,
    "medium": 4096,
    "high": 16384,
}

MAX_OUTPUT_TOKENS = 1024


class LLMClient:
    """Unified interface for calling Gemini or Claude APIs."""

    def __init__(
        self,
        provider: str = "gemini",
        model: Optional[str] = None,
        thinking_level: str = "low",
        max_output_tokens: int = MAX_OUTPUT_TOKENS,
    ):
        self.provider = provider.lower()
        self.thinking_level = thinking_level
        self.max_output_tokens = max_output_tokens

        if self.provider == "gemini":
            self.model = model or DEFAULT_MODELS["gemini"]
            self._init_gemini()
        elif self.provider == "claude":
            self.model = model or DEFAULT_MODELS["claude"]
            self._init_claude()
        else:
            raise ValueError(f"Unsupported provider: {provider}. Use 'gemini' or 'claude'.")

    def _init_gemini(self):
        try:
            from google import genai
        except ImportError:
            raise ImportError("Install google-genai: pip install google-genai")

        api_key = get_api_key("GEMINI_API_KEY", "gemini")
        if not api_key:
            raise ValueError(
                "GEMINI_API_KEY not found. Either:\n"
                "  • Run: tripgraph set-key gemini\n"
                "  • Or:  export GEMINI_API_KEY='your-key'"
            )
        self._gemini_client = genai.Client(api_key=api_key)

    def _init_claude(self):
        try:
            import anthropic
        except ImportError:
            raise ImportError("Install anthropic: pip install anthropic")

        api_key = get_api_key("ANTHROPIC_API_KEY", "claude")
        if not api_key:
            raise ValueError(
                "ANTHROPIC_API_KEY not found. Either:\n"
                "  • Run: tripgraph set-key claude\n"
                "  • Or:  export ANTHROPIC_API_KEY='sk-ant-...'"
            )
        self._claude_client = anthropic.Anthropic(api_key=api_key)

    def run(self, system_prompt: str, user_message: str) -> str:
        """Send system + user message to the LLM and return the text response."""
        logger.debug("LLM call %s/%s (%d chars in)", self.provider, self.model, len(user_message))
        if self.provider == "gemini":
            return self._run_gemini(system_prompt, user_message)
        return self._run_claude(system_prompt, user_message)

    def _run_gemini(self, system_prompt: str, user_message: str) -> str:
        from google.genai import types

        budget = THINKING_BUDGETS.get(self.thinking_level, 1024)

        # gemini-2.5-* and gemini-3-* support thinking; 2.0 does not
        model_supports_thinking = any(
            self.model.startswith(p) for p in ("gemini-2.5", "gemini-3")
        )

        if model_supports_thinking and self.thinking_level != "off":
            config = types.GenerateContentConfig(
                system_instruction=system_prompt,
                thinking_config=types.ThinkingConfig(thinking_budget=budget),
                max_output_tokens=self.max_output_tokens + max(budget, 0),
            )
        else:
            config = types.GenerateContentConfig(
                system_instruction=system_prompt,
                max_output_tokens=self.max_output_tokens,
            )

        response = self._gemini_client.models.generate_content(
            model=self.model,
            contents=user_message,
            config=config,
        )

        # Skip thinking parts
        text_parts = []
        if response.candidates and response.candidates[0].content:
            for part in response.candidates[0].content.parts:
                if part.text and not getattr(part, "thought", False):
                    text_parts.append(part.text)

        return "".join(text_parts)

    def _run_claude(self, system_prompt: str, user_message: str) -> str:
        response = self._claude_client.messages.create(
            model=self.model,
            max_tokens=self.max_output_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": user_message}],
        )
        return "".join(block.text for block in response.content if getattr(block, "type", "") == "text")

"""
LLM service for classifying chat messages with OpenAI GPT models.
"""

import logging
from typing import Optional, List, Dict

from ..config import get_settings
from ..models.schemas import ToolDecision
from ..utils.helpers import extract_json_object

logger = logging.getLogger(__name__)


class LLMService:
    """
    Service for interacting with Large Language Models (OpenAI GPT).
    """

    def __init__(self, client=None):
        self.settings = get_settings()
        self._client = client
        if self._client is None:
            self._init_client()

    def _init_client(self):
        """Initialize OpenAI client."""
        from openai import OpenAI

        self._client = OpenAI(api_key=self.settings.OPENAI_API_KEY or None)
        logger.info(f"Initialized OpenAI LLM client with model: {self.settings.OPENAI_MODEL}")

    def classify_tool(
        self,
        message: str,
        system_prompt: str,
        history: Optional[List[Dict[str, str]]] = None,
        temperature: Optional[float] = None
    ) -> ToolDecision:
        """
        Ask the model which tool should handle a message.

        Args:
            message: The current user message
            system_prompt: Prompt with broker/client context and tool list
            history: Trailing conversation history [{"role": ..., "content": ...}]
            temperature: Sampling temperature (uses settings default if not provided)

        Returns:
            Validated ToolDecision (tool, parameters, response)
        """
        messages = [{"role": "system", "content": system_prompt}]

        for entry in history or []:
            messages.append({
                "role": entry.get("role", "user"),
                "content": entry.get("content", "")
            })

        messages.append({"role": "user", "content": message})

        response = self._client.chat.completions.create(
            model=self.settings.OPENAI_MODEL,
            messages=messages,
            temperature=temperature if temperature is not None else self.settings.OPENAI_TEMPERATURE,
            max_tokens=self.settings.OPENAI_MAX_TOKENS,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content or ""
        decision = ToolDecision.model_validate(extract_json_object(content))
        logger.debug(f"Classifier picked {decision.tool.value}")
        return decision


# Singleton instance
_llm_service: Optional[LLMService] = None


def get_llm_service() -> LLMService:
    """
    Get or create the LLM service singleton.

    Returns:
        LLMService instance
    """
    global _llm_service

    if _llm_service is None:
        _llm_service = LLMService()

    return _llm_service

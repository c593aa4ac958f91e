"""
Delegated attribute extraction through an OpenAI-compatible chat API.

One attempt per call. Every failure surfaces as ExtractionServiceError so the
caller can fall back to local rules.
"""

import json
import logging
from typing import Any, Dict, Optional

from openai import OpenAI, OpenAIError

from ..errors import ExtractionServiceError
from ..models import AssetCategory
from .prompts import system_prompt


logger = logging.getLogger(__name__)


class LLMExtractionClient:
    """
    Chat-completions client in JSON mode.

    Construct once at process start and pass it to AttributeExtractor.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.3,
        max_tokens: int = 500,
        timeout: float = 30.0,
        client: Any = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

        if client is not None:
            self.client = client
        elif api_key:
            self.client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        else:
            logger.info("No OpenAI API key configured, delegated extraction disabled")
            self.client = None

    @classmethod
    def from_config(cls, config) -> "LLMExtractionClient":
        return cls(
            api_key=config.openai_api_key,
            model=config.openai_model,
            temperature=config.openai_temperature,
            max_tokens=config.openai_max_tokens,
            timeout=config.openai_timeout,
        )

    def is_available(self) -> bool:
        """Check if the client is properly configured."""
        return self.client is not None

    def extract(self, text: str, category: AssetCategory) -> Dict[str, Any]:
        """
        Request structured attributes for ``text``.

        Returns:
            The decoded JSON object, unvalidated

        Raises:
            ExtractionServiceError: on any transport, status or decode failure
        """
        if not self.client:
            raise ExtractionServiceError("LLM client not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt(category)},
                    {"role": "user", "content": text},
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except OpenAIError as exc:
            raise ExtractionServiceError(f"request failed: {exc}") from exc

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content:
            raise ExtractionServiceError("empty response")

        try:
            payload = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ExtractionServiceError(f"malformed JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise ExtractionServiceError(f"expected JSON object, got {type(payload).__name__}")

        logger.debug("LLM extracted %d fields for %s", len(payload), category.value)
        return payload

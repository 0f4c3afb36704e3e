"""Memo summarization via an OpenAI chat-completions model."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from openai import OpenAI, OpenAIError

from memobook.shared.config import settings
from memobook.shared.errors import ConfigError, GatewayError

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Summarize the key points of the following memo as 3-5 concise bullet points. "
    "Write each point as a single sentence and format them as a bulleted list.\n\n"
    "Memo content:\n{content}"
)

MISSING_KEY_MESSAGE = "API key is not configured."
FAILED_MESSAGE = "An error occurred while generating the summary."


@dataclass
class SummaryGateway:
    """One request per call: no retry, no streaming, no result caching."""

    api_key: str | None
    model: str = "gpt-4o-mini"
    max_tokens: int = 500
    temperature: float = 0.3
    client: Any = None

    @classmethod
    def from_settings(cls) -> "SummaryGateway":
        return cls(
            api_key=settings.OPENAI_API_KEY,
            model=settings.SUMMARY_MODEL,
            max_tokens=settings.SUMMARY_MAX_TOKENS,
            temperature=settings.SUMMARY_TEMPERATURE,
        )

    def _client(self):
        if self.client is None:
            self.client = OpenAI(api_key=self.api_key)
        return self.client

    def summarize(self, content: str) -> str:
        if not self.api_key:
            raise ConfigError(MISSING_KEY_MESSAGE)

        try:
            resp = self._client().chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": PROMPT_TEMPLATE.format(content=content)}],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except OpenAIError as e:
            logger.error("Summarization error: %s", e)
            raise GatewayError(FAILED_MESSAGE) from e

        text = ""
        if resp.choices:
            text = (resp.choices[0].message.content or "").strip()
        if not text:
            logger.error("Summarization returned no text (model=%s)", self.model)
            raise GatewayError(FAILED_MESSAGE)
        return text

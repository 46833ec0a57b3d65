import logging
from abc import ABC, abstractmethod

from services.errors import CompletionServiceFailure

logger = logging.getLogger(__name__)


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.
    Implement this interface to swap in a different provider (Anthropic, Gemini, etc.).
    """

    @abstractmethod
    def complete_text(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 1500,
    ) -> str:
        """Send a prompt and get a plain text response."""
        pass


class OpenAIProvider(LLMProvider):
    """OpenAI implementation using GPT-4o-mini by default."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", timeout: float = 60):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = None

    @property
    def client(self):
        # Built on first use; the SDK rejects a missing key at construction
        if self._client is None:
            from openai import OpenAI

            self._client = OpenAI(
                api_key=self.api_key, timeout=self.timeout, max_retries=0
            )
        return self._client

    def complete_text(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 1500,
    ) -> str:
        from openai import OpenAIError

        try:
            client = self.client
            completion = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI completion failed: {e}")
            raise CompletionServiceFailure(f"Completion request failed: {e}") from e

        if not completion.choices:
            raise CompletionServiceFailure("Completion returned no choices")
        return completion.choices[0].message.content or ""

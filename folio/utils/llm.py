"""
LLM provider abstraction and response parsing utilities.

Provides a provider-agnostic interface for LLM API calls with automatic retries
and a tolerant parser for JSON object responses.
"""

import json
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Retry configuration
MAX_RETRIES = int(os.getenv("LLM_MAX_RETRIES", "3"))
BASE_DELAY = 1.0

T = TypeVar("T")


def _retry_with_backoff(
    operation: Callable[[], T],
    retryable_exception: type[Exception],
    error_message: str,
) -> T:
    """
    Execute operation with exponential backoff retry on a specific exception.

    Args:
        operation: Callable that performs the API request and returns result
        retryable_exception: Exception type that triggers retry
        error_message: Message prefix for retry logging (e.g., "API overloaded")
    """
    for attempt in range(MAX_RETRIES):
        try:
            return operation()
        except retryable_exception:
            if attempt == MAX_RETRIES - 1:
                raise
            delay = BASE_DELAY * (2**attempt)
            logger.warning(
                f"{error_message}, retrying in {delay:.1f}s... "
                f"(attempt {attempt + 1}/{MAX_RETRIES})"
            )
            time.sleep(delay)


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "anthropic", "openai")
    - Set self._retryable_exception to the exception type that triggers retry
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str
    _retryable_exception: type[Exception] = ConnectionError
    _retry_message: str = "Transient API error"

    name: str
    model: str
    max_tokens: int = 1024

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Make a single API call (no retries)."""

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Generate a response with automatic retry on transient errors."""
        return _retry_with_backoff(
            partial(self._call_api, system_prompt, user_prompt),
            self._retryable_exception,
            self._retry_message,
        )


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider."""

    _provider_prefix = "anthropic"
    _retry_message = "API overloaded"

    def __init__(self, model: str = "claude-sonnet-4-20250514"):
        # Lazy import, only needed when this provider is selected
        try:
            import anthropic
        except ImportError:
            raise ImportError("anthropic package required. Install with: pip install folio[llm]")

        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self.client = anthropic.Anthropic(api_key=api_key)
        self._retryable_exception = anthropic.APIStatusError
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return LLMResponse(
            content=response.content[0].text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider."""

    _provider_prefix = "openai"
    _retry_message = "Rate limit hit"

    def __init__(self, model: str = "gpt-4o-mini"):
        # Lazy import, only needed when this provider is selected
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install folio[llm]")

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self.client = openai.OpenAI(api_key=api_key)
        self._retryable_exception = openai.RateLimitError
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=0.3,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


def get_provider(provider_name: Optional[str] = None, model: Optional[str] = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "anthropic" or "openai" (default: from LLM_PROVIDER env var)
        model: Model name (default: LLM_MODEL env var, then provider-specific default)

    Raises:
        ValueError: Unknown provider or missing API key
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "openai")
    provider_name = provider_name.lower()
    model = model or os.getenv("LLM_MODEL")

    if provider_name == "anthropic":
        return AnthropicProvider(model=model) if model else AnthropicProvider()
    elif provider_name == "openai":
        return OpenAIProvider(model=model) if model else OpenAIProvider()
    else:
        raise ValueError(f"Unknown provider: {provider_name}. Use 'anthropic' or 'openai'")


def parse_dict_response(
    text: str, fallback_dict: dict[str, list[str]] = None
) -> dict[str, list[str]]:
    """
    Parse a JSON object of string lists from an LLM response.

    Accepts bare JSON, JSON wrapped in prose or a markdown code fence. Non-list
    values become empty lists.

    Args:
        text: LLM response text
        fallback_dict: Dict to return if parsing fails (default: empty dict)

    Returns:
        Dict mapping strings to lists of strings
    """
    text = (text or "").strip()

    candidates = [text]
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start : end + 1])

    for candidate in candidates:
        try:
            result = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(result, dict):
            return {
                k: [str(i) for i in v] if isinstance(v, list) else [] for k, v in result.items()
            }

    return fallback_dict if fallback_dict is not None else {}

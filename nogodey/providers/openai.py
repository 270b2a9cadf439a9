"""OpenAI client for LLM translation."""

import os
from typing import Any, Dict, Optional

import requests

from nogodey.errors import BackendError
from nogodey.prompts.translate import SYSTEM_PROMPT
from nogodey.providers.base import TranslationClient, DEFAULT_TIMEOUT
from nogodey.run_logging import RunLogger


DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAIClient(TranslationClient):
    """OpenAI client using the Chat Completions API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        max_tokens: int = 2000,
        temperature: float = 0.3,
        logger: Optional[RunLogger] = None
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (default: from OPENAI_API_KEY env var)
            base_url: API base URL (default: from OPENAI_BASE_URL env var or https://api.openai.com/v1)
            max_tokens: Completion token limit (default: 2000)
            temperature: Sampling temperature (default: 0.3)
            logger: Optional RunLogger for response metadata
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self.api_key:
            raise ValueError(
                "OpenAI API key required. Set OPENAI_API_KEY environment variable "
                "or pass api_key parameter."
            )

        self.base_url = (base_url or os.getenv("OPENAI_BASE_URL") or
                         DEFAULT_BASE_URL).rstrip("/")
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.logger = logger

    def _build_payload(self, prompt: str, model: str) -> Dict[str, Any]:
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt}
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature
        }

    def complete(
        self,
        prompt: str,
        model: str,
        timeout: float = DEFAULT_TIMEOUT
    ) -> str:
        """
        Call OpenAI Chat Completions API with a prompt.

        No retries happen here; the caller decides whether to try again.

        Args:
            prompt: Prompt text
            model: Model name
            timeout: Request timeout in seconds (default: 60.0)

        Returns:
            Content of the first choice

        Raises:
            BackendError: If the request fails, or the response has no choices
                or an unexpected shape
        """
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        try:
            response = requests.post(
                url,
                headers=headers,
                json=self._build_payload(prompt, model),
                timeout=timeout
            )
        except requests.exceptions.Timeout as e:
            raise BackendError(f"OpenAI API request timed out after {timeout}s: {e}", cause=e) from e
        except requests.exceptions.RequestException as e:
            raise BackendError(f"OpenAI API request failed: {e}", cause=e) from e

        if response.status_code == 401:
            raise BackendError(
                "OpenAI API authentication failed. Check your API key. "
                f"Response: {response.text}"
            )

        if response.status_code == 403:
            raise BackendError(
                "OpenAI API permission denied. Check your API key permissions. "
                f"Response: {response.text}"
            )

        if response.status_code == 429:
            raise BackendError(f"OpenAI API rate limit exceeded. Response: {response.text}")

        if not response.ok:
            raise BackendError(
                f"OpenAI API error ({response.status_code}): {response.text}"
            )

        try:
            response_data = response.json()
        except ValueError as e:
            raise BackendError(f"OpenAI API returned invalid JSON: {e}", cause=e) from e

        if not isinstance(response_data, dict):
            raise BackendError(
                f"unexpected response shape from OpenAI: {type(response_data).__name__} body"
            )

        choices = response_data.get("choices") or []
        if not isinstance(choices, list):
            raise BackendError("unexpected response shape from OpenAI: choices is not a list")
        if len(choices) == 0:
            raise BackendError("no response choices returned from OpenAI")

        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict):
            raise BackendError("unexpected response shape from OpenAI: choice has no message object")

        content = message.get("content") or ""
        if not isinstance(content, str):
            raise BackendError("unexpected response shape from OpenAI: content is not a string")

        if self.logger:
            usage = response_data.get("usage")
            self.logger.info(
                "received LLM response",
                response_length=len(content),
                usage_tokens=usage.get("total_tokens", 0) if isinstance(usage, dict) else 0
            )

        return content

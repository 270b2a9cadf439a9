"""Base client interface for the text-generation backend."""

from abc import ABC, abstractmethod


DEFAULT_TIMEOUT = 60.0


class TranslationClient(ABC):
    """Base class for translation backends."""

    @abstractmethod
    def complete(
        self,
        prompt: str,
        model: str,
        timeout: float = DEFAULT_TIMEOUT
    ) -> str:
        """
        Submit a prompt and return the raw reply of the first returned choice.

        Args:
            prompt: Prompt text (see prompts.translate.build_translation_prompt)
            model: Model identifier (e.g., "gpt-3.5-turbo")
            timeout: Deadline for this single call, in seconds

        Returns:
            Raw reply text

        Raises:
            BackendError: If the remote call fails, times out, or returns no choices
        """
        pass

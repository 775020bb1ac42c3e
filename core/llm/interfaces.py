"""
LLM Provider Interface - Abstract base for completion service providers.

The selection pipeline only needs chat completions; any OpenAI-compatible
endpoint (OpenAI, Mistral, Ollama, vLLM, ...) can sit behind it.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

Message = Dict[str, str]


class LLMProvider(ABC):
    """
    Abstract Interface for chat completion providers.
    """

    @abstractmethod
    def chat(
        self,
        messages: List[Message],
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        """
        Run one chat completion and return the first choice's content.

        Args:
            messages: OpenAI-style ``[{'role': ..., 'content': ...}]`` list
            model: Override for the configured default model
            temperature: Sampling temperature
            max_tokens: Completion token budget

        Raises:
            CompletionServiceError: when the service fails terminally
        """
        pass

    def complete(self, prompt: str, temperature: float = 0.7, max_tokens: int = 2000) -> str:
        """Send a single user prompt."""
        return self.chat(
            [{'role': 'user', 'content': prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
        )

"""
OpenAI Service - chat completions over any OpenAI-compatible endpoint.

Retry policy: up to ``max_retries`` attempts with linearly increasing
backoff (``retry_delay * attempt``). Client errors (HTTP 4xx) are never
retried. Exhausted retries raise CompletionServiceError naming the last
underlying failure.
"""
from typing import Any, Dict, List, Optional
import logging

from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_incrementing,
)
from tenacity import RetryCallState

from core.exceptions import CompletionServiceError
from core.llm.interfaces import LLMProvider, Message

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

def _status_code(exc: BaseException) -> Optional[int]:
    """HTTP status carried by an exception, if any."""
    status = getattr(exc, 'status_code', None)
    if status is None:
        status = getattr(exc, 'status', None)
    return status if isinstance(status, int) else None


def _is_client_error(exc: BaseException) -> bool:
    status = _status_code(exc)
    return status is not None and 400 <= status < 500


def _is_retryable(exc: BaseException) -> bool:
    """Everything except 4xx responses is worth another attempt."""
    return not _is_client_error(exc)


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "Completion request failed (attempt %s). Waiting %.1fs before retry. Details: %s",
        retry_state.attempt_number, wait, exc,
    )


def _raise_exhausted(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception()
    raise CompletionServiceError(
        f"Failed after {retry_state.attempt_number} retries: {exc or 'Unknown error'}",
        status_code=_status_code(exc) if exc else None,
    ) from exc


def _completion_retry(max_attempts: int, delay_seconds: float):
    """Return a tenacity @retry decorator for completion calls."""
    return retry(
        retry=retry_if_exception(_is_retryable),
        wait=wait_incrementing(start=delay_seconds, increment=delay_seconds),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        retry_error_callback=_raise_exhausted,
    )


class OpenAIService(LLMProvider):
    """
    Chat completion client for OpenAI-compatible APIs.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: str = "mistral-medium",
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
        request_timeout_seconds: Optional[float] = None,
        client: Optional[Any] = None,
    ):
        if client is None:
            client_kwargs: Dict[str, Any] = {'max_retries': 0}
            if api_key:
                client_kwargs['api_key'] = api_key
            if base_url:
                client_kwargs['base_url'] = base_url
            if request_timeout_seconds:
                client_kwargs['timeout'] = request_timeout_seconds
            client = OpenAI(**client_kwargs)

        self.client = client
        self.model = model
        self.max_retries = max(1, max_retries)
        self.retry_delay_seconds = retry_delay_seconds

    def _create_completion(self, **params):
        return self.client.chat.completions.create(**params)

    def chat(
        self,
        messages: List[Message],
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        params = {
            'model': model or self.model,
            'messages': messages,
            'temperature': temperature,
            'max_tokens': max_tokens,
        }

        call = _completion_retry(self.max_retries, self.retry_delay_seconds)(self._create_completion)
        try:
            response = call(**params)
        except CompletionServiceError:
            raise
        except Exception as e:
            if _is_client_error(e):
                logger.error(f"Completion request rejected ({_status_code(e)}): {e}")
                raise CompletionServiceError(str(e), status_code=_status_code(e)) from e
            raise

        try:
            content = response.choices[0].message.content
        except (IndexError, AttributeError, TypeError) as e:
            raise CompletionServiceError(f"Malformed completion response: {e}") from e

        logger.debug(f"Completion received ({params['model']}), {len(content or '')} chars")
        return content or ""

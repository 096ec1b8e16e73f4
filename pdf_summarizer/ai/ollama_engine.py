"""
Ollama Completion Engine for PDF Summarizer
Wraps a locally running Ollama server behind a small chat-completion contract.

The summarization pipeline only depends on two operations:
- reload(model_id): make a model active (fails on unknown/unavailable models)
- complete(messages, temperature, max_tokens): one non-streaming chat call

Everything else here (connection checks, progress reporting) exists so the
controller can surface useful state to the user while a model loads.
"""

import time
from dataclasses import dataclass
from typing import Callable

import requests

from ..config import (
    OLLAMA_API_BASE,
    OLLAMA_CONNECT_TIMEOUT_SECONDS,
    OLLAMA_TIMEOUT_SECONDS,
)
from ..errors import CompletionError, ModelLoadError, NotInitializedError
from ..logging_config import debug_log

InitProgressCallback = Callable[[str, float], None]


@dataclass
class Completion:
    """
    Result of a single completion call.

    Attributes:
        choice_text: Content of the first choice, or None when the engine
            returned no message content.
        tokens_used: Tokens generated, as reported by the engine.
    """
    choice_text: str | None
    tokens_used: int = 0


class OllamaEngine:
    """
    Chat-completion engine backed by the Ollama REST API.

    An engine has no active model until reload() succeeds. One request is
    expected in flight at a time.
    """

    def __init__(self, api_base: str = OLLAMA_API_BASE, timeout: float = OLLAMA_TIMEOUT_SECONDS):
        self.api_base = api_base.rstrip('/')
        self.timeout = timeout
        self.model_id: str | None = None
        self._progress_callback: InitProgressCallback | None = None

    def set_init_progress_callback(self, callback: InitProgressCallback | None):
        """Register callback(text, fraction) for model load progress."""
        self._progress_callback = callback

    def _report_progress(self, text: str, fraction: float):
        if self._progress_callback:
            self._progress_callback(text, fraction)

    def _error_text(self, response) -> str:
        """Extract Ollama's error message from a failed response."""
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict) and body.get('error'):
            return str(body['error'])
        return response.text

    def reload(self, model_id: str):
        """
        Load model_id into Ollama and make it the active model.

        Ollama loads a model into memory when asked to generate from an
        empty prompt, so that request doubles as an availability check.

        Raises:
            ModelLoadError: If Ollama is unreachable or rejects the model
        """
        debug_log(f"[OLLAMA LOAD] Loading model: {model_id}")
        self._report_progress(f"Loading {model_id}", 0.0)
        start_time = time.time()

        try:
            response = requests.post(
                f"{self.api_base}/api/generate",
                json={"model": model_id, "prompt": "", "stream": False},
                timeout=(OLLAMA_CONNECT_TIMEOUT_SECONDS, self.timeout),
            )
        except requests.exceptions.ConnectionError as e:
            raise ModelLoadError(
                f"Cannot connect to Ollama at {self.api_base}. "
                "Is Ollama running? Start with: ollama serve"
            ) from e
        except requests.exceptions.RequestException as e:
            raise ModelLoadError(f"Failed to load model {model_id}: {e}") from e

        if response.status_code != 200:
            raise ModelLoadError(
                f"Model {model_id} is not available "
                f"(status {response.status_code}): {self._error_text(response)}"
            )

        self.model_id = model_id
        debug_log(f"[OLLAMA LOAD] Model ready: {model_id} ({time.time() - start_time:.2f}s)")
        self._report_progress(f"Loaded {model_id}", 1.0)

    def complete(
        self,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> Completion:
        """
        Run one chat completion against the active model.

        Args:
            messages: Chat messages, e.g. [{"role": "user", "content": "..."}]
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate

        Returns:
            Completion with the first choice's text (None if absent)

        Raises:
            NotInitializedError: If no model has been loaded
            CompletionError: On timeout, connection failure or an error status.
                The message carries Ollama's error text unchanged.
        """
        if self.model_id is None:
            raise NotInitializedError()

        payload = {
            "model": self.model_id,
            "messages": messages,
            "stream": False,
            "options": {
                "temperature": temperature,
                "num_predict": max_tokens,
            },
        }

        prompt_chars = sum(len(m.get('content', '')) for m in messages)
        debug_log(
            f"[OLLAMA CHAT] model={self.model_id} prompt={prompt_chars} chars "
            f"max_tokens={max_tokens} temp={temperature}"
        )

        start_time = time.time()
        try:
            response = requests.post(
                f"{self.api_base}/api/chat",
                json=payload,
                timeout=(OLLAMA_CONNECT_TIMEOUT_SECONDS, self.timeout),
            )
        except requests.exceptions.Timeout as e:
            raise CompletionError(f"Generation timeout after {self.timeout} seconds") from e
        except requests.exceptions.ConnectionError as e:
            raise CompletionError(f"Cannot connect to Ollama at {self.api_base}") from e
        except requests.exceptions.RequestException as e:
            raise CompletionError(f"Completion request failed: {e}") from e

        if response.status_code != 200:
            raise CompletionError(self._error_text(response))

        try:
            result = response.json()
        except ValueError as e:
            raise CompletionError("Ollama returned a malformed response") from e

        message = result.get('message') or {}
        content = message.get('content')
        tokens_used = result.get('eval_count', 0)

        debug_log(
            f"[OLLAMA CHAT] Complete: {tokens_used} tokens in {time.time() - start_time:.2f}s, "
            f"{len(content or '')} chars"
        )
        return Completion(choice_text=content, tokens_used=tokens_used)

    def unload(self):
        """Forget the active model (Ollama evicts idle models itself)."""
        debug_log(f"[OLLAMA] Unloading model: {self.model_id}")
        self.model_id = None

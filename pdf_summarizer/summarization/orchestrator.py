"""
Summarization Controller - Public entry point for PDF text summarization.

Owns the completion engine handle and the observable LifecycleState, and
decides between the single-pass and chunked paths:

    text ─┬─ len <= safe_text_length ─→ one completion call
          └─ len >  safe_text_length ─→ split_sentences → build_chunks
                                         → ChunkSummarizer (N calls)
                                         → Reducer (1 call)

State machine:
    Idle → Initializing → {Ready | InitFailed}
    Ready → Summarizing → {Ready | SummarizeFailed (error recorded, still Ready)}
    reset_engine(): any state → Idle

Single-caller contract: one initialize_engine() or summarize_text() call is
expected in flight at a time. Nothing here locks; concurrent calls from
several threads are a caller error.

Usage:
    controller = SummarizationController()
    controller.initialize_engine()
    if controller.state.initialized:
        summary = controller.summarize_text(text, SummarizeOptions(language="en"))
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Callable

from pdf_summarizer.ai.ollama_engine import OllamaEngine
from pdf_summarizer.config import CONTEXT_WINDOW_ERROR_MARKERS, SummarizerSettings
from pdf_summarizer.errors import (
    EmptyInputError,
    EmptySummaryError,
    ModelLoadError,
    NotInitializedError,
    SummarizationError,
)
from pdf_summarizer.logging_config import Timer, debug_log, error, info, warning

from .chunk_builder import build_chunks
from .chunk_summarizer import ChunkSummarizer
from .prompts import build_single_prompt, user_message
from .reducer import Reducer
from .result_types import LifecycleState, SummarizeOptions
from .segmenter import split_sentences

if TYPE_CHECKING:
    EngineFactory = Callable[[SummarizerSettings], OllamaEngine]

INIT_FAILED_MESSAGE = (
    "AI モデルの初期化に失敗しました。Ollama が起動しているか、モデルが利用可能か確認してください。"
)
CONTEXT_WINDOW_MESSAGE = "テキストが長すぎます。より短いテキストで試してください。"
SUMMARY_FAILED_MESSAGE = "要約の生成に失敗しました"
GENERIC_FAILURE_MESSAGE = "要約の生成中にエラーが発生しました"


def _default_engine_factory(settings: SummarizerSettings) -> OllamaEngine:
    return OllamaEngine(api_base=settings.api_base, timeout=settings.timeout_seconds)


def resolve_error_message(exc: BaseException) -> str:
    """Map an underlying failure to the message shown to the user."""
    message = str(exc)
    lowered = message.lower()
    if any(marker.lower() in lowered for marker in CONTEXT_WINDOW_ERROR_MARKERS):
        return CONTEXT_WINDOW_MESSAGE
    return message or GENERIC_FAILURE_MESSAGE


class SummarizationController:
    """
    Owns the engine handle and runs summarization requests.

    Attributes:
        settings: Tunable thresholds and model candidates.
        on_state_change: Optional listener called with a state snapshot
            after every state update.
    """

    def __init__(
        self,
        settings: SummarizerSettings | None = None,
        engine_factory: EngineFactory | None = None,
        on_state_change: Callable[[LifecycleState], None] | None = None,
    ):
        self.settings = settings or SummarizerSettings()
        self.engine_factory = engine_factory or _default_engine_factory
        self.on_state_change = on_state_change
        self._engine: OllamaEngine | None = None
        self._state = LifecycleState()

    @property
    def state(self) -> LifecycleState:
        """Snapshot of the current lifecycle state."""
        return replace(self._state)

    @property
    def engine(self) -> OllamaEngine | None:
        return self._engine

    def _update_state(self, **changes):
        self._state = replace(self._state, **changes)
        self._notify()

    def _notify(self):
        """Hand a snapshot to the listener. Listener errors never reach the state machine."""
        if not self.on_state_change:
            return
        try:
            self.on_state_change(self.state)
        except Exception as e:
            warning(f"[CONTROLLER] State listener failed: {e}")

    def _set_progress(self, message: str):
        self._update_state(progress=message)

    def _on_init_progress(self, text: str, fraction: float):
        self._set_progress(f"{text} ({round(fraction * 100)}%)")

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def initialize_engine(self):
        """
        Create the engine and load the first model candidate that works.

        Does nothing if an engine is held or initialization is underway or
        done. Failures never raise: they are logged and recorded in
        state.error, leaving initialized=False so the caller can retry.
        """
        if self._engine is not None or self._state.initializing or self._state.initialized:
            return

        self._update_state(
            initializing=True,
            error=None,
            progress="モデルを初期化しています...",
        )

        try:
            with Timer("Engine initialization"):
                engine = self.engine_factory(self.settings)
                engine.set_init_progress_callback(self._on_init_progress)
                self._load_first_available_model(engine)
        except Exception as e:
            error(f"[CONTROLLER] Engine initialization failed: {e}")
            self._update_state(
                initializing=False,
                error=INIT_FAILED_MESSAGE,
                progress="",
            )
            return

        self._engine = engine
        self._update_state(
            initializing=False,
            initialized=True,
            progress="初期化完了",
        )

    def _load_first_available_model(self, engine: OllamaEngine) -> str:
        """
        Try each model candidate in order.

        Returns:
            The model id that loaded

        Raises:
            ModelLoadError: If every candidate fails
        """
        last_error: Exception | None = None

        for model_id in self.settings.model_candidates:
            self._set_progress(f"モデル {model_id} を試行中...")
            try:
                engine.reload(model_id)
            except Exception as e:
                warning(f"[CONTROLLER] Failed to load model {model_id}: {e}")
                last_error = e
                continue

            self._set_progress(f"モデル {model_id} をロード完了")
            info(f"[CONTROLLER] Loaded model {model_id}")
            return model_id

        raise ModelLoadError("利用可能なモデルが見つかりませんでした") from last_error

    # ------------------------------------------------------------------
    # Summarization
    # ------------------------------------------------------------------

    def summarize_text(self, text: str, options: SummarizeOptions | None = None) -> str:
        """
        Summarize text with the loaded model.

        Args:
            text: Extracted document text.
            options: Language and target length (defaults to ja / 300).

        Returns:
            The summary.

        Raises:
            NotInitializedError: No engine is held (checked before the text).
            EmptyInputError: text is empty or whitespace only.
            SummarizationError: Any failure during generation. The message is
                user-facing and also stored in state.error.
        """
        if self._engine is None:
            raise NotInitializedError()

        if not text or not text.strip():
            raise EmptyInputError()

        options = options or SummarizeOptions()
        self._update_state(summarizing=True, error=None)

        try:
            if len(text) > self.settings.safe_text_length:
                summary = self._summarize_chunked(text, options)
                self._update_state(summarizing=False, progress="")
            else:
                summary = self._summarize_single(text, options)
                self._update_state(summarizing=False)
            return summary

        except Exception as e:
            message = resolve_error_message(e)
            error(f"[CONTROLLER] Summarization error: {e}")
            self._update_state(summarizing=False, error=message, progress="")
            raise SummarizationError(message) from e

    def _summarize_single(self, text: str, options: SummarizeOptions) -> str:
        debug_log(f"[CONTROLLER] Single-pass summary of {len(text)} chars")
        completion = self._engine.complete(
            messages=user_message(build_single_prompt(text, options.language, options.max_length)),
            temperature=self.settings.temperature,
            max_tokens=self.settings.summary_max_tokens(options.max_length),
        )
        summary = (completion.choice_text or "").strip()
        if not summary:
            raise EmptySummaryError(SUMMARY_FAILED_MESSAGE)
        return summary

    def _summarize_chunked(self, text: str, options: SummarizeOptions) -> str:
        self._set_progress("長いテキストを分割して処理中...")

        chunks = build_chunks(split_sentences(text), self.settings.safe_text_length)
        debug_log(f"[CONTROLLER] Chunked summary of {len(text)} chars in {len(chunks)} chunks")

        with Timer("Chunk summaries"):
            partial_summaries = ChunkSummarizer(self._engine, self.settings).summarize_chunks(
                chunks, options.language, on_progress=self._set_progress
            )

        self._set_progress("最終要約を生成中...")
        return Reducer(self._engine, self.settings).reduce(
            partial_summaries, options.language, options.max_length
        )

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def reset_engine(self):
        """Drop the engine and return every state field to its initial value."""
        if self._engine is not None:
            self._engine.unload()
            self._engine = None
        self._state = LifecycleState()
        self._notify()

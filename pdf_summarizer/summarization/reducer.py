"""
Reducer - Combines partial summaries into the final document summary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdf_summarizer.config import SummarizerSettings
from pdf_summarizer.errors import AllChunksEmptyError, EmptySummaryError
from pdf_summarizer.logging_config import debug_log

from .prompts import build_final_prompt, user_message

if TYPE_CHECKING:
    from pdf_summarizer.ai.ollama_engine import OllamaEngine

PARTIAL_SUMMARY_SEPARATOR = "\n\n"
FINAL_SUMMARY_FAILED = "最終要約の生成に失敗しました"


def combine_summaries(partial_summaries: list[str]) -> str:
    return PARTIAL_SUMMARY_SEPARATOR.join(partial_summaries)


class Reducer:
    """Integrates partial summaries with a single completion call."""

    def __init__(self, engine: OllamaEngine, settings: SummarizerSettings | None = None):
        self.engine = engine
        self.settings = settings or SummarizerSettings()

    def reduce(self, partial_summaries: list[str], language: str, max_length: int) -> str:
        """
        Generate the final summary from partial summaries in document order.

        Raises:
            AllChunksEmptyError: If there are no partial summaries to combine
            EmptySummaryError: If the model returns no usable text
            CompletionError: Propagated from the engine
        """
        if not partial_summaries:
            raise AllChunksEmptyError()

        combined = combine_summaries(partial_summaries)
        max_tokens = self.settings.summary_max_tokens(max_length)
        debug_log(
            f"[REDUCER] Combining {len(partial_summaries)} partial summaries "
            f"({len(combined)} chars, max_tokens={max_tokens})"
        )

        completion = self.engine.complete(
            messages=user_message(build_final_prompt(combined, language, max_length)),
            temperature=self.settings.temperature,
            max_tokens=max_tokens,
        )

        final_summary = (completion.choice_text or "").strip()
        if not final_summary:
            raise EmptySummaryError(FINAL_SUMMARY_FAILED)
        return final_summary

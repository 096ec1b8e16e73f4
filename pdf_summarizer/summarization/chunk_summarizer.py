"""
Chunk Summarizer - Map step of the chunked summarization path.

Summarizes each chunk with its own completion call, strictly in order, so
progress messages and partial summary order match the document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from pdf_summarizer.config import SummarizerSettings
from pdf_summarizer.logging_config import debug_log

from .prompts import build_chunk_prompt, user_message

if TYPE_CHECKING:
    from pdf_summarizer.ai.ollama_engine import OllamaEngine


def chunk_progress_message(index: int, total: int) -> str:
    return f"パート {index + 1}/{total} を要約中..."


class ChunkSummarizer:
    """
    Produces one partial summary per chunk.

    Chunks whose completion is empty or absent are skipped rather than
    failed, so the result may be shorter than the chunk list.

    Attributes:
        engine: Completion engine with a complete() method.
        settings: Temperature and per-chunk token budget.
    """

    def __init__(self, engine: OllamaEngine, settings: SummarizerSettings | None = None):
        self.engine = engine
        self.settings = settings or SummarizerSettings()

    def summarize_chunks(
        self,
        chunks: list[str],
        language: str,
        on_progress: Callable[[str], None] | None = None,
    ) -> list[str]:
        """
        Summarize every chunk in order.

        Args:
            chunks: Ordered chunks of the document.
            language: Prompt language ("ja" or "en").
            on_progress: Called with a progress message before each chunk.

        Returns:
            Partial summaries in chunk order, empty ones omitted.

        Raises:
            CompletionError: Propagated from the engine; no retries.
        """
        partial_summaries = []
        total = len(chunks)

        for i, chunk in enumerate(chunks):
            if on_progress:
                on_progress(chunk_progress_message(i, total))

            completion = self.engine.complete(
                messages=user_message(build_chunk_prompt(chunk, language)),
                temperature=self.settings.temperature,
                max_tokens=self.settings.chunk_max_tokens,
            )

            summary = (completion.choice_text or "").strip()
            if summary:
                partial_summaries.append(summary)
            else:
                debug_log(f"[CHUNK SUMMARIZER] Chunk {i + 1}/{total} returned no text, skipping")

        debug_log(f"[CHUNK SUMMARIZER] {len(partial_summaries)}/{total} chunks summarized")
        return partial_summaries

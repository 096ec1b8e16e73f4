"""
Data Types for PDF Summarization

Simple dataclasses passed between the summarization controller and its
callers.

Key Types:
    SummarizeOptions - Immutable per-request settings (language, max_length)
    LifecycleState - Observable state of the summarization controller
"""

from __future__ import annotations

from dataclasses import dataclass

from pdf_summarizer.config import DEFAULT_LANGUAGE, DEFAULT_MAX_LENGTH, SUPPORTED_LANGUAGES


@dataclass(frozen=True)
class SummarizeOptions:
    """
    Settings for a single summarize_text() call.

    Attributes:
        language: Prompt language, "ja" or "en".
        max_length: Approximate summary length (characters for "ja", words for "en").
    """
    language: str = DEFAULT_LANGUAGE
    max_length: int = DEFAULT_MAX_LENGTH

    def __post_init__(self):
        if self.language not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Unsupported language '{self.language}'. Choose one of {SUPPORTED_LANGUAGES}."
            )
        if self.max_length < 1:
            raise ValueError(f"max_length must be positive, got {self.max_length}")


@dataclass
class LifecycleState:
    """
    Observable state of the summarization controller.

    initializing and initialized are never both True. error is set only
    when the most recent operation failed and has not been retried.
    """
    initializing: bool = False
    initialized: bool = False
    summarizing: bool = False
    error: str | None = None
    progress: str = ""


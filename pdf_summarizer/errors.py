"""
Exception types raised by PDF Summarizer.

Initialization failures are absorbed into LifecycleState by the controller;
everything raised from summarize_text() is a SummarizationError chained from
one of the lower-level errors below.
"""


class PdfSummarizerError(Exception):
    """Base class for all application errors."""


class NotInitializedError(PdfSummarizerError):
    """The completion engine has not been initialized."""

    def __init__(self, message: str = "AI モデルが初期化されていません"):
        super().__init__(message)


class EmptyInputError(PdfSummarizerError):
    """Summarization was requested for blank text."""

    def __init__(self, message: str = "要約するテキストが空です"):
        super().__init__(message)


class ModelLoadError(PdfSummarizerError):
    """A model could not be loaded (or every candidate failed)."""


class CompletionError(PdfSummarizerError):
    """The engine rejected a completion request."""


class EmptySummaryError(PdfSummarizerError):
    """The model returned no usable text."""


class AllChunksEmptyError(EmptySummaryError):
    """Every per-chunk completion came back empty."""

    def __init__(self, message: str = "すべてのパートの要約が空でした"):
        super().__init__(message)


class SummarizationError(PdfSummarizerError):
    """A summarize_text() call failed; the message is user-facing."""


class PdfValidationError(PdfSummarizerError):
    """The uploaded file was rejected before extraction."""


class PdfExtractionError(PdfSummarizerError):
    """Text could not be extracted from the PDF."""

"""
Summarization Package for PDF Summarizer - Unified API for text summarization.

    from pdf_summarizer.summarization import (
        SummarizationController, SummarizeOptions, LifecycleState,
        split_sentences, build_chunks, ChunkSummarizer, Reducer,
    )

Architecture:
    ┌─────────────────────────────────────────────────────────────┐
    │  SummarizationController (engine handle + LifecycleState)   │
    ├─────────────────────────────────────────────────────────────┤
    │  short text → single completion call                        │
    │  long text  → split_sentences → build_chunks                │
    │               → ChunkSummarizer (one call per chunk)        │
    │               → Reducer (one call) → final summary          │
    └─────────────────────────────────────────────────────────────┘
"""

from .chunk_builder import build_chunks, split_text_into_chunks
from .chunk_summarizer import ChunkSummarizer
from .orchestrator import SummarizationController, resolve_error_message
from .reducer import Reducer, combine_summaries
from .result_types import LifecycleState, SummarizeOptions
from .segmenter import split_sentences

__all__ = [
    'SummarizationController',
    'resolve_error_message',
    'ChunkSummarizer',
    'Reducer',
    'combine_summaries',
    'build_chunks',
    'split_text_into_chunks',
    'split_sentences',
    'LifecycleState',
    'SummarizeOptions',
]

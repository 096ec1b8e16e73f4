"""
Chunk Builder

Packs sentence units into chunks of bounded character length for the
chunked summarization path:
1. Units are appended greedily, each followed by a unit terminator (。)
2. A chunk is sealed when the next unit would push it past the maximum
3. Units are never split, so one oversized unit becomes its own chunk
"""

from pdf_summarizer.config import DEFAULT_MAX_CHUNK_SIZE
from pdf_summarizer.logging_config import debug_log

from .segmenter import split_sentences

UNIT_TERMINATOR = "。"


def build_chunks(units: list[str], max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE) -> list[str]:
    """
    Build chunks from sentence units respecting the size limit.

    Args:
        units: Ordered sentence units (see split_sentences)
        max_chunk_size: Maximum chunk length in characters

    Returns:
        Ordered list of chunks; empty if units is empty

    Raises:
        ValueError: If max_chunk_size is less than 1
    """
    if max_chunk_size < 1:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")

    chunks = []
    current_chunk = ""

    for unit in units:
        candidate = current_chunk + unit + UNIT_TERMINATOR

        if len(candidate) > max_chunk_size and current_chunk:
            chunks.append(current_chunk.strip())
            current_chunk = unit + UNIT_TERMINATOR
        else:
            current_chunk = candidate

    # Don't forget the last chunk
    if current_chunk.strip():
        chunks.append(current_chunk.strip())

    oversized = sum(1 for chunk in chunks if len(chunk) > max_chunk_size)
    debug_log(
        f"[CHUNKS] Built {len(chunks)} chunks from {len(units)} units "
        f"(max {max_chunk_size} chars, {oversized} oversized)"
    )
    return chunks


def split_text_into_chunks(text: str, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE) -> list[str]:
    """Segment text into sentence units and pack them into chunks."""
    return build_chunks(split_sentences(text), max_chunk_size)

"""
Sentence segmentation on Japanese terminators and line breaks.
"""

import re

# Full-width period (both forms), exclamation, question mark, CR and LF.
# A run of terminators is a single boundary.
SENTENCE_BOUNDARY = re.compile(r'[。．！？\n\r]+')


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentence-like units.

    Returns:
        Ordered list of non-empty, whitespace-stripped units. Empty input
        yields an empty list.
    """
    if not text:
        return []
    units = (part.strip() for part in SENTENCE_BOUNDARY.split(text))
    return [unit for unit in units if unit]

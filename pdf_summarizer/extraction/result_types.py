"""
Data Types for PDF Extraction
"""

from dataclasses import dataclass, field


@dataclass
class ExtractionResult:
    """
    Text extracted from a PDF plus file metadata.

    Attributes:
        text: Page texts joined with newlines.
        metadata: filename, size (bytes), type (content type) and page_count.
    """
    text: str
    metadata: dict = field(default_factory=dict)

"""
Extraction Package

Turns an uploaded PDF into plain text for the summarization controller.
"""

from pdf_summarizer.extraction.pdf_text_extractor import PdfTextExtractor
from pdf_summarizer.extraction.result_types import ExtractionResult

__all__ = ['PdfTextExtractor', 'ExtractionResult']

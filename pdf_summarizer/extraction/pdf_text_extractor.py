"""
PDF Text Extraction Module

Validates an uploaded PDF and extracts its text with pdfplumber.

Validation mirrors the upload rules of the original web form:
- the file must exist
- it must be a PDF (by content type, or by suffix when no type is given)
- it must not exceed MAX_PDF_SIZE_BYTES (10MB)
"""

from pathlib import Path

import pdfplumber

from pdf_summarizer.config import DEBUG_MODE, MAX_PDF_SIZE_BYTES, PDF_CONTENT_TYPE
from pdf_summarizer.errors import PdfExtractionError, PdfValidationError
from pdf_summarizer.logging_config import Timer, debug, error, info
from pdf_summarizer.extraction.result_types import ExtractionResult

MISSING_FILE_MESSAGE = "PDFファイルが見つかりません"
NOT_PDF_MESSAGE = "PDFファイルを選択してください"
TOO_LARGE_MESSAGE = "ファイルサイズが大きすぎます (最大10MB)"
EXTRACTION_FAILED_MESSAGE = "PDFの解析中にエラーが発生しました"


class PdfTextExtractor:
    """
    Extracts raw text from a single PDF file.

    Attributes:
        max_size_bytes: Largest accepted file size.
    """

    def __init__(self, max_size_bytes: int = MAX_PDF_SIZE_BYTES):
        self.max_size_bytes = max_size_bytes

    def validate(self, file_path: Path, content_type: str | None = None) -> int:
        """
        Check that file_path is an acceptable PDF.

        Returns:
            File size in bytes

        Raises:
            PdfValidationError: With a user-facing message
        """
        if not file_path.is_file():
            raise PdfValidationError(MISSING_FILE_MESSAGE)

        if content_type is not None:
            is_pdf = content_type == PDF_CONTENT_TYPE
        else:
            is_pdf = file_path.suffix.lower() == ".pdf"
        if not is_pdf:
            raise PdfValidationError(NOT_PDF_MESSAGE)

        size = file_path.stat().st_size
        if size > self.max_size_bytes:
            raise PdfValidationError(TOO_LARGE_MESSAGE)
        return size

    def extract(self, file_path, content_type: str | None = None) -> ExtractionResult:
        """
        Validate the file and extract its text.

        Args:
            file_path: Path to the uploaded file
            content_type: MIME type reported by the uploader, if any

        Returns:
            ExtractionResult with page texts joined by newlines and metadata
            (filename, size, type, page_count)

        Raises:
            PdfValidationError: The file was rejected before extraction
            PdfExtractionError: pdfplumber could not read the file
        """
        file_path = Path(file_path)
        size = self.validate(file_path, content_type)
        info(f"Extracting text from {file_path.name} ({size / 1024:.2f} KB)")

        try:
            with Timer(f"PDF extraction ({file_path.name})"):
                with pdfplumber.open(file_path) as pdf:
                    page_count = len(pdf.pages)
                    debug(f"PDF has {page_count} pages")

                    pages = []
                    for i, page in enumerate(pdf.pages, 1):
                        if DEBUG_MODE and i % 10 == 0:
                            debug(f"Extracting page {i}/{page_count}")
                        page_text = page.extract_text()
                        if page_text:
                            pages.append(page_text)
        except Exception as e:
            error(f"Failed to extract PDF text from {file_path.name}: {e}", exc_info=True)
            raise PdfExtractionError(EXTRACTION_FAILED_MESSAGE) from e

        return ExtractionResult(
            text="\n".join(pages),
            metadata={
                'filename': file_path.name,
                'size': size,
                'type': content_type or PDF_CONTENT_TYPE,
                'page_count': page_count,
            },
        )

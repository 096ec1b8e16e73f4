"""
Unit tests for PdfTextExtractor.
"""

from unittest.mock import MagicMock, patch

import pytest

from pdf_summarizer import summarization
from pdf_summarizer.errors import PdfExtractionError, PdfValidationError
from pdf_summarizer.extraction import ExtractionResult, PdfTextExtractor


def _fake_pdf(page_texts):
    pdf = MagicMock()
    pdf.pages = []
    for text in page_texts:
        page = MagicMock()
        page.extract_text.return_value = text
        pdf.pages.append(page)
    pdf.__enter__.return_value = pdf
    pdf.__exit__.return_value = False
    return pdf


class TestValidation:
    """Tests for the upload rules applied before extraction."""

    @pytest.fixture
    def extractor(self):
        return PdfTextExtractor()

    def test_missing_file(self, extractor, tmp_path):
        with pytest.raises(PdfValidationError, match="PDFファイルが見つかりません"):
            extractor.extract(tmp_path / "missing.pdf")

    def test_wrong_suffix(self, extractor, tmp_path):
        text_file = tmp_path / "notes.txt"
        text_file.write_text("hello")

        with pytest.raises(PdfValidationError, match="PDFファイルを選択してください"):
            extractor.extract(text_file)

    def test_wrong_content_type(self, extractor, tmp_path):
        pdf_file = tmp_path / "test.pdf"
        pdf_file.write_bytes(b"%PDF-1.4")

        with pytest.raises(PdfValidationError, match="PDFファイルを選択してください"):
            extractor.extract(pdf_file, content_type="text/plain")

    def test_file_too_large(self, tmp_path):
        pdf_file = tmp_path / "large.pdf"
        pdf_file.write_bytes(b"x" * 2048)
        extractor = PdfTextExtractor(max_size_bytes=1024)

        with pytest.raises(PdfValidationError, match="ファイルサイズが大きすぎます"):
            extractor.extract(pdf_file)


class TestExtraction:
    """Tests for text extraction via pdfplumber."""

    @patch('pdf_summarizer.extraction.pdf_text_extractor.pdfplumber.open')
    def test_joins_page_text_and_reports_metadata(self, mock_open, tmp_path):
        pdf_file = tmp_path / "contract.pdf"
        pdf_file.write_bytes(b"%PDF-1.4 fake")
        mock_open.return_value = _fake_pdf(["一ページ目", None, "三ページ目"])

        result = PdfTextExtractor().extract(pdf_file)

        assert isinstance(result, ExtractionResult)
        assert result.text == "一ページ目\n三ページ目"
        assert result.metadata == {
            'filename': 'contract.pdf',
            'size': len(b"%PDF-1.4 fake"),
            'type': 'application/pdf',
            'page_count': 3,
        }

    @patch('pdf_summarizer.extraction.pdf_text_extractor.pdfplumber.open')
    def test_accepts_explicit_content_type(self, mock_open, tmp_path):
        upload = tmp_path / "upload.bin"
        upload.write_bytes(b"%PDF-1.4")
        mock_open.return_value = _fake_pdf(["text"])

        result = PdfTextExtractor().extract(upload, content_type="application/pdf")

        assert result.text == "text"

    @patch('pdf_summarizer.extraction.pdf_text_extractor.pdfplumber.open')
    def test_parser_failure_raises_extraction_error(self, mock_open, tmp_path):
        pdf_file = tmp_path / "broken.pdf"
        pdf_file.write_bytes(b"garbage")
        mock_open.side_effect = RuntimeError("damaged xref table")

        with pytest.raises(PdfExtractionError, match="PDFの解析中にエラーが発生しました") as exc_info:
            PdfTextExtractor().extract(pdf_file)
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestExtractionResult:
    """ExtractionResult belongs to the extraction package."""

    def test_defined_beside_extractor(self):
        assert ExtractionResult.__module__ == 'pdf_summarizer.extraction.result_types'

    def test_not_exported_by_summarization(self):
        assert not hasattr(summarization, 'ExtractionResult')

    def test_metadata_defaults_to_empty(self):
        assert ExtractionResult(text="body").metadata == {}

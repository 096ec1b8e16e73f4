"""
PDF Summarizer - Command-line entry point.

Extracts the text of a PDF, loads a local model through Ollama and prints
the summary.

Examples:
  pdf-summarizer report.pdf
  pdf-summarizer report.pdf --language en --max-length 200
  pdf-summarizer report.pdf --text-only
  DEBUG=true pdf-summarizer report.pdf
"""

import argparse
import sys
from pathlib import Path

from pdf_summarizer.config import DEFAULT_LANGUAGE, DEFAULT_MAX_LENGTH, SUPPORTED_LANGUAGES, load_settings
from pdf_summarizer.errors import EmptyInputError, PdfExtractionError, PdfValidationError, SummarizationError
from pdf_summarizer.extraction import PdfTextExtractor
from pdf_summarizer.logging_config import close_debug_log, critical, info
from pdf_summarizer.summarization import LifecycleState, SummarizationController, SummarizeOptions

EXIT_OK = 0
EXIT_EXTRACTION_FAILED = 1
EXIT_INIT_FAILED = 2
EXIT_SUMMARY_FAILED = 3
EXIT_CONFIG_INVALID = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-summarizer",
        description="Summarize a PDF with a local language model served by Ollama",
    )
    parser.add_argument('pdf', help='PDF file to summarize')
    parser.add_argument(
        '--language',
        default=DEFAULT_LANGUAGE,
        choices=SUPPORTED_LANGUAGES,
        help=f'Summary language (default: {DEFAULT_LANGUAGE})'
    )
    parser.add_argument(
        '--max-length',
        type=int,
        default=DEFAULT_MAX_LENGTH,
        help=f'Approximate summary length (default: {DEFAULT_MAX_LENGTH})'
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Settings YAML file (default: config/summarizer.yaml)'
    )
    parser.add_argument(
        '--text-only',
        action='store_true',
        help='Print the extracted text without summarizing'
    )
    return parser


def _print_progress(state: LifecycleState):
    if state.progress:
        print(state.progress, file=sys.stderr)


def run(args: argparse.Namespace, controller: SummarizationController | None = None) -> int:
    """Run the extract-then-summarize workflow and return an exit code."""
    try:
        extraction = PdfTextExtractor().extract(args.pdf)
    except (PdfValidationError, PdfExtractionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_EXTRACTION_FAILED

    if args.text_only:
        print(extraction.text)
        return EXIT_OK

    if controller is None:
        try:
            settings = load_settings(args.config)
        except ValueError as e:
            critical(f"Invalid settings: {e}", exc_info=False)
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_CONFIG_INVALID
        controller = SummarizationController(
            settings=settings,
            on_state_change=_print_progress,
        )

    controller.initialize_engine()
    state = controller.state
    if not state.initialized:
        print(f"Error: {state.error}", file=sys.stderr)
        return EXIT_INIT_FAILED

    options = SummarizeOptions(language=args.language, max_length=args.max_length)
    try:
        summary = controller.summarize_text(extraction.text, options)
    except (EmptyInputError, SummarizationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_SUMMARY_FAILED
    finally:
        controller.reset_engine()

    info(f"Summarized {extraction.metadata['filename']}: {len(summary)} chars")
    print(summary)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the pdf-summarizer command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_length < 1:
        parser.error("--max-length must be positive")
    try:
        return run(args)
    finally:
        close_debug_log()


if __name__ == "__main__":
    sys.exit(main())

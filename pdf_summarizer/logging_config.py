"""
Unified Logging Configuration for PDF Summarizer

This module provides a centralized logging system that combines:
- Console output with timestamps (DEBUG_MODE only)
- A debug trace file (debug_flow.txt) recording every debug_log() line
- A processing log (logs/processing.log) via the standard logging module
- Performance timing via the Timer context manager

All modules should import logging functions from this module:
    from pdf_summarizer.logging_config import debug_log, info, warning, error, Timer

Log Levels:
- debug_log(): Always writes to the trace file; console only in DEBUG_MODE
- info(): Standard information messages
- warning(): Warning messages
- error(): Error messages with optional exception info
- critical(): Critical errors (with traceback in DEBUG_MODE)
"""

import logging
import sys
import time
from datetime import datetime

from pdf_summarizer.config import (
    DEBUG_MODE,
    DEBUG_TRACE_FILE,
    LOG_DATE_FORMAT,
    LOG_FILE,
    LOG_FORMAT,
)

# =============================================================================
# Debug Trace File
# =============================================================================

class _DebugTraceFile:
    """
    Appends timestamped debug lines to debug_flow.txt.

    The file is opened lazily on the first write so importing the package
    never touches the filesystem beyond the logs directory.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._file = None
        return cls._instance

    def _open(self):
        try:
            self._file = open(DEBUG_TRACE_FILE, 'a', encoding='utf-8')
        except OSError:
            return None
        self._file.write(f"=== PDF Summarizer Debug Log ({datetime.now().isoformat()}) ===\n")
        return self._file

    def write(self, message: str):
        """Write message to the trace file."""
        log_file = self._file or self._open()
        if log_file is None:
            return
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        log_file.write(f"[{timestamp}] {message}\n")
        log_file.flush()

    def close(self):
        """Close the trace file."""
        if self._file:
            self._file.close()
            self._file = None


_debug_trace = _DebugTraceFile()


# =============================================================================
# Standard Python Logging Setup
# =============================================================================

def _setup_standard_logging() -> logging.Logger:
    """
    Configure the standard Python logging framework.

    Returns:
        Configured logger instance for the application
    """
    logger = logging.getLogger('PDFSummarizer')
    logger.setLevel(logging.DEBUG if DEBUG_MODE else logging.INFO)

    # Prevent duplicate handlers if called multiple times
    if logger.handlers:
        return logger

    try:
        file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(file_handler)
    except OSError:
        # Log directory is not writable; console handler below still applies
        pass

    if DEBUG_MODE:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(console_handler)

    return logger


_logger = _setup_standard_logging()


# =============================================================================
# Timer Context Manager
# =============================================================================

class Timer:
    """
    Context manager for timing code blocks with automatic logging.

    Usage:
        with Timer("ChunkSummaries"):
            # code to time
            pass

    Attributes:
        operation_name: Name of the operation being timed
        duration_ms: Duration in milliseconds (available after exit)
    """

    def __init__(self, operation_name: str, auto_log: bool = True):
        self.operation_name = operation_name
        self.auto_log = auto_log
        self.start_time: float | None = None
        self.duration_ms: float | None = None

    def __enter__(self):
        if self.auto_log:
            debug_log(f"Starting {self.operation_name}...")
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.time() - self.start_time) * 1000
        if self.auto_log:
            debug_timing(self.operation_name, self.duration_ms / 1000)
        return False  # Don't suppress exceptions


# =============================================================================
# Public Logging Functions
# =============================================================================

def debug_log(message: str):
    """
    Log a debug message to the trace file and console (if DEBUG_MODE).

    Args:
        message: The message to log (prefix with [MODULE] for clarity)

    Example:
        debug_log("[CHUNKS] Built 4 chunks from 9812 chars")
    """
    _debug_trace.write(message)
    _logger.debug(message)


def debug(message: str):
    """Alias for debug_log()."""
    debug_log(message)


def info(message: str):
    """Log an informational message."""
    _debug_trace.write(f"[INFO] {message}")
    _logger.info(message)


def warning(message: str):
    """Log a warning message."""
    _debug_trace.write(f"[WARNING] {message}")
    _logger.warning(message)


def error(message: str, exc_info: bool = False):
    """
    Log an error message with optional exception traceback.

    Args:
        message: The error message to log
        exc_info: If True, include exception traceback (only in DEBUG_MODE)
    """
    _debug_trace.write(f"[ERROR] {message}")
    _logger.error(message, exc_info=exc_info and DEBUG_MODE)


def critical(message: str, exc_info: bool = True):
    """Log a critical error, with traceback in DEBUG_MODE."""
    _debug_trace.write(f"[CRITICAL] {message}")
    _logger.critical(message, exc_info=exc_info and DEBUG_MODE)


def debug_timing(operation: str, elapsed_seconds: float):
    """
    Log operation timing information in human-readable format.

    Example:
        start = time.time()
        # ... do work ...
        debug_timing("PDF extraction", time.time() - start)
    """
    if elapsed_seconds < 1:
        time_str = f"{elapsed_seconds*1000:.0f} ms"
    elif elapsed_seconds < 60:
        time_str = f"{elapsed_seconds:.2f}s"
    else:
        time_str = f"{elapsed_seconds/60:.1f}m"
    debug_log(f"{operation} took {time_str}")


def close_debug_log():
    """Close the debug trace file. Call at application shutdown."""
    _debug_trace.close()


__all__ = [
    'debug_log',
    'debug',
    'debug_timing',
    'info',
    'warning',
    'error',
    'critical',
    'close_debug_log',
    'Timer',
    'DEBUG_MODE',
]

"""
PDF Summarizer Configuration Module
Centralized configuration for the application.

Tunable summarization thresholds live in config/summarizer.yaml and are
loaded into a SummarizerSettings instance; the module-level constants below
are the defaults used when the file (or a key) is missing.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

# Debug Mode Configuration
DEBUG_MODE = os.environ.get('DEBUG', 'false').lower() == 'true'

# Application Paths
APP_NAME = "PDFSummarizer"
APPDATA_DIR = Path(os.environ.get('APPDATA', os.path.expanduser('~/.config'))) / APP_NAME
LOGS_DIR = APPDATA_DIR / "logs"

# Ensure directories exist
LOGS_DIR.mkdir(parents=True, exist_ok=True)

# AI Engine Configuration
OLLAMA_API_BASE = os.environ.get('OLLAMA_HOST', "http://localhost:11434")
OLLAMA_TIMEOUT_SECONDS = 600  # 10 minutes for long summaries
OLLAMA_CONNECT_TIMEOUT_SECONDS = 5

# Models tried in order during initialization, most to least capable
MODEL_CANDIDATES = (
    "phi3:mini",
    "tinyllama:1.1b",
    "gemma3:1b",
)

# Summarization Thresholds
# Inputs longer than SAFE_TEXT_LENGTH characters go through the chunked path.
# Chunks on that path are built with SAFE_TEXT_LENGTH as their maximum size;
# DEFAULT_MAX_CHUNK_SIZE only applies to direct chunk_builder callers.
SAFE_TEXT_LENGTH = 2500
DEFAULT_MAX_CHUNK_SIZE = 3000
SUMMARY_TEMPERATURE = 0.7
CHUNK_SUMMARY_MAX_TOKENS = 400
SUMMARY_MAX_TOKENS_CAP = 600

# Default Request Settings
DEFAULT_LANGUAGE = "ja"
SUPPORTED_LANGUAGES = ("ja", "en")
DEFAULT_MAX_LENGTH = 300

# Engine error text that indicates the prompt did not fit the context window
CONTEXT_WINDOW_ERROR_MARKERS = (
    "ContextWindowSizeExceededError",
    "context length",
    "context window",
)

# PDF Upload Limits
MAX_PDF_SIZE_BYTES = 10 * 1024 * 1024  # 10MB
PDF_CONTENT_TYPE = "application/pdf"

# Settings file
SETTINGS_FILE = Path(__file__).parent.parent / "config" / "summarizer.yaml"

# Logging Configuration
LOG_FILE = LOGS_DIR / "processing.log"
DEBUG_TRACE_FILE = LOGS_DIR / "debug_flow.txt"
LOG_FORMAT = "[%(levelname)s %(asctime)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


@dataclass
class SummarizerSettings:
    """
    Tunable policy for engine initialization and summarization.

    Attributes:
        model_candidates: Model identifiers tried in order by initialize_engine().
        safe_text_length: Character count above which the chunked path is taken.
        temperature: Sampling temperature for every completion call.
        chunk_max_tokens: Token budget for each per-chunk completion.
        summary_max_tokens_cap: Upper bound for the final summary token budget.
        api_base: Ollama REST endpoint.
        timeout_seconds: Per-request timeout for completion calls.
    """
    model_candidates: list[str] = field(default_factory=lambda: list(MODEL_CANDIDATES))
    safe_text_length: int = SAFE_TEXT_LENGTH
    temperature: float = SUMMARY_TEMPERATURE
    chunk_max_tokens: int = CHUNK_SUMMARY_MAX_TOKENS
    summary_max_tokens_cap: int = SUMMARY_MAX_TOKENS_CAP
    api_base: str = OLLAMA_API_BASE
    timeout_seconds: float = OLLAMA_TIMEOUT_SECONDS

    def summary_max_tokens(self, max_length: int) -> int:
        """Token budget for a final or single-pass summary of max_length units."""
        return min(max_length * 2, self.summary_max_tokens_cap)


# Settings validated as numbers when read from YAML
_INT_SETTINGS = ('safe_text_length', 'chunk_max_tokens', 'summary_max_tokens_cap')
_NUMBER_SETTINGS = ('temperature', 'timeout_seconds')


def _validate_setting(key: str, value):
    """
    Check one YAML value against the type its setting expects.

    Returns:
        The value, normalized (model_candidates becomes a list)

    Raises:
        ValueError: If the value has the wrong type or is out of range
    """
    # bool is an int subclass; 'true' is never a valid threshold
    if key in _INT_SETTINGS:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"Setting '{key}' must be a positive integer, got {value!r}")
    elif key in _NUMBER_SETTINGS:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise ValueError(f"Setting '{key}' must be a non-negative number, got {value!r}")
    elif key == 'model_candidates':
        if not isinstance(value, list) or not value:
            raise ValueError(f"Setting 'model_candidates' must be a non-empty list, got {value!r}")
        if not all(isinstance(model_id, str) and model_id for model_id in value):
            raise ValueError(f"Setting 'model_candidates' must list model names, got {value!r}")
        return list(value)
    elif key == 'api_base':
        if not isinstance(value, str) or not value:
            raise ValueError(f"Setting 'api_base' must be a URL string, got {value!r}")
    return value


def load_settings(config_path: Path | None = None) -> SummarizerSettings:
    """
    Load SummarizerSettings from a YAML file.

    The file holds a top-level 'summarizer' mapping whose keys match the
    SummarizerSettings attributes. A missing file yields the defaults;
    unknown keys are skipped with a warning.

    Args:
        config_path: Path to the YAML file (defaults to config/summarizer.yaml).

    Returns:
        SummarizerSettings populated from the file.

    Raises:
        ValueError: If the file cannot be parsed or a value has the wrong type.
    """
    from pdf_summarizer.logging_config import debug_log, warning

    if config_path is None:
        config_path = SETTINGS_FILE

    try:
        with open(config_path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        debug_log(f"[Config] Settings file not found at {config_path}. Using defaults.")
        return SummarizerSettings()
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse settings file {config_path}: {e}") from e

    section = data.get('summarizer', {}) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        raise ValueError(f"Settings file {config_path} must contain a 'summarizer' mapping")

    known = {f.name for f in fields(SummarizerSettings)}
    values = {}
    for key, value in section.items():
        if key in known:
            values[key] = _validate_setting(key, value)
        else:
            warning(f"[Config] Ignoring unknown setting '{key}' in {config_path}")

    debug_log(f"[Config] Loaded {len(values)} settings from {config_path}")
    return SummarizerSettings(**values)

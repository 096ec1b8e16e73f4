"""
PDF Summarizer AI Module
Completion engine access via a local Ollama server.

The summarization pipeline only consumes OllamaEngine.reload() and
OllamaEngine.complete(); tests substitute any object with the same shape.
"""

from .ollama_engine import Completion, OllamaEngine

__all__ = ['Completion', 'OllamaEngine']

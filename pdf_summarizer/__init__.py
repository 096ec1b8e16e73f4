"""
PDF Summarizer
Extracts text from a PDF and summarizes it with a local language model.
"""

__version__ = "0.1.0"

"""
CLI module for document analysis.

Provides command-line tools for single-file and batch analysis.
"""

from doc_insight.cli.analyze import main as analyze_main

__all__ = ["analyze_main"]

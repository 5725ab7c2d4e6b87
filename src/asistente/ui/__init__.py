"""Textual TUI for the sales assistant.

This package hides the terminal UI implementation details.
"""

from .app import AsistenteApp, run_textual_tui

__all__ = ["AsistenteApp", "run_textual_tui"]

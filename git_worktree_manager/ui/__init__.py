"""Textual screens and widgets for the interactive TUI."""

"""Centralized symbols for consistent console output."""


class LogSymbols:
    """Unicode symbols for log messages."""

    SUCCESS = "✓"
    ERROR = "✗"
    ERROR_BOLD = "❌"     # U+274C - Cross mark (bold error for hints)
    WARNING = "⚠️"
    DOWNLOADING = "⬇"    # U+2B07 - Download indicator

    # List and formatting
    BULLET = "•"         # U+2022 - Bullet point for lists
    TRASH = "🗑"         # U+1F5D1 - Scratch directory removal
    SEPARATOR = "─"      # U+2500 - Box drawing light horizontal (line separator)

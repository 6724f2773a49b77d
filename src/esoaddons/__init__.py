"""Command-line installers for Elder Scrolls Online add-ons."""

__version__ = "1.0.0"

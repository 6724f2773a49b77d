"""Utility modules for the ESO add-on tools."""

from .console_log import ConsoleLog
from .symbols import LogSymbols

__all__ = ['ConsoleLog', 'LogSymbols']

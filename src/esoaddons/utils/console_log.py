"""Timestamped console logging used as the log callback for every component."""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO


class ConsoleLog:
    """Callable log sink: ``log(message, error=True)`` and friends.

    Components never print directly; they receive an instance of this class
    (or any callable with the same keyword arguments) and report through it.
    """

    def __init__(self, log_level: str = 'INFO', log_file: Optional[Path] = None,
                 stream: Optional[TextIO] = None, error_stream: Optional[TextIO] = None):
        self.log_level = log_level
        self.log_file = log_file
        self.stream = stream
        self.error_stream = error_stream

    def __call__(self, message, error=False, info=False, warning=False, debug=False, success=False):
        """Write a message with a timestamp and severity prefix.

        Args:
            message: Message to log
            error: If True, tag as ERROR and write to stderr
            info: If True, tag as INFO
            warning: If True, tag as WARN
            debug: If True, tag as DEBUG (dropped unless log level is DEBUG)
            success: If True, tag as INFO (success messages)
        """
        if debug and self.log_level != 'DEBUG':
            return

        log_entry = self._format_log_entry(message, error=error, info=info, warning=warning,
                                           debug=debug, success=success)
        self._write_log_to_file(log_entry)

        if error:
            target = self.error_stream or sys.stderr
        else:
            target = self.stream or sys.stdout
        target.write(log_entry)
        target.flush()

    def _format_log_entry(self, message, error=False, info=False, warning=False, debug=False,
                          success=False) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        if error:
            prefix = 'ERROR: '
        elif warning:
            prefix = 'WARN: '
        elif debug:
            prefix = 'DEBUG: '
        else:
            # info, success and untagged messages all surface as INFO
            prefix = 'INFO: '

        return f"[{timestamp}] {prefix}{message}\n"

    def _write_log_to_file(self, log_entry):
        """Append log entry to the log file, if one is configured.

        Args:
            log_entry: Formatted log entry string
        """
        if not self.log_file:
            return
        try:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(log_entry)
        except OSError as e:
            # Console output still works, so report once and stop writing
            self.log_file = None
            sys.stderr.write(f"Could not write log file: {e}\n")

"""
Installation progress tracking and reporting.
Collects per-add-on results so the batch can end with one summary.
"""

import time
from datetime import datetime

from esoaddons.utils.symbols import LogSymbols


class InstallationReport:
    """Tracks installation results for detailed reporting."""

    def __init__(self):
        self.errors = []
        self.installed = []
        self.start_time = time.time()

    def add_error(self, addon_name, error_msg, url):
        """Record an installation error."""
        self.errors.append({
            'addon': addon_name,
            'error': error_msg,
            'url': url,
            'timestamp': datetime.now().strftime('%H:%M:%S')
        })

    def add_installed(self, addon_name, file_count=None):
        """Record a newly installed add-on."""
        self.installed.append({
            'addon': addon_name,
            'files': file_count
        })

    def get_duration(self):
        """Get installation duration in seconds."""
        return time.time() - self.start_time

    def generate_summary(self):
        """Generate a formatted summary report."""
        duration = self.get_duration()
        minutes, seconds = divmod(int(duration), 60)

        summary = [
            LogSymbols.SEPARATOR * 60,
            f"Installation Complete ({minutes}m {seconds}s)",
            LogSymbols.SEPARATOR * 60,
            f"{LogSymbols.SUCCESS} {len(self.installed)} installed | {LogSymbols.ERROR} {len(self.errors)} errors"
        ]

        if self.errors:
            summary.append("Errors:")
            for item in self.errors:
                summary.append(f"  {LogSymbols.ERROR} {item['addon']}: {item['error']}")
                summary.append(f"    URL: {item['url']}")

        return "\n".join(summary)

    def has_errors(self):
        """Check if any errors occurred."""
        return len(self.errors) > 0

    def get_total_processed(self):
        """Get total number of add-ons processed."""
        return len(self.installed) + len(self.errors)

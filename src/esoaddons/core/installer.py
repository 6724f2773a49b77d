import re
from pathlib import Path
from typing import Iterable, Optional

import requests

from esoaddons.model_types import AddonListEntry, InstallTarget
from .archive_extractor import ArchiveExtractor
from .constants import CHUNK_SIZE, REQUEST_TIMEOUT
from .exceptions import DownloadError, InstallError
from .installation_report import InstallationReport
from .link_resolver import EsouiLinkResolver, LinkResolver
from esoaddons.utils.error_messages import log_error_hint
from esoaddons.utils.symbols import LogSymbols


def archive_file_name(addon_name: str) -> str:
    """Local archive file name for an add-on, safe to place in the scratch dir."""
    safe_name = re.sub(r'[<>:"/\\|?*]', '_', addon_name)
    return f"{safe_name}.zip"


class AddonInstaller:

    def __init__(self, log_callback, link_resolver: Optional[LinkResolver] = None,
                 extractor: Optional[ArchiveExtractor] = None, timeout=REQUEST_TIMEOUT):
        self.log = log_callback
        self.link_resolver = link_resolver or EsouiLinkResolver(log_callback, timeout=timeout)
        self.extractor = extractor or ArchiveExtractor(log_callback)
        self.timeout = timeout

    def fetch(self, url: str, dest_path: Path) -> Path:
        """Download url into dest_path, replacing any existing file.

        Raises:
            DownloadError: on any transport failure, HTTP error status or write error
        """
        dest_path = Path(dest_path)
        try:
            response = requests.get(url, stream=True, timeout=self.timeout)
            response.raise_for_status()
            with open(dest_path, 'wb') as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        except requests.exceptions.RequestException as e:
            raise DownloadError(f"Download from '{url}' failed: {e}") from e
        except OSError as e:
            raise DownloadError(f"Could not write '{dest_path}': {e}") from e
        return dest_path

    def extract(self, archive_path: Path, dest_dir: Path):
        return self.extractor.extract(archive_path, dest_dir)

    def install_target(self, target: InstallTarget):
        """Fetch and unpack one target. Errors propagate to the caller."""
        self.log(f"Downloading '{target.direct_download_url}' to '{target.local_archive_path}'.", info=True)
        self.fetch(target.direct_download_url, target.local_archive_path)
        self.log(f"Downloaded '{target.local_archive_path.name}'.", info=True)

        self.log(f"Installing '{target.local_archive_path.name}' to '{target.destination_dir}'.", info=True)
        members = self.extract(target.local_archive_path, target.destination_dir)
        self.log(f"{LogSymbols.SUCCESS} Successfully installed files to '{target.destination_dir}'.", success=True)
        return members

    def install_addon(self, entry: AddonListEntry, scratch_dir: Path, addon_dir: Path,
                      report: Optional[InstallationReport] = None) -> bool:
        """Resolve, fetch and unpack one list entry.

        Download and install failures are logged and recorded, never raised,
        so the caller can move on to the next entry.
        """
        self.log(f"{LogSymbols.DOWNLOADING} Resolving download link for add-on '{entry.name}' from '{entry.url}'.",
                 info=True)
        direct_url = self.link_resolver.resolve(entry.url)
        target = InstallTarget(direct_url, Path(scratch_dir) / archive_file_name(entry.name), Path(addon_dir))

        try:
            self.log(f"Downloading add-on '{entry.name}' from url '{direct_url}'.", info=True)
            self.fetch(target.direct_download_url, target.local_archive_path)
        except DownloadError as e:
            self.log(f"{LogSymbols.ERROR} Failed to download add-on '{entry.name}': {e}", error=True)
            log_error_hint(self.log, e)
            if report is not None:
                report.add_error(entry.name, str(e), entry.url)
            return False

        try:
            self.log(f"Installing add-on '{entry.name}'.", info=True)
            members = self.extract(target.local_archive_path, target.destination_dir)
        except InstallError as e:
            self.log(f"{LogSymbols.ERROR} Failed to install add-on '{entry.name}': {e}", error=True)
            log_error_hint(self.log, e)
            if report is not None:
                report.add_error(entry.name, str(e), entry.url)
            return False

        self.log(f"{LogSymbols.SUCCESS} Successfully installed add-on '{entry.name}'.", success=True)
        if report is not None:
            report.add_installed(entry.name, len(members))
        return True

    def install_addons(self, entries: Iterable[AddonListEntry], scratch_dir: Path, addon_dir: Path,
                       report: Optional[InstallationReport] = None) -> InstallationReport:
        """Install every entry in order, one at a time."""
        if report is None:
            report = InstallationReport()
        for entry in entries:
            self.install_addon(entry, scratch_dir, addon_dir, report)
        return report

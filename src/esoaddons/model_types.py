"""Type definitions for better code clarity and IDE support."""
from typing import NamedTuple
from pathlib import Path


class AddonListEntry(NamedTuple):
    """One complete ``[[addons]]`` block of the add-on list."""
    name: str
    url: str


class InstallTarget(NamedTuple):
    """Resolved download: where to fetch from, where to stage, where to unpack."""
    direct_download_url: str
    local_archive_path: Path
    destination_dir: Path


class IncompleteEntry(NamedTuple):
    """An ``[[addons]]`` block that never got both a name and a url."""
    line_number: int
    name: str
    url: str

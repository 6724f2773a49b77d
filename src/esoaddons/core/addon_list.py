"""Parser for the ``[[addons]]`` list file.

The format is line oriented::

    [[addons]]
    name = "LibAddonMenu"
    url = "https://www.esoui.com/downloads/download7-LibAddonMenu.html"

Each marker starts a new entry; an entry is ready once both ``name`` and
``url`` have been seen.
"""
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from esoaddons.model_types import AddonListEntry, IncompleteEntry
from .constants import NAME_KEY, SECTION_MARKER, URL_KEY
from .exceptions import ConfigurationError

_STRIP_PATTERN = re.compile(r'[\s"]+')


def split_key_value(line: str) -> Optional[Tuple[str, str]]:
    """Split ``key = "value"`` on the first ``=``.

    All whitespace and double quotes are removed from both halves. Returns
    None for lines without an ``=``.
    """
    key, sep, value = line.partition('=')
    if not sep:
        return None
    return _STRIP_PATTERN.sub('', key), _STRIP_PATTERN.sub('', value)


def parse_addon_list(lines: Iterable[str]) -> Iterator[AddonListEntry]:
    """Lazily yield complete entries in file order.

    An entry is yielded exactly once, as soon as both fields are set, and the
    accumulator is cleared right after so a repeated ``url =`` line cannot
    produce a second install of the same add-on.
    """
    name = ''
    url = ''
    for line in lines:
        if line.strip() == SECTION_MARKER:
            name = ''
            url = ''
            continue

        pair = split_key_value(line)
        if pair is None:
            continue

        key, value = pair
        if key == NAME_KEY:
            name = value
        elif key == URL_KEY:
            url = value

        if name and url:
            yield AddonListEntry(name, url)
            name = ''
            url = ''


def find_incomplete_entries(lines: Iterable[str]) -> List[IncompleteEntry]:
    """Return the blocks that would be skipped by parse_addon_list.

    A block is incomplete when a new marker or the end of the input arrives
    before both fields were set. Fields set outside any block count too.
    """
    incomplete = []
    name = ''
    url = ''
    start = 1
    for line_number, line in enumerate(lines, start=1):
        if line.strip() == SECTION_MARKER:
            if name or url:
                incomplete.append(IncompleteEntry(start, name, url))
            name = ''
            url = ''
            start = line_number
            continue

        pair = split_key_value(line)
        if pair is None:
            continue

        key, value = pair
        if key == NAME_KEY:
            name = value
        elif key == URL_KEY:
            url = value

        if name and url:
            name = ''
            url = ''

    if name or url:
        incomplete.append(IncompleteEntry(start, name, url))
    return incomplete


def load_addon_list_lines(list_path) -> List[str]:
    """Read every line of the list file up front.

    Raises:
        ConfigurationError: if the file is missing or unreadable
    """
    list_path = Path(list_path)
    if not list_path.is_file():
        raise ConfigurationError(f"The add-on list '{list_path}' could not be found.")
    try:
        return list_path.read_text(encoding='utf-8').splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"The add-on list '{list_path}' could not be read: {e}") from e


def read_addon_list(list_path) -> Iterator[AddonListEntry]:
    """Open the list eagerly and return the lazy entry parser over it."""
    return parse_addon_list(load_addon_list_lines(list_path))

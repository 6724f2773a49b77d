"""Configuration loading: shell-style KEY=value files into an immutable record."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional

from .constants import (
    KEY_ADDON_DIR,
    KEY_ADDON_LIST_FILE,
    KEY_DOWNLOAD_URL,
    KEY_SCRATCH_DIR,
)
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class InstallerConfig:
    """Settings shared by both installers, passed explicitly to each component."""
    addon_dir: Path
    scratch_dir: Path
    download_url: Optional[str] = None
    addon_list_file: Optional[Path] = None


def _read_double_quoted(raw: str, i: int):
    """Return (index after the closing quote, expanded text) for a "..." segment starting at i."""
    parts = []
    start = i
    while i < len(raw):
        char = raw[i]
        if char == '"':
            parts.append(os.path.expandvars(raw[start:i]))
            return i + 1, ''.join(parts)
        if char == '\\' and i + 1 < len(raw) and raw[i + 1] in '"\\$`':
            parts.append(os.path.expandvars(raw[start:i]))
            parts.append(raw[i + 1])
            i += 2
            start = i
        else:
            i += 1
    raise ValueError("No closing quotation")


def parse_shell_value(raw: str) -> str:
    """Interpret the right-hand side of a shell assignment.

    Single-quoted text is taken literally. Double-quoted and bare text
    expand ``$VAR``/``${VAR}`` and honour backslash escapes, and a leading
    ``~`` expands to the home directory. The value ends at the first unquoted
    blank; only a ``#`` comment may follow it. A ``#`` inside a word is kept.

    Raises:
        ValueError: on an unterminated quote or trailing text after the value
    """
    raw = raw.strip()
    parts = []
    i = 0
    if raw.startswith('~'):
        while i < len(raw) and raw[i] not in '/ \t\'"\\':
            i += 1
        parts.append(os.path.expanduser(raw[:i]))

    while i < len(raw):
        char = raw[i]
        if char in ' \t':
            rest = raw[i:].lstrip()
            if rest and not rest.startswith('#'):
                raise ValueError(f"Unexpected text after the value: {rest!r}")
            break
        if char == "'":
            end = raw.find("'", i + 1)
            if end == -1:
                raise ValueError("No closing quotation")
            parts.append(raw[i + 1:end])
            i = end + 1
        elif char == '"':
            i, text = _read_double_quoted(raw, i + 1)
            parts.append(text)
        elif char == '\\':
            # a trailing backslash stays as it is
            parts.append(raw[i + 1:i + 2] or '\\')
            i += 2
        else:
            end = i
            while end < len(raw) and raw[end] not in ' \t\'"\\':
                end += 1
            parts.append(os.path.expandvars(raw[i:end]))
            i = end
    return ''.join(parts)


def load_config_values(config_path) -> Dict[str, str]:
    """Read ``KEY=value`` pairs from a shell-style configuration file.

    Blank lines and ``#`` comments are skipped, an ``export`` prefix is
    accepted and values follow shell quoting, see :func:`parse_shell_value`.

    Raises:
        ConfigurationError: if the file is missing, unreadable or malformed
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ConfigurationError(f"The configuration '{config_path}' could not be found.")

    try:
        text = config_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"The configuration file '{config_path}' could not be loaded: {e}") from e

    values = {}
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('export '):
            line = line[len('export '):].lstrip()

        key, sep, raw_value = line.partition('=')
        key = key.strip()
        if not sep or not key.isidentifier():
            raise ConfigurationError(
                f"The configuration file '{config_path}' could not be loaded: "
                f"line {line_number} is not a KEY=value assignment."
            )

        try:
            values[key] = parse_shell_value(raw_value)
        except ValueError as e:
            raise ConfigurationError(
                f"The configuration file '{config_path}' could not be loaded: line {line_number}: {e}"
            ) from e

    return values


class ConfigManager:
    """Loads and validates installer configuration."""

    def __init__(self, log_callback=None):
        self.log_callback = log_callback

    def _log(self, message, **kwargs):
        if self.log_callback:
            self.log_callback(message, **kwargs)

    def validate_inputs(self, values: Dict[str, str], required_keys: Iterable[str]) -> None:
        """Check every required key is set to a non-empty value.

        Raises:
            ConfigurationError: naming every missing key
        """
        missing = [key for key in required_keys if not values.get(key, '').strip()]
        for key in missing:
            self._log(f"The required configuration value '{key}' is not set.", error=True)
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")

    def load(self, config_path, required_keys: Iterable[str], default_scratch_dir: Path) -> InstallerConfig:
        """Load the file, validate required keys and build an InstallerConfig.

        A relative ADDON_LIST_FILE is resolved against the configuration
        file's own directory.
        """
        config_path = Path(config_path)
        self._log(f"Loading configuration from '{config_path}'.", info=True)
        values = load_config_values(config_path)
        self.validate_inputs(values, required_keys)

        addon_list_file = None
        if values.get(KEY_ADDON_LIST_FILE):
            addon_list_file = Path(values[KEY_ADDON_LIST_FILE])
            if not addon_list_file.is_absolute():
                addon_list_file = config_path.parent / addon_list_file

        scratch_dir = Path(values[KEY_SCRATCH_DIR]) if values.get(KEY_SCRATCH_DIR) else default_scratch_dir

        config = InstallerConfig(
            addon_dir=Path(values[KEY_ADDON_DIR]) if values.get(KEY_ADDON_DIR) else None,
            scratch_dir=scratch_dir,
            download_url=values.get(KEY_DOWNLOAD_URL) or None,
            addon_list_file=addon_list_file,
        )
        self._log(f"Using add-on directory '{config.addon_dir}'.", debug=True)
        return config

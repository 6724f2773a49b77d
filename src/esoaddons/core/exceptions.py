"""Error kinds raised by the installers."""


class InstallerError(Exception):
    """Base class for every error the installers report."""


class ConfigurationError(InstallerError):
    """Configuration or list file missing/unreadable, or a required key is unset."""


class DependencyError(InstallerError):
    """A required HTTP client or archive backend is unavailable."""


class DirectoryError(InstallerError):
    """The scratch directory could not be created or removed."""


class DownloadError(InstallerError):
    """Fetching a file over the network failed."""


class InstallError(InstallerError):
    """Unpacking an archive into the add-on directory failed."""

"""Run lifecycle helpers: dependency checks and the scratch directory."""
import importlib.util
import shutil
import signal
import sys
from contextlib import contextmanager
from pathlib import Path

from .constants import EXIT_FAILURE, REQUIRED_MODULES
from .exceptions import DependencyError, DirectoryError
from esoaddons.utils.symbols import LogSymbols


def check_dependencies(log_callback, modules=REQUIRED_MODULES):
    """Verify the HTTP client and archive backend can be imported.

    Raises:
        DependencyError: listing every missing module
    """
    missing = []
    for module_name in modules:
        if importlib.util.find_spec(module_name) is None:
            log_callback(f"The required module '{module_name}' is not installed.", error=True)
            missing.append(module_name)
    if missing:
        raise DependencyError(f"Missing dependencies: {', '.join(missing)}")
    log_callback(f"Found required modules: {', '.join(modules)}", debug=True)


def create_scratch_directory(path: Path, log_callback) -> Path:
    log_callback(f"Creating temporary directory '{path}'.", info=True)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        log_callback(f"Failed to create temporary directory '{path}': {e}", error=True)
        raise DirectoryError(f"Could not create '{path}': {e}") from e
    return path


def remove_scratch_directory(path: Path, log_callback):
    """Delete the scratch directory recursively. Missing is not an error."""
    if not path.exists():
        return
    log_callback(f"{LogSymbols.TRASH} Removing temporary directory '{path}'.", info=True)
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        log_callback(f"Failed to remove temporary directory '{path}': {e}", error=True)
        raise DirectoryError(f"Could not remove '{path}': {e}") from e


@contextmanager
def scratch_directory(path, log_callback):
    """Create path, yield it and remove it again on every way out."""
    path = Path(path)
    try:
        yield create_scratch_directory(path, log_callback)
    finally:
        remove_scratch_directory(path, log_callback)


def _raise_system_exit(signum, frame):
    raise SystemExit(EXIT_FAILURE)


def handle_termination_signals():
    """Turn SIGTERM/SIGHUP into SystemExit so ``finally`` blocks still run."""
    signals = [signal.SIGTERM]
    if sys.platform != 'win32':
        signals.append(signal.SIGHUP)
    for signum in signals:
        signal.signal(signum, _raise_system_exit)

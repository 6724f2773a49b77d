"""Shared command-line plumbing for both installers.

Every tool runs the same gated sequence: load configuration, validate it,
check dependencies, create the scratch directory, do the work. The scratch
directory is removed however the run ends.
"""

import argparse
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from esoaddons.core.config_manager import ConfigManager, InstallerConfig
from esoaddons.core.constants import EXIT_FAILURE, EXIT_SUCCESS
from esoaddons.core.exceptions import DownloadError, InstallError, InstallerError
from esoaddons.core.lifecycle import check_dependencies, handle_termination_signals, scratch_directory
from esoaddons.utils.console_log import ConsoleLog
from esoaddons.utils.error_messages import log_error_hint

Work = Callable[[InstallerConfig, Path, Callable], int]


def build_parser(description: str, default_config: Path) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--config",
        type=Path,
        default=default_config,
        help=f"Configuration file with KEY=value lines (default: {default_config})",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also append log lines to this file")
    parser.add_argument("--debug", action="store_true", help="Show debug messages")
    return parser


def report_error_and_exit(log) -> int:
    log("A fatal error occurred. Check the messages above for details.", error=True)
    return EXIT_FAILURE


def run_tool(description: str, default_config: Path, required_keys: Iterable[str],
             default_scratch_dir: Path, work: Work, argv: Optional[List[str]] = None,
             log=None) -> int:
    args = build_parser(description, default_config).parse_args(argv)
    if log is None:
        log = ConsoleLog(log_level='DEBUG' if args.debug else 'INFO', log_file=args.log_file)

    handle_termination_signals()
    try:
        config = ConfigManager(log).load(args.config, required_keys, default_scratch_dir)
        check_dependencies(log)
        with scratch_directory(config.scratch_dir, log) as scratch_dir:
            return work(config, scratch_dir, log)
    except InstallerError as e:
        log(str(e), error=True)
        if isinstance(e, (DownloadError, InstallError)):
            log_error_hint(log, e)
        return report_error_and_exit(log)
    except (KeyboardInterrupt, SystemExit):
        log("Interrupted.", error=True)
        return report_error_and_exit(log)

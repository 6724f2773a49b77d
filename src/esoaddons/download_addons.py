"""
ESO add-on downloader - Entry point
Installs every add-on named in the add-on list file into the add-on folder.
"""

from esoaddons.cli import run_tool
from esoaddons.core.addon_list import find_incomplete_entries, load_addon_list_lines, parse_addon_list
from esoaddons.core.constants import (
    ADDON_DOWNLOAD_DIR,
    ADDONS_CONFIG_FILE,
    EXIT_SUCCESS,
    KEY_ADDON_DIR,
    KEY_ADDON_LIST_FILE,
)
from esoaddons.core.installation_report import InstallationReport
from esoaddons.utils.symbols import LogSymbols


def download_and_install_addons(config, scratch_dir, log, installer=None):
    """Install each list entry in file order; per-entry failures do not stop the batch."""
    log(f"Downloading addons from file '{config.addon_list_file}'.", info=True)
    lines = load_addon_list_lines(config.addon_list_file)

    for incomplete in find_incomplete_entries(lines):
        missing = 'url' if incomplete.name else 'name'
        label = incomplete.name or incomplete.url
        log(f"{LogSymbols.WARNING} Skipping entry at line {incomplete.line_number} ('{label}'): no {missing}",
            warning=True)

    from esoaddons.core.installer import AddonInstaller

    installer = installer or AddonInstaller(log)
    report = installer.install_addons(parse_addon_list(lines), scratch_dir, config.addon_dir,
                                      InstallationReport())

    log(report.generate_summary(), info=True)
    log(f"Downloaded all addons from file '{config.addon_list_file}'.", info=True)
    return EXIT_SUCCESS


def main(argv=None):
    """Main entry point for the add-on downloader."""
    return run_tool(
        "Download the add-ons listed in the add-on list and install them into the add-on folder",
        ADDONS_CONFIG_FILE,
        (KEY_ADDON_DIR, KEY_ADDON_LIST_FILE),
        ADDON_DOWNLOAD_DIR,
        download_and_install_addons,
        argv,
    )


if __name__ == "__main__":
    raise SystemExit(main())

"""
TTC price tables updater - Entry point
Downloads the Tamriel Trade Centre price table archive and unpacks it into
the add-on folder.
"""

from esoaddons.cli import run_tool
from esoaddons.core.constants import (
    EXIT_SUCCESS,
    KEY_ADDON_DIR,
    KEY_DOWNLOAD_URL,
    PRICE_TABLES_CONFIG_FILE,
    PRICE_TABLES_DOWNLOAD_DIR,
    PRICE_TABLES_FILE_NAME,
)
from esoaddons.model_types import InstallTarget


def update_price_tables(config, scratch_dir, log, installer=None):
    """Fetch and install the single configured archive; any failure is fatal."""
    # requests is only imported once the dependency check has passed
    from esoaddons.core.installer import AddonInstaller

    installer = installer or AddonInstaller(log)
    target = InstallTarget(config.download_url, scratch_dir / PRICE_TABLES_FILE_NAME, config.addon_dir)
    installer.install_target(target)
    return EXIT_SUCCESS


def main(argv=None):
    """Main entry point for the price table updater."""
    return run_tool(
        "Download the TTC price tables and install them into the add-on folder",
        PRICE_TABLES_CONFIG_FILE,
        (KEY_ADDON_DIR, KEY_DOWNLOAD_URL),
        PRICE_TABLES_DOWNLOAD_DIR,
        update_price_tables,
        argv,
    )


if __name__ == "__main__":
    raise SystemExit(main())

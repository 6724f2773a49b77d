# -*- coding: utf-8 -*-
"""Application constants and default paths."""
import tempfile
from pathlib import Path


# Project root (3 levels up from src/esoaddons/core/constants.py)
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Default configuration files
CONFIG_DIR = BASE_DIR / "etc"
ADDONS_CONFIG_FILE = CONFIG_DIR / "download-addons.config"
PRICE_TABLES_CONFIG_FILE = CONFIG_DIR / "update-ttc-price-tables.config"

# Scratch directories (removed on exit)
ADDON_DOWNLOAD_DIR = Path(tempfile.gettempdir()) / "eso-addons"
PRICE_TABLES_DOWNLOAD_DIR = Path(tempfile.gettempdir()) / "eso-ttc-data"
PRICE_TABLES_FILE_NAME = "ttc-price-tables.zip"

# Configuration keys
KEY_ADDON_DIR = "ADDON_DIR"
KEY_DOWNLOAD_URL = "DOWNLOAD_URL"
KEY_ADDON_LIST_FILE = "ADDON_LIST_FILE"
KEY_SCRATCH_DIR = "SCRATCH_DIR"

# Add-on list format
SECTION_MARKER = "[[addons]]"
NAME_KEY = "name"
URL_KEY = "url"

# Landing page scraping (esoui.com download pages)
LINK_LINE_MARKER = "Problems"
LINK_PREFIX = '<a href="'
LINK_SUFFIX = '">Click'

# Network
REQUEST_TIMEOUT = 30
CHUNK_SIZE = 8192

# Modules that must be importable before any work starts
REQUIRED_MODULES = ("requests", "zipfile")

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

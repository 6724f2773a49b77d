#!/usr/bin/env python3
"""
Validation script for the add-on list file.
Checks that every [[addons]] block has both a name and a url.
"""

import sys
from collections import Counter
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from esoaddons.core.addon_list import find_incomplete_entries, load_addon_list_lines, parse_addon_list
from esoaddons.core.exceptions import ConfigurationError


def validate_addon_list(list_path):
    """Validate the add-on list file, printing a report. Returns True when clean."""

    print(f"📋 Validating {list_path}")
    print("-" * 60)

    try:
        lines = load_addon_list_lines(list_path)
    except ConfigurationError as e:
        print(f"❌ {e}")
        return False

    entries = list(parse_addon_list(lines))
    print(f"✓ {len(entries)} complete add-on(s) in the list")
    print()

    errors = []
    warnings = []

    # 1. Blocks that will be skipped
    for incomplete in find_incomplete_entries(lines):
        missing = 'url' if incomplete.name else 'name'
        errors.append(f"❌ Line {incomplete.line_number}: entry '{incomplete.name or incomplete.url}' has no {missing}")

    # 2. Same name twice: the second archive overwrites the first in the scratch dir
    name_counts = Counter(entry.name for entry in entries)
    for name, count in sorted(name_counts.items()):
        if count > 1:
            warnings.append(f"⚠️  '{name}' is listed {count} times")

    # 3. Urls that can't be landing pages
    for entry in entries:
        if not entry.url.startswith(('http://', 'https://')):
            errors.append(f"❌ '{entry.name}' url is not http(s): {entry.url}")

    if warnings:
        for line in warnings:
            print(line)
        print()

    if errors:
        for line in errors:
            print(line)
        print()
        print("❌ Validation failed")
        return False

    print("✅ No errors found - add-on list is valid!")
    return True


if __name__ == '__main__':
    list_path = Path(__file__).parent / 'etc' / 'addons.toml'

    if len(sys.argv) > 1:
        list_path = Path(sys.argv[1])

    success = validate_addon_list(list_path)
    sys.exit(0 if success else 1)

#!/usr/bin/env python3
# Copyright 2026 Cisco Systems, Inc.
# SPDX-License-Identifier: Apache-2.0

"""Regenerate the rules table in README.md from the built-in rule packs.

Usage:
    python scripts/update_rules.py [README_PATH]
"""

import sys
from pathlib import Path

from qunit_lint.core.rule_registry import PackLoader
from qunit_lint.core.rules_table import update_readme

README_PATH = Path(__file__).resolve().parent.parent / "README.md"


def main() -> int:
    readme = Path(sys.argv[1]) if len(sys.argv) > 1 else README_PATH
    changed = update_readme(readme, PackLoader().build_registry())
    print(f"{'Updated' if changed else 'Unchanged'}: {readme}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

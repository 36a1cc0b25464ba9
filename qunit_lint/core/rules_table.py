# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""
Generate the README rules table from the rule registry.

The table lives between two HTML comment markers so the rest of the
README is left alone::

    <!--RULES_TABLE_START-->
    ...generated...
    <!--RULES_TABLE_END-->
"""

import logging
import re
from pathlib import Path

from ..config.constants import QUnitLintConstants
from .rule_registry import RuleRegistry

logger = logging.getLogger(__name__)

EMOJI_RECOMMENDED = ":white_check_mark:"
EMOJI_FIXABLE = ":wrench:"

TABLE_START = QUnitLintConstants.RULES_TABLE_START
TABLE_END = QUnitLintConstants.RULES_TABLE_END

# Greedy: everything from the first start marker to the last end marker
_TABLE_RE = re.compile(re.escape(TABLE_START) + r"[\S\s]*" + re.escape(TABLE_END))


def render_rules_table(registry: RuleRegistry) -> str:
    """Render the Markdown table of every registered rule, sorted by ID."""
    rows = []
    for rule_id in sorted(registry.rule_ids()):
        rule = registry.get(rule_id)
        link = f"[{rule_id}](./docs/rules/{rule_id}.md)"
        recommended = EMOJI_RECOMMENDED if rule.recommended else ""
        fixable = EMOJI_FIXABLE if rule.fixable else ""
        rows.append(f"| {link} | {rule.description} | {recommended} | {fixable} |")

    header = f"| Name | Description | {EMOJI_RECOMMENDED} | {EMOJI_FIXABLE} |\n|:--------|:--------|:---|:---|"
    return header + "\n" + "\n".join(rows)


def replace_rules_table(content: str, registry: RuleRegistry) -> str:
    """Return *content* with the marked table region regenerated.

    Raises:
        ValueError: If the markers are missing
    """
    if not _TABLE_RE.search(content):
        raise ValueError(f"README is missing the {TABLE_START} / {TABLE_END} markers")

    block = f"{TABLE_START}\n\n{render_rules_table(registry)}\n\n{TABLE_END}"
    # A function replacement keeps backslashes in descriptions literal
    return _TABLE_RE.sub(lambda _match: block, content, count=1)


def update_readme(path: str | Path, registry: RuleRegistry) -> bool:
    """Regenerate the rules table in the README at *path*.

    Returns:
        True if the file was rewritten, False if it was already current
    """
    path = Path(path)
    content = path.read_text(encoding="utf-8")
    updated = replace_rules_table(content, registry)
    if updated == content:
        logger.debug("Rules table in %s is up to date", path)
        return False

    path.write_text(updated, encoding="utf-8")
    logger.debug("Rewrote rules table in %s", path)
    return True

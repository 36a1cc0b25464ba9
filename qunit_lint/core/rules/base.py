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
Base rule interface and the per-run reporting context.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ..ast.nodes import Node
from ..models import Severity, Violation
from ..traversal import Listener

_PLACEHOLDER_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def format_message(template: str, data: Mapping[str, Any]) -> str:
    """Fill ``{{name}}`` placeholders from *data*.

    Placeholders without a matching key are left as written.
    """

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in data:
            return str(data[key])
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_replace, template)


@dataclass(frozen=True)
class ReportDescriptor:
    """What a rule reported: anchor node, message template id and its parameters."""

    node: Node
    message_id: str
    data: dict[str, Any] = field(default_factory=dict)


class RuleContext:
    """Reporting surface handed to a rule for one analysis run."""

    def __init__(
        self,
        rule_id: str,
        messages: Mapping[str, str],
        severity: Severity = Severity.ERROR,
        file_path: str | None = None,
        source: str = "",
    ):
        self.rule_id = rule_id
        self.messages = dict(messages)
        self.severity = severity
        self.file_path = file_path
        self._source_lines = source.splitlines()
        self.reports: list[ReportDescriptor] = []
        self.violations: list[Violation] = []

    def report(self, node: Node, message_id: str, data: Mapping[str, Any] | None = None) -> None:
        """Record a violation anchored at *node*.

        Raises:
            KeyError: If the rule has no message with *message_id*
        """
        payload = dict(data or {})
        template = self.messages[message_id]
        self.reports.append(ReportDescriptor(node=node, message_id=message_id, data=payload))

        line = column = end_line = end_column = None
        snippet = None
        if node.loc is not None:
            line = node.loc.start.line
            column = node.loc.start.column + 1
            end_line = node.loc.end.line
            end_column = node.loc.end.column + 1
            if 0 < line <= len(self._source_lines):
                snippet = self._source_lines[line - 1].strip()

        self.violations.append(
            Violation(
                rule_id=self.rule_id,
                message=format_message(template, payload),
                severity=self.severity,
                message_id=message_id,
                data=payload,
                file_path=self.file_path,
                line=line,
                column=column,
                end_line=end_line,
                end_column=end_column,
                snippet=snippet,
            )
        )


class BaseRule(ABC):
    """Abstract base class for all lint rules."""

    rule_id: ClassVar[str]
    messages: ClassVar[dict[str, str]]

    @abstractmethod
    def create(self, context: RuleContext) -> dict[str, Listener]:
        """
        Build the listeners for one analysis run.

        Args:
            context: Reporting context for this run

        Returns:
            Mapping of ``"<NodeType>"`` / ``"<NodeType>:exit"`` to listener
        """
        pass

    def get_name(self) -> str:
        """Get the rule id."""
        return self.rule_id

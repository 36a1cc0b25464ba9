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
Linter orchestrator: parse, run every enabled rule in one traversal, collect.
"""

import logging
import time
from pathlib import Path

from .ast.nodes import Node
from .ast.parser import JavaScriptParser
from .exceptions import SourceLoadError, SourceParseError
from .lint_policy import LintPolicy
from .loader import SourceLoader
from .models import PARSE_ERROR_RULE_ID, LintResult, Report, Severity, Violation
from .rule_registry import RuleRegistry, default_registry
from .rules.base import BaseRule, RuleContext
from .traversal import NodeTraverser

logger = logging.getLogger(__name__)


class Linter:
    """Main linter that runs the enabled rules over JavaScript sources."""

    def __init__(self, policy: LintPolicy | None = None, registry: RuleRegistry | None = None):
        """
        Initialize linter.

        Args:
            policy: Lint policy selecting rules, levels and files.
                If None, loads built-in defaults.
            registry: Rule registry. If None, uses the built-in packs.
        """
        self.policy = policy or LintPolicy.default()
        self.registry = registry or default_registry()
        self.parser = JavaScriptParser(source_type=self.policy.source_type, tolerant=self.policy.tolerant)
        self.loader = SourceLoader(self.policy)

        # Rule instances are stateless; per-run state lives in create()
        self._rules: list[tuple[BaseRule, Severity]] = []
        for rule_id, level in self.policy.enabled_rules(self.registry).items():
            severity = level.severity
            if severity is None:
                continue
            self._rules.append((self.registry.load_rule(rule_id), severity))

    def list_rules(self) -> list[str]:
        """Get ids of all rules this linter runs."""
        return [rule.get_name() for rule, _ in self._rules]

    def lint_source(self, source: str, file_path: str = "<input>") -> LintResult:
        """
        Lint JavaScript source text.

        A syntax error becomes a single fatal violation rather than an
        exception.

        Args:
            source: JavaScript source
            file_path: Name reported on violations

        Returns:
            LintResult with violations
        """
        start_time = time.time()
        try:
            program = self.parser.parse(source)
        except SourceParseError as e:
            logger.warning("Failed to parse %s: %s", file_path, e)
            result = LintResult(
                file_path=file_path,
                violations=[self._parse_error_violation(e, file_path)],
                rules_applied=self.list_rules(),
            )
            result.duration_seconds = time.time() - start_time
            return result

        result = self.lint_tree(program, source, file_path)
        result.duration_seconds = time.time() - start_time
        return result

    def lint_tree(self, program: Node, source: str = "", file_path: str = "<input>") -> LintResult:
        """
        Lint an already-built syntax tree.

        Args:
            program: Root node (normally ``Program``)
            source: Source text, used for snippets
            file_path: Name reported on violations

        Returns:
            LintResult with violations
        """
        traverser = NodeTraverser()
        contexts: list[RuleContext] = []
        for rule, severity in self._rules:
            context = RuleContext(
                rule_id=rule.rule_id,
                messages=rule.messages,
                severity=severity,
                file_path=file_path,
                source=source,
            )
            traverser.add_listeners(rule.create(context))
            contexts.append(context)

        traverser.traverse(program)

        violations: list[Violation] = []
        for context in contexts:
            violations.extend(context.violations)
        # Stable sort keeps each rule's emission order for equal positions
        violations.sort(key=lambda v: (v.line or 0, v.column or 0, v.rule_id))

        return LintResult(file_path=file_path, violations=violations, rules_applied=self.list_rules())

    def lint_file(self, path: str | Path) -> LintResult:
        """
        Lint a single file.

        Raises:
            SourceLoadError: If the file cannot be read
        """
        source_file = self.loader.load_file(path)
        return self.lint_source(source_file.content, file_path=source_file.relative_path)

    def lint_paths(self, paths: list[str | Path]) -> Report:
        """
        Lint files and directories.

        A file that cannot be read, or on which a rule fails, is recorded
        on its result and does not stop the run.

        Args:
            paths: Files and/or directories

        Returns:
            Report with results from all files

        Raises:
            SourceLoadError: If one of *paths* does not exist
        """
        report = Report()

        for path in self.loader.discover(paths):
            try:
                result = self.lint_file(path)
            except SourceLoadError as e:
                logger.warning("Failed to load %s: %s", path, e)
                result = LintResult(file_path=str(path), error=str(e))
            except Exception as e:
                # Isolate per-file failures so one crash doesn't abort the
                # entire run.
                logger.error("Unexpected error linting %s: %s", path, e)
                result = LintResult(file_path=str(path), error=f"{type(e).__name__}: {e}")
            report.add_result(result)

        return report

    @staticmethod
    def _parse_error_violation(error: SourceParseError, file_path: str) -> Violation:
        return Violation(
            rule_id=PARSE_ERROR_RULE_ID,
            message=f"Parsing error: {error.description}",
            severity=Severity.ERROR,
            file_path=file_path,
            line=error.line,
            column=error.column,
            fatal=True,
        )


def lint_source(
    source: str,
    file_path: str = "<input>",
    policy: LintPolicy | None = None,
    registry: RuleRegistry | None = None,
) -> LintResult:
    """
    Convenience function to lint a piece of source text.

    Args:
        source: JavaScript source
        file_path: Name reported on violations
        policy: Optional lint policy
        registry: Optional rule registry

    Returns:
        LintResult
    """
    return Linter(policy=policy, registry=registry).lint_source(source, file_path=file_path)


def lint_paths(
    paths: list[str | Path],
    policy: LintPolicy | None = None,
    registry: RuleRegistry | None = None,
) -> Report:
    """
    Convenience function to lint files and directories.

    Args:
        paths: Files and/or directories
        policy: Optional lint policy
        registry: Optional rule registry

    Returns:
        Report with all results
    """
    return Linter(policy=policy, registry=registry).lint_paths(paths)

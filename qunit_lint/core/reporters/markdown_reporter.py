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
Markdown format reporter for lint results.
"""

from ...core.models import LintResult, Report, Severity, Violation


class MarkdownReporter:
    """Generates Markdown format reports."""

    def __init__(self, detailed: bool = True):
        """
        Initialize Markdown reporter.

        Args:
            detailed: If True, include code snippets for each violation
        """
        self.detailed = detailed

    def generate_report(self, data: LintResult | Report) -> str:
        """
        Generate Markdown report.

        Args:
            data: LintResult or Report object

        Returns:
            Markdown string
        """
        if isinstance(data, LintResult):
            return self._generate_lint_result_report(data)
        else:
            return self._generate_multi_file_report(data)

    def _generate_lint_result_report(self, result: LintResult) -> str:
        """Generate report for a single file."""
        lines = []

        # Header
        lines.append("# QUnit Lint Report")
        lines.append("")
        lines.append(f"**File:** {result.file_path}")
        lines.append(f"**Status:** {self._status(result)}")
        lines.append(f"**Duration:** {result.duration_seconds:.2f}s")
        lines.append(f"**Timestamp:** {result.timestamp.isoformat()}")
        lines.append("")

        # Summary
        lines.append("## Summary")
        lines.append("")
        lines.append(f"- **Total Problems:** {len(result.violations)}")
        lines.append(f"- **Errors:** {result.error_count}")
        lines.append(f"- **Warnings:** {result.warning_count}")
        lines.append("")

        if result.error:
            lines.append("## Lint Failure")
            lines.append("")
            lines.append(result.error)
            lines.append("")

        if result.violations:
            lines.append("## Problems")
            lines.append("")
            for violation in result.violations:
                lines.extend(self._format_violation(violation))
                lines.append("")
        elif not result.error:
            lines.append("## [OK] No Problems Found")
            lines.append("")

        # Rules applied
        if result.rules_applied:
            lines.append("## Rules")
            lines.append("")
            for rule_id in result.rules_applied:
                lines.append(f"- {rule_id}")
            lines.append("")

        return "\n".join(lines)

    def _generate_multi_file_report(self, report: Report) -> str:
        """Generate report for multiple files."""
        lines = []

        # Header
        lines.append("# QUnit Lint Report")
        lines.append("")
        lines.append(f"**Timestamp:** {report.timestamp.isoformat()}")
        lines.append("")

        # Summary
        lines.append("## Summary")
        lines.append("")
        lines.append(f"- **Files Linted:** {report.total_files}")
        lines.append(f"- **Clean Files:** {report.clean_count}")
        lines.append(f"- **Total Problems:** {report.total_violations}")
        lines.append(f"- **Errors:** {report.error_count}")
        lines.append(f"- **Warnings:** {report.warning_count}")
        if report.fatal_count:
            lines.append(f"- **Parsing Errors:** {report.fatal_count}")
        lines.append("")

        # Files with problems
        flagged = [result for result in report.results if not result.is_clean]
        if flagged:
            lines.append("## File Results")
            lines.append("")

        for result in flagged:
            lines.append("\n---\n")
            lines.append(f"### {self._status(result)} {result.file_path}")
            lines.append("")
            lines.append(f"- **Errors:** {result.error_count}")
            lines.append(f"- **Warnings:** {result.warning_count}")
            if result.error:
                lines.append(f"- **Lint Failure:** {result.error}")
            lines.append("")

            for violation in result.violations:
                lines.extend(self._format_violation(violation, indent=1))
                lines.append("")

        return "\n".join(lines)

    @staticmethod
    def _status(result: LintResult) -> str:
        if result.error:
            return "[FAIL] NOT LINTED"
        if result.error_count:
            return "[FAIL] ERRORS"
        if result.warning_count:
            return "[WARN] WARNINGS"
        return "[OK] CLEAN"

    def _format_violation(self, violation: Violation, indent: int = 0) -> list:
        """Format a single violation as markdown lines."""
        lines = []
        indent_str = "  " * indent

        prefix = "[ERROR]" if violation.severity == Severity.ERROR else "[WARNING]"
        location = ""
        if violation.line:
            location = f" (line {violation.line}, column {violation.column})"

        lines.append(f"{indent_str}- {prefix} **{violation.rule_id}**{location}: {violation.message}")

        if self.detailed and violation.snippet:
            lines.append(f"{indent_str}  ```js")
            lines.append(f"{indent_str}  {violation.snippet}")
            lines.append(f"{indent_str}  ```")

        return lines

    def save_report(self, data: LintResult | Report, output_path: str):
        """
        Save Markdown report to file.

        Args:
            data: LintResult or Report object
            output_path: Path to save file
        """
        report_md = self.generate_report(data)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(report_md)

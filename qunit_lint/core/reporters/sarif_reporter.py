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
SARIF format reporter for GitHub Code Scanning integration.

Implements SARIF 2.1.0 specification for lint results.
https://docs.oasis-open.org/sarif/sarif/v2.1.0/sarif-v2.1.0.html
"""

import json
from typing import Any

from ...core.models import PARSE_ERROR_RULE_ID, LintResult, Report, Severity, Violation
from ..rule_registry import RuleRegistry


class SARIFReporter:
    """Generates SARIF 2.1.0 format reports for GitHub Code Scanning."""

    SARIF_VERSION = "2.1.0"
    SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"

    SEVERITY_TO_LEVEL = {
        Severity.ERROR: "error",
        Severity.WARNING: "warning",
    }

    def __init__(
        self,
        tool_name: str = "qunit-lint",
        tool_version: str = "1.0.0",
        registry: RuleRegistry | None = None,
    ):
        """
        Initialize SARIF reporter.

        Args:
            tool_name: Name of the lint tool
            tool_version: Version of the lint tool
            registry: Rule registry supplying rule descriptions and help links
        """
        self.tool_name = tool_name
        self.tool_version = tool_version
        self.registry = registry

    def generate_report(self, data: LintResult | Report) -> str:
        """
        Generate SARIF report.

        Args:
            data: LintResult or Report object

        Returns:
            SARIF JSON string
        """
        results = [data] if isinstance(data, LintResult) else data.results

        all_violations: list[Violation] = []
        for result in results:
            all_violations.extend(result.violations)

        sarif_results = []
        for result in results:
            sarif_results.extend(self._convert_violations(result.violations, result.file_path))

        sarif = {
            "$schema": self.SARIF_SCHEMA,
            "version": self.SARIF_VERSION,
            "runs": [
                {
                    "tool": self._create_tool_component(self._extract_rules(all_violations)),
                    "results": sarif_results,
                    "invocations": [
                        {
                            "executionSuccessful": not any(result.error for result in results),
                            "endTimeUtc": data.timestamp.isoformat() + "Z",
                        }
                    ],
                }
            ],
        }
        return json.dumps(sarif, indent=2, default=str)

    def _create_tool_component(self, rules: list[dict[str, Any]]) -> dict[str, Any]:
        """Create the tool component with rules."""
        return {
            "driver": {
                "name": self.tool_name,
                "version": self.tool_version,
                "rules": rules,
            }
        }

    def _extract_rules(self, violations: list[Violation]) -> list[dict[str, Any]]:
        """Extract unique rules from violations."""
        seen_rules: set[str] = set()
        rules = []

        for violation in violations:
            if violation.rule_id in seen_rules:
                continue
            seen_rules.add(violation.rule_id)

            rule: dict[str, Any] = {
                "id": violation.rule_id,
                "name": violation.rule_id.replace("-", " ").title().replace(" ", ""),
                "defaultConfiguration": {
                    "level": self.SEVERITY_TO_LEVEL.get(violation.severity, "warning"),
                },
            }

            rule_def = self.registry.get(violation.rule_id) if self.registry else None
            if rule_def is not None:
                rule["shortDescription"] = {"text": rule_def.description}
                rule["properties"] = {"category": rule_def.category, "recommended": rule_def.recommended}
                if rule_def.docs_url:
                    rule["helpUri"] = rule_def.docs_url
            elif violation.rule_id == PARSE_ERROR_RULE_ID:
                rule["shortDescription"] = {"text": "Source could not be parsed"}

            rules.append(rule)

        return rules

    def _convert_violations(self, violations: list[Violation], file_path: str) -> list[dict[str, Any]]:
        """Convert violations to SARIF results."""
        results = []

        for violation in violations:
            result: dict[str, Any] = {
                "ruleId": violation.rule_id,
                "level": self.SEVERITY_TO_LEVEL.get(violation.severity, "warning"),
                "message": {
                    "text": violation.message,
                },
            }

            location: dict[str, Any] = {
                "physicalLocation": {
                    "artifactLocation": {
                        "uri": violation.file_path or file_path,
                        "uriBaseId": "%SRCROOT%",
                    },
                }
            }

            if violation.line:
                region: dict[str, Any] = {"startLine": violation.line}
                if violation.column:
                    region["startColumn"] = violation.column
                if violation.end_line:
                    region["endLine"] = violation.end_line
                if violation.end_column:
                    region["endColumn"] = violation.end_column
                if violation.snippet:
                    region["snippet"] = {"text": violation.snippet}
                location["physicalLocation"]["region"] = region

            result["locations"] = [location]

            # Add fingerprint for deduplication
            result["fingerprints"] = {
                "primaryLocationLineHash": violation.id,
            }

            results.append(result)

        return results

    def save_report(self, data: LintResult | Report, output_path: str):
        """
        Save SARIF report to file.

        Args:
            data: LintResult or Report object
            output_path: Path to save file
        """
        report_json = self.generate_report(data)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(report_json)

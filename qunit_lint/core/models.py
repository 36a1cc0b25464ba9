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
Data models for lint violations and results.
"""

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

# Rule id used for fatal parse failures (no rule produced them)
PARSE_ERROR_RULE_ID = "parse-error"


class Severity(str, Enum):
    """Severity levels for lint violations."""

    ERROR = "error"
    WARNING = "warning"


def generate_violation_id(rule_id: str, context: str) -> str:
    """Generate a deterministic, unique violation ID."""
    combined = f"{rule_id}:{context}"
    hash_obj = hashlib.sha256(combined.encode())
    return f"{rule_id}_{hash_obj.hexdigest()[:10]}"


@dataclass
class Violation:
    """A problem reported by a rule at a location in a source file."""

    rule_id: str
    message: str
    severity: Severity
    message_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    file_path: str | None = None
    line: int | None = None  # 1-based
    column: int | None = None  # 1-based
    end_line: int | None = None
    end_column: int | None = None
    snippet: str | None = None
    fatal: bool = False

    @property
    def id(self) -> str:
        context = f"{self.file_path}:{self.line}:{self.column}:{self.message}"
        return generate_violation_id(self.rule_id, context)

    def to_dict(self) -> dict[str, Any]:
        """Convert violation to dictionary."""
        return {
            "id": self.id,
            "rule_id": self.rule_id,
            "message_id": self.message_id,
            "message": self.message,
            "data": self.data,
            "severity": self.severity.value,
            "file_path": self.file_path,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
            "snippet": self.snippet,
            "fatal": self.fatal,
        }


@dataclass
class LintResult:
    """Results from linting a single source file."""

    file_path: str
    violations: list[Violation] = field(default_factory=list)
    duration_seconds: float = 0.0
    rules_applied: list[str] = field(default_factory=list)
    error: str | None = None  # Unexpected failure while linting this file
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def error_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.WARNING)

    @property
    def fatal_count(self) -> int:
        return sum(1 for v in self.violations if v.fatal)

    @property
    def is_clean(self) -> bool:
        """True when the file produced no violations and linted without failure."""
        return not self.violations and self.error is None

    def get_violations_by_rule(self, rule_id: str) -> list[Violation]:
        """Get all violations reported by a specific rule."""
        return [v for v in self.violations if v.rule_id == rule_id]

    def to_dict(self) -> dict[str, Any]:
        """Convert lint result to dictionary."""
        return {
            "file_path": self.file_path,
            "is_clean": self.is_clean,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "fatal_count": self.fatal_count,
            "violations": [v.to_dict() for v in self.violations],
            "duration_seconds": self.duration_seconds,
            "rules_applied": self.rules_applied,
            "error": self.error,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class Report:
    """Aggregated report from linting one or more files."""

    results: list[LintResult] = field(default_factory=list)
    total_files: int = 0
    total_violations: int = 0
    error_count: int = 0
    warning_count: int = 0
    fatal_count: int = 0
    clean_count: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def add_result(self, result: LintResult):
        """Add a lint result and update counters."""
        self.results.append(result)
        self.total_files += 1
        self.total_violations += len(result.violations)
        self.error_count += result.error_count
        self.warning_count += result.warning_count
        self.fatal_count += result.fatal_count

        if result.is_clean:
            self.clean_count += 1

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0 or any(r.error for r in self.results)

    def to_dict(self) -> dict[str, Any]:
        """Convert report to dictionary."""
        return {
            "summary": {
                "total_files": self.total_files,
                "total_violations": self.total_violations,
                "clean_files": self.clean_count,
                "errors": self.error_count,
                "warnings": self.warning_count,
                "fatal": self.fatal_count,
                "timestamp": self.timestamp.isoformat(),
            },
            "results": [result.to_dict() for result in self.results],
        }

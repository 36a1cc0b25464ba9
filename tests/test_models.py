# Copyright 2026 Cisco Systems, Inc. and its affiliates
# SPDX-License-Identifier: Apache-2.0

"""
Tests for violation, result and report models.
"""

from __future__ import annotations

from qunit_lint.core.models import LintResult, Report, Severity, Violation, generate_violation_id


def _violation(severity=Severity.ERROR, line=1, fatal=False, message="Need 1 more start() call"):
    return Violation(
        rule_id="resolve-async",
        message=message,
        severity=severity,
        file_path="a.js",
        line=line,
        column=1,
        fatal=fatal,
    )


class TestViolation:
    def test_id_is_deterministic(self):
        assert _violation().id == _violation().id

    def test_id_depends_on_location(self):
        assert _violation(line=1).id != _violation(line=2).id

    def test_id_prefix(self):
        assert generate_violation_id("resolve-async", "ctx").startswith("resolve-async_")

    def test_to_dict(self):
        data = _violation().to_dict()
        assert data["rule_id"] == "resolve-async"
        assert data["severity"] == "error"
        assert data["line"] == 1
        assert data["fatal"] is False
        assert data["id"].startswith("resolve-async_")


class TestLintResult:
    def test_counts(self):
        result = LintResult(
            file_path="a.js",
            violations=[
                _violation(),
                _violation(severity=Severity.WARNING, line=2),
                _violation(line=3, fatal=True, message="Parsing error: Unexpected token"),
            ],
        )
        assert result.error_count == 2
        assert result.warning_count == 1
        assert result.fatal_count == 1
        assert not result.is_clean

    def test_clean(self):
        assert LintResult(file_path="a.js").is_clean

    def test_load_failure_is_not_clean(self):
        assert not LintResult(file_path="a.js", error="Failed to read a.js").is_clean

    def test_violations_by_rule(self):
        result = LintResult(file_path="a.js", violations=[_violation()])
        assert len(result.get_violations_by_rule("resolve-async")) == 1
        assert result.get_violations_by_rule("other") == []


class TestReport:
    def test_add_result_updates_counters(self):
        report = Report()
        report.add_result(LintResult(file_path="a.js", violations=[_violation()]))
        report.add_result(LintResult(file_path="b.js"))
        report.add_result(LintResult(file_path="c.js", violations=[_violation(severity=Severity.WARNING)]))

        assert report.total_files == 3
        assert report.total_violations == 2
        assert report.error_count == 1
        assert report.warning_count == 1
        assert report.clean_count == 1
        assert report.has_errors

    def test_warnings_only_is_not_an_error(self):
        report = Report()
        report.add_result(LintResult(file_path="a.js", violations=[_violation(severity=Severity.WARNING)]))
        assert not report.has_errors

    def test_file_failure_is_an_error(self):
        report = Report()
        report.add_result(LintResult(file_path="a.js", error="boom"))
        assert report.has_errors
        assert report.clean_count == 0

    def test_to_dict_summary(self):
        report = Report()
        report.add_result(LintResult(file_path="a.js"))
        summary = report.to_dict()["summary"]
        assert summary["total_files"] == 1
        assert summary["clean_files"] == 1
        assert summary["errors"] == 0

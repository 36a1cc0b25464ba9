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

"""Command-line interface for QUnit Lint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..config.config import Config
from ..config.constants import QUnitLintConstants
from ..core.exceptions import LintConfigError, SourceLoadError
from ..core.lint_policy import LintPolicy
from ..core.linter import Linter
from ..core.models import LintResult, Report, Severity
from ..core.reporters.json_reporter import JSONReporter
from ..core.reporters.markdown_reporter import MarkdownReporter
from ..core.reporters.sarif_reporter import SARIFReporter
from ..core.rule_registry import PackLoader, RuleRegistry
from ..core.rules_table import update_readme

logger = logging.getLogger("qunit_lint.cli")

EXIT_OK = 0
EXIT_LINT_ERRORS = 1
EXIT_USAGE_ERROR = 2


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_registry(args: argparse.Namespace) -> RuleRegistry:
    """Built-in packs plus any ``--rules-dir`` packs."""
    return PackLoader().build_registry(extra_dirs=getattr(args, "rules_dir", None) or None)


def _parse_rule_overrides(values: list[str] | None) -> dict[str, str]:
    """Turn ``--rule ID=LEVEL`` flags into a mapping."""
    overrides: dict[str, str] = {}
    for value in values or []:
        rule_id, sep, level = value.partition("=")
        if not sep or not rule_id.strip() or not level.strip():
            raise LintConfigError(f"Invalid --rule value '{value}': expected ID=LEVEL")
        overrides[rule_id.strip()] = level.strip()
    return overrides


def _load_policy(args: argparse.Namespace, config: Config) -> LintPolicy:
    """Load the lint policy from ``--policy`` (or the environment) and apply overrides.

    Raises:
        LintConfigError: On a malformed policy or ``--rule`` flag
        FileNotFoundError: If a policy path does not exist
    """
    policy_value = getattr(args, "policy", None) or config.policy
    policy = LintPolicy.load(policy_value)
    logger.info("Using lint policy: %s", policy.policy_name)

    if config.source_type != QUnitLintConstants.DEFAULT_SOURCE_TYPE:
        policy.source_type = config.source_type
    if config.max_file_size_kb != QUnitLintConstants.DEFAULT_MAX_FILE_SIZE_KB:
        policy.max_file_size_kb = config.max_file_size_kb

    overrides = _parse_rule_overrides(getattr(args, "rule", None))
    if overrides:
        policy = policy.with_overrides(overrides)
    return policy


def _drop_warnings(report: Report) -> Report:
    """Rebuild *report* keeping only error-severity violations."""
    filtered = Report(timestamp=report.timestamp)
    for result in report.results:
        filtered.add_result(
            LintResult(
                file_path=result.file_path,
                violations=[v for v in result.violations if v.severity == Severity.ERROR],
                duration_seconds=result.duration_seconds,
                rules_applied=result.rules_applied,
                error=result.error,
                timestamp=result.timestamp,
            )
        )
    return filtered


def _format_output(args: argparse.Namespace, report: Report, registry: RuleRegistry) -> str:
    """Generate the formatted output string for a lint report."""
    fmt = getattr(args, "format", "summary")
    if fmt == "json":
        return JSONReporter(pretty=not args.compact).generate_report(report)
    if fmt == "markdown":
        return MarkdownReporter(detailed=not args.compact).generate_report(report)
    if fmt == "sarif":
        return SARIFReporter(
            tool_name=QUnitLintConstants.TOOL_NAME,
            tool_version=QUnitLintConstants.VERSION,
            registry=registry,
        ).generate_report(report)
    # summary (default)
    return _generate_summary(report)


def _write_output(args: argparse.Namespace, output: str) -> None:
    """Write *output* to a file or stdout."""
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(output)
        print(f"Report saved to: {args.output}", file=sys.stderr)
    elif output:
        print(output)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def lint_command(args: argparse.Namespace) -> int:
    """Handle the ``lint`` command."""
    config = Config.from_env()
    if not getattr(args, "format", None):
        args.format = config.output_format
    if args.format not in QUnitLintConstants.OUTPUT_FORMATS:
        print(f"Error: Unknown output format '{args.format}'", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        registry = _build_registry(args)
        policy = _load_policy(args, config)
        linter = Linter(policy=policy, registry=registry)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR
    except (LintConfigError, ValueError) as e:
        print(f"Error loading policy: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        report = linter.lint_paths(args.paths)
    except SourceLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    warning_count = report.warning_count
    if args.quiet:
        report = _drop_warnings(report)

    _write_output(args, _format_output(args, report, registry))

    if report.has_errors:
        return EXIT_LINT_ERRORS
    if args.max_warnings is not None and args.max_warnings >= 0 and warning_count > args.max_warnings:
        print(
            f"Too many warnings ({warning_count}). Maximum allowed is {args.max_warnings}.",
            file=sys.stderr,
        )
        return EXIT_LINT_ERRORS
    return EXIT_OK


def list_rules_command(args: argparse.Namespace) -> int:
    """Handle the ``list-rules`` command."""
    config = Config.from_env()
    try:
        registry = _build_registry(args)
        policy = _load_policy(args, config)
    except (FileNotFoundError, LintConfigError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    print(f"Rules ({len(registry)}) under policy '{policy.policy_name}':\n")
    for rule_id in sorted(registry.rule_ids()):
        rule = registry.get(rule_id)
        level = policy.level_for(rule_id, registry)
        tags = []
        if rule.recommended:
            tags.append("recommended")
        if rule.fixable:
            tags.append("fixable")
        suffix = f" ({', '.join(tags)})" if tags else ""
        print(f"  {rule_id:<24s} {level.value:<6s} {rule.description}{suffix}")
        if rule.docs_url:
            print(f"  {'':<24s} {'':<6s} {rule.docs_url}")
    return EXIT_OK


def generate_policy_command(args: argparse.Namespace) -> int:
    """Handle the ``generate-policy`` command."""
    output_path = Path(args.output)
    preset = getattr(args, "preset", "recommended")
    try:
        policy = LintPolicy.from_preset(preset)
        policy.to_yaml(output_path)
    except (OSError, LintConfigError) as e:
        print(f"Error generating policy: {e}", file=sys.stderr)
        return EXIT_LINT_ERRORS

    print(f"Generated {preset} lint policy: {output_path}\n")
    print("Edit the file to customise, then use:")
    print(f"  qunit-lint lint --policy {output_path} tests/\n")
    print(f"Available presets: {' | '.join(LintPolicy.preset_names())}")
    return EXIT_OK


def update_readme_command(args: argparse.Namespace) -> int:
    """Handle the ``update-readme`` command."""
    readme = Path(args.readme)
    if not readme.is_file():
        print(f"Error: README not found: {readme}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        changed = update_readme(readme, _build_registry(args))
    except (OSError, ValueError) as e:
        print(f"Error updating README: {e}", file=sys.stderr)
        return EXIT_LINT_ERRORS

    print(f"{'Updated' if changed else 'Unchanged'}: {readme}")
    return EXIT_OK


# ---------------------------------------------------------------------------
# Summary formatter
# ---------------------------------------------------------------------------


def _generate_summary(report: Report) -> str:
    """ESLint "stylish"-like listing grouped by file."""
    lines: list[str] = []
    for result in report.results:
        if result.is_clean:
            continue
        lines.append(result.file_path)
        if result.error:
            lines.append(f"  [FAIL] {result.error}")
        for v in result.violations:
            position = f"{v.line or 0}:{v.column or 0}"
            level = "error" if v.severity == Severity.ERROR else "warning"
            lines.append(f"  {position:>7s}  {level:<7s}  {v.message}  {v.rule_id}")
        lines.append("")

    problems = report.error_count + report.warning_count
    if problems == 0 and not any(r.error for r in report.results):
        return ""

    tag = "[FAIL]" if report.has_errors else "[WARNING]"
    noun = "problem" if problems == 1 else "problems"
    lines.append(f"{tag} {problems} {noun} ({report.error_count} errors, {report.warning_count} warnings)")
    failed = sum(1 for r in report.results if r.error)
    if failed:
        lines.append(f"{failed} file(s) could not be linted")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Shared argparse helpers
# ---------------------------------------------------------------------------


def _add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def _add_policy_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--policy",
        metavar="PRESET_OR_PATH",
        help="Lint policy: preset name (recommended, all) or path to custom YAML",
    )
    parser.add_argument(
        "--rule",
        action="append",
        metavar="ID=LEVEL",
        help="Override a rule level (off, warn, error or 0, 1, 2). Repeatable.",
    )
    parser.add_argument(
        "--rules-dir",
        action="append",
        metavar="PATH",
        help="Directory with additional rule packs (pack.yaml). Repeatable.",
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="QUnit Lint - Static checks for unresolved asynchronous work in QUnit tests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  qunit-lint lint tests/
  qunit-lint lint tests/unit/ajax.js --format json
  qunit-lint lint tests/ --format sarif -o results.sarif
  qunit-lint lint tests/ --rule resolve-async=warn --max-warnings 0
  qunit-lint list-rules
  qunit-lint generate-policy -o .qunit-lint.yaml
  qunit-lint update-readme --readme README.md
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # -- lint --------------------------------------------------------------
    lint_p = subparsers.add_parser("lint", help="Lint JavaScript files and directories")
    lint_p.add_argument("paths", nargs="+", help="Files or directories to lint")
    lint_p.add_argument(
        "--format",
        choices=list(QUnitLintConstants.OUTPUT_FORMATS),
        default=None,
        help="Output format (default: summary, or QUNIT_LINT_FORMAT). Use 'sarif' for GitHub Code Scanning.",
    )
    lint_p.add_argument("--output", "-o", help="Output file path")
    lint_p.add_argument("--compact", action="store_true", help="Compact JSON output / no snippets in Markdown")
    lint_p.add_argument("--quiet", action="store_true", help="Report errors only")
    lint_p.add_argument(
        "--max-warnings",
        type=int,
        default=None,
        metavar="N",
        help="Exit with error if more than N warnings are found",
    )
    _add_policy_flags(lint_p)
    _add_verbose_flag(lint_p)

    # -- list-rules --------------------------------------------------------
    lr_p = subparsers.add_parser("list-rules", help="List rules and their level under the active policy")
    _add_policy_flags(lr_p)
    _add_verbose_flag(lr_p)

    # -- generate-policy ---------------------------------------------------
    gp_p = subparsers.add_parser("generate-policy", help="Generate a lint policy YAML")
    gp_p.add_argument("--output", "-o", default="qunit_lint_policy.yaml", help="Output file path")
    gp_p.add_argument("--preset", choices=LintPolicy.preset_names(), default="recommended", help="Base preset")
    _add_verbose_flag(gp_p)

    # -- update-readme -----------------------------------------------------
    ur_p = subparsers.add_parser("update-readme", help="Regenerate the rules table in a README")
    ur_p.add_argument("--readme", default="README.md", help="README path (default: README.md)")
    ur_p.add_argument("--rules-dir", action="append", metavar="PATH", help="Additional rule pack directory")
    _add_verbose_flag(ur_p)

    # -- dispatch ----------------------------------------------------------
    args = parser.parse_args(argv)
    _configure_logging(getattr(args, "verbose", False))

    if not args.command:
        parser.print_help()
        return EXIT_USAGE_ERROR

    dispatch = {
        "lint": lint_command,
        "list-rules": list_rules_command,
        "generate-policy": generate_policy_command,
        "update-readme": update_readme_command,
    }
    handler = dispatch.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return EXIT_USAGE_ERROR


if __name__ == "__main__":
    sys.exit(main())

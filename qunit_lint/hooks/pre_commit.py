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
Pre-commit hook for linting QUnit test files.

This hook lints staged JavaScript files and blocks commits that contain
unresolved asynchronous work (or, optionally, any warning).

Usage:
    1. Install as a pre-commit hook:
       qunit-lint-pre-commit install

    2. Or add to .pre-commit-config.yaml:
       - repo: local
         hooks:
           - id: qunit-lint
             name: QUnit Lint
             entry: qunit-lint-pre-commit
             language: python
             types: [javascript]
             pass_filenames: false

Configuration:
    Create a .qunit_lintrc file in your repo root:

    {
        "block_on": "error",      # block on: error, warning
        "policy": "recommended",  # preset name or path to policy YAML
        "fail_fast": false
    }
"""

import argparse
import json
import subprocess
import sys
from pathlib import Path

# Default configuration
DEFAULT_CONFIG = {
    "block_on": "error",  # Block commits on lint errors
    "policy": None,
    "fail_fast": False,
}

BLOCK_LEVELS = ("error", "warning")


def load_config(repo_root: Path) -> dict:
    """
    Load configuration from .qunit_lintrc file.

    Args:
        repo_root: Repository root directory

    Returns:
        Configuration dictionary
    """
    config = DEFAULT_CONFIG.copy()

    config_paths = [
        repo_root / ".qunit_lintrc",
        repo_root / ".qunit_lintrc.json",
    ]

    for config_path in config_paths:
        if config_path.exists():
            try:
                with open(config_path, encoding="utf-8") as f:
                    user_config = json.load(f)
                    config.update(user_config)
                    break
            except (OSError, json.JSONDecodeError) as e:
                print(f"Warning: Failed to load config from {config_path}: {e}", file=sys.stderr)

    return config


def get_repo_root() -> Path | None:
    """Return the top-level directory of the current git repository."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            check=True,
        )
        return Path(result.stdout.strip())
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None


def get_staged_files() -> list[str]:
    """
    Get list of staged files from git.

    Returns:
        List of staged file paths relative to repo root
    """
    try:
        result = subprocess.run(
            ["git", "diff", "--cached", "--name-only", "--diff-filter=ACMR"],
            capture_output=True,
            text=True,
            check=True,
        )
        return [f.strip() for f in result.stdout.split("\n") if f.strip()]
    except subprocess.CalledProcessError:
        return []


def select_lintable(files: list[str], policy) -> list[str]:
    """Keep the files the policy's include/exclude globs select."""
    return [f for f in files if policy.matches(f)]


def lint_file(path: Path, display_path: str, linter) -> dict:
    """
    Lint a single file and return a plain summary.

    Args:
        path: File to read
        display_path: Path shown in output
        linter: Configured :class:`~qunit_lint.core.linter.Linter`

    Returns:
        Lint results as dictionary
    """
    from ..core.exceptions import SourceLoadError

    try:
        source = linter.loader.load_file(path).content
    except SourceLoadError as e:
        return {"file_path": display_path, "error": str(e), "violations": []}

    result = linter.lint_source(source, file_path=display_path)
    return {
        "file_path": display_path,
        "violations": [
            {
                "rule_id": v.rule_id,
                "severity": v.severity.value,
                "message": v.message,
                "line": v.line,
                "column": v.column,
            }
            for v in result.violations
        ],
        "error_count": result.error_count,
        "warning_count": result.warning_count,
    }


def should_block(lint_result: dict, block_on: str) -> bool:
    """
    Check if a file's violations reach the blocking level.

    Args:
        lint_result: Lint results from :func:`lint_file`
        block_on: ``error`` or ``warning``

    Returns:
        True if the commit should be blocked
    """
    if lint_result.get("error_count", 0) > 0:
        return True
    return block_on == "warning" and lint_result.get("warning_count", 0) > 0


def format_violation(violation: dict) -> str:
    """Format a violation for console output."""
    severity = violation["severity"].upper()
    position = f"{violation.get('line') or 0}:{violation.get('column') or 0}"
    return f"  [{severity}] {position} {violation['message']} ({violation['rule_id']})"


def _build_linter(config: dict, repo_root: Path):
    from ..core.lint_policy import LintPolicy
    from ..core.linter import Linter

    policy_value = config.get("policy")
    if policy_value and str(policy_value).lower() not in LintPolicy.preset_names():
        # Relative policy paths are relative to the repository
        policy_path = Path(policy_value)
        if not policy_path.is_absolute():
            policy_path = repo_root / policy_path
        policy_value = str(policy_path)
    return Linter(policy=LintPolicy.load(policy_value))


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for pre-commit hook.

    Args:
        args: Command line arguments (for testing)

    Returns:
        Exit code (0 = success, 1 = blocked)
    """
    parser = argparse.ArgumentParser(description="Pre-commit hook for linting QUnit test files")
    parser.add_argument(
        "--block-on",
        choices=list(BLOCK_LEVELS),
        help="Override blocking level from config",
    )
    parser.add_argument(
        "--policy",
        help="Override lint policy from config (preset name or YAML path)",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Lint all tracked files, not just staged ones",
    )
    parser.add_argument(
        "install",
        nargs="?",
        help="Install pre-commit hook",
    )

    parsed_args = parser.parse_args(args)

    # Handle install command
    if parsed_args.install == "install":
        return install_hook()

    repo_root = get_repo_root()
    if repo_root is None:
        print("Error: Not a git repository", file=sys.stderr)
        return 1

    # Load config
    config = load_config(repo_root)

    # Apply command line overrides
    if parsed_args.block_on:
        config["block_on"] = parsed_args.block_on
    if parsed_args.policy:
        config["policy"] = parsed_args.policy

    if config.get("block_on") not in BLOCK_LEVELS:
        print(f"Error: Invalid block_on '{config.get('block_on')}' (expected error or warning)", file=sys.stderr)
        return 1

    from ..core.exceptions import LintConfigError

    try:
        linter = _build_linter(config, repo_root)
    except (FileNotFoundError, LintConfigError, ValueError) as e:
        print(f"Error loading policy: {e}", file=sys.stderr)
        return 1

    if parsed_args.all:
        candidates = [p.relative_to(repo_root).as_posix() for p in linter.loader.discover([repo_root])]
    else:
        candidates = select_lintable(get_staged_files(), linter.policy)

    if not candidates:
        # Nothing to lint, allow commit
        return 0

    print(f"Linting {len(candidates)} file(s)...")

    blocked = False
    total_problems = 0

    for rel_path in candidates:
        lint_result = lint_file(repo_root / rel_path, rel_path, linter)

        if lint_result.get("error"):
            print(f"\n{rel_path}\n  [WARNING] Skipped: {lint_result['error']}", file=sys.stderr)
            continue

        violations = lint_result["violations"]
        if not violations:
            continue

        print(f"\n{rel_path}")
        for violation in violations:
            print(format_violation(violation))
        total_problems += len(violations)

        if should_block(lint_result, config["block_on"]):
            blocked = True
            if config.get("fail_fast"):
                break

    # Summary
    print(f"\n{'=' * 50}")
    if blocked:
        print("[FAIL] Commit BLOCKED - resolve the reported problems before committing")
        print(f"   Blocking on: {config['block_on']}")
        return 1
    elif total_problems:
        print(f"[WARNING] {total_problems} problem(s) detected (below blocking level)")
        return 0
    else:
        print("[OK] All files passed QUnit lint checks")
        return 0


def install_hook() -> int:
    """
    Install the pre-commit hook in the current repository.

    Returns:
        Exit code
    """
    repo_root = get_repo_root()
    if repo_root is None:
        print("Error: Not a git repository", file=sys.stderr)
        return 1

    hooks_dir = repo_root / ".git" / "hooks"
    hooks_dir.mkdir(parents=True, exist_ok=True)

    hook_path = hooks_dir / "pre-commit"

    hook_script = """#!/bin/sh
# QUnit Lint Pre-commit Hook
# Blocks commits whose QUnit tests leave async work unresolved

qunit-lint-pre-commit "$@"
exit_code=$?

if [ $exit_code -ne 0 ]; then
    echo ""
    echo "To bypass this check (not recommended), use: git commit --no-verify"
fi

exit $exit_code
"""

    # Check if hook already exists
    if hook_path.exists():
        print(f"Warning: Pre-commit hook already exists at {hook_path}")
        try:
            response = input("Overwrite? [y/N] ").strip().lower()
        except EOFError:
            response = ""
        if response != "y":
            print("Aborted")
            return 1

    hook_path.write_text(hook_script)
    hook_path.chmod(0o755)

    print(f"[OK] Pre-commit hook installed at {hook_path}")
    print("\nConfiguration:")
    print("  Create .qunit_lintrc in your repo root to customize behavior:")
    print('  { "block_on": "error", "policy": "recommended" }')

    return 0


if __name__ == "__main__":
    sys.exit(main())

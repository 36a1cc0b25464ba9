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
QUnit Lint - Static checks for unresolved asynchronous work in QUnit tests.
"""

from ._version import __version__

__author__ = "Cisco Systems, Inc."


def __getattr__(name: str):
    """Lazy-load public API symbols on first access.

    Keeps ``python -m qunit_lint.cli.cli`` and the pre-commit hook from
    importing esprima and the rule packs before they are needed.
    """
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "QUnitLintConstants": (".config.constants", "QUnitLintConstants"),
        "LintPolicy": (".core.lint_policy", "LintPolicy"),
        "RuleLevel": (".core.lint_policy", "RuleLevel"),
        "Linter": (".core.linter", "Linter"),
        "lint_source": (".core.linter", "lint_source"),
        "lint_paths": (".core.linter", "lint_paths"),
        "LintResult": (".core.models", "LintResult"),
        "Report": (".core.models", "Report"),
        "Severity": (".core.models", "Severity"),
        "Violation": (".core.models", "Violation"),
        "SourceLoader": (".core.loader", "SourceLoader"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        # Cache on the module so __getattr__ is only called once per symbol
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "Linter",
    "lint_source",
    "lint_paths",
    "LintResult",
    "Report",
    "Severity",
    "Violation",
    "LintPolicy",
    "RuleLevel",
    "SourceLoader",
    "Config",
    "QUnitLintConstants",
]

# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from dotenv import load_dotenv

from qunit_lint.core.ast.parser import JavaScriptParser
from qunit_lint.core.lint_policy import LintPolicy
from qunit_lint.core.linter import Linter
from qunit_lint.core.rules.base import RuleContext
from qunit_lint.core.rules.resolve_async import MESSAGES, RULE_ID, AsyncResolutionTracker
from qunit_lint.core.traversal import NodeTraverser

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

project_root = Path(__file__).parent.parent
env_file = project_root / ".env"

if env_file.exists():
    load_dotenv(env_file)


@pytest.fixture(autouse=True)
def _clean_qunit_lint_env(monkeypatch):
    """Keep QUNIT_LINT_* variables from the developer's shell out of tests."""
    for name in (
        "QUNIT_LINT_POLICY",
        "QUNIT_LINT_SOURCE_TYPE",
        "QUNIT_LINT_MAX_FILE_SIZE_KB",
        "QUNIT_LINT_FORMAT",
        "QUNIT_LINT_ALLOWED_ROOTS",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_policy():
    """Factory: build a :class:`LintPolicy` from the defaults plus overrides."""

    def _factory(**overrides) -> LintPolicy:
        policy = LintPolicy.default()
        for key, value in overrides.items():
            setattr(policy, key, value)
        return policy

    return _factory


@pytest.fixture
def make_linter(make_policy):
    """Factory: build a :class:`Linter` with optional policy overrides."""

    def _factory(policy: LintPolicy | None = None, **overrides) -> Linter:
        return Linter(policy=policy or make_policy(**overrides))

    return _factory


@pytest.fixture
def lint_js():
    """Lint dedented source with the default policy and return its violations."""

    def _lint(source: str, policy: LintPolicy | None = None):
        return Linter(policy=policy).lint_source(textwrap.dedent(source)).violations

    return _lint


@pytest.fixture
def write_js(tmp_path):
    """Write a dedented file under ``tmp_path`` and return its path."""

    def _write(rel_path: str, content: str) -> Path:
        path = tmp_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def analyze():
    """Run only the async-resolution tracker and return its report descriptors."""

    def _analyze(source: str, source_type: str = "script"):
        program = JavaScriptParser(source_type=source_type).parse(textwrap.dedent(source))
        context = RuleContext(RULE_ID, MESSAGES)
        traverser = NodeTraverser()
        traverser.add_listeners(AsyncResolutionTracker(context.report).listeners())
        traverser.traverse(program)
        return context.reports

    return _analyze

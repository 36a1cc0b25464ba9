# Copyright 2026 Cisco Systems, Inc. and its affiliates
# SPDX-License-Identifier: Apache-2.0

"""
Tests for lint policies: rule levels, presets, YAML loading and file globs.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
import yaml

from qunit_lint.core.exceptions import LintConfigError
from qunit_lint.core.lint_policy import LintPolicy, RuleLevel, glob_match
from qunit_lint.core.models import Severity
from qunit_lint.core.rule_registry import RuleDefinition, RuleRegistry


def _write_policy(tmp_path: Path, body: str, name: str = "policy.yaml") -> Path:
    path = tmp_path / name
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


@pytest.fixture
def registry() -> RuleRegistry:
    reg = RuleRegistry()
    reg.register(RuleDefinition(id="resolve-async", pack_name="core", recommended=True))
    reg.register(RuleDefinition(id="no-only", pack_name="extra", default_level="warn"))
    return reg


# ---------------------------------------------------------------------------
# Rule levels
# ---------------------------------------------------------------------------


class TestRuleLevel:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("off", RuleLevel.OFF),
            ("warn", RuleLevel.WARN),
            ("error", RuleLevel.ERROR),
            ("ERROR", RuleLevel.ERROR),
            (" warning ", RuleLevel.WARN),
            (0, RuleLevel.OFF),
            (1, RuleLevel.WARN),
            (2, RuleLevel.ERROR),
            ("2", RuleLevel.ERROR),
            (RuleLevel.WARN, RuleLevel.WARN),
            (False, RuleLevel.OFF),
        ],
    )
    def test_parse(self, value, expected):
        assert RuleLevel.parse(value) is expected

    @pytest.mark.parametrize("value", ["loud", 3, -1, True, None, 1.5, ""])
    def test_parse_rejects(self, value):
        with pytest.raises(LintConfigError):
            RuleLevel.parse(value)

    def test_severity(self):
        assert RuleLevel.ERROR.severity is Severity.ERROR
        assert RuleLevel.WARN.severity is Severity.WARNING
        assert RuleLevel.OFF.severity is None


# ---------------------------------------------------------------------------
# File globs
# ---------------------------------------------------------------------------


class TestGlobMatch:
    def test_top_level_file_matches_double_star(self):
        assert glob_match("ajax.js", "**/*.js")

    def test_nested_file(self):
        assert glob_match("unit/core/ajax.js", "**/*.js")

    def test_directory_exclusion(self):
        assert glob_match("node_modules/qunit/qunit.js", "**/node_modules/**")
        assert glob_match("vendor/node_modules/x.js", "**/node_modules/**")

    def test_extension_mismatch(self):
        assert not glob_match("unit/ajax.ts", "**/*.js")

    def test_path_objects(self):
        assert glob_match(Path("unit") / "ajax.min.js", "**/*.min.js")


class TestFileSelection:
    def test_default_policy_globs(self):
        policy = LintPolicy.default()
        assert policy.matches("tests/unit/ajax.js")
        assert policy.matches("module.mjs")
        assert not policy.matches("node_modules/qunit/qunit.js")
        assert not policy.matches("dist/app.min.js")
        assert not policy.matches("README.md")

    def test_exclude_wins_over_include(self):
        policy = LintPolicy(include=["**/*.js"], exclude=["legacy/**"])
        assert policy.is_excluded("legacy/old.js")
        assert not policy.matches("legacy/old.js")
        assert policy.matches("new/fresh.js")


# ---------------------------------------------------------------------------
# Levels under extends
# ---------------------------------------------------------------------------


class TestLevelFor:
    def test_explicit_level_wins(self, registry):
        policy = LintPolicy(rules={"resolve-async": RuleLevel.WARN})
        assert policy.level_for("resolve-async", registry) is RuleLevel.WARN

    def test_recommended_enables_recommended_only(self, registry):
        policy = LintPolicy(extends="recommended")
        assert policy.level_for("resolve-async", registry) is RuleLevel.ERROR
        assert policy.level_for("no-only", registry) is RuleLevel.OFF

    def test_all_enables_everything_at_default_level(self, registry):
        policy = LintPolicy(extends="all")
        assert policy.level_for("no-only", registry) is RuleLevel.WARN

    def test_none_enables_nothing(self, registry):
        policy = LintPolicy(extends="none")
        assert policy.level_for("resolve-async", registry) is RuleLevel.OFF

    def test_without_registry_only_explicit_levels(self):
        policy = LintPolicy(rules={"resolve-async": RuleLevel.ERROR})
        assert policy.level_for("resolve-async") is RuleLevel.ERROR
        assert policy.level_for("other") is RuleLevel.OFF

    def test_unknown_rule_is_off(self, registry):
        assert LintPolicy(extends="all").level_for("missing", registry) is RuleLevel.OFF

    def test_enabled_rules_sorted_and_filtered(self, registry):
        policy = LintPolicy(extends="all", rules={"resolve-async": RuleLevel.OFF})
        assert policy.enabled_rules(registry) == {"no-only": RuleLevel.WARN}

        policy = LintPolicy(extends="all")
        assert list(policy.enabled_rules(registry)) == ["no-only", "resolve-async"]

    def test_enabled_rules_warns_on_unknown(self, registry, caplog):
        policy = LintPolicy(rules={"typo-rule": RuleLevel.ERROR})
        with caplog.at_level("WARNING"):
            enabled = policy.enabled_rules(registry)
        assert "typo-rule" not in enabled
        assert "typo-rule" in caplog.text

    def test_enabled_rules_uses_builtin_registry(self):
        assert LintPolicy.default().enabled_rules() == {"resolve-async": RuleLevel.ERROR}


class TestWithOverrides:
    def test_returns_copy(self):
        policy = LintPolicy.default()
        overridden = policy.with_overrides({"resolve-async": "warn"})
        assert overridden.rules["resolve-async"] is RuleLevel.WARN
        assert "resolve-async" not in policy.rules
        overridden.include.append("**/*.ts")
        assert "**/*.ts" not in policy.include

    def test_invalid_level(self):
        with pytest.raises(LintConfigError):
            LintPolicy.default().with_overrides({"resolve-async": "maybe"})


# ---------------------------------------------------------------------------
# Presets and YAML
# ---------------------------------------------------------------------------


class TestPresets:
    def test_default_is_recommended(self):
        policy = LintPolicy.default()
        assert policy.policy_name == "recommended"
        assert policy.extends == "recommended"
        assert policy.source_type == "script"
        assert policy.max_file_size_kb == 1024

    def test_all_preset(self):
        policy = LintPolicy.from_preset("ALL")
        assert policy.policy_name == "all"
        assert policy.extends == "all"
        # Inherits file selection from the defaults
        assert "**/node_modules/**" in policy.exclude

    def test_unknown_preset(self):
        with pytest.raises(LintConfigError, match="Unknown preset"):
            LintPolicy.from_preset("strict")

    def test_preset_names(self):
        assert LintPolicy.preset_names() == ["all", "recommended"]

    def test_load_resolves_none_preset_and_path(self, tmp_path):
        assert LintPolicy.load(None).policy_name == "recommended"
        assert LintPolicy.load("all").policy_name == "all"
        path = _write_policy(tmp_path, "policy_name: mine\n")
        assert LintPolicy.load(path).policy_name == "mine"


class TestFromYaml:
    def test_merges_over_defaults(self, tmp_path):
        path = _write_policy(
            tmp_path,
            """\
            policy_name: project
            rules:
              resolve-async: warn
            parser:
              source_type: module
            """,
        )
        policy = LintPolicy.from_yaml(path)
        assert policy.policy_name == "project"
        assert policy.rules == {"resolve-async": RuleLevel.WARN}
        assert policy.source_type == "module"
        assert policy.tolerant is False
        assert "**/*.mjs" in policy.include

    def test_lists_replace_defaults(self, tmp_path):
        path = _write_policy(tmp_path, "files:\n  include: ['spec/**/*.js']\n")
        policy = LintPolicy.from_yaml(path)
        assert policy.include == ["spec/**/*.js"]
        assert "**/node_modules/**" in policy.exclude

    def test_numeric_levels(self, tmp_path):
        path = _write_policy(tmp_path, "rules:\n  resolve-async: 1\n")
        assert LintPolicy.from_yaml(path).rules["resolve-async"] is RuleLevel.WARN

    def test_empty_file_is_defaults(self, tmp_path):
        path = _write_policy(tmp_path, "")
        assert LintPolicy.from_yaml(path).policy_name == "recommended"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LintPolicy.from_yaml(tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        "body,match",
        [
            ("- a\n- b\n", "mapping"),
            ("rules: [resolve-async]\n", "must be mappings"),
            ("extends: strict\n", "Invalid extends"),
            ("parser:\n  source_type: commonjs\n", "source_type"),
            ("files:\n  max_file_size_kb: big\n", "max_file_size_kb"),
            ("rules:\n  resolve-async: loud\n", "Invalid rule level"),
            ("rules: {resolve-async: [\n", "Invalid policy YAML"),
        ],
    )
    def test_invalid_policies(self, tmp_path, body, match):
        path = _write_policy(tmp_path, body)
        with pytest.raises(LintConfigError, match=match):
            LintPolicy.from_yaml(path)

    def test_to_yaml_round_trips(self, tmp_path):
        original = LintPolicy.default().with_overrides({"resolve-async": 1})
        target = tmp_path / "generated.yaml"
        original.to_yaml(target)

        text = target.read_text(encoding="utf-8")
        assert text.startswith("# QUnit Lint")
        assert yaml.safe_load(text)["rules"] == {"resolve-async": "warn"}

        reloaded = LintPolicy.from_yaml(target)
        assert reloaded.rules == original.rules
        assert reloaded.include == original.include
        assert reloaded.exclude == original.exclude

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
Lint policy: which rules run, at what level, and on which files.

Usage
-----
    from qunit_lint.core.lint_policy import LintPolicy

    # Load built-in defaults (the ``recommended`` preset)
    policy = LintPolicy.default()

    # Load a project policy (merges on top of defaults)
    policy = LintPolicy.from_yaml(".qunit-lint.yaml")

    # Turn a rule down from the command line
    policy = policy.with_overrides({"resolve-async": "warn"})

    # Dump the current (including default) policy for editing
    policy.to_yaml("generated_policy.yaml")

Rule levels follow ESLint: ``off``/``warn``/``error`` or ``0``/``1``/``2``.
Rules without an explicit level take theirs from the policy's ``extends``
base: ``recommended`` enables rules flagged as recommended in their pack,
``all`` enables every registered rule, ``none`` enables nothing.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from fnmatch import fnmatchcase
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Any

import yaml

from .exceptions import LintConfigError
from .models import Severity

if TYPE_CHECKING:
    from .rule_registry import RuleRegistry

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Where the built-in policies live (ship with the package)
# ---------------------------------------------------------------------------
_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_DEFAULT_POLICY_PATH = _DATA_DIR / "default_policy.yaml"

_PRESET_POLICIES: dict[str, Path] = {
    "recommended": _DEFAULT_POLICY_PATH,
    "all": _DATA_DIR / "all_policy.yaml",
}

EXTENDS_BASES = ("recommended", "all", "none")


class RuleLevel(str, Enum):
    """How a rule's findings are treated."""

    OFF = "off"
    WARN = "warn"
    ERROR = "error"

    @classmethod
    def parse(cls, value: Any) -> RuleLevel:
        """Accept a level name or an ESLint numeric level."""
        if isinstance(value, RuleLevel):
            return value
        # PyYAML reads a bare ``off`` as False; ``on``/``true`` are not levels
        if isinstance(value, bool):
            if value is False:
                return cls.OFF
        elif isinstance(value, int):
            numeric = {0: cls.OFF, 1: cls.WARN, 2: cls.ERROR}
            if value in numeric:
                return numeric[value]
        elif isinstance(value, str):
            text = value.strip().lower()
            if text.isdigit():
                return cls.parse(int(text))
            if text == "warning":
                return cls.WARN
            for level in cls:
                if level.value == text:
                    return level
        raise LintConfigError(f"Invalid rule level {value!r}: expected off, warn, error or 0, 1, 2")

    @property
    def severity(self) -> Severity | None:
        """Violation severity for this level (None when the rule is off)."""
        if self is RuleLevel.ERROR:
            return Severity.ERROR
        if self is RuleLevel.WARN:
            return Severity.WARNING
        return None


def glob_match(path: str | PurePath, pattern: str) -> bool:
    """Match a relative POSIX path against a ``**``-style glob.

    ``*`` crosses directory separators, and a leading ``**/`` also matches
    paths at the top level.
    """
    text = PurePath(path).as_posix()
    if fnmatchcase(text, pattern):
        return True
    return pattern.startswith("**/") and fnmatchcase(text, pattern[3:])


# ---------------------------------------------------------------------------
# The policy object
# ---------------------------------------------------------------------------


@dataclass
class LintPolicy:
    """Project lint policy – everything that should be customisable."""

    # Metadata
    policy_name: str = "recommended"
    policy_version: str = "1.0"
    extends: str = "recommended"

    # Explicit per-rule levels; take precedence over ``extends``
    rules: dict[str, RuleLevel] = field(default_factory=dict)

    # File selection
    include: list[str] = field(default_factory=lambda: ["**/*.js"])
    exclude: list[str] = field(default_factory=list)
    max_file_size_kb: int = 1024

    # Parser options
    source_type: str = "script"
    tolerant: bool = False

    # -----------------------------------------------------------------------
    # Rule levels
    # -----------------------------------------------------------------------

    def level_for(self, rule_id: str, registry: RuleRegistry | None = None) -> RuleLevel:
        """Effective level of *rule_id*.

        Without a *registry* only explicitly configured levels are known and
        every other rule is reported as off.
        """
        if rule_id in self.rules:
            return self.rules[rule_id]
        if registry is None:
            return RuleLevel.OFF

        rule_def = registry.get(rule_id)
        if rule_def is None or self.extends == "none":
            return RuleLevel.OFF
        if self.extends == "recommended" and not rule_def.recommended:
            return RuleLevel.OFF
        return RuleLevel.parse(rule_def.default_level)

    def enabled_rules(self, registry: RuleRegistry | None = None) -> dict[str, RuleLevel]:
        """Rule ID → level for every registered rule that is not off.

        Ordered by rule ID so runs are deterministic.
        """
        if registry is None:
            from .rule_registry import default_registry

            registry = default_registry()

        for rule_id in sorted(set(self.rules) - registry.rule_ids()):
            logger.warning("Policy '%s' configures unknown rule '%s'", self.policy_name, rule_id)

        enabled: dict[str, RuleLevel] = {}
        for rule_id in sorted(registry.rule_ids()):
            level = self.level_for(rule_id, registry)
            if level is not RuleLevel.OFF:
                enabled[rule_id] = level
        return enabled

    def with_overrides(self, overrides: dict[str, Any]) -> LintPolicy:
        """Return a copy with the given rule levels applied on top."""
        rules = dict(self.rules)
        for rule_id, level in overrides.items():
            rules[rule_id] = RuleLevel.parse(level)
        return dataclasses.replace(self, rules=rules, include=list(self.include), exclude=list(self.exclude))

    # -----------------------------------------------------------------------
    # File selection
    # -----------------------------------------------------------------------

    def is_excluded(self, path: str | PurePath) -> bool:
        return any(glob_match(path, pattern) for pattern in self.exclude)

    def matches(self, path: str | PurePath) -> bool:
        """True when *path* (relative to the lint root) should be linted."""
        if self.is_excluded(path):
            return False
        return any(glob_match(path, pattern) for pattern in self.include)

    # -----------------------------------------------------------------------
    # Construction helpers
    # -----------------------------------------------------------------------

    @classmethod
    def default(cls) -> LintPolicy:
        """Load the built-in default policy that ships with the package."""
        return cls.from_yaml(_DEFAULT_POLICY_PATH)

    @classmethod
    def from_preset(cls, name: str) -> LintPolicy:
        """Load a named preset policy: ``recommended`` or ``all``."""
        name_lower = name.lower()
        if name_lower not in _PRESET_POLICIES:
            raise LintConfigError(f"Unknown preset '{name}'. Available: {', '.join(sorted(_PRESET_POLICIES))}")
        return cls.from_yaml(_PRESET_POLICIES[name_lower])

    @classmethod
    def preset_names(cls) -> list[str]:
        """Return available preset policy names."""
        return sorted(_PRESET_POLICIES.keys())

    @classmethod
    def load(cls, preset_or_path: str | Path | None) -> LintPolicy:
        """Resolve a CLI/API ``--policy`` value: a preset name or a YAML path."""
        if preset_or_path is None:
            return cls.default()
        if str(preset_or_path).lower() in _PRESET_POLICIES:
            return cls.from_preset(str(preset_or_path))
        return cls.from_yaml(preset_or_path)

    @classmethod
    def from_yaml(cls, path: str | Path) -> LintPolicy:
        """
        Load a policy from a YAML file.

        The YAML is first merged on top of the built-in defaults so that
        users only need to specify the sections they want to override.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Policy file not found: {path}")

        with open(path, encoding="utf-8") as fh:
            try:
                raw = yaml.safe_load(fh) or {}
            except yaml.YAMLError as e:
                raise LintConfigError(f"Invalid policy YAML in {path}: {e}") from e

        if not isinstance(raw, dict):
            raise LintConfigError(f"Policy file must contain a mapping: {path}")

        # If this IS the default file, just parse directly
        if path.resolve() == _DEFAULT_POLICY_PATH.resolve():
            return cls._from_dict(raw)

        merged = cls._deep_merge(cls._load_default_raw(), raw)
        return cls._from_dict(merged)

    def to_yaml(self, path: str | Path) -> None:
        """Dump the full policy to a YAML file for editing."""
        data = self._to_dict()
        with open(path, "w", encoding="utf-8") as fh:
            fh.write("# QUnit Lint – Lint Policy\n")
            fh.write("# Rule levels: off | warn | error (or 0 | 1 | 2).\n")
            fh.write("# Only include sections you want to override; omitted sections\n")
            fh.write("# will use the built-in defaults.\n\n")
            yaml.dump(data, fh, default_flow_style=False, sort_keys=False, width=120)

    # -----------------------------------------------------------------------
    # Internal parsing
    # -----------------------------------------------------------------------

    @classmethod
    def _load_default_raw(cls) -> dict[str, Any]:
        if _DEFAULT_POLICY_PATH.exists():
            with open(_DEFAULT_POLICY_PATH, encoding="utf-8") as fh:
                return yaml.safe_load(fh) or {}
        return {}

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Recursively merge *override* into *base*.

        Lists in the override **replace** the base list.
        """
        result = dict(base)
        for key, val in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(val, dict):
                result[key] = LintPolicy._deep_merge(result[key], val)
            else:
                result[key] = val
        return result

    @classmethod
    def _from_dict(cls, d: dict[str, Any]) -> LintPolicy:
        files = d.get("files") or {}
        parser = d.get("parser") or {}
        raw_rules = d.get("rules") or {}
        if not isinstance(files, dict) or not isinstance(parser, dict) or not isinstance(raw_rules, dict):
            raise LintConfigError("Policy sections 'rules', 'files' and 'parser' must be mappings")

        extends = str(d.get("extends", "recommended")).lower()
        if extends not in EXTENDS_BASES:
            raise LintConfigError(f"Invalid extends '{extends}': expected one of {', '.join(EXTENDS_BASES)}")

        source_type = str(parser.get("source_type", "script"))
        if source_type not in ("script", "module"):
            raise LintConfigError(f"Invalid parser.source_type '{source_type}': expected script or module")

        try:
            max_file_size_kb = int(files.get("max_file_size_kb", 1024))
        except (TypeError, ValueError) as e:
            raise LintConfigError(f"Invalid files.max_file_size_kb: {files.get('max_file_size_kb')!r}") from e

        return cls(
            policy_name=str(d.get("policy_name", "recommended")),
            policy_version=str(d.get("policy_version", "1.0")),
            extends=extends,
            rules={str(rule_id): RuleLevel.parse(level) for rule_id, level in raw_rules.items()},
            include=list(files.get("include") or ["**/*.js"]),
            exclude=list(files.get("exclude") or []),
            max_file_size_kb=max_file_size_kb,
            source_type=source_type,
            tolerant=bool(parser.get("tolerant", False)),
        )

    def _to_dict(self) -> dict[str, Any]:
        return {
            "policy_name": self.policy_name,
            "policy_version": self.policy_version,
            "extends": self.extends,
            "rules": {rule_id: level.value for rule_id, level in sorted(self.rules.items())},
            "files": {
                "include": list(self.include),
                "exclude": list(self.exclude),
                "max_file_size_kb": self.max_file_size_kb,
            },
            "parser": {
                "source_type": self.source_type,
                "tolerant": self.tolerant,
            },
        }

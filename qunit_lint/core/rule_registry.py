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
Rule Pack system – self-describing rules with metadata.

Architecture
~~~~~~~~~~~~

A rule pack is a directory containing a ``pack.yaml`` manifest:

.. code-block:: text

    my-rules/
        pack.yaml           # Manifest – declares every rule in the pack

Each manifest entry names the Python class implementing the rule
(``module:Class``) together with its documentation metadata.  At startup the
:class:`PackLoader` discovers built-in and external packs, the
:class:`RuleRegistry` collects every :class:`RuleDefinition`, and the lint
policy decides which of them run and at what level.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from .rules.base import BaseRule

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RuleDefinition:
    """Metadata for a single lint rule.

    Instances are created by loading a ``pack.yaml`` manifest.
    """

    id: str
    """Unique rule identifier, e.g. ``resolve-async``."""

    pack_name: str
    """Name of the pack that provides this rule."""

    implementation: str = ""
    """``module:Class`` path of the :class:`BaseRule` subclass."""

    description: str = ""
    """Human-readable one-liner explaining the check."""

    category: str = ""
    """Documentation category, e.g. ``Possible Errors``."""

    recommended: bool = False
    """Whether the ``recommended`` preset enables this rule."""

    fixable: bool = False
    """Whether the rule can fix its violations automatically."""

    default_level: str = "error"
    """Level used when the rule is enabled without an explicit level."""

    docs_url: str = ""
    """Link to the rule's documentation page."""


@dataclass
class RulePack:
    """A collection of rules loaded from a single pack directory.

    Attributes:
        name: Pack name from ``pack.yaml`` (e.g. ``"core"``).
        version: Version string.
        description: Human-readable description.
        path: Filesystem path to the pack directory.
        rules: Mapping of rule ID → :class:`RuleDefinition`.
    """

    name: str
    version: str
    description: str
    path: Path
    rules: dict[str, RuleDefinition] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class RuleRegistry:
    """Central catalog of all known rule definitions across packs.

    The registry is built once at startup and is **read-only** after
    construction.
    """

    def __init__(self) -> None:
        self._rules: dict[str, RuleDefinition] = {}
        self._packs: dict[str, RulePack] = {}

    # -- Mutation (used during startup) ------------------------------------

    def register_pack(self, pack: RulePack) -> None:
        """Register all rules from *pack*.

        Raises :class:`ValueError` if a rule ID collides with an
        already-registered rule from a different pack.
        """
        for rule_id, rule_def in pack.rules.items():
            if rule_id in self._rules:
                existing = self._rules[rule_id]
                if existing.pack_name != pack.name:
                    raise ValueError(
                        f"Rule ID collision: '{rule_id}' is defined in both "
                        f"pack '{existing.pack_name}' and pack '{pack.name}'"
                    )
                # Same pack re-registered (idempotent) – overwrite silently
            self._rules[rule_id] = rule_def
        self._packs[pack.name] = pack

    def register(self, rule: RuleDefinition) -> None:
        """Register a single rule (convenience for tests)."""
        self._rules[rule.id] = rule

    # -- Read-only accessors ------------------------------------------------

    def get(self, rule_id: str) -> RuleDefinition | None:
        """Look up a rule by ID."""
        return self._rules.get(rule_id)

    def all_rules(self) -> dict[str, RuleDefinition]:
        """Return a shallow copy of the full rule catalog."""
        return dict(self._rules)

    def all_packs(self) -> dict[str, RulePack]:
        """Return a shallow copy of the loaded packs."""
        return dict(self._packs)

    def rule_ids(self) -> set[str]:
        """Return the set of all registered rule IDs."""
        return set(self._rules.keys())

    def recommended_levels(self) -> dict[str, str]:
        """Rule ID → level for every rule the ``recommended`` preset turns on."""
        return {rule_id: rule.default_level for rule_id, rule in self._rules.items() if rule.recommended}

    def load_rule(self, rule_id: str) -> BaseRule:
        """Import and instantiate the implementation of *rule_id*.

        Raises:
            KeyError: If the rule is not registered.
            ValueError: If the implementation path is malformed or the
                class declares a different rule ID than the manifest.
        """
        rule_def = self._rules.get(rule_id)
        if rule_def is None:
            raise KeyError(f"Unknown rule: {rule_id}")

        module_path, sep, class_name = rule_def.implementation.partition(":")
        if not sep or not module_path or not class_name:
            raise ValueError(
                f"Rule '{rule_id}' has malformed implementation path '{rule_def.implementation}' "
                "(expected 'module:Class')"
            )

        module = importlib.import_module(module_path)
        rule_cls = getattr(module, class_name)
        rule = rule_cls()
        if rule.rule_id != rule_id:
            raise ValueError(f"Rule class {class_name} declares id '{rule.rule_id}' but pack registers '{rule_id}'")
        return rule

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: str) -> bool:
        return rule_id in self._rules


# ---------------------------------------------------------------------------
# Pack loader
# ---------------------------------------------------------------------------


class PackLoader:
    """Discovers and loads rule packs from filesystem directories."""

    # Default location of the built-in core pack
    _BUILT_IN_PACKS_DIR: Path = Path(__file__).parent.parent / "data" / "packs"

    def load_pack(self, path: Path) -> RulePack:
        """Load a single rule pack from *path*.

        The directory must contain a ``pack.yaml`` manifest.

        Returns:
            A fully populated :class:`RulePack`.

        Raises:
            FileNotFoundError: If the directory or ``pack.yaml`` is missing.
            ValueError: On malformed manifest data.
        """
        path = Path(path)
        manifest_path = path / "pack.yaml"
        if not manifest_path.exists():
            raise FileNotFoundError(f"Pack manifest not found: {manifest_path}")

        with open(manifest_path, encoding="utf-8") as fh:
            raw: Any = yaml.safe_load(fh) or {}

        if not isinstance(raw, dict):
            raise ValueError(f"Pack manifest must be a mapping: {manifest_path}")

        pack_name = raw.get("name", path.name)
        pack_version = str(raw.get("version", "0.0"))
        pack_desc = raw.get("description", "")

        rules: dict[str, RuleDefinition] = {}
        for rule_id, rule_data in (raw.get("rules") or {}).items():
            rule_id = str(rule_id)
            if not isinstance(rule_data, dict):
                logger.warning("Skipping non-dict rule entry '%s' in pack '%s'", rule_id, pack_name)
                continue

            rules[rule_id] = RuleDefinition(
                id=rule_id,
                pack_name=pack_name,
                implementation=rule_data.get("implementation", ""),
                description=rule_data.get("description", ""),
                category=rule_data.get("category", ""),
                recommended=bool(rule_data.get("recommended", False)),
                fixable=bool(rule_data.get("fixable", False)),
                default_level=str(rule_data.get("level", "error")),
                docs_url=rule_data.get("docs_url", f"./docs/rules/{rule_id}.md"),
            )

        logger.debug("Loaded rule pack '%s' with %d rules", pack_name, len(rules))
        return RulePack(
            name=pack_name,
            version=pack_version,
            description=pack_desc,
            path=path,
            rules=rules,
        )

    def discover_packs(
        self,
        built_in_dir: Path | None = None,
        extra_dirs: list[Path | str] | None = None,
    ) -> list[RulePack]:
        """Discover and load all rule packs.

        Packs are loaded in order:

        1. Built-in packs from *built_in_dir* (default:
           ``qunit_lint/data/packs/``).
        2. Extra packs from each directory in *extra_dirs*.

        Returns:
            Ordered list of loaded packs (built-in first).
        """
        packs: list[RulePack] = []

        search_dir = built_in_dir or self._BUILT_IN_PACKS_DIR
        if search_dir.is_dir():
            for child in sorted(search_dir.iterdir()):
                if child.is_dir() and (child / "pack.yaml").exists():
                    try:
                        packs.append(self.load_pack(child))
                    except (OSError, ValueError, yaml.YAMLError) as exc:
                        logger.warning("Failed to load built-in pack '%s': %s", child.name, exc)

        for extra in extra_dirs or []:
            extra = Path(extra)
            if not extra.is_dir():
                logger.warning("Extra rule-pack path is not a directory: %s", extra)
                continue
            # If the directory itself is a pack, load it directly
            if (extra / "pack.yaml").exists():
                try:
                    packs.append(self.load_pack(extra))
                except (OSError, ValueError, yaml.YAMLError) as exc:
                    logger.warning("Failed to load extra pack '%s': %s", extra, exc)
            else:
                # Otherwise iterate subdirectories
                for child in sorted(extra.iterdir()):
                    if child.is_dir() and (child / "pack.yaml").exists():
                        try:
                            packs.append(self.load_pack(child))
                        except (OSError, ValueError, yaml.YAMLError) as exc:
                            logger.warning("Failed to load extra pack '%s': %s", child.name, exc)

        return packs

    def build_registry(
        self,
        built_in_dir: Path | None = None,
        extra_dirs: list[Path | str] | None = None,
    ) -> RuleRegistry:
        """Convenience: discover packs and build a populated registry."""
        registry = RuleRegistry()
        for pack in self.discover_packs(built_in_dir=built_in_dir, extra_dirs=extra_dirs):
            registry.register_pack(pack)
        return registry


_default_registry: RuleRegistry | None = None


def default_registry() -> RuleRegistry:
    """Registry of the built-in packs, built on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = PackLoader().build_registry()
    return _default_registry

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

"""API router for QUnit Lint endpoints.

The router is a composable ``APIRouter`` so it can be mounted in other
FastAPI applications.  Parameters mirror the ``lint`` CLI command.
"""

import asyncio
import logging
import os
import uuid
from pathlib import Path

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from .. import __version__ as PACKAGE_VERSION
from ..core.exceptions import LintConfigError, SourceLoadError
from ..core.lint_policy import LintPolicy
from ..core.linter import Linter
from ..core.rule_registry import default_registry

logger = logging.getLogger("qunit_lint.api")

router = APIRouter()

MAX_SOURCE_CHARS = 5 * 1024 * 1024  # 5M characters per inline source


def _allowed_roots() -> list[Path]:
    """Directories the API may read, from ``QUNIT_LINT_ALLOWED_ROOTS``.

    When empty (default) any *resolved* absolute path is accepted; operators
    should set the variable to restrict access in production.
    """
    return [Path(p).resolve() for p in os.environ.get("QUNIT_LINT_ALLOWED_ROOTS", "").split(":") if p.strip()]


def _validate_path(user_input: str, *, label: str = "path") -> Path:
    """Sanitize and validate a user-supplied filesystem path.

    Rejects null bytes, resolves symlinks, and enforces the optional
    QUNIT_LINT_ALLOWED_ROOTS allowlist.
    """
    if "\x00" in user_input:
        raise HTTPException(status_code=400, detail=f"Invalid {label}: null bytes are not allowed")

    resolved = Path(user_input).resolve()

    roots = _allowed_roots()
    if roots and not any(resolved == root or resolved.is_relative_to(root) for root in roots):
        raise HTTPException(
            status_code=403,
            detail=f"Access denied: {label} is outside the allowed directories",
        )

    return resolved


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class LintRequest(BaseModel):
    """Request model for linting inline source."""

    source: str = Field(..., description="JavaScript source to lint")
    file_name: str = Field("<input>", description="Name reported on violations")
    policy: str | None = Field(
        None,
        description="Lint policy: preset name (recommended, all) or path to custom YAML",
    )
    rules: dict[str, str | int] | None = Field(
        None,
        description="Rule level overrides, e.g. {'resolve-async': 'warn'}",
    )


class LintResponse(BaseModel):
    """Response model for a single linted source."""

    lint_id: str
    file_path: str
    is_clean: bool
    error_count: int
    warning_count: int
    fatal_count: int
    duration_seconds: float
    timestamp: str
    violations: list[dict]


class LintPathRequest(BaseModel):
    """Request for linting files or directories on the server."""

    path: str = Field(..., description="File or directory to lint")
    policy: str | None = Field(
        None,
        description="Lint policy: preset name (recommended, all) or path to custom YAML",
    )
    rules: dict[str, str | int] | None = Field(None, description="Rule level overrides")


class LintPathResponse(BaseModel):
    """Response model for a path lint."""

    lint_id: str
    summary: dict
    results: list[dict]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    rules_available: list[str]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_policy(policy_str: str | None, rules: dict | None = None) -> LintPolicy:
    """Resolve a policy string (and overrides) to a LintPolicy object.

    Raises:
        ValueError: For an unknown policy or a malformed policy file
    """
    if policy_str is None or not policy_str.strip():
        policy = LintPolicy.default()
    elif policy_str.strip().lower() in LintPolicy.preset_names():
        policy = LintPolicy.from_preset(policy_str.strip())
    else:
        policy_path = _validate_path(policy_str.strip(), label="policy path")
        if not policy_path.exists():
            raise ValueError(f"Unknown policy '{policy_str}'. Use a preset name or a path to a YAML file.")
        if not policy_path.is_file():
            raise ValueError(f"Policy path '{policy_str}' is not a file.")
        if policy_path.suffix not in (".yaml", ".yml"):
            raise ValueError("Policy file must have a .yaml or .yml extension.")
        try:
            policy = LintPolicy.from_yaml(policy_path)
        except LintConfigError as e:
            raise ValueError(str(e)) from e

    if rules:
        try:
            policy = policy.with_overrides(rules)
        except LintConfigError as e:
            raise ValueError(str(e)) from e
    return policy


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/", response_model=dict)
async def root():
    """Root endpoint."""
    return {"service": "QUnit Lint API", "version": PACKAGE_VERSION, "docs": "/docs", "health": "/health"}


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=PACKAGE_VERSION,
        rules_available=sorted(default_registry().rule_ids()),
    )


@router.get("/rules")
async def list_rules(policy: str | None = None):
    """List registered rules with their level under *policy*."""
    try:
        resolved = _resolve_policy(policy)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    registry = default_registry()
    rules = []
    for rule_id in sorted(registry.rule_ids()):
        rule = registry.get(rule_id)
        rules.append(
            {
                "id": rule_id,
                "pack": rule.pack_name,
                "description": rule.description,
                "category": rule.category,
                "recommended": rule.recommended,
                "fixable": rule.fixable,
                "level": resolved.level_for(rule_id, registry).value,
                "docs_url": rule.docs_url,
            }
        )
    return {"policy": resolved.policy_name, "rules": rules, "total": len(rules)}


@router.post("/lint", response_model=LintResponse)
async def lint_source(request: LintRequest):
    """Lint a piece of JavaScript source."""
    if len(request.source) > MAX_SOURCE_CHARS:
        raise HTTPException(status_code=413, detail="Source too large")

    try:
        policy = _resolve_policy(request.policy, request.rules)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    def run_lint():
        return Linter(policy=policy).lint_source(request.source, file_path=request.file_name)

    try:
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, run_lint)
    except Exception as e:
        logger.error("Lint failed for %s: %s", request.file_name, e)
        raise HTTPException(status_code=500, detail=f"Lint failed: {str(e)}")

    return LintResponse(
        lint_id=str(uuid.uuid4()),
        file_path=result.file_path,
        is_clean=result.is_clean,
        error_count=result.error_count,
        warning_count=result.warning_count,
        fatal_count=result.fatal_count,
        duration_seconds=result.duration_seconds,
        timestamp=result.timestamp.isoformat(),
        violations=[v.to_dict() for v in result.violations],
    )


@router.post("/lint-path", response_model=LintPathResponse)
async def lint_path(request: LintPathRequest):
    """Lint a file or directory readable by the server."""
    target = _validate_path(request.path, label="path")
    if not target.exists():
        raise HTTPException(status_code=404, detail=f"Path not found: {target}")

    try:
        policy = _resolve_policy(request.policy, request.rules)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    def run_lint():
        return Linter(policy=policy).lint_paths([target])

    try:
        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(None, run_lint)
    except SourceLoadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Lint failed for %s: %s", target, e)
        raise HTTPException(status_code=500, detail=f"Lint failed: {str(e)}")

    data = report.to_dict()
    return LintPathResponse(lint_id=str(uuid.uuid4()), summary=data["summary"], results=data["results"])

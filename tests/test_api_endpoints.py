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
Tests for REST API endpoints.

Tests cover every endpoint with inline sources, on-disk paths and the
path allowlist.
"""

import pytest
from fastapi.testclient import TestClient

from qunit_lint import __version__ as PACKAGE_VERSION
from qunit_lint.api import router as router_module
from qunit_lint.api.api import app

PENDING_TEST = 'asyncTest("pending", function() {});\n'
CLEAN_TEST = 'QUnit.test("clean", function(assert) { var done = assert.async(); done(); });\n'


# Test fixtures
@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def tests_dir(write_js):
    """Directory with one pending and one clean test file."""
    write_js("tests/pending.js", PENDING_TEST)
    return write_js("tests/clean.js", CLEAN_TEST).parent


# =============================================================================
# Service Endpoint Tests
# =============================================================================
class TestServiceEndpoints:
    """Test root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "QUnit Lint API"
        assert data["version"] == PACKAGE_VERSION

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == PACKAGE_VERSION
        assert data["rules_available"] == ["resolve-async"]

    def test_rules(self, client):
        response = client.get("/rules")
        assert response.status_code == 200
        data = response.json()
        assert data["policy"] == "recommended"
        assert data["total"] == 1
        rule = data["rules"][0]
        assert rule["id"] == "resolve-async"
        assert rule["pack"] == "core"
        assert rule["level"] == "error"
        assert rule["recommended"] is True

    def test_rules_unknown_policy(self, client):
        response = client.get("/rules", params={"policy": "/definitely/not/here.yaml"})
        assert response.status_code == 400


# =============================================================================
# Inline Lint Tests
# =============================================================================
class TestLintEndpoint:
    """Test POST /lint."""

    def test_clean_source(self, client):
        response = client.post("/lint", json={"source": CLEAN_TEST})
        assert response.status_code == 200
        data = response.json()
        assert data["is_clean"] is True
        assert data["file_path"] == "<input>"
        assert data["violations"] == []
        assert data["lint_id"]

    def test_pending_source(self, client):
        response = client.post("/lint", json={"source": PENDING_TEST, "file_name": "ajax.js"})
        assert response.status_code == 200
        data = response.json()
        assert data["file_path"] == "ajax.js"
        assert data["error_count"] == 1
        violation = data["violations"][0]
        assert violation["rule_id"] == "resolve-async"
        assert violation["message"] == "Need 1 more start() call"
        assert violation["line"] == 1

    def test_rule_overrides(self, client):
        response = client.post("/lint", json={"source": PENDING_TEST, "rules": {"resolve-async": "warn"}})
        data = response.json()
        assert data["error_count"] == 0
        assert data["warning_count"] == 1

    def test_numeric_rule_override(self, client):
        response = client.post("/lint", json={"source": PENDING_TEST, "rules": {"resolve-async": 0}})
        assert response.json()["is_clean"] is True

    def test_invalid_rule_level(self, client):
        response = client.post("/lint", json={"source": PENDING_TEST, "rules": {"resolve-async": "loud"}})
        assert response.status_code == 400

    def test_parse_error(self, client):
        response = client.post("/lint", json={"source": "test(function( {"})
        assert response.status_code == 200
        data = response.json()
        assert data["fatal_count"] == 1
        assert data["violations"][0]["rule_id"] == "parse-error"

    def test_preset_policy(self, client):
        response = client.post("/lint", json={"source": PENDING_TEST, "policy": "all"})
        assert response.status_code == 200
        assert response.json()["error_count"] == 1

    def test_missing_source(self, client):
        assert client.post("/lint", json={}).status_code == 422

    def test_source_too_large(self, client, monkeypatch):
        monkeypatch.setattr(router_module, "MAX_SOURCE_CHARS", 10)
        response = client.post("/lint", json={"source": PENDING_TEST})
        assert response.status_code == 413


# =============================================================================
# Path Lint Tests
# =============================================================================
class TestLintPathEndpoint:
    """Test POST /lint-path."""

    def test_directory(self, client, tests_dir):
        response = client.post("/lint-path", json={"path": str(tests_dir)})
        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["total_files"] == 2
        assert data["summary"]["errors"] == 1
        assert len(data["results"]) == 2

    def test_single_file(self, client, tests_dir):
        response = client.post("/lint-path", json={"path": str(tests_dir / "clean.js")})
        assert response.status_code == 200
        assert response.json()["summary"]["clean_files"] == 1

    def test_policy_file(self, client, tests_dir, tmp_path):
        policy = tmp_path / "policy.yaml"
        policy.write_text("rules:\n  resolve-async: off\n", encoding="utf-8")
        response = client.post("/lint-path", json={"path": str(tests_dir), "policy": str(policy)})
        assert response.status_code == 200
        assert response.json()["summary"]["errors"] == 0

    def test_policy_must_be_yaml(self, client, tests_dir, tmp_path):
        policy = tmp_path / "policy.json"
        policy.write_text("{}", encoding="utf-8")
        response = client.post("/lint-path", json={"path": str(tests_dir), "policy": str(policy)})
        assert response.status_code == 400

    def test_missing_path(self, client, tmp_path):
        response = client.post("/lint-path", json={"path": str(tmp_path / "nowhere")})
        assert response.status_code == 404

    def test_null_byte_rejected(self, client):
        response = client.post("/lint-path", json={"path": "/tmp/evil\x00.js"})
        assert response.status_code == 400

    def test_allowed_roots(self, client, tests_dir, tmp_path, monkeypatch):
        allowed = tmp_path / "allowed"
        allowed.mkdir()
        monkeypatch.setenv("QUNIT_LINT_ALLOWED_ROOTS", str(allowed))

        response = client.post("/lint-path", json={"path": str(tests_dir)})
        assert response.status_code == 403

        monkeypatch.setenv("QUNIT_LINT_ALLOWED_ROOTS", f"{allowed}:{tests_dir}")
        response = client.post("/lint-path", json={"path": str(tests_dir)})
        assert response.status_code == 200


# =============================================================================
# Server Entry Point Tests
# =============================================================================
class TestApiServer:
    """Test the qunit-lint-api entry point without binding a socket."""

    def test_main_passes_arguments_to_uvicorn(self, monkeypatch):
        import uvicorn

        from qunit_lint.api import api_server

        calls = []
        monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

        assert api_server.main(["--host", "0.0.0.0", "--port", "9000"]) == 0
        assert calls == [("qunit_lint.api.api:app", {"host": "0.0.0.0", "port": 9000, "reload": False})]

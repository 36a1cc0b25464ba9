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
Standalone REST API server for QUnit Lint.

Serves the canonical ``app`` from :mod:`qunit_lint.api.api`; all endpoints
and Pydantic models live in ``router.py``.
"""

import argparse


def run_server(host: str = "localhost", port: int = 8000, reload: bool = False) -> None:
    """Run the API server.

    Args:
        host: Host to bind to.
        port: Port to bind to.
        reload: Enable auto-reload for development.
    """
    import uvicorn

    uvicorn.run("qunit_lint.api.api:app", host=host, port=port, reload=reload)


def main(args: list[str] | None = None) -> int:
    """Entry point for ``qunit-lint-api``."""
    parser = argparse.ArgumentParser(description="QUnit Lint REST API server")
    parser.add_argument("--host", default="localhost", help="Host to bind to (default: localhost)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parsed = parser.parse_args(args)

    run_server(host=parsed.host, port=parsed.port, reload=parsed.reload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

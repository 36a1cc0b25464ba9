# Copyright 2026 Cisco Systems, Inc.
# SPDX-License-Identifier: Apache-2.0

"""REST API for qunit-lint (requires FastAPI)."""

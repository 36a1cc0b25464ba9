# Copyright 2026 Cisco Systems, Inc.
# SPDX-License-Identifier: Apache-2.0

"""Core linting engine: syntax tree, traversal, rules and orchestration."""

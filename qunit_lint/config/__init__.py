# Copyright 2026 Cisco Systems, Inc.
# SPDX-License-Identifier: Apache-2.0

"""Runtime configuration and constants."""

from .config import Config
from .constants import QUnitLintConstants

__all__ = ["Config", "QUnitLintConstants"]

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
Constants for QUnit Lint.
"""

from pathlib import Path

from .._version import __version__ as PACKAGE_VERSION


class QUnitLintConstants:
    """Constants used throughout the linter."""

    VERSION = PACKAGE_VERSION
    TOOL_NAME = "qunit-lint"

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    PACKAGE_ROOT = Path(__file__).parent.parent

    # Resource paths
    DATA_DIR = PACKAGE_ROOT / "data"
    PACKS_DIR = DATA_DIR / "packs"
    DEFAULT_POLICY_PATH = DATA_DIR / "default_policy.yaml"

    # Default values
    DEFAULT_SOURCE_TYPE = "script"
    DEFAULT_MAX_FILE_SIZE_KB = 1024
    DEFAULT_OUTPUT_FORMAT = "summary"
    OUTPUT_FORMATS = ("summary", "json", "markdown", "sarif")

    # README rules table markers
    RULES_TABLE_START = "<!--RULES_TABLE_START-->"
    RULES_TABLE_END = "<!--RULES_TABLE_END-->"

    @classmethod
    def get_data_path(cls) -> Path:
        """Get path to data directory."""
        return cls.DATA_DIR

    @classmethod
    def get_packs_path(cls) -> Path:
        """Get path to built-in rule packs."""
        return cls.PACKS_DIR

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
Configuration class for QUnit Lint.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .constants import QUnitLintConstants

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """
    Runtime configuration for QUnit Lint.

    Explicit values win; fields left at their defaults are filled from
    ``QUNIT_LINT_*`` environment variables.
    """

    # Policy: a preset name or a path to a policy YAML file
    policy: str | None = None

    # Parser Options
    source_type: str = QUnitLintConstants.DEFAULT_SOURCE_TYPE

    # Linting Options
    max_file_size_kb: int = QUnitLintConstants.DEFAULT_MAX_FILE_SIZE_KB

    # Output Options
    output_format: str = QUnitLintConstants.DEFAULT_OUTPUT_FORMAT

    def __post_init__(self):
        """Load configuration from environment variables if not provided."""

        if self.policy is None:
            self.policy = os.getenv("QUNIT_LINT_POLICY") or None

        if self.source_type == QUnitLintConstants.DEFAULT_SOURCE_TYPE:
            if env_source_type := os.getenv("QUNIT_LINT_SOURCE_TYPE"):
                self.source_type = env_source_type.lower()

        if self.max_file_size_kb == QUnitLintConstants.DEFAULT_MAX_FILE_SIZE_KB:
            if env_size := os.getenv("QUNIT_LINT_MAX_FILE_SIZE_KB"):
                try:
                    self.max_file_size_kb = int(env_size)
                except ValueError:
                    logger.warning("Ignoring invalid QUNIT_LINT_MAX_FILE_SIZE_KB=%r", env_size)

        if self.output_format == QUnitLintConstants.DEFAULT_OUTPUT_FORMAT:
            if env_format := os.getenv("QUNIT_LINT_FORMAT"):
                self.output_format = env_format.lower()

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_file(cls, config_file: Path) -> "Config":
        """
        Load configuration from .env file.

        Values in the file override variables already set in the environment.

        Args:
            config_file: Path to .env file

        Returns:
            Config instance
        """
        if config_file.exists():
            load_dotenv(config_file, override=True)
        else:
            logger.debug("Config file %s not found, using environment only", config_file)

        return cls.from_env()

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

"""QUnit Lint exceptions.

All exceptions inherit from QUnitLintError for easy catching.

Rule findings are never raised: an unresolved ``stop()`` or an uncalled
``assert.async()`` callback is reported as a :class:`~qunit_lint.core.models.Violation`.
These exceptions cover problems with the inputs around the analysis.

Example:
    >>> from qunit_lint.core.linter import Linter
    >>> from qunit_lint.core.exceptions import SourceLoadError
    >>>
    >>> linter = Linter()
    >>>
    >>> try:
    ...     result = linter.lint_file("tests/unit/ajax.js")
    ... except SourceLoadError as e:
    ...     print(f"Failed to read source: {e}")
"""


class QUnitLintError(Exception):
    """Base exception for all QUnit Lint errors."""

    pass


class SourceLoadError(QUnitLintError):
    """Raised when a source file cannot be read.

    This can indicate:
    - Missing file
    - Permission errors
    - Undecodable (non UTF-8) content
    """

    pass


class SourceParseError(QUnitLintError):
    """Raised when JavaScript source cannot be parsed."""

    def __init__(self, description: str, line: int | None = None, column: int | None = None):
        self.description = description
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"{description}{location}")


class LintConfigError(QUnitLintError):
    """Raised when a lint policy is malformed.

    This indicates:
    - Unknown rule level (anything besides off/warn/error or 0/1/2)
    - Unknown preset name
    - Policy YAML that is not a mapping
    """

    pass

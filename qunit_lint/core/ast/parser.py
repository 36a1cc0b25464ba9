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
JavaScript parser for QUnit test files.
"""

import logging

import esprima
from esprima.error_handler import Error as EsprimaError

from ..exceptions import SourceParseError
from .nodes import Node, build_node

logger = logging.getLogger(__name__)


class JavaScriptParser:
    """Parse JavaScript source into a :class:`Node` tree using esprima."""

    SOURCE_TYPES = ("script", "module")

    def __init__(self, source_type: str = "script", tolerant: bool = False):
        """
        Initialize parser.

        Args:
            source_type: ``"script"`` for classic test files, ``"module"`` for
                files using ``import``/``export``
            tolerant: Let esprima recover from some syntax errors instead of
                failing on the first one
        """
        if source_type not in self.SOURCE_TYPES:
            raise ValueError(f"Unsupported source type '{source_type}', expected one of {self.SOURCE_TYPES}")
        self.source_type = source_type
        self.tolerant = tolerant

    def parse(self, source: str) -> Node:
        """
        Parse the source code.

        Args:
            source: JavaScript source text

        Returns:
            The ``Program`` node

        Raises:
            SourceParseError: If esprima rejects the source
        """
        options = {"loc": True, "range": True, "tolerant": self.tolerant}
        parse_fn = esprima.parseModule if self.source_type == "module" else esprima.parseScript

        try:
            program = parse_fn(source, options)
        except EsprimaError as e:
            description = getattr(e, "description", None) or str(e)
            line = getattr(e, "lineNumber", None)
            column = getattr(e, "column", None)
            logger.debug("esprima rejected source at line %s: %s", line, description)
            raise SourceParseError(description, line=line, column=column) from e

        return build_node(program)

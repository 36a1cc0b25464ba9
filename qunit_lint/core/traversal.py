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
Enter/exit traversal engine for rule listeners.

Rules register listeners keyed by node type.  ``"CallExpression"`` fires
when the traversal enters a call, ``"CallExpression:exit"`` fires once every
descendant of that call has been visited.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from .ast.nodes import Node

Listener = Callable[[Node], None]

EXIT_SUFFIX = ":exit"


class NodeTraverser:
    """Depth-first, document-order walk that dispatches enter/exit events."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def add_listeners(self, listeners: Mapping[str, Listener]) -> None:
        """Register a rule's listener mapping.

        Listeners for the same key run in the order they were added.
        """
        for key, listener in listeners.items():
            self._listeners.setdefault(key, []).append(listener)

    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def traverse(self, root: Node) -> None:
        """Visit *root* and all of its descendants.

        Iterative so that deeply nested callback chains cannot hit the
        interpreter recursion limit.
        """
        stack: list[tuple[Node, bool]] = [(root, False)]
        while stack:
            node, exiting = stack.pop()
            if exiting:
                self._dispatch(node.type + EXIT_SUFFIX, node)
                continue

            self._dispatch(node.type, node)
            stack.append((node, True))
            children = list(node.iter_children())
            for child in reversed(children):
                stack.append((child, False))

    def _dispatch(self, key: str, node: Node) -> None:
        for listener in self._listeners.get(key, ()):
            listener(node)

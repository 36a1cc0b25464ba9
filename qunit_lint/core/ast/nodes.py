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
JavaScript syntax tree model.

The tree follows ESTree naming.  Node kinds the rules inspect field by field
get their own dataclass; every other kind is carried as a :class:`GenericNode`
that keeps its fields in source order so the traversal can still reach the
calls nested inside it.

:func:`build_node` accepts either the objects produced by ``esprima`` or
plain ESTree dictionaries (for example JSON dumped by another parser).
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass(frozen=True)
class Position:
    """A point in the source: 1-based line, 0-based column."""

    line: int
    column: int


@dataclass(frozen=True)
class SourceLocation:
    start: Position
    end: Position


@dataclass(eq=False)
class Node:
    """Base class for all syntax tree nodes.

    Nodes compare by identity: two structurally equal calls at different
    places in a file are different anchors.
    """

    TYPE: ClassVar[str] = ""
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ()

    loc: SourceLocation | None = field(default=None, kw_only=True, repr=False)
    range: tuple[int, int] | None = field(default=None, kw_only=True, repr=False)

    @property
    def type(self) -> str:
        return self.TYPE

    def iter_children(self) -> Iterator[Node]:
        """Yield child nodes in document order."""
        for name in self.CHILD_FIELDS:
            yield from _iter_nodes(getattr(self, name))


@dataclass(eq=False)
class Identifier(Node):
    TYPE: ClassVar[str] = "Identifier"

    name: str


@dataclass(eq=False)
class MemberExpression(Node):
    TYPE: ClassVar[str] = "MemberExpression"
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("object", "property")

    object: Node
    property: Node
    computed: bool = False


@dataclass(eq=False)
class CallExpression(Node):
    TYPE: ClassVar[str] = "CallExpression"
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("callee", "arguments")

    callee: Node
    arguments: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class FunctionExpression(Node):
    TYPE: ClassVar[str] = "FunctionExpression"
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("id", "params", "body")

    id: Node | None = None
    params: list[Node] = field(default_factory=list)
    body: Node | None = None


@dataclass(eq=False)
class ArrowFunctionExpression(Node):
    TYPE: ClassVar[str] = "ArrowFunctionExpression"
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("params", "body")

    params: list[Node] = field(default_factory=list)
    body: Node | None = None


@dataclass(eq=False)
class AssignmentExpression(Node):
    TYPE: ClassVar[str] = "AssignmentExpression"
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("left", "right")

    operator: str
    left: Node
    right: Node


@dataclass(eq=False)
class VariableDeclarator(Node):
    TYPE: ClassVar[str] = "VariableDeclarator"
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("id", "init")

    id: Node
    init: Node | None = None


@dataclass(eq=False)
class GenericNode(Node):
    """Any node kind without a dedicated class (``Program``, ``BlockStatement``...)."""

    kind: str
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def type(self) -> str:
        return self.kind

    def iter_children(self) -> Iterator[Node]:
        for value in self.fields.values():
            yield from _iter_nodes(value)


_VARIANTS: dict[str, type[Node]] = {
    cls.TYPE: cls
    for cls in (
        Identifier,
        MemberExpression,
        CallExpression,
        FunctionExpression,
        ArrowFunctionExpression,
        AssignmentExpression,
        VariableDeclarator,
    )
}

# Keys handled by the Node base class rather than the variant's own fields
_META_KEYS = frozenset({"type", "loc", "range"})


def _iter_nodes(value: Any) -> Iterator[Node]:
    if isinstance(value, Node):
        yield value
    elif isinstance(value, list):
        # Array holes (``[, a]``) show up as None entries
        for item in value:
            if isinstance(item, Node):
                yield item


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def _attributes(value: Any) -> dict[str, Any] | None:
    """Return the field mapping of an ESTree record, or None for scalars."""
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (str, bytes, int, float, bool, type)) or value is None:
        return None
    try:
        return dict(vars(value))
    except TypeError:
        return None


def _build_position(value: Any) -> Position | None:
    if value is None:
        return None
    line, column = _get(value, "line"), _get(value, "column")
    if not isinstance(line, int) or not isinstance(column, int):
        return None
    return Position(line, column)


def _build_location(value: Any) -> SourceLocation | None:
    if value is None:
        return None
    start = _build_position(_get(value, "start"))
    end = _build_position(_get(value, "end"))
    if start is None:
        return None
    return SourceLocation(start, end or start)


def _build_range(value: Any) -> tuple[int, int] | None:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return (value[0], value[1])
    return None


def _required_fields(variant: type[Node]) -> list[str]:
    return [
        f.name
        for f in dataclasses.fields(variant)
        if f.init
        and not f.kw_only
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING
    ]


def build_node(value: Any) -> Any:
    """Convert an esprima tree (or ESTree dict) into :class:`Node` objects.

    Non-node values are returned unchanged; lists are converted element-wise.
    A recognised node kind that lacks one of its required fields is kept as a
    :class:`GenericNode` instead of failing the whole conversion.
    """
    if isinstance(value, Node):
        return value
    if isinstance(value, (list, tuple)):
        return [build_node(item) for item in value]

    attrs = _attributes(value)
    if attrs is None:
        return value

    node_type = attrs.get("type")
    if not isinstance(node_type, str):
        # Plain record inside a node (regex flags, template element values)
        return {key: build_node(item) for key, item in attrs.items()}

    loc = _build_location(attrs.get("loc"))
    rng = _build_range(attrs.get("range"))

    variant = _VARIANTS.get(node_type)
    if variant is not None and all(attrs.get(name) is not None for name in _required_fields(variant)):
        kwargs = {
            f.name: build_node(attrs[f.name])
            for f in dataclasses.fields(variant)
            if f.init and not f.kw_only and f.name in attrs and attrs[f.name] is not None
        }
        return variant(**kwargs, loc=loc, range=rng)

    fields = {key: build_node(item) for key, item in attrs.items() if key not in _META_KEYS}
    return GenericNode(node_type, fields, loc=loc, range=rng)

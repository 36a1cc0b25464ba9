# Copyright 2026 Cisco Systems, Inc.
# SPDX-License-Identifier: Apache-2.0

"""JavaScript syntax tree model and parser."""

from .nodes import (
    ArrowFunctionExpression,
    AssignmentExpression,
    CallExpression,
    FunctionExpression,
    GenericNode,
    Identifier,
    MemberExpression,
    Node,
    Position,
    SourceLocation,
    VariableDeclarator,
    build_node,
)

__all__ = [
    "ArrowFunctionExpression",
    "AssignmentExpression",
    "CallExpression",
    "FunctionExpression",
    "GenericNode",
    "Identifier",
    "MemberExpression",
    "Node",
    "Position",
    "SourceLocation",
    "VariableDeclarator",
    "build_node",
]

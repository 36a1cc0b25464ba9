# Copyright 2026 Cisco Systems, Inc. and its affiliates
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the syntax tree model and the esprima-backed parser.
"""

from __future__ import annotations

import pytest

from qunit_lint.core.ast.nodes import (
    CallExpression,
    FunctionExpression,
    GenericNode,
    Identifier,
    MemberExpression,
    Position,
    VariableDeclarator,
    build_node,
)
from qunit_lint.core.ast.parser import JavaScriptParser
from qunit_lint.core.exceptions import SourceParseError


def _loc(line, column, end_line, end_column):
    return {"start": {"line": line, "column": column}, "end": {"line": end_line, "column": end_column}}


# ===========================================================================
# build_node on ESTree dictionaries
# ===========================================================================


class TestBuildNode:
    def test_identifier(self):
        node = build_node({"type": "Identifier", "name": "stop", "loc": _loc(1, 0, 1, 4), "range": [0, 4]})
        assert isinstance(node, Identifier)
        assert node.name == "stop"
        assert node.type == "Identifier"
        assert node.loc.start == Position(1, 0)
        assert node.loc.end == Position(1, 4)
        assert node.range == (0, 4)

    def test_call_with_member_callee(self):
        node = build_node(
            {
                "type": "CallExpression",
                "callee": {
                    "type": "MemberExpression",
                    "computed": False,
                    "object": {"type": "Identifier", "name": "QUnit"},
                    "property": {"type": "Identifier", "name": "test"},
                },
                "arguments": [{"type": "Literal", "value": "name", "raw": '"name"'}],
            }
        )
        assert isinstance(node, CallExpression)
        assert isinstance(node.callee, MemberExpression)
        assert node.callee.computed is False
        assert node.callee.object.name == "QUnit"
        literal = node.arguments[0]
        assert isinstance(literal, GenericNode)
        assert literal.type == "Literal"
        assert literal.fields["value"] == "name"

    def test_unknown_kind_becomes_generic(self):
        node = build_node({"type": "ThisExpression"})
        assert isinstance(node, GenericNode)
        assert node.kind == "ThisExpression"
        assert list(node.iter_children()) == []

    def test_variant_missing_required_field_is_generic(self):
        node = build_node({"type": "CallExpression", "arguments": []})
        assert isinstance(node, GenericNode)
        assert node.type == "CallExpression"

    def test_optional_fields_default(self):
        declarator = build_node({"type": "VariableDeclarator", "id": {"type": "Identifier", "name": "done"}})
        assert isinstance(declarator, VariableDeclarator)
        assert declarator.init is None

        fn = build_node({"type": "FunctionExpression", "id": None, "params": [], "body": None})
        assert isinstance(fn, FunctionExpression)
        assert fn.id is None
        assert fn.params == []

    def test_scalars_and_records_pass_through(self):
        assert build_node("text") == "text"
        assert build_node(None) is None
        assert build_node({"pattern": "a+", "flags": "g"}) == {"pattern": "a+", "flags": "g"}

    def test_missing_location(self):
        node = build_node({"type": "Identifier", "name": "x", "loc": {"start": {"line": 1}}})
        assert node.loc is None

    def test_nodes_compare_by_identity(self):
        assert Identifier("a") != Identifier("a")


class TestIterChildren:
    def test_call_children_in_document_order(self):
        callee = Identifier("test")
        first, second = Identifier("a"), Identifier("b")
        call = CallExpression(callee, [first, second])
        assert list(call.iter_children()) == [callee, first, second]

    def test_member_expression_children(self):
        obj, prop = Identifier("QUnit"), Identifier("stop")
        assert list(MemberExpression(obj, prop).iter_children()) == [obj, prop]

    def test_array_holes_are_skipped(self):
        node = build_node(
            {
                "type": "ArrayExpression",
                "elements": [None, {"type": "Identifier", "name": "a"}],
            }
        )
        children = list(node.iter_children())
        assert len(children) == 1
        assert children[0].name == "a"

    def test_generic_children_skip_scalars(self):
        node = build_node(
            {
                "type": "BinaryExpression",
                "operator": "+",
                "left": {"type": "Identifier", "name": "x"},
                "right": {"type": "Identifier", "name": "y"},
            }
        )
        assert [child.name for child in node.iter_children()] == ["x", "y"]


# ===========================================================================
# Parser
# ===========================================================================


class TestJavaScriptParser:
    def test_parse_script(self):
        program = JavaScriptParser().parse('QUnit.test("a", function(assert) {});')
        assert program.type == "Program"
        statement = program.fields["body"][0]
        call = statement.fields["expression"]
        assert isinstance(call, CallExpression)
        assert isinstance(call.arguments[1], FunctionExpression)
        assert call.arguments[1].params[0].name == "assert"
        assert call.loc.start == Position(1, 0)

    def test_parse_module(self):
        program = JavaScriptParser(source_type="module").parse('import QUnit from "qunit";\nQUnit.test("a", () => {});')
        assert program.type == "Program"
        assert program.fields["sourceType"] == "module"

    def test_import_rejected_in_script_mode(self):
        with pytest.raises(SourceParseError):
            JavaScriptParser().parse('import QUnit from "qunit";')

    def test_syntax_error_location(self):
        with pytest.raises(SourceParseError) as exc_info:
            JavaScriptParser().parse("var ok = 1;\ntest(function( { ]")
        error = exc_info.value
        assert error.line == 2
        assert error.description
        assert "line 2" in str(error)

    def test_unexpected_end_of_input_is_reported_after_last_newline(self):
        with pytest.raises(SourceParseError) as exc_info:
            JavaScriptParser().parse("var ok = 1;\ntest(function( {\n")
        assert exc_info.value.line == 3

    def test_unsupported_source_type(self):
        with pytest.raises(ValueError, match="Unsupported source type"):
            JavaScriptParser(source_type="commonjs")

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
Ensure asynchronous work declared in a QUnit test is resolved before the test ends.

Two kinds of pending work are tracked per test:

* the ``stop()``/``start()`` semaphore (``asyncTest`` starts at one), and
* callbacks returned by ``assert.async()``, which must each be called.

Tracking is purely syntactic.  Aliases (``var t = QUnit.test``), shadowed
globals and calls made from helpers defined outside the test body are not
followed.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..ast.nodes import (
    ArrowFunctionExpression,
    AssignmentExpression,
    CallExpression,
    FunctionExpression,
    Identifier,
    MemberExpression,
    Node,
    VariableDeclarator,
)
from ..traversal import Listener
from .base import BaseRule, RuleContext

RULE_ID = "resolve-async"

STOP_MESSAGE = "STOP_MESSAGE"
ASYNC_VAR_MESSAGE = "ASYNC_VAR_MESSAGE"

MESSAGES = {
    STOP_MESSAGE: "Need {{semaphore}} more start() {{callOrCalls}}",
    ASYNC_VAR_MESSAGE: 'Async callback "{{asyncVar}}" is not called',
}

QUNIT_NAMESPACE = "QUnit"
TEST_IDENTIFIERS = frozenset({"test", "asyncTest"})
ASYNC_TEST_IDENTIFIERS = frozenset({"asyncTest"})
STOP_IDENTIFIERS = frozenset({"stop"})
START_IDENTIFIERS = frozenset({"start"})
ASYNC_TOKEN_METHOD = "async"

ReportFn = Callable[[Node, str, Mapping[str, Any]], None]


# ---------------------------------------------------------------------------
# Call-shape classifiers
# ---------------------------------------------------------------------------


def _matches_qunit_call(callee: Node, names: frozenset[str]) -> bool:
    """True for a bare ``name`` or a ``QUnit.name`` member access."""
    if isinstance(callee, Identifier):
        return callee.name in names
    if isinstance(callee, MemberExpression):
        return (
            isinstance(callee.object, Identifier)
            and callee.object.name == QUNIT_NAMESPACE
            and isinstance(callee.property, Identifier)
            and callee.property.name in names
        )
    return False


def is_test(callee: Node) -> bool:
    return _matches_qunit_call(callee, TEST_IDENTIFIERS)


def is_async_test(callee: Node) -> bool:
    return _matches_qunit_call(callee, ASYNC_TEST_IDENTIFIERS)


def is_stop(callee: Node) -> bool:
    return _matches_qunit_call(callee, STOP_IDENTIFIERS)


def is_start(callee: Node) -> bool:
    return _matches_qunit_call(callee, START_IDENTIFIERS)


def get_assert_context_name(arguments: list[Node]) -> str | None:
    """Name of the first parameter of the first function-literal argument.

    Returns None when there is no function literal, it takes no parameters,
    or its first parameter is a destructuring pattern.
    """
    for argument in arguments:
        if isinstance(argument, (FunctionExpression, ArrowFunctionExpression)):
            if argument.params and isinstance(argument.params[0], Identifier):
                return argument.params[0].name
            return None
    return None


# ---------------------------------------------------------------------------
# Tracker
# ---------------------------------------------------------------------------


@dataclass
class TrackingFrame:
    """Pending asynchronous obligations of one open test."""

    semaphore_count: int = 0
    # Insertion order is registration order, which fixes the report order
    async_callback_vars: dict[str, bool] = field(default_factory=dict)
    assert_context_var: str | None = None

    def unresolved_callbacks(self) -> list[str]:
        return [name for name, called in self.async_callback_vars.items() if not called]


class AsyncResolutionTracker:
    """Stack of tracking frames driven by traversal enter/exit events.

    A tracker serves exactly one traversal pass; create a new one per file.
    """

    def __init__(self, report: ReportFn):
        self._report = report
        self._frames: list[TrackingFrame] = []

    @property
    def depth(self) -> int:
        return len(self._frames)

    def _current(self) -> TrackingFrame | None:
        return self._frames[-1] if self._frames else None

    # -- stateful classifiers ------------------------------------------------

    def is_async_call_expression(self, node: Node | None) -> bool:
        """True for ``<assertContextVar>.async(...)`` of the innermost test."""
        frame = self._current()
        assert_context_var = frame.assert_context_var if frame else None
        if node is None or not assert_context_var:
            return False
        if not isinstance(node, CallExpression):
            return False
        callee = node.callee
        return (
            isinstance(callee, MemberExpression)
            and isinstance(callee.object, Identifier)
            and callee.object.name == assert_context_var
            and isinstance(callee.property, Identifier)
            and callee.property.name == ASYNC_TOKEN_METHOD
        )

    def is_async_callback_var(self, callee: Node) -> bool:
        frame = self._current()
        if frame is None or not isinstance(callee, Identifier):
            return False
        return callee.name in frame.async_callback_vars

    # -- state changes -------------------------------------------------------

    def _adjust_semaphore(self, amount: int) -> None:
        frame = self._current()
        if frame is not None:
            frame.semaphore_count += amount

    def _add_async_callback_var(self, target: Node) -> None:
        frame = self._current()
        # Member targets (``this.done = assert.async()``) cannot be matched
        # against a later bare call, so only plain names are tracked.
        if frame is not None and isinstance(target, Identifier):
            frame.async_callback_vars[target.name] = False

    def _mark_async_callback_var_called(self, callee: Identifier) -> None:
        frame = self._current()
        if frame is not None:
            frame.async_callback_vars[callee.name] = True

    def _verify(self, frame: TrackingFrame, node: Node) -> None:
        if frame.semaphore_count > 0:
            self._report(
                node,
                STOP_MESSAGE,
                {
                    "semaphore": frame.semaphore_count,
                    "callOrCalls": "call" if frame.semaphore_count == 1 else "calls",
                },
            )

        for callback_var in frame.unresolved_callbacks():
            self._report(node, ASYNC_VAR_MESSAGE, {"asyncVar": callback_var})

    # -- traversal events ----------------------------------------------------

    # Listeners ignore a node whose kind matches but which lacks the fields
    # of its variant (kept as GenericNode by build_node).

    def enter_call_expression(self, node: Node) -> None:
        if not isinstance(node, CallExpression):
            return
        callee = node.callee
        if is_test(callee):
            self._frames.append(
                TrackingFrame(
                    semaphore_count=1 if is_async_test(callee) else 0,
                    assert_context_var=get_assert_context_name(node.arguments),
                )
            )
        elif self.is_async_callback_var(callee):
            self._mark_async_callback_var_called(callee)
        elif is_stop(callee):
            self._adjust_semaphore(1)
        elif is_start(callee):
            self._adjust_semaphore(-1)

    def exit_call_expression(self, node: Node) -> None:
        if isinstance(node, CallExpression) and is_test(node.callee) and self._frames:
            self._verify(self._frames.pop(), node)

    def enter_assignment_expression(self, node: Node) -> None:
        if isinstance(node, AssignmentExpression) and self.is_async_call_expression(node.right):
            self._add_async_callback_var(node.left)

    def enter_variable_declarator(self, node: Node) -> None:
        if isinstance(node, VariableDeclarator) and self.is_async_call_expression(node.init):
            self._add_async_callback_var(node.id)

    def listeners(self) -> dict[str, Listener]:
        return {
            "CallExpression": self.enter_call_expression,
            "CallExpression:exit": self.exit_call_expression,
            "AssignmentExpression": self.enter_assignment_expression,
            "VariableDeclarator": self.enter_variable_declarator,
        }


class ResolveAsyncRule(BaseRule):
    """Report QUnit tests that leave ``stop()`` or ``assert.async()`` unresolved."""

    rule_id = RULE_ID
    messages = MESSAGES

    def create(self, context: RuleContext) -> dict[str, Listener]:
        return AsyncResolutionTracker(context.report).listeners()

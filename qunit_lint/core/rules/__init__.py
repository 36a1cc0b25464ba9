# Copyright 2026 Cisco Systems, Inc.
# SPDX-License-Identifier: Apache-2.0

"""
Lint rules.

Every rule follows the same contract::

    class MyRule(BaseRule):
        rule_id = "my-rule"
        messages = {"MESSAGE_ID": "Template with {{placeholder}}"}

        def create(self, context: RuleContext) -> dict[str, Listener]:
            ...

``create`` is called once per analysis run, so any state a rule keeps lives
in objects built there.  Rule metadata (description, recommended, docs) is
declared in the pack's ``pack.yaml``.
"""

from .base import BaseRule, ReportDescriptor, RuleContext, format_message
from .resolve_async import ResolveAsyncRule

__all__ = ["BaseRule", "ReportDescriptor", "RuleContext", "format_message", "ResolveAsyncRule"]

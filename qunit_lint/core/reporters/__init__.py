# Copyright 2026 Cisco Systems, Inc.
# SPDX-License-Identifier: Apache-2.0

"""Report generators for lint results."""

from .json_reporter import JSONReporter
from .markdown_reporter import MarkdownReporter
from .sarif_reporter import SARIFReporter

__all__ = ["JSONReporter", "MarkdownReporter", "SARIFReporter"]

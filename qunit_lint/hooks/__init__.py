# Copyright 2026 Cisco Systems, Inc.
# SPDX-License-Identifier: Apache-2.0

"""Git hooks for qunit-lint."""


def __getattr__(name: str):
    """Lazy-load pre_commit_hook to avoid heavy imports on module entry."""
    if name == "pre_commit_hook":
        from .pre_commit import main as pre_commit_hook

        globals()["pre_commit_hook"] = pre_commit_hook
        return pre_commit_hook
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["pre_commit_hook"]

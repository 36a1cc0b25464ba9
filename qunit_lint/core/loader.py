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
Source file discovery and loading.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from .exceptions import SourceLoadError
from .lint_policy import LintPolicy

logger = logging.getLogger(__name__)


@dataclass
class SourceFile:
    """A JavaScript file read from disk."""

    path: Path
    relative_path: str
    content: str
    size_bytes: int


class SourceLoader:
    """Finds and reads the JavaScript files a lint run covers.

    Explicitly named files are always linted.  Directories are walked
    recursively and filtered with the policy's include/exclude globs,
    which are matched against paths relative to the directory given.
    """

    def __init__(self, policy: LintPolicy | None = None):
        """
        Initialize source loader.

        Args:
            policy: Lint policy supplying globs and the file size limit
        """
        self.policy = policy or LintPolicy.default()
        self.max_file_size_bytes = self.policy.max_file_size_kb * 1024

    def load_file(self, path: str | Path, root: str | Path | None = None) -> SourceFile:
        """
        Read a source file.

        Args:
            path: File to read
            root: Directory the reported relative path is computed from

        Returns:
            The file's content and metadata

        Raises:
            SourceLoadError: If the file cannot be read or is not UTF-8
        """
        if not isinstance(path, Path):
            path = Path(path)

        if not path.is_file():
            raise SourceLoadError(f"Source file does not exist: {path}")

        try:
            raw = path.read_bytes()
            # utf-8-sig drops a leading BOM, which esprima rejects
            content = raw.decode("utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceLoadError(f"Failed to read {path}: {e}") from e

        relative_path = str(path)
        if root is not None:
            try:
                relative_path = path.relative_to(root).as_posix()
            except ValueError:
                pass

        return SourceFile(path=path, relative_path=relative_path, content=content, size_bytes=len(raw))

    def discover(self, paths: list[str | Path]) -> list[Path]:
        """
        Expand files and directories into the list of files to lint.

        Args:
            paths: Files and/or directories

        Returns:
            De-duplicated file paths, directory contents sorted

        Raises:
            SourceLoadError: If a given path does not exist
        """
        found: list[Path] = []
        seen: set[Path] = set()

        for entry in paths:
            entry = Path(entry)
            if entry.is_file():
                candidates = [entry]
            elif entry.is_dir():
                candidates = self._walk(entry)
            else:
                raise SourceLoadError(f"Path does not exist: {entry}")

            for candidate in candidates:
                key = candidate.resolve()
                if key not in seen:
                    seen.add(key)
                    found.append(candidate)

        return found

    def _walk(self, directory: Path) -> list[Path]:
        files: list[Path] = []
        for path in sorted(directory.rglob("*")):
            if not path.is_file():
                continue

            relative = path.relative_to(directory)
            if not self.policy.matches(relative):
                continue

            try:
                size = path.stat().st_size
            except OSError as e:
                logger.debug("Skipping unreadable file %s: %s", path, e)
                continue

            if size > self.max_file_size_bytes:
                logger.debug("Skipping %s: %d bytes exceeds limit of %d", path, size, self.max_file_size_bytes)
                continue

            files.append(path)
        return files

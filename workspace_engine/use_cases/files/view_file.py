"""
Use case for reading a workspace file, whole or by line ranges.
"""

import logging
import re
from typing import Optional

from workspace_engine.config.settings import Settings
from workspace_engine.entities.workspace_file import WorkspaceFile
from workspace_engine.exceptions import FileRepositoryError, WorkspaceError
from workspace_engine.ports.files.workspace_repository_port import (
    WorkspaceRepositoryPort,
)
from workspace_engine.utils.line_ranges import parse_line_ranges
from workspace_engine.utils.workspace import WorkspaceGuard

LINE_SPLIT = re.compile(r"\r?\n")


def split_lines(content: str) -> list[str]:
    """Split file content on CRLF or LF."""
    return LINE_SPLIT.split(content)


class ViewFileUseCase:
    """Use case for reading the content of a workspace file."""

    def __init__(
        self,
        repository: WorkspaceRepositoryPort,
        guard: WorkspaceGuard,
        settings: Settings,
        logger: Optional[logging.Logger] = None,
    ):
        self._repository = repository
        self._guard = guard
        self._settings = settings
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, file_path: str, lines: Optional[str] = None) -> str:
        """
        Read a file.

        Args:
            file_path: Workspace-relative path
            lines: Optional range expression, e.g. "1-800, 1001-1500"

        Returns:
            The selected lines joined with LF, capped in length. Without a range
            the first lines of the file are returned.

        Raises:
            WorkspaceError: If the path is rejected, missing or the range is invalid
        """
        rel, abs_path = self._guard.resolve_allowed(file_path)
        try:
            self._logger.info(f"Viewing {rel} (lines={lines or 'default'})")
            WorkspaceFile(rel, abs_path)
            all_lines = split_lines(self._repository.read_text(abs_path))
            if lines and lines.strip():
                chunks = [
                    "\n".join(all_lines[r.start - 1 : r.end])
                    for r in parse_line_ranges(lines)
                ]
                output = "\n".join(chunks)
            else:
                output = "\n".join(all_lines[: self._settings.view_default_lines])
            return output[: self._settings.view_max_chars]
        except WorkspaceError as e:
            if not e.file:
                e.file = rel
            raise
        except Exception as e:
            self._logger.error(f"Error viewing {rel}: {e}")
            raise FileRepositoryError(f"Failed to read {rel}: {str(e)}", file=rel)

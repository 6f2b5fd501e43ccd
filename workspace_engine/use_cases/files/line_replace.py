"""
Use case for line-addressed, content-verified search and replace.

The caller names a line range and repeats what it believes those lines
contain. The edit is applied only if the template matches the file as it is
now, so an edit computed against a stale view of the file is refused instead
of landing on the wrong lines.
"""

import logging
from typing import Optional

from workspace_engine.entities.results import ReplaceResult
from workspace_engine.entities.search_template import SearchTemplate, normalize_newlines
from workspace_engine.entities.workspace_file import WorkspaceFile
from workspace_engine.exceptions import (
    FileRepositoryError,
    RangeFormatError,
    WorkspaceError,
)
from workspace_engine.ports.files.workspace_repository_port import (
    WorkspaceRepositoryPort,
)
from workspace_engine.use_cases.files.view_file import split_lines
from workspace_engine.utils.workspace import WorkspaceGuard


class LineReplaceUseCase:
    """Use case for replacing a verified block of lines in a workspace file."""

    def __init__(
        self,
        repository: WorkspaceRepositoryPort,
        guard: WorkspaceGuard,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the use case.

        Args:
            repository: Repository for file operations
            guard: Path guard bound to the workspace root
            logger: Logger instance to use for logging
        """
        self._repository = repository
        self._guard = guard
        self._logger = logger or logging.getLogger(__name__)

    def execute(
        self,
        file_path: str,
        search: str,
        first_replaced_line: int,
        last_replaced_line: int,
        replace: str,
    ) -> ReplaceResult:
        """
        Replace lines [first_replaced_line, last_replaced_line] with replace.

        Args:
            file_path: Workspace-relative path of an existing file
            search: Expected content of the range, verbatim or with one '...' line
            first_replaced_line: First line of the range (1-indexed)
            last_replaced_line: Last line of the range (1-indexed, clamped to EOF)
            replace: Replacement text; may have any number of lines

        Returns:
            ReplaceResult whose end is the last line of the inserted block

        Raises:
            WorkspaceError: If the path is rejected, the range is invalid or the
                template does not match; the file is left untouched
        """
        rel, abs_path = self._guard.resolve_allowed(file_path)
        try:
            template = SearchTemplate.parse(search)
            with self._repository.lock(abs_path):
                WorkspaceFile(rel, abs_path)
                lines = split_lines(self._repository.read_text(abs_path))

                start = max(1, int(first_replaced_line))
                end = max(start, int(last_replaced_line))
                if start > len(lines):
                    raise RangeFormatError(
                        f"Start line beyond EOF (file has {len(lines)} lines)"
                    )
                target_block = "\n".join(lines[start - 1 : min(end, len(lines))])
                template.verify(target_block, file=rel)

                backup = self._repository.backup(abs_path)
                replace_lines = normalize_newlines(replace).split("\n")
                new_lines = lines[: start - 1] + replace_lines + lines[end:]
                self._repository.write_text(abs_path, "\n".join(new_lines))

            new_end = (start - 1) + len(replace_lines)
            self._logger.info(
                f"Replaced lines {start}-{end} of {rel} with {len(replace_lines)} lines"
            )
            return ReplaceResult(
                file=rel,
                start=start,
                end=new_end,
                lines_total=len(new_lines),
                backup=backup,
            )
        except WorkspaceError as e:
            if not e.file:
                e.file = rel
            self._logger.warning(f"line-replace on {rel} refused: {e}")
            raise
        except Exception as e:
            self._logger.error(f"Error replacing lines in {rel}: {e}")
            raise FileRepositoryError(f"Failed to edit {rel}: {str(e)}", file=rel)

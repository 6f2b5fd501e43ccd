"""
Use case for creating or overwriting a whole workspace file.
"""

import logging
from typing import Optional

from workspace_engine.config.settings import Settings
from workspace_engine.entities.results import WriteResult
from workspace_engine.entities.search_template import normalize_newlines
from workspace_engine.exceptions import (
    FileRepositoryError,
    InvalidArgumentsError,
    SizeLimitError,
    WorkspaceError,
)
from workspace_engine.ports.files.workspace_repository_port import (
    WorkspaceRepositoryPort,
)
from workspace_engine.use_cases.files.view_file import split_lines
from workspace_engine.utils.workspace import WorkspaceGuard


def count_changed_lines(old: list[str], new: list[str], limit: int) -> int:
    """
    Position-wise count of differing lines, stopping once it exceeds limit.

    Missing lines on the shorter side compare as empty strings.
    """
    changed = 0
    for i in range(max(len(old), len(new))):
        a = old[i] if i < len(old) else ""
        b = new[i] if i < len(new) else ""
        if a != b:
            changed += 1
            if changed > limit:
                break
    return changed


class WriteFileUseCase:
    """Use case for writing a whole file with size and change ceilings."""

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

    def execute(self, file_path: str, content: str) -> WriteResult:
        """
        Create or overwrite a file.

        Args:
            file_path: Workspace-relative path
            content: Full new content (LF-normalized before writing)

        Returns:
            WriteResult

        Raises:
            SizeLimitError: If content is too large or the overwrite changes too many lines
            WorkspaceError: If the path is rejected
        """
        rel = self._guard.normalize(file_path)
        try:
            size = len(content.encode("utf-8"))
        except UnicodeEncodeError as e:
            raise InvalidArgumentsError(f"Content is not valid UTF-8 text: {e.reason}", file=rel)
        if size > self._settings.max_write_bytes:
            raise SizeLimitError(
                f"Content exceeds {self._settings.max_write_bytes // 1024}KB; use line-replace",
                file=rel,
            )
        rel, abs_path = self._guard.resolve_allowed(file_path)
        normalized = normalize_newlines(content)

        try:
            with self._repository.lock(abs_path):
                if self._repository.exists(abs_path):
                    if not self._repository.is_file(abs_path):
                        raise FileRepositoryError("Path exists and is not a file", file=rel)
                    return self._overwrite(rel, abs_path, normalized)

                self._repository.write_text(abs_path, normalized, create_parents=True)
            self._logger.info(f"Created {rel}")
            return WriteResult(file=rel, created=True)
        except WorkspaceError as e:
            if not e.file:
                e.file = rel
            self._logger.warning(f"write on {rel} refused: {e}")
            raise
        except Exception as e:
            self._logger.error(f"Error writing {rel}: {e}")
            raise FileRepositoryError(f"Failed to write {rel}: {str(e)}", file=rel)

    def _overwrite(self, rel: str, abs_path: str, content: str) -> WriteResult:
        limit = self._settings.max_changed_lines
        previous = split_lines(self._repository.read_text(abs_path))
        new_lines = content.split("\n")
        changed = count_changed_lines(previous, new_lines, limit)
        if changed > limit:
            raise SizeLimitError(
                f"Change exceeds {limit} lines; use line-replace", file=rel
            )
        backup = self._repository.backup(abs_path)
        self._repository.write_text(abs_path, "\n".join(new_lines))
        self._logger.info(f"Overwrote {rel} ({changed} lines changed)")
        return WriteResult(file=rel, created=False, changed_lines=changed, backup=backup)

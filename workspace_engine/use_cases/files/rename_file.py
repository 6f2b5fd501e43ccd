"""
Use case for renaming a file within its directory.
"""

import logging
import os
from typing import Optional

from workspace_engine.entities.results import RenameResult
from workspace_engine.exceptions import (
    ConflictError,
    CrossDirectoryError,
    FileRepositoryError,
    InvalidArgumentsError,
    NotFoundError,
    WorkspaceError,
)
from workspace_engine.ports.files.workspace_repository_port import (
    WorkspaceRepositoryPort,
)
from workspace_engine.utils.workspace import WorkspaceGuard


class RenameFileUseCase:
    """Use case for same-directory renames with confirmed overwrite."""

    def __init__(
        self,
        repository: WorkspaceRepositoryPort,
        guard: WorkspaceGuard,
        logger: Optional[logging.Logger] = None,
    ):
        self._repository = repository
        self._guard = guard
        self._logger = logger or logging.getLogger(__name__)

    def execute(
        self, original_file_path: str, new_file_path: str, confirm: bool = False
    ) -> RenameResult:
        """
        Rename a file.

        Moves across directories are refused; relocate with write + delete
        instead. An existing destination is replaced only with confirm=True,
        after moving it aside to its backup name.

        Raises:
            CrossDirectoryError: If the parent directories differ
            NotFoundError: If the source does not exist
            ConflictError: If the destination exists and confirm is False
        """
        rel_from, abs_from = self._guard.resolve_allowed(original_file_path)
        rel_to, abs_to = self._guard.resolve_allowed(new_file_path)

        if os.path.dirname(abs_from) != os.path.dirname(abs_to):
            raise CrossDirectoryError("Cross-directory renames are blocked", file=rel_from)
        if abs_from == abs_to:
            raise InvalidArgumentsError("Source and destination are the same", file=rel_from)

        # Locks are taken in path order so opposite renames cannot deadlock.
        first, second = sorted((abs_from, abs_to))
        try:
            with self._repository.lock(first), self._repository.lock(second):
                if not self._repository.is_file(abs_from):
                    raise NotFoundError("Source not found", file=rel_from)

                backup = None
                replaced = self._repository.exists(abs_to)
                if replaced:
                    if not confirm:
                        raise ConflictError(
                            "Target exists; pass confirm:true to overwrite (backup will be created)",
                            file=rel_to,
                        )
                    backup = self._repository.move_aside(abs_to)

                self._repository.rename(abs_from, abs_to)
            self._logger.info(f"Renamed {rel_from} -> {rel_to}")
            return RenameResult(
                source=rel_from, file=rel_to, replaced_existing=replaced, backup=backup
            )
        except WorkspaceError as e:
            if not e.file:
                e.file = rel_to
            self._logger.warning(f"rename {rel_from} -> {rel_to} refused: {e}")
            raise
        except Exception as e:
            self._logger.error(f"Error renaming {rel_from}: {e}")
            raise FileRepositoryError(f"Failed to rename {rel_from}: {str(e)}", file=rel_to)

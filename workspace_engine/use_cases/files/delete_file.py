"""
Use case for the two-phase delete confirmation.
"""

import logging
from typing import Optional

from workspace_engine.entities.results import DeleteResult
from workspace_engine.entities.workspace_file import WorkspaceFile
from workspace_engine.utils.workspace import WorkspaceGuard


class DeleteFileUseCase:
    """
    Two-phase delete: a dry run reporting the file size, then an
    acknowledgement once confirmed. The file itself is never removed here;
    the actual deletion happens in an out-of-band confirmation flow.
    """

    def __init__(self, guard: WorkspaceGuard, logger: Optional[logging.Logger] = None):
        self._guard = guard
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, file_path: str, confirm: bool = False) -> DeleteResult:
        rel, abs_path = self._guard.resolve_allowed(file_path)
        file = WorkspaceFile(rel, abs_path)
        self._logger.info(f"Delete requested for {rel} (confirm={confirm})")
        return DeleteResult(file=rel, size=file.size, confirmed=confirm)

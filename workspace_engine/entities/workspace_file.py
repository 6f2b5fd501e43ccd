"""
Workspace file domain entity.
"""

import os
from typing import Any

from workspace_engine.exceptions import NotFoundError

NOT_FOUND_NOTE = (
    "File not found. Use paths relative to workspace root, e.g. 'src/App.tsx' "
    "(no 'workspace/' prefix)."
)


class WorkspaceFile:
    """
    Regular file inside the workspace, addressed by both its workspace-relative
    and absolute paths.
    """

    def __init__(self, rel_path: str, abs_path: str):
        """
        Initialize the WorkspaceFile entity.

        Args:
            rel_path: Workspace-relative path (forward slashes)
            abs_path: Absolute path inside the workspace root

        Raises:
            NotFoundError: If the path is not an existing regular file
        """
        if not os.path.isfile(abs_path):
            raise NotFoundError(NOT_FOUND_NOTE, file=rel_path)

        self.rel_path = rel_path
        self.path = abs_path
        self.name = os.path.basename(abs_path)
        self.size = os.path.getsize(abs_path)
        self.file_type = self._find_file_type()

    def _find_file_type(self) -> str:
        """Extract the file extension."""
        _, ext = os.path.splitext(self.path)
        return ext.lstrip(".") if ext else "no_extension"

    def get_details(self) -> dict[str, Any]:
        """
        Get file details as echoed back to the calling agent.

        Returns:
            Dictionary with file information
        """
        return {
            "file": self.rel_path,
            "name": self.name,
            "size": self.size,
            "type": self.file_type,
        }

    def __str__(self) -> str:
        return f"WorkspaceFile(file='{self.rel_path}', size={self.size})"

    def __repr__(self) -> str:
        return f"WorkspaceFile(path='{self.path}')"

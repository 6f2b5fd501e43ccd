"""
Workspace repository port interface defining the contract for file operations.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from workspace_engine.entities.results import BackupResult


class WorkspaceRepositoryPort(ABC):
    """Port interface for storage operations inside the workspace root."""

    @abstractmethod
    def read_text(self, path: str) -> str:
        """
        Read a UTF-8 text file.

        Args:
            path: Absolute path of the file

        Returns:
            File content

        Raises:
            FileRepositoryError: If the file cannot be read or decoded
        """
        pass

    @abstractmethod
    def write_text(self, path: str, content: str, create_parents: bool = False) -> None:
        """
        Atomically replace (or create) a file with UTF-8 content.

        Args:
            path: Absolute path of the file
            content: Text content to write
            create_parents: Create missing parent directories

        Raises:
            FileRepositoryError: If writing fails
        """
        pass

    @abstractmethod
    def is_file(self, path: str) -> bool:
        """Whether the path is an existing regular file."""
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Whether anything exists at the path."""
        pass

    @abstractmethod
    def backup(self, path: str) -> BackupResult:
        """
        Copy a file next to itself with the backup suffix.

        Failure is non-fatal: it is logged and reported in the result, never raised.
        """
        pass

    @abstractmethod
    def move_aside(self, path: str) -> BackupResult:
        """
        Rename a file to its backup name, replacing any previous backup.

        Failure is non-fatal: it is logged and reported in the result, never raised.
        """
        pass

    @abstractmethod
    def rename(self, source: str, destination: str) -> None:
        """
        Move source onto destination.

        Raises:
            FileRepositoryError: If the rename fails
        """
        pass

    @abstractmethod
    def walk_files(self, root: str, max_files: int) -> list[str]:
        """
        Enumerate regular files below root without recursion, skipping
        excluded directories.

        Args:
            root: Directory to walk
            max_files: Stop after this many files

        Returns:
            Absolute file paths in directory-entry order
        """
        pass

    @abstractmethod
    def lock(self, path: str) -> AbstractContextManager[None]:
        """Context manager serializing edits of one file."""
        pass

"""
Local file system adapter implementation for workspace operations.
"""

import logging
import os
import shutil
import tempfile
import threading
from contextlib import contextmanager
from typing import Iterator

from typing_extensions import override

from workspace_engine.entities.results import BackupResult
from workspace_engine.exceptions import FileRepositoryError
from workspace_engine.ports.files.workspace_repository_port import (
    WorkspaceRepositoryPort,
)
from workspace_engine.utils.workspace import FORBIDDEN_DIRS

# path -> [lock, holders]; entries are dropped once nobody holds or waits on them
_file_locks: dict[str, list] = {}
_registry_lock = threading.Lock()


class LocalWorkspaceAdapter(WorkspaceRepositoryPort):
    """Local file system implementation of the workspace repository port."""

    def __init__(
        self,
        backup_suffix: str = ".bak",
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the adapter.

        Args:
            backup_suffix: Suffix appended to backup file names
            logger: Logger instance to use for logging. If None, a default logger will be created.
        """
        self._backup_suffix = backup_suffix
        self._logger: logging.Logger = logger or logging.getLogger(__name__)

    @override
    def read_text(self, path: str) -> str:
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except UnicodeDecodeError:
            raise FileRepositoryError("File is not valid UTF-8 text")
        except OSError as e:
            raise FileRepositoryError(f"Failed to read file: {e}")

    @override
    def write_text(self, path: str, content: str, create_parents: bool = False) -> None:
        directory = os.path.dirname(path)
        try:
            if create_parents:
                os.makedirs(directory, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{os.path.basename(path)}.", suffix=".tmp", dir=directory
            )
        except OSError as e:
            raise FileRepositoryError(f"Failed to write file: {e}")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            if os.path.exists(path):
                shutil.copymode(path, tmp_name)
            os.replace(tmp_name, path)
        except UnicodeEncodeError:
            self._discard(tmp_name)
            raise FileRepositoryError("Content is not valid UTF-8 text")
        except OSError as e:
            self._discard(tmp_name)
            raise FileRepositoryError(f"Failed to write file: {e}")

    def _discard(self, tmp_name: str) -> None:
        try:
            os.unlink(tmp_name)
        except OSError as e:
            self._logger.warning(f"Could not remove temporary file {tmp_name}: {e}")

    @override
    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    @override
    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def _backup_path(self, path: str) -> str:
        return path + self._backup_suffix

    @override
    def backup(self, path: str) -> BackupResult:
        target = self._backup_path(path)
        try:
            shutil.copyfile(path, target)
        except OSError as e:
            self._logger.warning(f"Backup of {path} failed (non-fatal): {e}")
            return BackupResult(source=path, backup_path=target, created=False, error=str(e))
        self._logger.info(f"Backup written: {target}")
        return BackupResult(source=path, backup_path=target, created=True)

    @override
    def move_aside(self, path: str) -> BackupResult:
        target = self._backup_path(path)
        try:
            os.replace(path, target)
        except OSError as e:
            self._logger.warning(f"Moving {path} aside failed (non-fatal): {e}")
            return BackupResult(source=path, backup_path=target, created=False, error=str(e))
        self._logger.info(f"Moved existing file aside: {target}")
        return BackupResult(source=path, backup_path=target, created=True)

    @override
    def rename(self, source: str, destination: str) -> None:
        try:
            os.replace(source, destination)
        except OSError as e:
            raise FileRepositoryError(f"Failed to rename file: {e}")

    @override
    def walk_files(self, root: str, max_files: int) -> list[str]:
        results: list[str] = []
        stack: list[str] = [root]
        while stack:
            directory = stack.pop()
            try:
                entries = list(os.scandir(directory))
            except OSError as e:
                # Log the error but continue with other directories
                self._logger.warning(f"Could not list {directory}: {e}")
                continue
            for entry in entries:
                if entry.name in FORBIDDEN_DIRS:
                    continue
                if entry.is_dir(follow_symlinks=False):
                    stack.append(entry.path)
                elif entry.is_file():
                    results.append(entry.path)
                    if len(results) >= max_files:
                        self._logger.warning(
                            f"File walk stopped after {max_files} files under {root}"
                        )
                        return results
        return results

    @override
    @contextmanager
    def lock(self, path: str) -> Iterator[None]:
        key = os.path.normcase(os.path.abspath(path))
        with _registry_lock:
            entry = _file_locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with _registry_lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del _file_locks[key]

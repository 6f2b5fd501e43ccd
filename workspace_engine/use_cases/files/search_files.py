"""
Use case for regex search across workspace files selected by glob patterns.
"""

import logging
import re
from typing import Optional

from workspace_engine.config.settings import Settings
from workspace_engine.entities.results import FileMatches, SearchMatch
from workspace_engine.exceptions import (
    FileRepositoryError,
    InvalidArgumentsError,
    WorkspaceError,
)
from workspace_engine.ports.files.workspace_repository_port import (
    WorkspaceRepositoryPort,
)
from workspace_engine.use_cases.files.view_file import split_lines
from workspace_engine.utils.globbing import compile_glob
from workspace_engine.utils.workspace import WorkspaceGuard


class SearchFilesUseCase:
    """Use case for searching file contents in the workspace."""

    def __init__(
        self,
        repository: WorkspaceRepositoryPort,
        guard: WorkspaceGuard,
        settings: Settings,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the use case.

        Args:
            repository: Repository for file operations
            guard: Path guard bound to the workspace root
            settings: Engine settings (search limits)
            logger: Logger instance to use for logging
        """
        self._repository = repository
        self._guard = guard
        self._settings = settings
        self._logger = logger or logging.getLogger(__name__)

    def execute(
        self,
        query: str,
        include_pattern: str,
        exclude_pattern: Optional[str] = None,
        case_sensitive: bool = False,
    ) -> list[FileMatches]:
        """
        Search files for a regular expression.

        Args:
            query: Regular expression, matched line by line
            include_pattern: Glob selecting files (e.g., "src/**")
            exclude_pattern: Optional glob removing files from the selection
            case_sensitive: Match case (default: False)

        Returns:
            One FileMatches per file with at least one match

        Raises:
            InvalidArgumentsError: If the query is not a valid regular expression
            FileRepositoryError: If the search fails
        """
        flags = 0 if case_sensitive else re.IGNORECASE
        try:
            regex = re.compile(query, flags)
        except re.error as e:
            raise InvalidArgumentsError(f"Invalid regular expression: {e}")
        include = compile_glob(include_pattern)
        exclude = compile_glob(exclude_pattern) if exclude_pattern else None

        try:
            self._logger.info(
                f"Searching for '{query}' in files matching '{include_pattern}'"
                + (f" excluding '{exclude_pattern}'" if exclude_pattern else "")
            )
            results: list[FileMatches] = []
            for abs_path in self._repository.walk_files(
                self._guard.root, self._settings.search_max_files
            ):
                rel = self._guard.relative(abs_path)
                if not include(rel):
                    continue
                if exclude is not None and exclude(rel):
                    continue
                if self._guard.classify(abs_path):
                    continue
                matches = self._scan(abs_path, regex)
                if matches:
                    results.append(FileMatches(file_path=rel, matches=matches))
            self._logger.info(f"Found matches in {len(results)} files")
            return results
        except WorkspaceError:
            raise
        except Exception as e:
            self._logger.error(f"Error searching files: {e}")
            raise FileRepositoryError(f"Failed to search files: {str(e)}")

    def _scan(self, abs_path: str, regex: re.Pattern[str]) -> list[SearchMatch]:
        try:
            content = self._repository.read_text(abs_path)
        except FileRepositoryError as e:
            self._logger.debug(f"Skipping {abs_path}: {e}")
            return []
        matches: list[SearchMatch] = []
        for number, line in enumerate(split_lines(content), start=1):
            if len(matches) >= self._settings.search_max_matches_per_file:
                break
            if regex.search(line):
                matches.append(
                    SearchMatch(line=number, preview=line[: self._settings.search_preview_chars])
                )
        return matches

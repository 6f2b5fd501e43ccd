"""
Dependency injection container for managing engine dependencies.
"""

import json
import logging
from typing import Any, List, Optional

from workspace_engine.adapters.files.local_fs_adapter import LocalWorkspaceAdapter
from workspace_engine.config.settings import Settings
from workspace_engine.ports.files.workspace_repository_port import (
    WorkspaceRepositoryPort,
)
from workspace_engine.ports.llm.tools_port import ToolName, ToolsHandlerPort, ToolSpec
from workspace_engine.use_cases.files.delete_file import DeleteFileUseCase
from workspace_engine.use_cases.files.line_replace import LineReplaceUseCase
from workspace_engine.use_cases.files.rename_file import RenameFileUseCase
from workspace_engine.use_cases.files.search_files import SearchFilesUseCase
from workspace_engine.use_cases.files.view_file import ViewFileUseCase
from workspace_engine.use_cases.files.write_file import WriteFileUseCase
from workspace_engine.use_cases.project.dependencies import DependencyUseCase
from workspace_engine.use_cases.tools.files_tools import FilesToolsHandler, dump
from workspace_engine.use_cases.tools.project_tools import ProjectToolsHandler
from workspace_engine.utils.workspace import WorkspaceGuard


class CompositeToolsHandler:
    """Combine several tool handlers into one dispatcher keyed by ToolName."""

    def __init__(
        self, *handlers: ToolsHandlerPort, logger: Optional[logging.Logger] = None
    ) -> None:
        self._handlers = list(handlers)
        self._logger = logger or logging.getLogger(__name__)
        self._routes: dict[ToolName, ToolsHandlerPort] = {}
        for h in self._handlers:
            for name in h.handled_tools():
                if name in self._routes:
                    raise ValueError(f"Tool {name.value} is handled twice")
                self._routes[name] = h

    def available_tools(self) -> list[ToolSpec]:
        tools: List[ToolSpec] = []
        for h in self._handlers:
            tools.extend(h.available_tools())
        return tools

    def dispatch(self, name: str, arguments: Any) -> str:
        """
        Run one tool call and return the string relayed to the agent.

        Args:
            name: Raw tool name from the agent
            arguments: Argument object, or its JSON text

        Returns:
            JSON (or raw text for view); never raises for bad input
        """
        if isinstance(arguments, (str, bytes)):
            try:
                arguments = json.loads(arguments or "{}")
            except ValueError as e:
                return dump({"error": f"Invalid JSON arguments: {e}"})
        if arguments is None:
            arguments = {}

        tool = ToolName.parse(name)
        if tool is ToolName.INTEGRATION:
            return dump({"status": "not_enabled", "tool": name})
        handler = self._routes.get(tool)
        if tool is ToolName.UNKNOWN or handler is None:
            self._logger.warning(f"Unknown tool requested: {name}")
            return dump({"error": f"Unknown tool: {name}"})
        if not isinstance(arguments, dict):
            return dump({"error": "Tool arguments must be a JSON object"})
        return handler.dispatch(tool, arguments)


class DependencyContainer:
    """
    Container for managing engine dependencies using dependency injection.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._settings = settings
        self._instances: dict[str, Any] = {}
        self._logger = logger or logging.getLogger(__name__)

    def get_settings(self) -> Settings:
        """
        Get settings, loading them from the environment on first use.

        Returns:
            Settings instance
        """
        if self._settings is None:
            self._settings = Settings()
        return self._settings

    def get_workspace_guard(self) -> WorkspaceGuard:
        if "workspace_guard" not in self._instances:
            settings = self.get_settings()
            self._instances["workspace_guard"] = WorkspaceGuard(
                settings.workspace_root, settings.workspace_prefix
            )
        return self._instances["workspace_guard"]

    def get_workspace_repository(self) -> WorkspaceRepositoryPort:
        """
        Get workspace repository adapter instance.

        Returns:
            WorkspaceRepositoryPort implementation
        """
        if "workspace_repository" not in self._instances:
            self._instances["workspace_repository"] = LocalWorkspaceAdapter(
                backup_suffix=self.get_settings().backup_suffix, logger=self._logger
            )
        return self._instances["workspace_repository"]

    def get_view_file_use_case(self) -> ViewFileUseCase:
        if "view_file_use_case" not in self._instances:
            self._instances["view_file_use_case"] = ViewFileUseCase(
                self.get_workspace_repository(),
                self.get_workspace_guard(),
                self.get_settings(),
                self._logger,
            )
        return self._instances["view_file_use_case"]

    def get_search_files_use_case(self) -> SearchFilesUseCase:
        if "search_files_use_case" not in self._instances:
            self._instances["search_files_use_case"] = SearchFilesUseCase(
                self.get_workspace_repository(),
                self.get_workspace_guard(),
                self.get_settings(),
                self._logger,
            )
        return self._instances["search_files_use_case"]

    def get_line_replace_use_case(self) -> LineReplaceUseCase:
        if "line_replace_use_case" not in self._instances:
            self._instances["line_replace_use_case"] = LineReplaceUseCase(
                self.get_workspace_repository(), self.get_workspace_guard(), self._logger
            )
        return self._instances["line_replace_use_case"]

    def get_write_file_use_case(self) -> WriteFileUseCase:
        if "write_file_use_case" not in self._instances:
            self._instances["write_file_use_case"] = WriteFileUseCase(
                self.get_workspace_repository(),
                self.get_workspace_guard(),
                self.get_settings(),
                self._logger,
            )
        return self._instances["write_file_use_case"]

    def get_rename_file_use_case(self) -> RenameFileUseCase:
        if "rename_file_use_case" not in self._instances:
            self._instances["rename_file_use_case"] = RenameFileUseCase(
                self.get_workspace_repository(), self.get_workspace_guard(), self._logger
            )
        return self._instances["rename_file_use_case"]

    def get_delete_file_use_case(self) -> DeleteFileUseCase:
        if "delete_file_use_case" not in self._instances:
            self._instances["delete_file_use_case"] = DeleteFileUseCase(
                self.get_workspace_guard(), self._logger
            )
        return self._instances["delete_file_use_case"]

    def get_files_tools_handler(self) -> ToolsHandlerPort:
        """
        Registry of the file tools backed by the Files use cases.
        """
        if "files_tools_handler" not in self._instances:
            settings = self.get_settings()
            self._instances["files_tools_handler"] = FilesToolsHandler(
                self.get_view_file_use_case(),
                self.get_search_files_use_case(),
                self.get_line_replace_use_case(),
                self.get_write_file_use_case(),
                self.get_rename_file_use_case(),
                self.get_delete_file_use_case(),
                delete_enabled=settings.delete_enabled,
                workspace_prefix=settings.workspace_prefix,
                logger=self._logger,
            )
        return self._instances["files_tools_handler"]

    def get_project_tools_handler(self) -> ToolsHandlerPort:
        if "project_tools_handler" not in self._instances:
            self._instances["project_tools_handler"] = ProjectToolsHandler(
                DependencyUseCase(self._logger),
                deps_enabled=self.get_settings().deps_enabled,
                logger=self._logger,
            )
        return self._instances["project_tools_handler"]

    def get_tools_handler(self) -> CompositeToolsHandler:
        """
        Dispatcher for every tool the engine exposes.
        """
        if "tools_handler" not in self._instances:
            self._instances["tools_handler"] = CompositeToolsHandler(
                self.get_files_tools_handler(),
                self.get_project_tools_handler(),
                logger=self._logger,
            )
        return self._instances["tools_handler"]

    def reset(self):
        """Reset all instances (useful for testing)."""
        self._instances.clear()

"""
Project-level tools: dependency stubs and the console/network log readers.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from workspace_engine.exceptions import WorkspaceError
from workspace_engine.ports.llm.tools_port import ToolName, ToolsHandlerPort, ToolSpec
from workspace_engine.use_cases.project.dependencies import DependencyUseCase
from workspace_engine.use_cases.tools.files_tools import dump, validation_note
from workspace_engine.use_cases.tools.schemas import DependencyArguments, LogQueryArguments


class ProjectToolsHandler(ToolsHandlerPort):
    """Handler for project tools. None of them mutates the workspace."""

    def __init__(
        self,
        dependency_uc: DependencyUseCase,
        deps_enabled: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self._dependency_uc = dependency_uc
        self._deps_enabled = deps_enabled
        self._logger = logger or logging.getLogger(__name__)

    def handled_tools(self) -> frozenset[ToolName]:
        return frozenset(
            {
                ToolName.ADD_DEPENDENCY,
                ToolName.REMOVE_DEPENDENCY,
                ToolName.READ_CONSOLE_LOGS,
                ToolName.READ_NETWORK_REQUESTS,
            }
        )

    def available_tools(self) -> list[ToolSpec]:
        deps_schema = DependencyArguments.model_json_schema()
        logs_schema = LogQueryArguments.model_json_schema()
        return [
            {
                "name": ToolName.ADD_DEPENDENCY.value,
                "description": (
                    "Add one or more pinned dependencies (e.g., react@18.3.1). "
                    "Blocked when dependency management is disabled."
                ),
                "parameters": deps_schema,
            },
            {
                "name": ToolName.REMOVE_DEPENDENCY.value,
                "description": (
                    "Remove one or more dependencies by name. "
                    "Blocked when dependency management is disabled."
                ),
                "parameters": deps_schema,
            },
            {
                "name": ToolName.READ_CONSOLE_LOGS.value,
                "description": "Read the latest console logs, optionally filtered.",
                "parameters": logs_schema,
            },
            {
                "name": ToolName.READ_NETWORK_REQUESTS.value,
                "description": "Read the latest network requests, optionally filtered.",
                "parameters": logs_schema,
            },
        ]

    def dispatch(self, name: ToolName, arguments: dict[str, Any]) -> str:
        self._logger.info(f"Executing {name.value} tool")
        if name in (ToolName.READ_CONSOLE_LOGS, ToolName.READ_NETWORK_REQUESTS):
            # No browser is attached to the engine, so there is never anything to report.
            return dump([])

        if not self._deps_enabled:
            return dump({"status": "not_enabled", "tool": name.value})
        try:
            args = DependencyArguments.model_validate(arguments)
            if name is ToolName.ADD_DEPENDENCY:
                return dump(self._dependency_uc.add(args.packages, dev=args.dev))
            return dump(self._dependency_uc.remove(args.packages, dev=args.dev))
        except ValidationError as e:
            return dump({"status": "error", "note": validation_note(e)})
        except WorkspaceError as e:
            return dump({"status": "error", "note": e.note})
        except Exception as e:
            self._logger.error(f"Unexpected error in {name.value}: {e}")
            return dump({"status": "error", "note": f"Internal error: {e}"})

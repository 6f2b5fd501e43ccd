"""
File tools (view, search, line-replace, write, rename, delete) mapped to the Files use cases.
"""

import json
import logging
from typing import Any, Callable, Optional

from pydantic import ValidationError

from workspace_engine.exceptions import WorkspaceError
from workspace_engine.ports.llm.tools_port import ToolName, ToolsHandlerPort, ToolSpec
from workspace_engine.use_cases.files.delete_file import DeleteFileUseCase
from workspace_engine.use_cases.files.line_replace import LineReplaceUseCase
from workspace_engine.use_cases.files.rename_file import RenameFileUseCase
from workspace_engine.use_cases.files.search_files import SearchFilesUseCase
from workspace_engine.use_cases.files.view_file import ViewFileUseCase
from workspace_engine.use_cases.files.write_file import WriteFileUseCase
from workspace_engine.use_cases.tools.schemas import (
    DeleteArguments,
    LineReplaceArguments,
    RenameArguments,
    SearchArguments,
    ToolArguments,
    ViewArguments,
    WriteArguments,
)
from workspace_engine.utils.workspace import normalize_workspace_rel


def dump(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False)


def validation_note(error: ValidationError) -> str:
    """Compact, agent-readable summary of a pydantic validation error."""
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "Invalid arguments: " + "; ".join(parts)


class FilesToolsHandler(ToolsHandlerPort):
    """Handler for file-related tools that can be called by an LLM."""

    _DESCRIPTIONS: dict[ToolName, str] = {
        ToolName.VIEW: (
            "Read the contents of a file relative to the project root. Optionally pass line "
            "ranges (e.g. '1-800, 1001-1500'); by default the first 500 lines are returned."
        ),
        ToolName.SEARCH: (
            "Regex-based code search. include_pattern/exclude_pattern are globs (e.g. 'src/**'). "
            "At most 3 matching lines are reported per file. Escape regex metacharacters "
            "for literal search."
        ),
        ToolName.LINE_REPLACE: (
            "Preferred tool for editing existing files. Replace lines first_replaced_line.."
            "last_replaced_line after validating that search matches them exactly. For long "
            "sections put '...' on its own line between the first and last few lines. When "
            "making several edits to one file, always use the original line numbers."
        ),
        ToolName.WRITE: (
            "Create a file or overwrite it. Content is limited to 200KB and overwrites may "
            "change at most 400 lines; use line-replace for larger edits."
        ),
        ToolName.RENAME: (
            "Rename a file within its directory. Pass confirm:true to overwrite an existing "
            "target (a backup is kept)."
        ),
        ToolName.DELETE: (
            "Request deletion of a file. The first call reports the size; re-run with "
            "confirm:true to request the deletion."
        ),
    }

    _ARGUMENTS: dict[ToolName, type[ToolArguments]] = {
        ToolName.VIEW: ViewArguments,
        ToolName.SEARCH: SearchArguments,
        ToolName.LINE_REPLACE: LineReplaceArguments,
        ToolName.WRITE: WriteArguments,
        ToolName.RENAME: RenameArguments,
        ToolName.DELETE: DeleteArguments,
    }

    def __init__(
        self,
        view_uc: ViewFileUseCase,
        search_uc: SearchFilesUseCase,
        line_replace_uc: LineReplaceUseCase,
        write_uc: WriteFileUseCase,
        rename_uc: RenameFileUseCase,
        delete_uc: DeleteFileUseCase,
        delete_enabled: bool = True,
        workspace_prefix: str = "workspace",
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the files tools handler.

        Args:
            view_uc: Use case for reading files
            search_uc: Use case for searching file contents
            line_replace_uc: Use case for verified line edits
            write_uc: Use case for whole-file writes
            rename_uc: Use case for renames
            delete_uc: Use case for the delete confirmation flow
            delete_enabled: When False, delete answers 'not_enabled'
            workspace_prefix: Redundant path prefix echoed paths are stripped of
            logger: Logger instance to use for logging
        """
        self._view_uc = view_uc
        self._search_uc = search_uc
        self._line_replace_uc = line_replace_uc
        self._write_uc = write_uc
        self._rename_uc = rename_uc
        self._delete_uc = delete_uc
        self._delete_enabled = delete_enabled
        self._workspace_prefix = workspace_prefix
        self._logger = logger or logging.getLogger(__name__)
        self._handlers: dict[ToolName, Callable[[Any], str]] = {
            ToolName.VIEW: self._handle_view,
            ToolName.SEARCH: self._handle_search,
            ToolName.LINE_REPLACE: self._handle_line_replace,
            ToolName.WRITE: self._handle_write,
            ToolName.RENAME: self._handle_rename,
            ToolName.DELETE: self._handle_delete,
        }

    def handled_tools(self) -> frozenset[ToolName]:
        return frozenset(self._handlers)

    def available_tools(self) -> list[ToolSpec]:
        """
        Get a list of available file tools.

        Returns:
            List of tool specifications for file operations
        """
        return [
            {
                "name": name.value,
                "description": self._DESCRIPTIONS[name],
                "parameters": self._ARGUMENTS[name].model_json_schema(),
            }
            for name in self._handlers
        ]

    def dispatch(self, name: ToolName, arguments: dict[str, Any]) -> str:
        """
        Dispatch a tool invocation to the appropriate use case.

        Every failure is converted to a structured result: view and search
        answer {"error", "file"}, mutating tools answer
        {"status": "error", "file", "note"}.

        Args:
            name: Tool variant to invoke
            arguments: Raw JSON arguments

        Returns:
            Result string for the agent
        """
        handler = self._handlers[name]
        self._logger.info(f"Executing {name.value} tool")
        try:
            args = self._ARGUMENTS[name].model_validate(arguments)
            return handler(args)
        except ValidationError as e:
            self._logger.warning(f"{name.value}: {validation_note(e)}")
            return self._error(name, self._fallback_file(arguments), validation_note(e))
        except WorkspaceError as e:
            return self._error(name, e.file or self._fallback_file(arguments), e.note)
        except Exception as e:
            self._logger.error(f"Unexpected error in {name.value}: {e}")
            return self._error(name, self._fallback_file(arguments), f"Internal error: {e}")

    # ------------------------- internal helpers -------------------------
    def _error(self, name: ToolName, file: str, note: str) -> str:
        if name in (ToolName.VIEW, ToolName.SEARCH):
            payload: dict[str, Any] = {"error": note}
            if file:
                payload["file"] = file
            return dump(payload)
        return dump({"status": "error", "file": file, "note": note})

    def _fallback_file(self, arguments: Any) -> str:
        if not isinstance(arguments, dict):
            return ""
        for key in ("new_file_path", "file_path", "original_file_path"):
            value = arguments.get(key)
            if isinstance(value, str) and value:
                return normalize_workspace_rel(value, self._workspace_prefix)
        return ""

    def _handle_view(self, args: ViewArguments) -> str:
        return self._view_uc.execute(args.file_path, args.lines)

    def _handle_search(self, args: SearchArguments) -> str:
        results = self._search_uc.execute(
            args.query,
            args.include_pattern,
            exclude_pattern=args.exclude_pattern or None,
            case_sensitive=args.case_sensitive,
        )
        return dump([r.to_dict() for r in results])

    def _handle_line_replace(self, args: LineReplaceArguments) -> str:
        result = self._line_replace_uc.execute(
            args.file_path,
            args.search,
            args.first_replaced_line,
            args.last_replaced_line,
            args.replace,
        )
        return dump(result.to_dict())

    def _handle_write(self, args: WriteArguments) -> str:
        return dump(self._write_uc.execute(args.file_path, args.content).to_dict())

    def _handle_rename(self, args: RenameArguments) -> str:
        result = self._rename_uc.execute(
            args.original_file_path, args.new_file_path, confirm=args.confirm
        )
        return dump(result.to_dict())

    def _handle_delete(self, args: DeleteArguments) -> str:
        if not self._delete_enabled:
            return dump({"status": "not_enabled", "tool": ToolName.DELETE.value})
        return dump(self._delete_uc.execute(args.file_path, confirm=args.confirm).to_dict())

"""
Pydantic models for tool arguments.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ToolArguments(BaseModel):
    """Base for tool argument models; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class ViewArguments(ToolArguments):
    file_path: str = Field(..., description="Path relative to the project root, e.g. 'src/App.tsx'")
    lines: Optional[str] = Field(
        None, description="Optional line ranges, e.g. '1-800, 1001-1500'"
    )


class SearchArguments(ToolArguments):
    query: str = Field(..., description="Regex pattern to find, e.g. 'useEffect\\('")
    include_pattern: str = Field(..., description="Files to include (glob), e.g. 'src/**'")
    exclude_pattern: Optional[str] = Field(
        None, description="Files to exclude (glob), e.g. '**/*.test.tsx'"
    )
    case_sensitive: bool = Field(False, description="Whether to match case")


class LineReplaceArguments(ToolArguments):
    file_path: str = Field(..., description="Path of the file to modify")
    search: str = Field(
        ...,
        description=(
            "Content currently at the line range (without line numbers). "
            "Use a '...' line to omit the middle of large sections."
        ),
    )
    first_replaced_line: int = Field(..., description="First line number to replace (1-indexed)")
    last_replaced_line: int = Field(..., description="Last line number to replace (1-indexed)")
    replace: str = Field(..., description="New content for the range (without line numbers)")


class WriteArguments(ToolArguments):
    file_path: str = Field(..., description="Path relative to the project root")
    content: str = Field(..., description="Full file content")


class RenameArguments(ToolArguments):
    original_file_path: str = Field(..., description="Current path of the file")
    new_file_path: str = Field(..., description="New path, in the same directory")
    confirm: bool = Field(False, description="Overwrite an existing target (backup is kept)")


class DeleteArguments(ToolArguments):
    file_path: str = Field(..., description="Path of the file to delete")
    confirm: bool = Field(False, description="Confirm after the dry run")


class DependencyArguments(ToolArguments):
    packages: List[str] = Field(..., description="Package specs, e.g. ['react@18.3.1']")
    dev: bool = Field(False, description="Development dependency")
    workspace: Optional[str] = Field(None, description="Target workspace")


class LogQueryArguments(ToolArguments):
    search: Optional[str] = Field(None, description="Optional filter")

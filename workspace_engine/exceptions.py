"""
Custom exceptions for the workspace engine.
"""


class BaseAppError(Exception):
    """Base exception class for application errors."""

    pass


class ConfigurationError(BaseAppError):
    """Exception raised for configuration errors."""

    pass


class WorkspaceError(BaseAppError):
    """
    Base class for every failure of a workspace tool operation.

    The message is reported to the calling agent as the result ``note`` and
    ``file`` carries the workspace-relative path the operation was about.
    """

    def __init__(self, message: str, file: str = ""):
        super().__init__(message)
        self.file = file

    @property
    def note(self) -> str:
        return str(self)


class TraversalError(WorkspaceError):
    """Path contains '..' or resolves outside the workspace root."""

    pass


class ForbiddenPathError(WorkspaceError):
    """Path targets a reserved directory or file inside the workspace."""

    pass


class NotFoundError(WorkspaceError):
    """Target file does not exist."""

    pass


class RangeFormatError(WorkspaceError):
    """Line range expression or line numbers are invalid."""

    pass


class MalformedTemplateError(WorkspaceError):
    """Search template has an ambiguous ellipsis marker."""

    pass


class ContentMismatchError(WorkspaceError):
    """Search template does not match the addressed lines."""

    pass


class SizeLimitError(WorkspaceError):
    """Write exceeds the size or changed-lines ceiling."""

    pass


class ConflictError(WorkspaceError):
    """Rename destination exists and overwrite was not confirmed."""

    pass


class CrossDirectoryError(WorkspaceError):
    """Rename would move the file to another directory."""

    pass


class InvalidArgumentsError(WorkspaceError):
    """Tool arguments are missing or malformed."""

    pass


class FileRepositoryError(WorkspaceError):
    """Exception raised for unexpected file repository errors."""

    pass

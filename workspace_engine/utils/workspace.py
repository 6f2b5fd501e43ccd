"""Workspace root utilities to constrain file access.

Every caller-supplied path is normalized to a workspace-relative form, joined
onto the injected root and checked against it before any file is touched.
"""

from __future__ import annotations

import os
import re
from typing import Optional, Tuple

from workspace_engine.exceptions import ForbiddenPathError, TraversalError

_LEADING_SEPARATORS = re.compile(r"^[\\/]+")

FORBIDDEN_DIRS = ("node_modules", ".git")
ENV_FILE_MARKER = ".env"


def normalize_workspace_rel(path: str, prefix: str = "workspace") -> str:
    """Strip leading separators and a redundant '<prefix>/' from a caller path."""
    rel = _LEADING_SEPARATORS.sub("", str(path)).replace("\\", "/")
    if prefix and rel.lower().startswith(prefix.lower() + "/"):
        rel = rel[len(prefix) + 1 :]
    return rel


def is_path_inside(child: str, parent: str) -> bool:
    """Separator-terminated prefix check on normalized absolute paths."""
    resolved_child = os.path.normpath(os.path.abspath(child)) + os.sep
    resolved_parent = os.path.normpath(os.path.abspath(parent)) + os.sep
    return resolved_child.startswith(resolved_parent)


def safe_join(root: str, *segments: str) -> str:
    """Join segments onto root, refusing traversal and escapes."""
    for seg in segments:
        if ".." in seg:
            raise TraversalError("Path traversal blocked", file=seg)
    joined = os.path.normpath(os.path.join(root, *segments))
    if not is_path_inside(joined, root):
        raise TraversalError("Path escapes workspace", file="/".join(segments))
    return joined


def forbidden_reason(root: str, abs_path: str) -> Optional[str]:
    """Return why a path inside the workspace is off-limits, or None."""
    rel = os.path.relpath(abs_path, root)
    if rel == ".." or rel.startswith(".." + os.sep):
        return "Path escapes workspace"
    parts = rel.split(os.sep)
    for name in FORBIDDEN_DIRS:
        if name in parts:
            return f"Operation not allowed in {name}"
    if os.path.basename(abs_path).startswith(ENV_FILE_MARKER):
        return "Operation not allowed on .env files"
    return None


class WorkspaceGuard:
    """Path Guard bound to one workspace root."""

    def __init__(self, root: str, prefix: str = "workspace"):
        self.root = os.path.normpath(os.path.abspath(root))
        self.prefix = prefix

    def normalize(self, path: str) -> str:
        return normalize_workspace_rel(path, self.prefix)

    def resolve(self, path: str) -> Tuple[str, str]:
        """
        Resolve a caller path.

        Returns:
            (workspace-relative path, absolute path)

        Raises:
            TraversalError: If the path contains '..' or escapes the root
        """
        rel = self.normalize(path)
        try:
            abs_path = safe_join(self.root, rel)
        except TraversalError as e:
            raise TraversalError(str(e), file=rel)
        return self.relative(abs_path), abs_path

    def classify(self, abs_path: str) -> Optional[str]:
        return forbidden_reason(self.root, abs_path)

    def ensure_allowed(self, abs_path: str, rel: str = "") -> None:
        reason = self.classify(abs_path)
        if reason:
            raise ForbiddenPathError(reason, file=rel or self.relative(abs_path))

    def resolve_allowed(self, path: str) -> Tuple[str, str]:
        """Resolve a caller path and reject forbidden targets."""
        rel, abs_path = self.resolve(path)
        self.ensure_allowed(abs_path, rel)
        return rel, abs_path

    def relative(self, abs_path: str) -> str:
        """Workspace-relative form of an absolute path, with forward slashes."""
        return os.path.relpath(abs_path, self.root).replace(os.sep, "/")

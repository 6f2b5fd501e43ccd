"""
Value objects returned by the workspace use cases.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class BackupResult:
    """Outcome of a best-effort backup. A failed backup never aborts an edit."""

    source: str
    backup_path: str
    created: bool
    error: Optional[str] = None


@dataclass
class SearchMatch:
    line: int
    preview: str


@dataclass
class FileMatches:
    file_path: str
    matches: list[SearchMatch] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ReplaceResult:
    file: str
    start: int
    end: int
    lines_total: int
    backup: Optional[BackupResult] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "ok",
            "file": self.file,
            "start": self.start,
            "end": self.end,
            "lines_total": self.lines_total,
            "backup": bool(self.backup and self.backup.created),
        }


@dataclass
class WriteResult:
    file: str
    created: bool
    changed_lines: int = 0
    backup: Optional[BackupResult] = None

    @property
    def note(self) -> str:
        return "File created" if self.created else "Overwritten with small changes"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "ok",
            "file": self.file,
            "note": self.note,
            "changed_lines": self.changed_lines,
            "backup": bool(self.backup and self.backup.created),
        }


@dataclass
class RenameResult:
    source: str
    file: str
    replaced_existing: bool = False
    backup: Optional[BackupResult] = None

    def to_dict(self) -> dict[str, Any]:
        note = "Renamed"
        if self.replaced_existing and self.backup and self.backup.created:
            note = "Renamed (target backup created)"
        elif self.replaced_existing:
            note = "Renamed (target overwritten, backup failed)"
        return {"status": "ok", "file": self.file, "from": self.source, "note": note}


@dataclass
class DeleteResult:
    file: str
    size: int
    confirmed: bool

    def to_dict(self) -> dict[str, Any]:
        if not self.confirmed:
            return {
                "status": "confirm_required",
                "file": self.file,
                "size": self.size,
                "note": f"About to delete {self.size} bytes. Re-run with confirm:true to proceed.",
            }
        return {
            "status": "ok",
            "file": self.file,
            "size": self.size,
            "deleted": False,
            "note": f"Deletion requested for {self.size} bytes. Confirm in chat to proceed.",
        }

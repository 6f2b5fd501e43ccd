"""
Search template used by line-replace to verify the addressed lines.

A template is either verbatim text, which must equal the addressed block, or
text with a single ``...`` placeholder line splitting it into a literal prefix
and a literal suffix. Nothing between the prefix and the suffix is checked.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from workspace_engine.exceptions import ContentMismatchError, MalformedTemplateError

ELLIPSIS_MARKER = "..."


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n")


@dataclass(frozen=True)
class SearchTemplate:
    """Parsed search template."""

    text: str
    prefix: Optional[str] = None
    suffix: Optional[str] = None

    @property
    def has_ellipsis(self) -> bool:
        return self.prefix is not None

    @classmethod
    def parse(cls, search: str) -> "SearchTemplate":
        """
        Parse a raw search string.

        Raises:
            MalformedTemplateError: If more than one ellipsis line is present
        """
        text = normalize_newlines(search)
        lines = text.split("\n")
        markers = [i for i, line in enumerate(lines) if line.strip() == ELLIPSIS_MARKER]
        if not markers:
            return cls(text=text)
        if len(markers) > 1:
            raise MalformedTemplateError(
                f"Search may contain only one '{ELLIPSIS_MARKER}' line, found {len(markers)}"
            )
        idx = markers[0]
        return cls(
            text=text,
            prefix="\n".join(lines[:idx]),
            suffix="\n".join(lines[idx + 1 :]),
        )

    def matches(self, block: str) -> bool:
        if self.prefix is None or self.suffix is None:
            return block == self.text
        # prefix and suffix may not overlap inside the block
        if len(block) < len(self.prefix) + len(self.suffix):
            return False
        return block.startswith(self.prefix) and block.endswith(self.suffix)

    def verify(self, block: str, file: str = "") -> None:
        """
        Check the template against the addressed block.

        Raises:
            ContentMismatchError: If the block does not match
        """
        if self.matches(block):
            return
        if self.has_ellipsis:
            raise ContentMismatchError("Prefix/suffix do not match target lines", file=file)
        raise ContentMismatchError("Search content mismatch in specified range", file=file)

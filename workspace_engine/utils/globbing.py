"""
Restricted glob syntax for workspace-relative paths.

Supported tokens:
- ``**/``: zero or more leading path segments
- ``**``: any sequence, separators included
- ``*``: any sequence without '/'
- ``?``: a single character other than '/'
"""

from __future__ import annotations

import re
from typing import Callable

_TOKENS: list[tuple[str, str]] = [
    ("**/", "(?:.*/)?"),
    ("**", ".*"),
    ("*", "[^/]*"),
    ("?", "[^/]"),
]


def glob_to_regex(glob: str) -> re.Pattern[str]:
    """Translate a glob into a regex anchored at both ends."""
    parts: list[str] = []
    i = 0
    while i < len(glob):
        for token, replacement in _TOKENS:
            if glob.startswith(token, i):
                parts.append(replacement)
                i += len(token)
                break
        else:
            parts.append(re.escape(glob[i]))
            i += 1
    return re.compile("^" + "".join(parts) + "$")


def compile_glob(glob: str) -> Callable[[str], bool]:
    """Return a predicate telling whether a relative path matches the glob."""
    pattern = glob_to_regex(glob)

    def matcher(relative_path: str) -> bool:
        return pattern.match(relative_path) is not None

    return matcher

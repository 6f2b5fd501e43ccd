"""
Dependency management stubs: package specs are validated, nothing is installed.
"""

import logging
import re
from typing import Any, Optional

from workspace_engine.exceptions import InvalidArgumentsError

_PINNED_VERSION = re.compile(r"^\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.-]+)?$")
_RANGE_CHARS = re.compile(r"[~^><=*xX]")


def is_pinned_version_spec(spec: str) -> bool:
    """Whether spec looks like 'name@1.2.3' (scoped names such as '@scope/pkg@1.0.0' allowed)."""
    if not isinstance(spec, str) or not spec.strip():
        return False
    last_at = spec.rfind("@")
    if last_at <= 0 or last_at == len(spec) - 1:
        return False
    version = spec[last_at + 1 :]
    if _RANGE_CHARS.search(version):
        return False
    return _PINNED_VERSION.match(version) is not None


class DependencyUseCase:
    """Validate add/remove dependency requests without applying them."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)

    def add(self, packages: list[str], dev: bool = False) -> dict[str, Any]:
        """
        Raises:
            InvalidArgumentsError: If the list is empty or a spec is not pinned
        """
        if not packages:
            raise InvalidArgumentsError("packages[] required")
        invalid = [spec for spec in packages if not is_pinned_version_spec(spec)]
        if invalid:
            raise InvalidArgumentsError(
                f"Unpinned or invalid versions: {', '.join(invalid)}"
            )
        self._logger.info(f"Validated dependency specs (dev={dev}): {packages}")
        return {
            "status": "ok",
            "note": "Validated pinned specs only (no changes applied)",
            "audit": "Tip: run `npm audit --omit=dev` after installing.",
            "packages": packages,
        }

    def remove(self, packages: list[str], dev: bool = False) -> dict[str, Any]:
        if not packages:
            raise InvalidArgumentsError("packages[] required")
        self._logger.info(f"Validated dependency removal (dev={dev}): {packages}")
        return {
            "status": "ok",
            "note": "Validated package names only (no changes applied)",
            "audit": "Tip: run `npm audit --omit=dev` after changes.",
            "packages": packages,
        }

"""
Port and types defining LLM tools (function calls), independent of the provider.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TypedDict

LEGACY_PREFIX = "lov-"
INTEGRATION_PREFIXES = ("secrets--", "security--", "stripe--")
DISABLED_TOOLS = ("download-to-repo",)


class ToolName(str, Enum):
    """Closed set of tool operations understood by the engine."""

    VIEW = "view"
    SEARCH = "search"
    LINE_REPLACE = "line-replace"
    WRITE = "write"
    RENAME = "rename"
    DELETE = "delete"
    ADD_DEPENDENCY = "add-dependency"
    REMOVE_DEPENDENCY = "remove-dependency"
    READ_CONSOLE_LOGS = "read-console-logs"
    READ_NETWORK_REQUESTS = "read-network-requests"
    # Integrations and tools that are never enabled in this engine
    INTEGRATION = "integration"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: str) -> "ToolName":
        """
        Map a raw tool name to its variant.

        Accepts plain names ("line-replace") and the legacy prefixed forms
        ("lov-line-replace", "lov-search-files"). Names that match nothing map
        to UNKNOWN rather than raising.
        """
        name = str(raw or "").strip()
        if name.startswith(INTEGRATION_PREFIXES):
            return cls.INTEGRATION
        if name.startswith(LEGACY_PREFIX):
            name = name[len(LEGACY_PREFIX) :]
        if name in DISABLED_TOOLS:
            return cls.INTEGRATION
        name = _ALIASES.get(name, name)
        if name in (cls.INTEGRATION.value, cls.UNKNOWN.value):
            return cls.UNKNOWN
        try:
            return cls(name)
        except ValueError:
            return cls.UNKNOWN


_ALIASES = {"search-files": ToolName.SEARCH.value}


class ToolSpec(TypedDict):
    """Specification for a tool that can be called by an LLM."""

    name: str
    description: str
    parameters: dict[str, object]  # JSON Schema


class ToolsHandlerPort(ABC):
    """
    Port interface for handling LLM tools (function calls).

    This port exposes available tools and dispatches tool invocations to appropriate use cases.
    """

    @abstractmethod
    def handled_tools(self) -> frozenset[ToolName]:
        """Tool variants this handler implements."""
        pass

    @abstractmethod
    def available_tools(self) -> list[ToolSpec]:
        """
        Get a list of available tools.

        Returns:
            List of tool specifications
        """
        pass

    @abstractmethod
    def dispatch(self, name: ToolName, arguments: dict[str, object]) -> str:
        """
        Dispatch a tool invocation to the appropriate use case.

        Args:
            name: Tool variant to invoke (one of handled_tools())
            arguments: Arguments to pass to the tool

        Returns:
            Result string (JSON, or raw text for view) relayed to the agent
        """
        pass

"""
Tests for the project tools and the dependency stubs.
"""

import json

import pytest

from workspace_engine.exceptions import InvalidArgumentsError
from workspace_engine.ports.llm.tools_port import ToolName
from workspace_engine.use_cases.project.dependencies import (
    DependencyUseCase,
    is_pinned_version_spec,
)
from workspace_engine.use_cases.tools.project_tools import ProjectToolsHandler


class TestPinnedVersionSpec:
    """Test cases for is_pinned_version_spec."""

    @pytest.mark.parametrize(
        "spec", ["react@18.3.1", "@types/node@20.11.5", "zod@3.23.8", "pkg@1.0.0-beta.1"]
    )
    def test_pinned(self, spec):
        assert is_pinned_version_spec(spec)

    @pytest.mark.parametrize(
        "spec", ["react", "react@", "@types/node", "react@^18.3.1", "react@~1.2.3", "react@latest", "react@1.x", ""]
    )
    def test_not_pinned(self, spec):
        assert not is_pinned_version_spec(spec)


class TestDependencyUseCase:
    """Test cases for the DependencyUseCase."""

    def test_add_validates_only(self, mock_logger):
        result = DependencyUseCase(mock_logger).add(["react@18.3.1"])

        assert result["status"] == "ok"
        assert result["packages"] == ["react@18.3.1"]
        assert "no changes applied" in result["note"]

    def test_add_requires_packages(self, mock_logger):
        with pytest.raises(InvalidArgumentsError, match=r"packages\[\] required"):
            DependencyUseCase(mock_logger).add([])

    def test_add_rejects_unpinned(self, mock_logger):
        with pytest.raises(InvalidArgumentsError, match="react@latest"):
            DependencyUseCase(mock_logger).add(["zod@3.23.8", "react@latest"])

    def test_remove(self, mock_logger):
        assert DependencyUseCase(mock_logger).remove(["lodash"])["status"] == "ok"


class TestProjectToolsHandler:
    """Test cases for the ProjectToolsHandler."""

    def test_dependency_tools_disabled_by_default(self, tools):
        result = json.loads(tools.dispatch("add-dependency", {"packages": ["react@18.3.1"]}))
        assert result == {"status": "not_enabled", "tool": "add-dependency"}

    def test_log_readers_return_empty_lists(self, tools):
        assert json.loads(tools.dispatch("read-console-logs", {"search": "error"})) == []
        assert json.loads(tools.dispatch("lov-read-network-requests", {})) == []

    def test_enabled_add(self, mock_logger):
        handler = ProjectToolsHandler(
            DependencyUseCase(mock_logger), deps_enabled=True, logger=mock_logger
        )
        result = json.loads(
            handler.dispatch(ToolName.ADD_DEPENDENCY, {"packages": ["react@18.3.1"]})
        )
        assert result["status"] == "ok"

    def test_enabled_add_unpinned(self, mock_logger):
        handler = ProjectToolsHandler(
            DependencyUseCase(mock_logger), deps_enabled=True, logger=mock_logger
        )
        result = json.loads(
            handler.dispatch(ToolName.ADD_DEPENDENCY, {"packages": ["react"]})
        )
        assert result == {"status": "error", "note": "Unpinned or invalid versions: react"}

    def test_enabled_missing_packages(self, mock_logger):
        handler = ProjectToolsHandler(
            DependencyUseCase(mock_logger), deps_enabled=True, logger=mock_logger
        )
        result = json.loads(handler.dispatch(ToolName.REMOVE_DEPENDENCY, {}))
        assert result["status"] == "error"
        assert result["note"].startswith("Invalid arguments: packages")

"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from workspace_engine.config.settings import Settings
from workspace_engine.container import DependencyContainer

FIVE_LINES = "L1\nL2\nL3\nL4\nL5"


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """
    Create a populated workspace directory for testing file operations.

    Returns:
        Path to the workspace root
    """
    root = tmp_path / "workspace"
    (root / "src" / "test").mkdir(parents=True)
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / ".git").mkdir()

    (root / "a.txt").write_text(FIVE_LINES)
    (root / "src" / "Foo.ts").write_text("export const Foo = 1;\n")
    (root / "src" / "test" / "Foo.ts").write_text("import { Foo } from '../Foo';\n")
    (root / "src" / "App.tsx").write_text("function App() {\n  return null;\n}\n")
    (root / ".env").write_text("SECRET_FOO=1\n")
    (root / "node_modules" / "pkg" / "index.js").write_text("module.exports = 'Foo';\n")
    (root / ".git" / "config").write_text("[core] Foo\n")
    return root


@pytest.fixture
def settings(workspace_root: Path) -> Settings:
    return Settings(workspace_root=str(workspace_root), load_env=False)


@pytest.fixture
def mock_logger():
    """
    Create a mock logger for testing.

    Returns:
        Mock logger instance
    """
    return MagicMock()


@pytest.fixture
def dependency_container(settings, mock_logger):
    """
    Create a dependency container bound to the temporary workspace.

    Returns:
        DependencyContainer instance with mocked logger
    """
    return DependencyContainer(settings, logger=mock_logger)


@pytest.fixture
def tools(dependency_container):
    return dependency_container.get_tools_handler()

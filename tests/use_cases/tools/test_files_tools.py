"""
Tests for the tool dispatcher and the file tools handler.
"""

import json
from unittest.mock import MagicMock

import pytest

from workspace_engine.container import CompositeToolsHandler, DependencyContainer
from workspace_engine.ports.llm.tools_port import ToolName


class TestToolName:
    """Test cases for ToolName.parse."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("view", ToolName.VIEW),
            ("lov-view", ToolName.VIEW),
            ("lov-search-files", ToolName.SEARCH),
            ("search-files", ToolName.SEARCH),
            ("lov-line-replace", ToolName.LINE_REPLACE),
            ("rename", ToolName.RENAME),
            ("secrets--add_secret", ToolName.INTEGRATION),
            ("stripe--create_product", ToolName.INTEGRATION),
            ("lov-download-to-repo", ToolName.INTEGRATION),
            ("download-to-repo", ToolName.INTEGRATION),
            ("integration", ToolName.UNKNOWN),
            ("unknown", ToolName.UNKNOWN),
            ("explode", ToolName.UNKNOWN),
            ("", ToolName.UNKNOWN),
        ],
    )
    def test_parse(self, raw, expected):
        assert ToolName.parse(raw) is expected


class TestCompositeToolsHandler:
    """Test cases for the dispatcher."""

    def test_view_returns_raw_text(self, tools):
        assert tools.dispatch("view", {"file_path": "a.txt", "lines": "2-3"}) == "L2\nL3"

    def test_arguments_as_json_text(self, tools):
        assert tools.dispatch("lov-view", '{"file_path": "workspace/a.txt"}') == "L1\nL2\nL3\nL4\nL5"

    def test_invalid_json_arguments(self, tools):
        result = json.loads(tools.dispatch("view", "{not json"))
        assert result["error"].startswith("Invalid JSON arguments")

    def test_non_object_arguments(self, tools):
        result = json.loads(tools.dispatch("view", "[1, 2]"))
        assert result == {"error": "Tool arguments must be a JSON object"}

    def test_unknown_tool(self, tools, mock_logger):
        assert json.loads(tools.dispatch("explode", {})) == {"error": "Unknown tool: explode"}
        mock_logger.warning.assert_called_with("Unknown tool requested: explode")

    def test_integration_tools_are_not_enabled(self, tools):
        result = json.loads(tools.dispatch("security--run_scan", {}))
        assert result == {"status": "not_enabled", "tool": "security--run_scan"}

    def test_download_to_repo_is_not_enabled(self, tools):
        result = json.loads(tools.dispatch("lov-download-to-repo", {"source_url": "https://x"}))
        assert result == {"status": "not_enabled", "tool": "lov-download-to-repo"}

    def test_available_tools(self, tools):
        names = [t["name"] for t in tools.available_tools()]

        assert names[:6] == ["view", "search", "line-replace", "write", "rename", "delete"]
        assert "add-dependency" in names
        assert "read-console-logs" in names
        for spec in tools.available_tools():
            assert spec["description"]
            assert spec["parameters"]["type"] == "object"

    def test_duplicate_routes_are_rejected(self):
        handler = MagicMock()
        handler.handled_tools.return_value = frozenset({ToolName.VIEW})

        with pytest.raises(ValueError, match="handled twice"):
            CompositeToolsHandler(handler, handler)


class TestFilesToolsHandler:
    """Test cases for the file tool envelopes."""

    def test_search_payload(self, tools):
        result = json.loads(
            tools.dispatch(
                "search",
                {"query": "Foo", "include_pattern": "src/**", "exclude_pattern": "src/test/**"},
            )
        )
        assert result == [
            {"file_path": "src/Foo.ts", "matches": [{"line": 1, "preview": "export const Foo = 1;"}]}
        ]

    def test_view_error_envelope(self, tools):
        result = json.loads(tools.dispatch("view", {"file_path": "workspace/missing.ts"}))

        assert result["file"] == "missing.ts"
        assert "File not found" in result["error"]
        assert "status" not in result

    def test_search_invalid_regex_envelope(self, tools):
        result = json.loads(tools.dispatch("search", {"query": "(", "include_pattern": "**"}))
        assert "Invalid regular expression" in result["error"]

    def test_line_replace_ok(self, tools, workspace_root):
        result = json.loads(
            tools.dispatch(
                "line-replace",
                {
                    "file_path": "a.txt",
                    "search": "L2\nL3",
                    "first_replaced_line": 2,
                    "last_replaced_line": 3,
                    "replace": "X",
                },
            )
        )

        assert result == {
            "status": "ok",
            "file": "a.txt",
            "start": 2,
            "end": 2,
            "lines_total": 4,
            "backup": True,
        }
        assert (workspace_root / "a.txt").read_text() == "L1\nX\nL4\nL5"

    def test_line_replace_mismatch_envelope(self, tools, workspace_root):
        result = json.loads(
            tools.dispatch(
                "line-replace",
                {
                    "file_path": "a.txt",
                    "search": "WRONG",
                    "first_replaced_line": 2,
                    "last_replaced_line": 3,
                    "replace": "X",
                },
            )
        )

        assert result["status"] == "error"
        assert result["file"] == "a.txt"
        assert "mismatch" in result["note"]

    def test_missing_argument_is_a_validation_error(self, tools):
        result = json.loads(tools.dispatch("write", {"file_path": "workspace/new.txt"}))

        assert result["status"] == "error"
        assert result["file"] == "new.txt"
        assert result["note"].startswith("Invalid arguments: content")

    def test_extra_arguments_are_ignored(self, tools):
        result = json.loads(
            tools.dispatch("write", {"file_path": "new.txt", "content": "x", "mode": "fast"})
        )
        assert result["status"] == "ok"
        assert result["note"] == "File created"

    def test_write_size_limit_envelope(self, tools, workspace_root):
        result = json.loads(
            tools.dispatch("write", {"file_path": "a.txt", "content": "x" * (500 * 1024)})
        )

        assert result["status"] == "error"
        assert "200KB" in result["note"]
        assert (workspace_root / "a.txt").read_text() == "L1\nL2\nL3\nL4\nL5"

    def test_rename_envelopes(self, tools, workspace_root):
        blocked = json.loads(
            tools.dispatch(
                "rename",
                {"original_file_path": "a.txt", "new_file_path": "src/a.txt", "confirm": True},
            )
        )
        assert blocked == {
            "status": "error",
            "file": "a.txt",
            "note": "Cross-directory renames are blocked",
        }

        ok = json.loads(
            tools.dispatch("rename", {"original_file_path": "a.txt", "new_file_path": "b.txt"})
        )
        assert ok == {"status": "ok", "file": "b.txt", "from": "a.txt", "note": "Renamed"}

    def test_delete_two_phase(self, tools, workspace_root):
        first = json.loads(tools.dispatch("delete", {"file_path": "a.txt"}))
        second = json.loads(tools.dispatch("delete", {"file_path": "a.txt", "confirm": True}))

        assert first["status"] == "confirm_required"
        assert second["status"] == "ok"
        assert second["deleted"] is False
        assert (workspace_root / "a.txt").exists()

    def test_delete_disabled(self, settings, mock_logger, workspace_root):
        settings.delete_enabled = False
        tools = DependencyContainer(settings, logger=mock_logger).get_tools_handler()

        result = json.loads(tools.dispatch("delete", {"file_path": "a.txt", "confirm": True}))

        assert result == {"status": "not_enabled", "tool": "delete"}
        assert (workspace_root / "a.txt").exists()

    def test_forbidden_write_envelope(self, tools, workspace_root):
        result = json.loads(tools.dispatch("write", {"file_path": ".env", "content": "A=1"}))

        assert result["status"] == "error"
        assert result["file"] == ".env"
        assert (workspace_root / ".env").read_text() == "SECRET_FOO=1\n"

    def test_lone_surrogate_content_is_an_error_envelope(self, tools, workspace_root):
        result = json.loads(tools.dispatch("write", '{"file_path": "s.txt", "content": "\\ud800"}'))

        assert result["status"] == "error"
        assert result["file"] == "s.txt"
        assert "not valid UTF-8" in result["note"]
        assert not (workspace_root / "s.txt").exists()

    def test_lone_surrogate_replacement_leaves_no_temp_files(self, tools, workspace_root):
        before = sorted(p.name for p in workspace_root.iterdir())

        result = json.loads(
            tools.dispatch(
                "line-replace",
                '{"file_path": "a.txt", "search": "L1", "first_replaced_line": 1,'
                ' "last_replaced_line": 1, "replace": "\\ud800"}',
            )
        )

        assert result["status"] == "error"
        assert (workspace_root / "a.txt").read_text() == "L1\nL2\nL3\nL4\nL5"
        leftovers = [p.name for p in workspace_root.iterdir() if p.name.endswith(".tmp")]
        assert leftovers == []
        assert set(before) <= {p.name for p in workspace_root.iterdir()}

    def test_unexpected_errors_become_envelopes(self, tools, dependency_container, mock_logger):
        dependency_container.get_view_file_use_case().execute = MagicMock(
            side_effect=RuntimeError("boom")
        )

        result = json.loads(tools.dispatch("view", {"file_path": "a.txt"}))

        assert result == {"error": "Internal error: boom", "file": "a.txt"}
        mock_logger.error.assert_called_once()

    def test_rename_with_dot_segments(self, tools, workspace_root):
        result = json.loads(
            tools.dispatch("rename", {"original_file_path": "./a.txt", "new_file_path": "b.txt"})
        )

        assert result == {"status": "ok", "file": "b.txt", "from": "a.txt", "note": "Renamed"}
        assert (workspace_root / "b.txt").exists()

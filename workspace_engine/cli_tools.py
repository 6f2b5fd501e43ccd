import argparse
import json
import logging
import sys

from workspace_engine.config.settings import Settings
from workspace_engine.container import DependencyContainer
from workspace_engine.exceptions import ConfigurationError


def _print_json(text: str, pretty: bool) -> None:
    if not pretty:
        print(text)
        return
    try:
        obj = json.loads(text)
    except ValueError:
        obj = None
    from rich import box
    from rich.console import Console
    from rich.panel import Panel
    from rich.syntax import Syntax

    console = Console(soft_wrap=True)
    if obj is None:
        # view returns raw file text
        console.print(Panel(text, title="result", box=box.ROUNDED, border_style="magenta"))
        return
    console.print(
        Panel(
            Syntax(json.dumps(obj, ensure_ascii=False, indent=2), "json"),
            title="result",
            box=box.ROUNDED,
            border_style="magenta",
            expand=True,
        )
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="engine-tools",
        description="Run one workspace tool call and print its result.",
    )
    parser.add_argument(
        "tool",
        nargs="?",
        help="Tool name (view, search, line-replace, write, rename, delete, ...)",
    )
    parser.add_argument(
        "--args",
        dest="arguments",
        default="{}",
        help="Tool arguments as a JSON object (use '-' to read them from stdin)",
    )
    parser.add_argument(
        "--root", default=None, help="Workspace root (default: ENGINE_WORKSPACE_ROOT)"
    )
    parser.add_argument(
        "--log-level", default=None, help="Logging level (default: ENGINE_LOG_LEVEL)"
    )
    parser.add_argument(
        "--list-tools", action="store_true", help="Print the tool specifications"
    )
    parser.add_argument(
        "--health", action="store_true", help="Print the active configuration"
    )
    parser.add_argument(
        "--pretty", action="store_true", help="Pretty print JSON output with colors"
    )

    args = parser.parse_args(argv)

    try:
        settings = Settings(workspace_root=args.root, log_level=args.log_level)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    container = DependencyContainer(settings, logger=logging.getLogger("workspace_engine"))
    tools = container.get_tools_handler()

    if args.health:
        _print_json(json.dumps(settings.describe(), ensure_ascii=False), args.pretty)
        return 0
    if args.list_tools:
        _print_json(json.dumps(tools.available_tools(), ensure_ascii=False), args.pretty)
        return 0
    if not args.tool:
        parser.error("a tool name is required unless --list-tools or --health is given")

    raw = sys.stdin.read() if args.arguments == "-" else args.arguments
    _print_json(tools.dispatch(args.tool, raw), args.pretty)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

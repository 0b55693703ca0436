"""
Command-line entry point.

Lists and runs the registered vignettes, rendering each DemoReport as a rich
panel and every failure through the diagnostic payload helpers.
"""

import argparse
import sys
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from .config_loader import load_config_bundle
from .demos import DemoReport, available_demos, demo_registry, run_demo
from .errors import PatternCraftError, error_from_exception, error_lines
from .logging_config import audit_log, generate_session_id, set_session_id, setup_logging

PATTERNCRAFT_THEME = Theme(
    {
        "header": "bold blue",
        "section": "bold cyan",
        "error": "bold red",
        "hint": "dim yellow",
        "dim": "dim white",
        "value": "bold white",
    }
)


class ReportRenderer:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(theme=PATTERNCRAFT_THEME)

    def render_report(self, report: DemoReport) -> None:
        body = Text()
        for index, line in enumerate(report.lines):
            if index:
                body.append("\n")
            if line.startswith("## "):
                body.append(line[3:], style="section")
            else:
                body.append(line)
        self.console.print(
            Panel(
                body,
                title=f"[header]{report.title}[/header]",
                title_align="left",
                border_style="blue",
                box=box.ROUNDED,
            )
        )

    def render_error(self, name: str, payload: dict) -> None:
        body = Text()
        for index, line in enumerate(error_lines(payload)):
            if index:
                body.append("\n")
            body.append(line, style="hint" if line.startswith("Hint:") else "error")
        self.console.print(
            Panel(
                body,
                title=f"[error]{escape(name)} failed[/error]",
                border_style="red",
                box=box.ROUNDED,
            )
        )

    def render_catalog(self, names: list[str]) -> None:
        table = Table(title="Available demos", box=box.SIMPLE_HEAVY)
        table.add_column("Name", style="value")
        table.add_column("Description", style="dim")
        for name in names:
            func = demo_registry.resolve(name)
            doc = (func.__doc__ or "").strip().splitlines()
            table.add_row(name, doc[0] if doc else func.__name__.replace("_", " "))
        self.console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="patterncraft", description="Run design pattern and principle vignettes."
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Console log level (default: WARNING)"
    )
    parser.add_argument("--log-dir", default=None, help="Directory for log files")
    parser.add_argument("--json-logs", action="store_true", help="Write the app log as JSON")
    parser.add_argument("--config-dir", default=None, help="Directory holding runtime_config.json")
    parser.add_argument(
        "--strict-config", action="store_true", help="Fail on missing or malformed config"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list", help="List available demos")
    run = subparsers.add_parser("run", help="Run one or more demos")
    run.add_argument("demos", nargs="*", help="Demo names (see `list`)")
    run.add_argument("--all", action="store_true", help="Run every demo")
    return parser


def main(argv: Optional[list[str]] = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(console_level=args.log_level, json_format=args.json_logs, log_dir=args.log_dir)
    set_session_id(generate_session_id())
    renderer = ReportRenderer(console)

    if args.command == "list":
        renderer.render_catalog(available_demos())
        return 0

    names = available_demos() if args.all else args.demos
    if not names:
        parser.error("run: name at least one demo or pass --all")

    unknown = [name for name in names if name.lower() not in demo_registry]
    if unknown:
        renderer.render_error(
            "run",
            error_from_exception(
                LookupError(f"Unknown demo(s): {', '.join(unknown)}"),
                hint=f"Available: {', '.join(available_demos())}",
            ),
        )
        return 2

    try:
        config = load_config_bundle(config_dir=args.config_dir, strict=args.strict_config or None)
    except (FileNotFoundError, ValueError) as exc:
        renderer.render_error("config", error_from_exception(exc, hint="Check --config-dir"))
        return 1

    exit_code = 0
    for name in names:
        try:
            report = run_demo(name, config)
        except PatternCraftError as exc:
            renderer.render_error(name, error_from_exception(exc))
            audit_log("Demo failed", demo=name, error=type(exc).__name__)
            exit_code = 1
            continue
        renderer.render_report(report)
        audit_log("Demo completed", demo=name, lines=len(report.lines))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())

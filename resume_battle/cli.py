"""CLI - Command line interface for Resume Battle."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import Severity, has_errors, load_config, load_raw_config, validate_config
from .domain import compare_documents, parse_document
from .observability import BattleObserver, configure_logging
from .providers import create_provider
from .roast import RoastClient, RoastError
from .tools import ResumeBattleTool, ResumeScoreTool

console = Console()
err_console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-battle",
        description="Resume Battle - score two resumes and decide which one wins",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to configuration file (default: config/config.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log pipeline steps",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    score = sub.add_parser("score", help="Score a single resume")
    score.add_argument("path", help="Resume file (.pdf, .docx, .md, .txt)")
    score.add_argument("--json", action="store_true", help="Print machine-readable JSON")

    compare = sub.add_parser("compare", help="Battle two resumes")
    compare.add_argument("first", help="First resume file")
    compare.add_argument("second", help="Second resume file")
    compare.add_argument(
        "--names",
        nargs=2,
        metavar=("FIRST", "SECOND"),
        default=["Player 1", "Player 2"],
        help="Display names for the two resumes",
    )
    compare.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    compare.add_argument("--roast", action="store_true", help="Ask the configured model for a roast")
    compare.add_argument("--brutal", action="store_true", help="Use the savage roast tone")

    serve = sub.add_parser("serve", help="Run the web API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_comparison(comparison: Dict[str, Any], first_name: str, second_name: str) -> Table:
    names = {"first": first_name, "second": second_name}
    table = Table(title="Category Breakdown")
    table.add_column("Metric", style="bold")
    table.add_column(first_name, justify="right")
    table.add_column(second_name, justify="right")
    table.add_column("Winner")
    table.add_column("Why", style="dim")

    for row in comparison["breakdown"]:
        first_style = "bold yellow" if row["winner"] == "first" else ""
        second_style = "bold yellow" if row["winner"] == "second" else ""
        table.add_row(
            row["metric"],
            f"[{first_style}]{row['value_first']}[/]" if first_style else str(row["value_first"]),
            f"[{second_style}]{row['value_second']}[/]" if second_style else str(row["value_second"]),
            names[row["winner"]],
            row["reason"],
        )
    return table


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def run_score(args: argparse.Namespace) -> int:
    tool = ResumeScoreTool(workspace_dir=".", observer=BattleObserver())
    result = await tool.execute(path=args.path)
    if not result.success:
        console.print(f"Error: {result.error}", style="red")
        return 1

    if args.json:
        print(json.dumps(result.data, indent=2))
    else:
        console.print(Markdown(result.output))
    return 0


async def run_compare(args: argparse.Namespace) -> int:
    first_name, second_name = args.names
    observer = BattleObserver()
    tool = ResumeBattleTool(workspace_dir=".", observer=observer)
    result = await tool.execute(
        first_path=args.first,
        second_path=args.second,
        first_name=first_name,
        second_name=second_name,
    )
    if not result.success:
        console.print(f"Error: {result.error}", style="red")
        return 1

    comparison = result.data["comparison"]
    output: Dict[str, Any] = {"first_name": first_name, "second_name": second_name, **comparison}

    roast_data: Optional[Dict[str, str]] = None
    if args.roast:
        roast_data = await _roast(args, result.data["first"]["text"], result.data["second"]["text"], observer)
        if roast_data is None:
            return 1
        output["roast"] = roast_data

    if args.json:
        print(json.dumps(output, indent=2))
        return 0

    winner_name = first_name if comparison["winner"] == "first" else second_name
    console.print(Panel(f"Winner: {winner_name}", style="bold green"))
    console.print(render_comparison(comparison, first_name, second_name))
    console.print(
        f"ATS {comparison['scores_first']['ats']} vs {comparison['scores_second']['ats']}  |  "
        f"Total {comparison['scores_first']['total']} vs {comparison['scores_second']['total']}",
        style="dim",
    )
    if roast_data:
        console.print(Panel(roast_data["roast"], title="Roast", style="red"))
        console.print(Panel(roast_data["advice"], title="Advice", style="cyan"))
    return 0


async def _roast(
    args: argparse.Namespace,
    first_text: str,
    second_text: str,
    observer: BattleObserver,
) -> Optional[Dict[str, str]]:
    config = load_config(args.config)
    if not config.roast_enabled:
        console.print(f"Roast disabled: no API key for provider {config.provider}", style="yellow")
        return None

    client = RoastClient(create_provider(config), config=config)
    # the tool result only carries JSON-ready data
    comparison = compare_documents(parse_document(first_text), parse_document(second_text))
    first_name, second_name = args.names
    try:
        with observer.track("roast", brutal=args.brutal) as event:
            roast = await client.roast(
                first_text,
                second_text,
                comparison,
                first_name=first_name,
                second_name=second_name,
                brutal=args.brutal,
            )
            event["winner"] = roast.winner
    except RoastError as e:
        console.print(f"Error: {e}", style="red")
        return None
    return roast.to_dict()


def check_config(config_path: Optional[str], show_warnings: bool = True) -> bool:
    """Validate the raw config file and print its issues to stderr.

    Returns False when the config has errors and the command must not run.
    """
    try:
        raw_config = load_raw_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        err_console.print(f"Error: cannot read config: {e}", style="red")
        return False

    issues = validate_config(raw_config)
    for issue in issues:
        if issue.severity == Severity.WARNING and not show_warnings:
            continue
        style = "red" if issue.severity == Severity.ERROR else "yellow"
        err_console.print(f"  [{issue.field}] {issue.message}", style=style, markup=False)

    if has_errors(issues):
        err_console.print("Fix the config errors above, then try again.", style="dim")
        return False
    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    # a missing API key only matters to commands that talk to the model
    needs_provider = args.command == "serve" or getattr(args, "roast", False)
    if not check_config(args.config, show_warnings=needs_provider or args.verbose):
        return 1

    if args.command == "serve":
        from .web.app import main as serve

        serve(host=args.host, port=args.port, config_path=args.config)
        return 0

    try:
        if args.command == "score":
            return asyncio.run(run_score(args))
        return asyncio.run(run_compare(args))
    except (FileNotFoundError, ValueError) as e:
        console.print(f"Error: {e}", style="red")
        return 1


if __name__ == "__main__":
    sys.exit(main())

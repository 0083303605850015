"""
Command-line interface for tire lifecycle analytics.

Usage:
    python -m tirelife make-example [--output example_roster.json]
    python -m tirelife analyze --input roster.json [--output reports.json] [--readable]
    python -m tirelife summary --input roster.json [--date 2024-06-30] [--readable]
    python -m tirelife reassign --input roster.json --moves moves.json [--commit-to saved.json]
    python -m tirelife layout --tires 10 [--vehicle-type camion_3_ejes]
    python -m tirelife serve [--port 8000]
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from tirelife import __version__
from tirelife.analytics.units import Preferences, normalize_tire
from tirelife.classify.classifier import ConditionClassifier
from tirelife.config import Settings, get_settings
from tirelife.errors import TireLifeError
from tirelife.export.changeset import JsonFilePositionStore, change_set_document, commit_with
from tirelife.fleet.summary import analyze_tires, summarize_fleet
from tirelife.models.inputs import MoveCommand, Roster
from tirelife.positions.engine import PositionEngine
from tirelife.positions.layout import derive_layout, layout_for_vehicle_type
from tirelife.sample import example_roster

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tirelife",
        description="Tire lifecycle analytics - wear, CPK, condition and position planning "
                    "for fleet tires.",
    )
    parser.add_argument("--version", action="version", version=f"tirelife {__version__}")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # make-example command
    example_parser = subparsers.add_parser(
        "make-example",
        help="Generate an example roster JSON file",
    )
    example_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=Path("example_roster.json"),
        help="Output path for example file (default: example_roster.json)",
    )

    # analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Compute wear state and condition for every tire in a roster",
    )
    analyze_parser.add_argument(
        "--input", "-i",
        type=Path,
        required=True,
        help="Path to roster JSON file",
    )
    analyze_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Path to save JSON output (prints to stdout if not specified)",
    )
    analyze_parser.add_argument(
        "--readable",
        action="store_true",
        help="Print a table instead of JSON",
    )

    # summary command
    summary_parser = subparsers.add_parser(
        "summary",
        help="Aggregate fleet figures for a roster",
    )
    summary_parser.add_argument(
        "--input", "-i",
        type=Path,
        required=True,
        help="Path to roster JSON file",
    )
    summary_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Reference date (YYYY-MM-DD) for monthly spend (default: today)",
    )
    summary_parser.add_argument(
        "--include-retired",
        action="store_true",
        help="Keep retired tires in the summary",
    )
    summary_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Path to save JSON output (prints to stdout if not specified)",
    )
    summary_parser.add_argument(
        "--readable",
        action="store_true",
        help="Print a dashboard-style summary instead of JSON",
    )

    # reassign command
    reassign_parser = subparsers.add_parser(
        "reassign",
        help="Apply tire moves to a vehicle roster and print the change-set",
    )
    reassign_parser.add_argument(
        "--input", "-i",
        type=Path,
        required=True,
        help="Path to roster JSON file for one vehicle",
    )
    reassign_parser.add_argument(
        "--moves", "-m",
        type=Path,
        required=True,
        help='Path to JSON list of moves, e.g. [{"tire_id": "T-1", "target": 3}]',
    )
    reassign_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Path to save the change-set document (prints to stdout if not specified)",
    )
    reassign_parser.add_argument(
        "--commit-to",
        type=Path,
        default=None,
        help="Save the resulting slot map to this JSON file and commit the changes",
    )

    # layout command
    layout_parser = subparsers.add_parser(
        "layout",
        help="Show the axle layout for a tire count",
    )
    layout_parser.add_argument(
        "--tires", "-n",
        type=int,
        required=True,
        help="Number of mounted tires",
    )
    layout_parser.add_argument(
        "--vehicle-type",
        default=None,
        help="Vehicle type tag, e.g. camion_3_ejes",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the FastAPI web server",
    )
    serve_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    serve_parser.add_argument(
        "--port", "-p",
        type=int,
        default=8000,
        help="Port to listen on (default: 8000)",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    return parser


def load_roster(path: Path, preferences: Optional[Preferences] = None) -> Roster:
    """Read a roster file and convert its readings to mm and km."""
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, list):
        data = {"tires": data}
    roster = Roster.model_validate(data)
    if preferences is not None and not preferences.is_metric:
        roster = roster.model_copy(
            update={"tires": [normalize_tire(tire, preferences) for tire in roster.tires]}
        )
    return roster


def load_moves(path: Path) -> list[MoveCommand]:
    """Read a list of moves, either bare or under a "moves" key."""
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("moves", [])
    return [MoveCommand.model_validate(item) for item in data]


def _write_output(output_json: str, output: Optional[Path], label: str) -> None:
    if output:
        with open(output, "w") as f:
            f.write(output_json)
        print(f"\n{label} saved to {output}", file=sys.stderr)
    else:
        print(output_json)


def _classifier(settings: Settings) -> ConditionClassifier:
    return ConditionClassifier(settings.thresholds(), settings.legal_min_depth_mm)


def cmd_make_example(args: argparse.Namespace, settings: Settings) -> int:
    """Generate an example roster JSON file."""
    roster = example_roster()

    with open(args.output, "w") as f:
        f.write(roster.model_dump_json(indent=2))

    print(f"Created example roster file: {args.output}")
    print("\nAnalyze it with:")
    print(f"  python -m tirelife analyze --input {args.output} --readable")

    return 0


def cmd_analyze(args: argparse.Namespace, settings: Settings) -> int:
    """Compute wear state and condition for every tire."""
    preferences = settings.preferences()
    roster = load_roster(args.input, preferences)
    print(f"Analyzing {len(roster.tires)} tires...", file=sys.stderr)

    reports = analyze_tires(roster.tires, _classifier(settings))

    if args.readable:
        from tirelife.cli.readable_output import print_tire_reports
        print_tire_reports(reports, preferences)
        return 0

    output_json = json.dumps([report.model_dump(mode="json") for report in reports], indent=2)
    _write_output(output_json, args.output, "Reports")
    return 0


def cmd_summary(args: argparse.Namespace, settings: Settings) -> int:
    """Aggregate fleet figures."""
    preferences = settings.preferences()
    roster = load_roster(args.input, preferences)
    reference_date = args.date or date.today()

    summary = summarize_fleet(
        roster.tires,
        reference_date,
        classifier=_classifier(settings),
        include_retired=args.include_retired,
    )

    if args.readable:
        from tirelife.cli.readable_output import print_fleet_summary
        print_fleet_summary(summary, preferences)
        return 0

    _write_output(summary.model_dump_json(indent=2), args.output, "Summary")
    return 0


def cmd_reassign(args: argparse.Namespace, settings: Settings) -> int:
    """Apply moves and report the change-set."""
    from tirelife.cli.readable_output import print_change_set

    roster = load_roster(args.input, settings.preferences())
    commands = load_moves(args.moves)

    engine = PositionEngine.from_roster(roster)
    outcomes = engine.apply_commands(commands)
    records = engine.change_set()

    document = change_set_document(roster.vehicle, records)
    document["displaced"] = [o.displaced for o in outcomes if o.displaced]
    document["positions"] = {tid: pos.model_dump() for tid, pos in sorted(engine.positions.items())}
    document["payload"] = engine.persistence_payload()
    document["layout"] = engine.layout().model_dump()

    if args.commit_to:
        saved = commit_with(engine, JsonFilePositionStore(args.commit_to))
        document["committed"] = saved
        print(f"Positions saved to {args.commit_to}", file=sys.stderr)

    _write_output(json.dumps(document, indent=2), args.output, "Change-set")
    # stdout carries the JSON document unless it went to a file
    if args.output:
        print_change_set(records)
    return 0


def cmd_layout(args: argparse.Namespace, settings: Settings) -> int:
    """Print the derived axle layout."""
    from tirelife.cli.readable_output import print_layout

    if args.vehicle_type:
        layout = layout_for_vehicle_type(args.vehicle_type, args.tires)
    else:
        layout = derive_layout(args.tires)
    print_layout(layout)
    return 0


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Start the FastAPI web server."""
    try:
        import uvicorn
    except ImportError as e:
        print(f"Error: Missing dependency: {e}", file=sys.stderr)
        print("Install with: pip install uvicorn fastapi", file=sys.stderr)
        return 1

    print("\nStarting tirelife API", file=sys.stderr)
    print(f"API: http://{args.host}:{args.port}/", file=sys.stderr)
    print(f"Docs: http://{args.host}:{args.port}/docs", file=sys.stderr)
    print("\nPress Ctrl+C to stop\n", file=sys.stderr)

    uvicorn.run(
        "tirelife.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


COMMANDS = {
    "make-example": cmd_make_example,
    "analyze": cmd_analyze,
    "summary": cmd_summary,
    "reassign": cmd_reassign,
    "layout": cmd_layout,
    "serve": cmd_serve,
}


def cli(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args, settings)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}", file=sys.stderr)
        return 1
    except TireLifeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Validation Error: {e}", file=sys.stderr)
        return 1


def main():
    """Console script entrypoint wrapper."""
    return cli()


if __name__ == "__main__":
    sys.exit(cli())

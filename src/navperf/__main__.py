"""CLI entry point for navperf.

Usage:
    python -m navperf run <script.yaml>      Play a navigation script
    python -m navperf check <script.yaml>    Validate a navigation script
    python -m navperf init <script.yaml>     Write an example script
    python -m navperf settings               Show effective settings
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="navperf",
        description="navperf - Navigation timing and home transition simulator",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--debug",
        action="append",
        metavar="COMPONENT",
        help="Enable debug logging for one component (e.g. navigation); repeatable",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    runParser = subparsers.add_parser("run", help="Play a navigation script")
    runParser.add_argument("script", type=Path, help="Path to the script YAML")
    runParser.add_argument(
        "--frames",
        action="store_true",
        help="Print pane layouts on every animation frame",
    )
    runParser.add_argument(
        "--json",
        type=Path,
        default=None,
        help="Export the event trace to a JSON file",
    )

    # check command
    checkParser = subparsers.add_parser("check", help="Validate a navigation script")
    checkParser.add_argument("script", type=Path, help="Path to the script YAML")

    # init command
    initParser = subparsers.add_parser("init", help="Write an example script")
    initParser.add_argument("script", type=Path, help="Path for the new script")

    # settings command
    subparsers.add_parser("settings", help="Show effective settings")

    args = parser.parse_args(argv)

    from navperf.config import getSettings
    from navperf.logging import configureLogging, setDebugMode

    # No uptime prefix: script runs use simulated time
    configureLogging(level=getSettings().logLevel, includeUptime=False)
    if args.verbose:
        setDebugMode(True)
    if args.debug:
        setDebugMode(True, components=args.debug)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "run":
            return cmdRun(args)
        elif args.command == "check":
            return cmdCheck(args)
        elif args.command == "init":
            return cmdInit(args)
        elif args.command == "settings":
            return cmdSettings(args)
    except KeyboardInterrupt:
        print("\nAborted.")
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def cmdRun(args: argparse.Namespace) -> int:
    """Play a navigation script and print the event stream."""
    from navperf.cli.loader import ScriptLoader
    from navperf.cli.runner import ScriptRunner, TextRenderer

    script = ScriptLoader().loadFromPath(args.script)
    runner = ScriptRunner(renderer=TextRenderer() if args.frames else None)
    result = runner.run(script)

    print(f"\n{'='*60}")
    print(f"  {script.name}")
    if script.description:
        print(f"  {script.description}")
    print(f"{'='*60}\n")

    print("Events:")
    for event in result.events:
        print(f"  [{event.eventType.value}] {event.summary}")

    print(f"\nFinal screen: {result.finalScreen}")
    print(f"Simulated time: {result.elapsedMs:.0f}ms\n")
    print(result.report)

    if args.json:
        args.json.parent.mkdir(parents=True, exist_ok=True)
        args.json.write_text(result.traceJson, encoding="utf-8")
        print(f"\nTrace written to {args.json}")

    print()
    return 0


def cmdCheck(args: argparse.Namespace) -> int:
    """Validate a navigation script."""
    from navperf.cli.loader import ScriptLoader
    from navperf.exceptions import ScriptError

    try:
        script = ScriptLoader().loadFromPath(args.script)
    except (FileNotFoundError, ScriptError) as e:
        print(f"Error: {e}")
        return 1

    print(f"OK: {script.name} ({len(script.steps)} steps)")
    return 0


def cmdInit(args: argparse.Namespace) -> int:
    """Write an example navigation script."""
    from navperf.cli.loader import EXAMPLE_SCRIPT, ScriptLoader

    try:
        path = ScriptLoader().save(EXAMPLE_SCRIPT, args.script)
    except FileExistsError:
        print(f"Script '{args.script}' already exists.")
        return 1

    print(f"Created example script: {path}")
    print(f"Run with: python -m navperf run {path}")
    return 0


def cmdSettings(args: argparse.Namespace) -> int:
    """Show effective settings."""
    from navperf.config import getSettings

    settings = getSettings()
    print("\nSettings (NAVPERF_ environment variables override):")
    for key, value in settings.model_dump().items():
        print(f"  {key}: {value}")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())

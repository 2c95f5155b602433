"""Geomorph dungeon generator CLI entry point.

Provides subcommands for generating a dungeon map as JSON and for running the
HTTP API server. Accepts configuration via flags and environment variables,
with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from pathlib import Path
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stderr.isatty()
except (AttributeError, ValueError):  # pragma: no cover - closed or replaced stream
    _COLOR_ENABLED = False


def _load_version() -> str:
    try:
        return (Path(__file__).resolve().parent / "VERSION").read_text(encoding="utf-8").strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Geomorph Dungeon Generator

    Generate a seeded grid dungeon (rooms, corridors, one entrance) as JSON, or
    run the HTTP API that does the same. Configuration can be provided via CLI
    flags or environment variables. If both are present, CLI flags take
    precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                                Bind address for the web server (default: 0.0.0.0)
          PORT                                Port for the web server (default: 5000)
          GEOMORPH_ENABLE_GENERATION_METRICS  Per-phase timing in metrics (default: 1)
          GEOMORPH_LOG_LEVEL                  debug|info|warn|error (default: info)
          GEOMORPH_LOG_JSON                   Emit JSON log lines (default: 0)

        Examples:
          # Generate a map with the default settings and a fixed seed
          python run.py generate --seed 42

          # Twelve rooms on a 40x40 grid, merged corridors, written to a file
          python run.py generate --rooms 12 --grid 40 --merge --out dungeon.json

          # Run the HTTP API on a custom port
          python run.py serve --port 8080

          # Load variables from .env then run the server
          python run.py --env-file .env serve
        """
    )

    parser = argparse.ArgumentParser(
        prog="Geomorph",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Geomorph Dungeon Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon map and print it as JSON",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one dungeon map. Omitted settings use the built-in defaults.",
    )
    gen_parser.add_argument("--rooms", dest="room_count", type=int, default=None, help="Target room count (1-50)")
    gen_parser.add_argument("--min-rooms", dest="min_rooms", type=int, default=None, help="Lower bound of the room count draw")
    gen_parser.add_argument("--max-rooms", dest="max_rooms", type=int, default=None, help="Upper bound of the room count draw")
    gen_parser.add_argument("--grid", dest="grid_size", type=int, default=None, help="Grid edge length (20-50)")
    gen_parser.add_argument("--spacing", dest="room_spacing", type=int, default=None, help="Free cells kept around rooms (1-5)")
    gen_parser.add_argument("--max-exits", dest="max_exits_per_room", type=int, default=None, help="Doorways kept per room (1-8)")
    gen_parser.add_argument("--seed", default=None, help="Seed string; random when omitted")
    gen_parser.add_argument("--merge", action="store_true", help="Also emit merged corridor groups")
    gen_parser.add_argument("--out", default=None, help="Write JSON to this path instead of stdout")
    gen_parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    gen_parser.set_defaults(command="generate")

    # serve subcommand
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask HTTP API",
    )
    serve_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    serve_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    serve_parser.set_defaults(command="serve")

    args = parser.parse_args(argv)
    if not getattr(args, "command", None):
        args.command = "serve"
    return args


def _paint(color: str, text: str) -> str:
    return f"{color}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


_SETTINGS_FLAGS = ("room_count", "min_rooms", "max_rooms", "grid_size", "room_spacing", "max_exits_per_room", "seed")


def run_generate(args: argparse.Namespace) -> int:
    from geomorph.dungeon import GenerationSettings, InvalidSettingsError, merge_adjacent_corridors, run_generation

    payload = {k: getattr(args, k) for k in _SETTINGS_FLAGS if getattr(args, k, None) is not None}
    try:
        settings = GenerationSettings.from_payload(payload)
    except InvalidSettingsError as e:
        print(f"{_paint(Fore.RED, '[ERROR]')} {e.field}: {e.message}", file=sys.stderr)
        return 2

    ctx = run_generation(settings)
    doc = ctx.map.to_dict()
    if args.merge:
        doc = {"map": doc, "mergedCorridors": [m.to_dict() for m in merge_adjacent_corridors(ctx.map.corridors)]}
    text = json.dumps(doc, indent=args.indent if args.indent and args.indent > 0 else None)
    if args.out:
        Path(args.out).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)

    m = ctx.metrics
    door = ctx.map.entrance_door
    entrance = "none" if door is None else ("forced" if door.forced else "routed")
    rooms = "%d/%d" % (m["rooms_placed"], m["rooms_requested"])
    summary = [
        f"{_paint(Fore.CYAN, 'Seed:'):12} {_paint(Fore.GREEN, ctx.seed)}",
        f"{_paint(Fore.CYAN, 'Rooms:'):12} {_paint(Fore.GREEN, rooms)}",
        f"{_paint(Fore.CYAN, 'Corridors:'):12} {_paint(Fore.GREEN, str(len(ctx.map.corridors)))}",
        f"{_paint(Fore.CYAN, 'Entrance:'):12} {_paint(Fore.YELLOW if entrance != 'routed' else Fore.GREEN, entrance)}",
    ]
    if m["connections_failed"]:
        summary.append(f"{_paint(Fore.YELLOW, '[WARN]')} {m['connections_failed']} room connection(s) found no route")
    if args.out:
        summary.append(f"{_paint(Fore.CYAN, 'Written:'):12} {args.out}")
    print("\n".join(summary), file=sys.stderr)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = args.command.lower()
    if mode == "generate":
        return run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from geomorph import server

    divider = _paint(Fore.MAGENTA, "=" * 40)
    lines = [
        divider,
        f"  {_paint(Fore.CYAN + Style.BRIGHT, 'Geomorph API Bootup')}",
        divider,
        f"  {_paint(Fore.YELLOW, 'Host:'):12} {_paint(Fore.GREEN, host)}",
        f"  {_paint(Fore.YELLOW, 'Port:'):12} {_paint(Fore.GREEN, str(port))}",
        f"  {_paint(Fore.YELLOW, 'Debug:'):12} {_paint(Fore.GREEN, str(debug))}",
        divider,
    ]
    print("\n".join(lines))

    from geomorph.logging_utils import log

    log.info(event="listen", host=host, port=port, debug=debug)
    server.start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

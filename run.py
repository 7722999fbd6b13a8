"""Facility layout CLI entry point.

Provides subcommands for generating a layout in the terminal and for running
the layout HTTP API. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import just_fix_windows_console
from dotenv import load_dotenv

__version__ = "0.4.0"


def _color_enabled(stream=None) -> bool:
    stream = stream or sys.stdout
    try:
        return stream.isatty() and os.getenv("NO_COLOR") is None
    except (AttributeError, ValueError):
        return False


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Facility Layout Generator

    Generate grid layouts (a central security room, scattered side rooms and
    corridors guaranteed to connect them) or serve them over HTTP.
    Configuration can be provided via CLI flags or environment variables. If
    both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          LAYOUT_WIDTH            Grid width (default: 20)
          LAYOUT_HEIGHT           Grid height (default: 20)
          LAYOUT_SCATTERED_ROOMS  Scattered room attempts (default: 8)
          LAYOUT_SEED             Fixed seed (default: random)
          LAYOUT_CATALOG          Path to a JSON room catalog (default: built-in)
          HOST / PORT             Bind address for the server (default: 127.0.0.1:5000)
          FACILITY_LOG_LEVEL      debug|info|warn|error (default: info)

        Examples:
          # Print a random 20x20 layout
          python run.py generate

          # Reproducible 30x24 layout with 12 room attempts, as JSON
          python run.py generate --width 30 --height 24 --rooms 12 --seed 42 --json

          # Serve the HTTP API on port 8080
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="facility",
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
        "--log-level",
        dest="log_level",
        choices=["debug", "info", "warn", "error"],
        default=None,
        help="Structured log threshold (default: env FACILITY_LOG_LEVEL or info)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Facility Layout Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a layout and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one layout and print it as an ASCII map or JSON",
    )
    gen_parser.add_argument("--width", type=int, default=None, help="Grid width (default: env LAYOUT_WIDTH or 20)")
    gen_parser.add_argument("--height", type=int, default=None, help="Grid height (default: env LAYOUT_HEIGHT or 20)")
    gen_parser.add_argument(
        "--rooms",
        dest="scattered_rooms",
        type=int,
        default=None,
        help="Scattered room attempts (default: env LAYOUT_SCATTERED_ROOMS or 8)",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    gen_parser.add_argument(
        "--catalog",
        dest="catalog_path",
        default=None,
        help="JSON room catalog (default: env LAYOUT_CATALOG or built-in)",
    )
    gen_parser.add_argument("--json", dest="as_json", action="store_true", help="Emit JSON instead of a map")
    gen_parser.add_argument("--metrics", action="store_true", help="Print generation metrics after the map")
    gen_parser.set_defaults(command="generate")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the layout HTTP API",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask development server exposing /api/layout",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 127.0.0.1)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if not any(a in ("generate", "server") for a in argv) and not any(
        a in ("-h", "--help", "--version") for a in argv
    ):
        argv = list(argv) + ["generate"]

    return parser.parse_args(argv)


def _error(msg: str, color: bool) -> None:
    prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if color else "[ERROR]"
    print(f"{prefix} {msg}", file=sys.stderr)


def _run_generate(args) -> int:
    from facility.layout import (
        ConfigurationError,
        LayoutConfig,
        UnconnectableMapError,
        default_catalog,
        generate_from_config,
        load_catalog,
    )
    from facility.layout.render import render_ascii

    color = _color_enabled()
    try:
        config = LayoutConfig.from_env(
            width=args.width,
            height=args.height,
            scattered_rooms=args.scattered_rooms,
            seed=args.seed,
            catalog_path=args.catalog_path,
        )
        catalog = load_catalog(config.catalog_path) if config.catalog_path else default_catalog()
        layout = generate_from_config(config, catalog)
    except ConfigurationError as exc:
        _error(f"Invalid configuration: {exc}", color)
        return 1
    except UnconnectableMapError as exc:
        _error(f"Layout could not be connected: {exc}", color)
        return 1

    if args.as_json:
        data = layout.to_dict()
        if args.metrics:
            data["metrics"] = layout.metrics
        print(json.dumps(data, indent=2))
        return 0

    print(render_ascii(layout, color=color))
    label = (lambda t: f"{Fore.YELLOW}{t}{Style.RESET_ALL}") if color else (lambda t: t)
    print(
        f"{label('seed:')} {layout.seed}  {label('rooms:')} {len(layout.rooms)}  "
        f"{label('hallways:')} {len(layout.hallways)}"
    )
    if args.metrics:
        for key, val in layout.metrics.items():
            print(f"  {label(key + ':'):28} {val}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()
    just_fix_windows_console()

    from facility.logging_utils import configure, log

    if args.log_level:
        configure(level=args.log_level)

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "generate":
        return _run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "127.0.0.1")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    # Import server entrypoint only after environment is ready
    from facility.server import start_server

    color = _color_enabled()
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if color else "=" * 40
    title = f"{Fore.CYAN}{Style.BRIGHT}Facility Layout Server{Style.RESET_ALL}" if color else "Facility Layout Server"
    print("\n".join([divider, f"  {title}", divider, f"  Host: {host}", f"  Port: {port}", divider, ""]))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

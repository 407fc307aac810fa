from __future__ import annotations

import argparse
import sys

from dais.assembler import ProjectAssembler
from dais.config import ConfigError, load_config
from dais.project import assemble_sync, init
from dais.utils.display.terminal import (
    print_assembly_summary,
    print_assembly_summary_json,
    print_banner,
    print_internal_events,
)
from dais.utils.logging import get_logger, setup_logging


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="dais", description="Scaffold a smart-contract project")
    sub = parser.add_subparsers(dest="command", required=True)

    init_parser = sub.add_parser("init", help="Write a starter .daisconfig")
    init_parser.add_argument("dir", nargs="?", default=".", help="Project directory")
    init_parser.add_argument("--log-level", help="Override log level (DEBUG, INFO, WARNING, ERROR)")

    assemble_parser = sub.add_parser("assemble", help="Generate the project from .daisconfig")
    assemble_parser.add_argument("dir", nargs="?", default=".", help="Project directory")
    assemble_parser.add_argument("--log-level", help="Override log level (DEBUG, INFO, WARNING, ERROR)")
    assemble_parser.add_argument(
        "--max-concurrency", type=positive_int, help="Bound on concurrent protocol writers"
    )
    assemble_parser.add_argument("--json-summary", action="store_true", help="Print run summary as JSON")
    assemble_parser.add_argument("--events-limit", type=int, default=0, help="Print recent internal events")
    assemble_parser.add_argument("--no-banner", action="store_true", help="Skip the banner")
    return parser.parse_args(argv)


def _assemble(args: argparse.Namespace) -> int:
    logger = get_logger("dais.cli")
    try:
        config = load_config(args.dir)
    except ConfigError as exc:
        setup_logging(level=args.log_level)
        logger.error("%s", exc)
        return 1

    setup_logging(level=args.log_level or config.logging.level)
    if not (args.json_summary or args.no_banner):
        print_banner()

    if args.max_concurrency is not None:
        max_concurrency = args.max_concurrency
    else:
        max_concurrency = config.max_concurrency
    assembler = ProjectAssembler(max_concurrency=max_concurrency)
    unsupported: list[str] = []
    assembler.event_bus.subscribe(
        "protocol.unsupported", lambda event: unsupported.append(str(event.payload["protocol"]))
    )
    packs = assemble_sync(args.dir, assembler, config)

    if args.json_summary:
        print_assembly_summary_json(assembler.state, packs, unsupported)
    else:
        print_assembly_summary(assembler.state, packs, unsupported)
    if args.events_limit > 0:
        print_internal_events(assembler.recent_events(args.events_limit))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    if args.command == "init":
        setup_logging(level=args.log_level)
        path = init(args.dir)
        print(f"Wrote starter config to {path}")
        return 0

    return _assemble(args)


if __name__ == "__main__":
    raise SystemExit(main())

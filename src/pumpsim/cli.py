"""
Command line entry point.

Reads the seven configuration lines (report interval, ending time, number
of pumps, arrival/litres/balking/service seeds) from a file or stdin,
runs the simulation and prints the report.
"""

from __future__ import annotations

import argparse
import contextlib
import dataclasses
import logging
import sys
from typing import Sequence, TextIO

from pumpsim.config import parse_config
from pumpsim.exceptions import ConfigurationError, SimulationError
from pumpsim.process_model import simulate_processes
from pumpsim.report import write_report
from pumpsim.simulation import simulate

logger = logging.getLogger(__name__)

ENGINES = {
    "events": simulate,
    "processes": simulate_processes,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pumpsim",
        description="Gas station discrete event simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "input, one value per line:\n"
            "  report interval, ending time, number of pumps,\n"
            "  arrival seed, litres seed, balking seed, service seed"
        ),
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=argparse.FileType("r"),
        default=None,
        help="configuration file (default: stdin)",
    )
    parser.add_argument(
        "--engine",
        choices=sorted(ENGINES),
        default="events",
        help="event-scheduling engine or SimPy processes (default: events)",
    )
    parser.add_argument(
        "--pumps",
        type=int,
        default=None,
        help="override the number of pumps from the input",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: WARNING)",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )
    # Only a file opened from the command line is ours to close
    source: contextlib.AbstractContextManager[TextIO]
    if args.input is not None:
        source = args.input
    else:
        source = contextlib.nullcontext(stdin or sys.stdin)
    out = stdout or sys.stdout

    try:
        with source as lines:
            config = parse_config(lines)
        if args.pumps is not None:
            config = dataclasses.replace(config, num_pumps=args.pumps)
        snapshots = ENGINES[args.engine](config)
    except ConfigurationError as e:
        logger.error("configuration error: %s", e)
        return 2
    except SimulationError as e:
        logger.error("simulation aborted: %s", e)
        return 1

    write_report(config, snapshots, out, num_pumps=max(1, config.num_pumps))
    return 0


if __name__ == "__main__":
    sys.exit(main())

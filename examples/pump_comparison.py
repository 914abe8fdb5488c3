"""
Pump count comparison.

Runs the station with the same seeds for a range of pump counts and
prints the final statistics of each run side by side, to see where an
extra pump stops paying for itself.

Demonstrates:
- Building a StationConfig directly instead of parsing input
- Running both the event engine and the SimPy processes
- Reading the final Snapshot of a run

Run with --processes to use the SimPy rendition.
"""

from __future__ import annotations

import sys

from pumpsim import StationConfig, simulate, simulate_processes


def run_comparison(max_pumps: int = 6, use_processes: bool = False) -> None:
    """Run one simulation per pump count and print a summary line each."""
    run = simulate_processes if use_processes else simulate

    print(" Pumps  Balked  NoQueue  Average Wait  Usage   Profit  Lost Profit")
    for pumps in range(1, max_pumps + 1):
        config = StationConfig(
            report_interval=0.0,
            ending_time=50000.0,
            num_pumps=pumps,
            seed_arrival=1,
            seed_litres=2,
            seed_balk=3,
            seed_service=4,
        )
        final = run(config)[-1]

        wait = "Unknown" if final.average_wait is None else f"{final.average_wait:.2f}"
        print(
            f"{pumps:6d}{final.balked:8d}{final.no_queue_fraction:9.3f}"
            f"{wait:>14}{final.pump_usage:7.3f}{final.total_profit:9.2f}"
            f"{final.lost_profit:13.2f}"
        )


def main() -> None:
    use_processes = "--processes" in sys.argv

    if use_processes:
        print("Comparing pump counts with SimPy processes")
    else:
        print("Comparing pump counts with the event engine")
    print()

    run_comparison(use_processes=use_processes)


if __name__ == "__main__":
    main()

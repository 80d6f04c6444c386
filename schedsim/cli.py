from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .errors import SchedulerError
from .metrics import summarize_results
from .report import write_schedule
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="Batch CPU scheduling simulator (FCFS, SJF, idle-aware SJF, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every scheduling decision.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=list(ALGORITHMS),
        help="Algorithm to use.",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin. Without it rr runs the single-pass variant.",
    )
    run_parser.add_argument(
        "--title",
        "-t",
        default=None,
        help="Report title (default: algorithm name).",
    )
    run_parser.add_argument(
        "--strict-wait",
        action="store_true",
        help="Compute every waiting time as max(0, clock - arrival) instead of reusing the previous one.",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart with plain ASCII characters.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare averages.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(ALGORITHMS),
        help="Algorithms to compare (default: all).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum used for rr when included.",
    )
    compare_parser.add_argument(
        "--strict-wait",
        action="store_true",
        help="Compute every waiting time as max(0, clock - arrival).",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _run_compare(args: argparse.Namespace, console: Console) -> None:
    processes = load_workload(Path(args.workload))
    results = [
        run_algorithm(alg, processes, quantum=args.quantum, legacy_wait=not args.strict_wait)
        for alg in args.algorithms
    ]

    console.print(f"[bold]Workload:[/bold] {args.workload}")
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput", justify="right")
    summary_table.add_column("Warnings", justify="right")

    for summary in summarize_results(results):
        summary_table.add_row(
            summary["algorithm"],
            "" if summary["quantum"] is None else str(summary["quantum"]),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['throughput']:.3f}",
            str(summary["warnings"]),
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
            write_schedule(
                sys.stdout,
                args.title or args.algorithm.upper(),
                processes,
                args.algorithm,
                quantum=args.quantum,
                legacy_wait=not args.strict_wait,
                plain=args.plain,
            )
            return 0

        if args.command == "compare":
            _run_compare(args, console)
            return 0
    except (SchedulerError, OSError) as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())

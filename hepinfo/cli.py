"""
Command-line interface for hepinfo.

Usage:
    hepinfo run --events 1000 --seed 7 [--list] [--json] [--parquet out.parquet]
    hepinfo run --events 1000 --workers 4 --json
    hepinfo doctor
"""

from __future__ import annotations

import argparse
import json
import sys

import hepinfo


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hepinfo",
        description="Event-generation info and diagnostics bookkeeping.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {hepinfo.__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- run ---
    run_parser = subparsers.add_parser(
        "run",
        help="Run the toy event loop and print run statistics",
        description="Drive every producer role with a toy event loop, then report "
        "cross sections, counters and error statistics.",
    )
    run_parser.add_argument("--events", type=int, default=100, help="Number of events (default: 100)")
    run_parser.add_argument("--seed", type=int, default=12345, help="Random seed")
    run_parser.add_argument("--ecm", type=float, default=13000.0, help="CM energy in GeV")
    run_parser.add_argument("--id-a", type=int, default=2212, help="PDG code of beam A")
    run_parser.add_argument("--id-b", type=int, default=2212, help="PDG code of beam B")
    run_parser.add_argument("--pt-min", type=float, default=2.0, help="Lower pT cutoff in GeV")
    run_parser.add_argument(
        "--times-allowed-errors", type=int, default=10,
        help="Stop the run after this many failed events",
    )
    run_parser.add_argument(
        "--times-to-print", type=int, default=1,
        help="How many times an identical warning is echoed",
    )
    run_parser.add_argument(
        "--workers", type=int, default=1,
        help="Independent contexts (seed, seed+1, ...) reduced into one summary",
    )
    run_parser.add_argument(
        "--list", dest="list_last", action="store_true",
        help="List the last event of the (first) worker",
    )
    run_parser.add_argument(
        "--parquet", default=None,
        help="Write one row per accepted event to this Parquet file",
    )
    run_parser.add_argument(
        "--json", dest="as_json", action="store_true",
        help="Output the run summary as JSON",
    )

    # --- doctor ---
    doctor_parser = subparsers.add_parser(
        "doctor",
        help="Environment & capability check",
    )
    doctor_parser.add_argument("--json", dest="as_json", action="store_true")

    return parser


def _print_summary(summary: dict) -> None:
    print(f"Beams:               {summary['beams']['id_a']} + {summary['beams']['id_b']}"
          f" at {summary['beams']['e_cm']} GeV")
    if "n_workers" in summary:
        print(f"Workers:             {summary['n_workers']}")
    for code, snap in summary["sigma"].items():
        label = "total" if code == "0" else f"code {code}"
        print(f"  {label:>10s}: tried {snap['n_tried']:>8d}  selected {snap['n_selected']:>8d}"
              f"  accepted {snap['n_accepted']:>8d}"
              f"  sigma = {snap['sigma_gen']:.4e} +- {snap['sigma_err']:.4e} mb")
    if summary["counters"]:
        print("Counters:")
        for name, value in summary["counters"].items():
            print(f"  {name:>20s}: {value}")
    print(f"Errors and warnings: {summary['error_total']}")
    for d in summary["diagnostics"]:
        print(f"  {d['count']} occurrences: {d['message']} {d['extra']}".rstrip())


def _cmd_run(args: argparse.Namespace) -> int:
    from .config import InfoConfig, RunConfig
    from .context import GenerationContext
    from .driver import EventLoop
    from .merge import combine
    from .report import run_summary

    if args.workers < 1:
        print("Error: --workers must be >= 1", file=sys.stderr)
        return 1

    # Echoes go to stderr when stdout carries JSON.
    sink = sys.stderr if args.as_json else sys.stdout
    rows = []
    summaries = []
    first_ctx = None
    try:
        for worker in range(args.workers):
            config = RunConfig(
                n_events=args.events,
                seed=args.seed + worker,
                id_a=args.id_a,
                id_b=args.id_b,
                e_cm=args.ecm,
                pt_min=args.pt_min,
                times_allowed_errors=args.times_allowed_errors,
            )
            ctx = GenerationContext(InfoConfig(times_to_print=args.times_to_print, sink=sink))
            loop = EventLoop(ctx, config)

            def collect(c, worker=worker):
                rows.append({"worker": worker, **c.info.to_dict()})

            loop.run(collect if args.parquet else None)
            if loop.aborted:
                print(f"Worker {worker}: event generation aborted prematurely", file=sys.stderr)
            summaries.append(run_summary(ctx.info))
            if first_ctx is None:
                first_ctx = ctx
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.list_last and first_ctx is not None:
        first_ctx.info.list(sink)

    if args.parquet:
        from .io.parquet import write_event_table
        from .report import stable_json_dumps

        try:
            write_event_table(args.parquet, rows, metadata={"summaries": stable_json_dumps(summaries)})
        except (ImportError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    summary = summaries[0] if len(summaries) == 1 else combine(summaries)
    if args.as_json:
        print(json.dumps(summary, indent=2, sort_keys=True))
    else:
        if len(summaries) == 1:
            first_ctx.info.error_statistics(sink)
        _print_summary(summary)
    return 0


def _cmd_doctor(args: argparse.Namespace) -> int:
    from .doctor import doctor_report

    rep = doctor_report()
    if args.as_json:
        print(json.dumps(rep, indent=2, sort_keys=True))
    else:
        print(rep["summary"])
        for item in rep["checks"]:
            status = "OK" if item["ok"] else "FAIL"
            print(f"- {status}: {item['name']}: {item['detail']}")
    return 0 if all(c["ok"] for c in rep["checks"]) else 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "run": _cmd_run,
        "doctor": _cmd_doctor,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())

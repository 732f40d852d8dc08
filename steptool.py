#!/usr/bin/env python3
"""
steptool.py

A unified CLI with subcommands:
  1) validate <instructions_file>  -> Parse, check for cycles, print the critical path length
  2) order <instructions_file>     -> Print the smallest-first completion order
  3) schedule <instructions_file>  -> Simulate N workers and print the total completion time
       --workers     => Number of identical workers (default $STEPSCHED_WORKERS or 5)
       --base-time   => Constant added to every step duration (default $STEPSCHED_BASE_TIME or 60)
       --idle        => 'tick' (advance idle workers by 1) or 'jump' (to the next completion)
       --timeline    => Also print one line per step assignment
  4) fetch <url>                   -> Download an instructions file
       --session     => Session cookie value (default $STEPSCHED_SESSION)

Instruction files hold one record per line, either the sentence form
  Step C must be finished before step A can begin.
or, with --format edges, a plain edge list ("C A" or "C -> A").
Use '-' as the file name to read from stdin.
"""

import argparse
import logging
import os
import sys

import requests

from stepsched.input_client import DEFAULT_TIMEOUT, fetch_instructions, save_instructions
from stepsched.scheduling import DEFAULT_BASE_TIME, DEFAULT_WORKERS, IDLE_STRATEGIES, simulate
from stepsched.sequencing import expected_runtime, sequence_string
from stepsched.tasks_parser import FORMATS, build_graph, load_instructions, parse_instructions

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"


def setup_logging(log_file=None, verbose=False):
    logging.basicConfig(filename=log_file, level=logging.DEBUG if verbose else logging.INFO,
                        format=LOG_FORMAT)


def env_int(name, default):
    """Read an integer from the environment; unset or unparsable values give `default`."""
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logging.warning(f"Ignoring {name}={value!r}: not an integer, using {default}")
        return default


def load_graph(task_file, fmt):
    if task_file == "-":
        instructions = parse_instructions(sys.stdin, fmt)
    else:
        instructions = load_instructions(task_file, fmt)
    logging.info(f"Loaded {len(instructions)} instruction(s) from {task_file}")
    return build_graph(instructions)


def build_parser():
    parser = argparse.ArgumentParser(description="Step ordering and worker scheduling CLI")
    parser.add_argument("--log-file", default=None, help="Write log records to this file")
    parser.add_argument("--verbose", action="store_true", help="Log every scheduling event")
    subparsers = parser.add_subparsers(dest="command")

    def add_input_args(sp):
        sp.add_argument("task_file", help="Path to instructions file, or '-' for stdin")
        sp.add_argument("--format", choices=FORMATS, default="sentence", help="Line format of the file")

    # Subcommand: validate
    sp_val = subparsers.add_parser("validate", help="Validate an instructions file and compute expected runtime")
    add_input_args(sp_val)
    sp_val.add_argument("--base-time", type=int, default=None,
                        help="Constant added to every step duration (default $STEPSCHED_BASE_TIME or 60)")

    # Subcommand: order
    sp_ord = subparsers.add_parser("order", help="Print the smallest-first completion order")
    add_input_args(sp_ord)

    # Subcommand: schedule
    sp_sch = subparsers.add_parser("schedule", help="Simulate parallel workers and print total time")
    add_input_args(sp_sch)
    sp_sch.add_argument("--workers", type=int, default=None,
                        help="Number of workers (default $STEPSCHED_WORKERS or 5)")
    sp_sch.add_argument("--base-time", type=int, default=None,
                        help="Constant added to every step duration (default $STEPSCHED_BASE_TIME or 60)")
    sp_sch.add_argument("--idle", choices=IDLE_STRATEGIES, default="tick",
                        help="How idle workers advance when nothing is ready")
    sp_sch.add_argument("--timeline", action="store_true", help="Print every step assignment")

    # Subcommand: fetch
    sp_fetch = subparsers.add_parser("fetch", help="Download an instructions file")
    sp_fetch.add_argument("url", help="URL of the instructions text")
    sp_fetch.add_argument("--output", default="instructions.txt", help="Where to save the text")
    sp_fetch.add_argument("--session", default=os.environ.get("STEPSCHED_SESSION"),
                          help="Session cookie value")
    sp_fetch.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Request timeout in seconds")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging(args.log_file, args.verbose)

    if args.command in ("validate", "schedule") and args.base_time is None:
        args.base_time = env_int("STEPSCHED_BASE_TIME", DEFAULT_BASE_TIME)
    if args.command == "schedule" and args.workers is None:
        args.workers = env_int("STEPSCHED_WORKERS", DEFAULT_WORKERS)

    if args.command == "fetch":
        try:
            text = fetch_instructions(args.url, session_token=args.session, timeout=args.timeout)
        except requests.RequestException as e:
            print(f"Fetch error: {e}")
            sys.exit(1)
        try:
            save_instructions(text, args.output)
        except OSError as e:
            print(f"Input error: {e}")
            sys.exit(1)
        print(f"Saved {len(text.splitlines())} line(s) to {args.output}")
        return

    try:
        graph = load_graph(args.task_file, args.format)
        if args.command == "validate":
            exp = expected_runtime(graph, args.base_time)
            print(f"Instructions are valid. {len(graph)} step(s), {len(graph.edges())} constraint(s).")
            print(f"Expected runtime (critical path, base {args.base_time}): {exp}")
        elif args.command == "order":
            print(sequence_string(graph))
        elif args.command == "schedule":
            report = simulate(graph, workers=args.workers, base_time=args.base_time, idle=args.idle)
            if args.timeline:
                for a in report.assignments:
                    print(f"[Worker {a.worker}] {a.step}: {a.start} -> {a.end}")
            print(f"[Schedule] Workers: {args.workers}, base time: {args.base_time}")
            print(f"[Schedule] Total time: {report.total_time}")
    except ValueError as e:
        print(f"Validation error: {e}")
        sys.exit(1)
    except OSError as e:
        print(f"Input error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

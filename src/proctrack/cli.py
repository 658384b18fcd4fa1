"""Command line front-end for the process supervisor.

Usage:
    proctrack launch --track --detached -- sh -c "sleep 30; true"
    proctrack alive 4242
    proctrack resolve 4242 --exclude sh --exclude bash
    proctrack kill 4242
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional, Sequence

from .config import ConfigurationError, SupervisorSettings
from .exceptions import ProcessSupervisionError
from .logging_config import setup_logging
from .process_models import DescendantQuery, LaunchSpec, LogLine, StreamTag
from .supervisor import ProcessSupervisor


def _print_line(line: LogLine) -> None:
    stream = sys.stdout if line.stream is StreamTag.STDOUT else sys.stderr
    print(line.text, file=stream, flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="proctrack", description="Launch, track and terminate child processes.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: PROCTRACK_LOG_LEVEL or WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    launch = subparsers.add_parser("launch", help="Launch a command and print the tracked PID")
    launch.add_argument("--cwd", default=None, help="Working directory for the command")
    launch.add_argument("--detached", action="store_true", help="Let the command outlive this process")
    launch.add_argument(
        "--hidden",
        action="store_true",
        help="Suppress the console window where supported (requires --follow; other launches are always hidden)",
    )
    launch.add_argument("--track", action="store_true", help="Resolve the real worker behind wrapper commands")
    launch.add_argument("--expect", default=None, help="Expected worker process name")
    launch.add_argument("--exclude", action="append", default=None, help="Wrapper name to skip (repeatable)")
    launch.add_argument("--follow", action="store_true", help="Relay output to this terminal until the command closes it")
    launch.add_argument("argv", nargs=argparse.REMAINDER, help="Command and arguments, after --")

    alive = subparsers.add_parser("alive", help="Exit 0 when the PID is running")
    alive.add_argument("pid", type=int)

    resolve = subparsers.add_parser("resolve", help="Find the worker process below a PID")
    resolve.add_argument("pid", type=int)
    resolve.add_argument("--expect", default=None)
    resolve.add_argument("--exclude", action="append", default=None)
    resolve.add_argument("--max-wait-ms", type=int, default=None)

    kill = subparsers.add_parser("kill", help="Terminate a process and all of its descendants")
    kill.add_argument("pid", type=int)
    return parser


def _launch_spec(args: argparse.Namespace) -> LaunchSpec:
    argv: List[str] = list(args.argv)
    if argv and argv[0] == "--":
        argv = argv[1:]
    if not argv:
        raise SystemExit("proctrack launch: missing command (use: proctrack launch [options] -- CMD [ARGS...])")
    if args.hidden and not args.follow:
        raise SystemExit("proctrack launch: --hidden only applies with --follow; launches without --follow are always hidden")
    return LaunchSpec(
        command=argv[0],
        args=argv[1:],
        working_directory=args.cwd,
        hidden=args.hidden,
        detached=args.detached,
        track=args.track,
        expected_name=args.expect,
        exclude_names=args.exclude,
    )


async def _launch(supervisor: ProcessSupervisor, args: argparse.Namespace) -> int:
    spec = _launch_spec(args)
    if args.follow:
        result = await supervisor.launch(spec)
        print(result.pid, flush=True)
        await result.spawned.wait_for_output()
        return 0

    pid = await supervisor.launch_hidden(spec)
    if spec.track:
        resolved = await supervisor.resolve(supervisor.query_for(spec, pid))
        pid = resolved if resolved is not None else pid
    print(pid)
    return 0


async def _resolve(supervisor: ProcessSupervisor, args: argparse.Namespace) -> int:
    settings = supervisor.settings
    query = DescendantQuery(
        parent_pid=args.pid,
        expected_name=args.expect,
        exclude_names=tuple(args.exclude) if args.exclude is not None else settings.wrapper_excludes,
        max_wait_ms=args.max_wait_ms if args.max_wait_ms is not None else settings.resolve_max_wait_ms,
    )
    pid = await supervisor.resolve(query)
    print(pid if pid is not None else "none")
    return 0 if pid is not None else 1


async def _kill(supervisor: ProcessSupervisor, args: argparse.Namespace) -> int:
    outcome = await supervisor.terminate(args.pid)
    print(outcome.message)
    for failure in outcome.failures:
        print(f"  {failure}", file=sys.stderr)
    return 0


async def run(args: argparse.Namespace, supervisor: Optional[ProcessSupervisor] = None) -> int:
    if supervisor is None:
        sink = _print_line if getattr(args, "follow", False) else None
        supervisor = ProcessSupervisor.from_settings(SupervisorSettings.from_env(), sink=sink)

    if args.command == "alive":
        alive = supervisor.is_alive(args.pid)
        print("alive" if alive else "dead")
        return 0 if alive else 1
    if args.command == "launch":
        return await _launch(supervisor, args)
    if args.command == "resolve":
        return await _resolve(supervisor, args)
    if args.command == "kill":
        return await _kill(supervisor, args)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    try:
        return asyncio.run(run(args))
    except (ProcessSupervisionError, ConfigurationError) as exc:
        print(str(exc), file=sys.stderr)
        return 1


__all__ = ["build_parser", "main", "run"]

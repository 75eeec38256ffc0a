"""Command line entry point: renders the status line and manages settings."""

from __future__ import annotations

import argparse
import json
import os
import sys
from importlib import metadata

from ccstatus import claude, config, status, terminal
from ccstatus.render import post_process, render_line
from ccstatus.widgets import registry
from ccstatus.widgets.base import RenderContext

DEFAULT_DUMP_PATH = "/tmp/ccstatus-dump.json"


class _CommandError(Exception):
    """A command failed; the message is shown to the user."""


def _version() -> str:
    try:
        return metadata.version("ccstatus")
    except metadata.PackageNotFoundError:
        return "dev"


def _read_stdin() -> bytes:
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is not None:
        return buffer.read()
    return sys.stdin.read().encode("utf-8")


def _load_input() -> tuple[status.Session, config.Settings]:
    try:
        raw = _read_stdin()
    except OSError as err:
        raise _CommandError(f"reading stdin: {err}") from err
    try:
        session = status.parse(raw)
    except ValueError as err:
        raise _CommandError(f"parsing JSON: {err}") from err
    try:
        settings = config.load()
    except (OSError, ValueError) as err:
        raise _CommandError(f"loading settings: {err}") from err
    return session, settings


def _rendered_lines(session: status.Session, settings: config.Settings) -> list[str]:
    ctx = RenderContext(data=session, terminal_width=terminal.width())
    lines = (post_process(render_line(line, settings, ctx)) for line in settings.lines)
    return [line for line in lines if line]


def _run_status_line(args: argparse.Namespace) -> None:
    session, settings = _load_input()
    # Written in one go so a reader never sees a partial status line.
    output = "".join(line + "\n" for line in _rendered_lines(session, settings))
    if output:
        sys.stdout.write(output)
        sys.stdout.flush()


def write_dump(data: bytes, path: str) -> None:
    """Write data to path, pretty-printed when it is valid JSON."""
    path = os.path.normpath(path)
    payload = data
    try:
        parsed = json.loads(data)
    except ValueError:
        pass
    else:
        payload = (json.dumps(parsed, indent=2, ensure_ascii=False) + "\n").encode("utf-8")
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb") as handle:
        handle.write(payload)


def _run_dump(args: argparse.Namespace) -> None:
    try:
        raw = _read_stdin()
    except OSError as err:
        raise _CommandError(f"reading stdin: {err}") from err
    try:
        write_dump(raw, args.output)
    except OSError as err:
        print(f"Warning: failed to write dump: {err}", file=sys.stderr)
    else:
        print(f"Dumped JSON to {args.output}", file=sys.stderr)

    try:
        session = status.parse(raw)
    except ValueError as err:
        raise _CommandError(f"parsing JSON: {err}") from err
    try:
        settings = config.load()
    except (OSError, ValueError) as err:
        raise _CommandError(f"loading settings: {err}") from err
    for line in _rendered_lines(session, settings):
        print(line)


def _run_init(args: argparse.Namespace) -> None:
    path = config.config_path()
    if not args.force and os.path.exists(path):
        raise _CommandError(f"settings already exist at {path} (use --force to overwrite)")
    try:
        config.save(config.default_settings())
    except OSError as err:
        raise _CommandError(f"saving settings: {err}") from err
    print(f"Created {path}", file=sys.stderr)


def _run_install(args: argparse.Namespace) -> None:
    try:
        path = claude.install()
    except (OSError, ValueError) as err:
        raise _CommandError(str(err)) from err
    print(f"ccstatus installed successfully: {path}", file=sys.stderr)


def _run_uninstall(args: argparse.Namespace) -> None:
    try:
        path = claude.uninstall()
    except (OSError, ValueError) as err:
        raise _CommandError(str(err)) from err
    print(f"ccstatus uninstalled successfully: {path}", file=sys.stderr)


def _run_validate(args: argparse.Namespace) -> None:
    try:
        settings = config.load()
    except (OSError, ValueError) as err:
        raise _CommandError(f"invalid settings: {err}") from err
    for line in settings.lines:
        for item in line:
            if registry.get(item.type) is None:
                print(f"Warning: unknown widget type: {json.dumps(item.type)}", file=sys.stderr)
    print("Settings are valid", file=sys.stderr)


def _run_widgets(args: argparse.Namespace) -> None:
    print("Available widgets:")
    print()
    for name in sorted(registry.types()):
        widget = registry.get(name)
        if widget is None:
            continue
        color_info = f" ({widget.default_color})" if widget.default_color else ""
        print(f"  {name:<28} {widget.description}{color_info}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ccstatus",
        description=(
            "A customizable status line formatter for Claude Code CLI. "
            "When run without a subcommand, reads JSON from stdin and renders the status line."
        ),
    )
    parser.add_argument("--version", action="version", version=f"ccstatus version {_version()}")
    parser.set_defaults(handler=_run_status_line)
    commands = parser.add_subparsers(title="commands")

    init = commands.add_parser("init", help="Generate default settings.json")
    init.add_argument("--force", action="store_true", help="Overwrite existing settings.json")
    init.set_defaults(handler=_run_init)

    commands.add_parser("validate", help="Validate settings.json").set_defaults(
        handler=_run_validate
    )
    commands.add_parser("install", help="Register ccstatus in Claude Code settings").set_defaults(
        handler=_run_install
    )
    commands.add_parser(
        "uninstall", help="Remove ccstatus from Claude Code settings"
    ).set_defaults(handler=_run_uninstall)

    dump = commands.add_parser("dump", help="Dump raw JSON input from Claude Code for debugging")
    dump.add_argument(
        "-o", "--output", default=DEFAULT_DUMP_PATH, help="Output file path for the JSON dump"
    )
    dump.set_defaults(handler=_run_dump)

    commands.add_parser("widgets", help="List all available widget types").set_defaults(
        handler=_run_widgets
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    try:
        args.handler(args)
    except _CommandError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
from __future__ import annotations

import argparse
from collections.abc import Callable, Mapping

from tag_tools.common import TagToolError, log_error


def command_map() -> dict[str, Callable[[], None]]:
    """Return the action's commands, keyed by the name used in `action.yml`."""
    from tag_tools.create_version_tag import main as create_version_tag

    return {"create-version-tag": create_version_tag}


def build_parser(commands: Mapping[str, Callable[[], None]]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python3 -m tag_tools.cli",
        description="Run one version tag action command.",
    )
    parser.add_argument("command", choices=sorted(commands))
    return parser


def run_command(command: str, commands: Mapping[str, Callable[[], None]]) -> None:
    commands[command]()


def main(argv: list[str] | None = None) -> None:
    commands = command_map()
    args = build_parser(commands).parse_args(argv)

    try:
        run_command(args.command, commands)
    except Exception as exc:
        # One `::error::` annotation per failed step; known errors carry their own wording.
        detail = str(exc) if isinstance(exc, TagToolError) else f"{type(exc).__name__}: {exc}"
        log_error(detail)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()

"""
Script: tag_tools/common.py
What: Shared helper functions used by all `tag_tools` modules.
Doing: Wraps env and action-input reads, shell execution, workflow log commands, and output writes.
Why: Avoids duplicated helper code.
Goal: Keep behavior consistent across all helper modules.
"""

from __future__ import annotations

import os
import subprocess
import sys
import uuid
from typing import Mapping


class TagToolError(RuntimeError):
    """Raised when a workflow helper script hits a known error condition."""


def require_env(name: str) -> str:
    """Return a required environment variable or raise a clear error."""
    value = os.environ.get(name)
    if value is None or value == "":
        raise TagToolError(f"Missing required environment variable: {name}")
    return value


def optional_env(name: str, default: str = "") -> str:
    """Return an environment variable with a fallback default."""
    return os.environ.get(name, default)


def input_env_name(name: str) -> str:
    """
    Return the environment variable name the runner uses for one action input.

    Example: `version_regex` becomes `INPUT_VERSION_REGEX`.
    """
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str, *, required: bool = False) -> str:
    """Return an action input value with surrounding whitespace removed."""
    value = os.environ.get(input_env_name(name), "").strip()
    if required and not value:
        raise TagToolError(f"Input required and not supplied: {name}")
    return value


def get_bool_input(name: str) -> bool:
    # Only the exact string "true" turns a flag on; anything else is off.
    return get_input(name) == "true"


def run_shell(command: str) -> int:
    """
    Run a command through `bash -c` and return its exit code.

    Output goes straight to the job log. A non-zero exit is returned, not raised,
    so the caller decides what failure means.
    """
    result = subprocess.run(["bash", "-c", command], check=False)
    return result.returncode


def escape_command_data(value: str) -> str:
    """Encode text so it survives inside one `::command::` line."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def log_debug(message: str) -> None:
    """Print a debug line; the runner shows it only when step debug logging is on."""
    print(f"::debug::{escape_command_data(message)}")


def log_info(message: str) -> None:
    print(message)


def log_error(message: str) -> None:
    """Print an error annotation to stderr."""
    print(f"::error::{escape_command_data(message)}", file=sys.stderr)


def format_output(key: str, value: str) -> str:
    """
    Format one `GITHUB_OUTPUT` entry.

    Single-line values use `name=value`. Multi-line values use the heredoc form
    `name<<DELIMITER` so embedded newlines are kept.
    """
    if "\n" not in value and "\r" not in value:
        return f"{key}={value}\n"

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in key or delimiter in value:
        raise TagToolError(f"Unexpected delimiter collision while writing output {key}")
    return f"{key}<<{delimiter}\n{value}\n{delimiter}\n"


def write_github_outputs(values: Mapping[str, str]) -> None:
    """
    Write step outputs for GitHub Actions.

    GitHub provides a file path in `GITHUB_OUTPUT`; writing entries there makes
    each value available to later steps in the same job.
    """
    output_file = require_env("GITHUB_OUTPUT")
    with open(output_file, "a", encoding="utf-8") as handle:
        for key, value in values.items():
            handle.write(format_output(key, value))

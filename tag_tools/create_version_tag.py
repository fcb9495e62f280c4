"""
Script: tag_tools/create_version_tag.py
What: Creates a release tag when the triggering commit's title is a version.
Doing: Fetches the commit, matches its title against `version_regex`, runs the optional assertion command, then creates the tag object/ref.
Why: Lets a "bump version" commit publish its own tag without a manual step.
Goal: Emit `tag`, `message`, and `commit` outputs for later release steps.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Protocol

from tag_tools.common import (
    TagToolError,
    get_bool_input,
    get_input,
    log_debug,
    log_info,
    optional_env,
    require_env,
    run_shell,
    write_github_outputs,
)
from tag_tools.github_api import DEFAULT_API_URL, ApiResponse, GitHubClient


VERSION_PLACEHOLDER = "$version"


class GitDataClient(Protocol):
    def get_commit(self, sha: str) -> ApiResponse: ...

    def create_tag(self, tag: str, message: str, sha: str) -> ApiResponse: ...

    def create_ref(self, ref: str, sha: str) -> ApiResponse: ...


@dataclass(frozen=True)
class TagConfig:
    token: str
    version_regex: re.Pattern[str]
    version_assertion_command: str
    version_tag_prefix: str
    annotated: bool
    dry_run: bool
    repository: str
    commit_sha: str
    api_url: str = DEFAULT_API_URL


@dataclass(frozen=True)
class CommitInfo:
    sha: str
    message: str


@dataclass(frozen=True)
class TagResult:
    tag: str = ""
    message: str = ""
    commit: str = ""

    def as_outputs(self) -> dict[str, str]:
        return {"tag": self.tag, "message": self.message, "commit": self.commit}


def compile_version_regex(pattern: str) -> re.Pattern[str]:
    """Compile the caller's regex, turning syntax errors into a readable failure."""
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise TagToolError(f"Invalid version_regex '{pattern}': {exc}") from exc


def load_config() -> TagConfig:
    # Action inputs arrive as INPUT_* variables; run context comes from GITHUB_*.
    return TagConfig(
        token=get_input("token", required=True),
        version_regex=compile_version_regex(get_input("version_regex", required=True)),
        version_assertion_command=get_input("version_assertion_command"),
        version_tag_prefix=get_input("version_tag_prefix"),
        annotated=get_bool_input("annotated"),
        dry_run=get_bool_input("dry_run"),
        repository=require_env("GITHUB_REPOSITORY"),
        commit_sha=require_env("GITHUB_SHA"),
        api_url=optional_env("GITHUB_API_URL", DEFAULT_API_URL) or DEFAULT_API_URL,
    )


def split_commit_message(message: str) -> tuple[str, str]:
    """
    Split a commit message into `(title, body)`.

    The title is the first line. The body skips the second line, which by
    convention is the blank line between title and body.
    """
    lines = message.split("\n")
    return lines[0], "\n".join(lines[2:])


def match_version(version_regex: re.Pattern[str], title: str) -> str | None:
    """Return the version for a matching title, or None."""
    # The whole title is the version; the regex only decides whether it is one.
    if version_regex.search(title) is None:
        return None
    return title


def build_assertion_command(template: str, version: str) -> str:
    """Put the version into the first `$version` placeholder of the template."""
    return template.replace(VERSION_PLACEHOLDER, version, 1)


def build_tag_message(body: str, *, annotated: bool) -> str:
    return body if annotated else ""


def describe_created_tag(
    tag_name: str,
    commit_sha: str,
    tag_message: str,
    *,
    annotated: bool,
    dry_run: bool = False,
) -> str:
    """Build the human-readable summary line printed after tag creation."""
    verb = "Would create" if dry_run else "Created"
    summary = f"{verb} tag '{tag_name}' on commit {commit_sha}"
    if not annotated:
        return summary
    if not tag_message:
        return f"{summary} with empty message"
    indented = tag_message.replace("\n", "\n\t")
    return f"{summary} with message:\n\t{indented}"


def fetch_commit(client: GitDataClient, sha: str) -> CommitInfo:
    response = client.get_commit(sha)
    if response.status != 200:
        raise TagToolError(f"Failed to get commit data (status={response.status})")
    data = response.data if isinstance(response.data, dict) else {}
    return CommitInfo(sha=sha, message=str(data.get("message") or ""))


def publish_tag(
    client: GitDataClient,
    *,
    tag_name: str,
    tag_message: str,
    commit_sha: str,
    annotated: bool,
) -> None:
    """
    Create the tag object (annotated only) and the `refs/tags/<name>` ref.

    For annotated tags the ref points at the new tag object so `git describe`
    and `git show` see the message; otherwise it points at the commit.
    """
    ref_target = commit_sha
    if annotated:
        tag_response = client.create_tag(tag_name, tag_message, commit_sha)
        if tag_response.status != 201:
            raise TagToolError(f"Failed to create tag object (status={tag_response.status})")
        tag_data = tag_response.data if isinstance(tag_response.data, dict) else {}
        ref_target = str(tag_data.get("sha") or commit_sha)

    ref_response = client.create_ref(f"refs/tags/{tag_name}", ref_target)
    if ref_response.status != 201:
        raise TagToolError(f"Failed to create tag ref (status={ref_response.status})")


def create_version_tag(
    config: TagConfig,
    client: GitDataClient,
    shell: Callable[[str], int] = run_shell,
) -> TagResult:
    """
    Run the full tag flow and return the step outputs.

    A title that does not match the regex is not an error: the result is empty
    and the run still succeeds.
    """
    commit = fetch_commit(client, config.commit_sha)
    title, body = split_commit_message(commit.message)

    version = match_version(config.version_regex, title)
    if version is None:
        log_info(
            f"Commit title does not match version regex '{config.version_regex.pattern}': '{title}'"
        )
        return TagResult()

    if config.version_assertion_command:
        command_with_version = build_assertion_command(config.version_assertion_command, version)
        log_debug(f"Running version assertion command: {command_with_version}")
        return_code = shell(command_with_version)
        log_debug(f"Result of version assertion command: {return_code}")
        if return_code != 0:
            raise TagToolError(f"Version assertion failed. Double check the version: {version}")

    tag_message = build_tag_message(body, annotated=config.annotated)
    tag_name = f"{config.version_tag_prefix}{version}"
    log_debug(
        f"Creating tag '{tag_name}' on commit {commit.sha}"
        + (f" with message: '{tag_message}'" if config.annotated else "")
    )

    if config.dry_run:
        log_info("Dry run: skipping tag creation")
    else:
        publish_tag(
            client,
            tag_name=tag_name,
            tag_message=tag_message,
            commit_sha=commit.sha,
            annotated=config.annotated,
        )

    log_info(
        describe_created_tag(
            tag_name,
            commit.sha,
            tag_message,
            annotated=config.annotated,
            dry_run=config.dry_run,
        )
    )
    return TagResult(tag=tag_name, message=tag_message, commit=commit.sha)


def main() -> None:
    config = load_config()
    client = GitHubClient(config.repository, config.token, config.api_url)
    result = create_version_tag(config, client)

    # Outputs are always written, empty on a non-matching title, so later
    # steps can test `steps.<id>.outputs.tag != ''`.
    write_github_outputs(result.as_outputs())


if __name__ == "__main__":
    main()

"""
Script: tag_tools package
What: Holds the Python workflow helpers behind the version tag action.
Doing: Groups the CLI entrypoint, the GitHub API client, and shared utility code in one importable package.
Why: Keeps workflow logic readable and testable instead of inlining it in action YAML.
Goal: Provide a clear, maintainable home for release tag creation logic.
"""

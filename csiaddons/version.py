"""Build and runtime version details."""

from __future__ import annotations

import platform
import sys

# Filled in at release time.
VERSION = ""
GIT_COMMIT = ""


def version_lines() -> list[str]:
    """Return the lines that describe this build and its runtime."""
    return [
        f"Version: {VERSION}",
        f"Git Commit: {GIT_COMMIT}",
        f"Python Version: {platform.python_version()}",
        f"Implementation: {platform.python_implementation()}",
        f"Platform: {sys.platform}/{platform.machine()}",
    ]


def print_version() -> None:
    """Print the version details to standard output."""
    for line in version_lines():
        print(line)
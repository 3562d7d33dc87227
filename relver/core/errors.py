"""Process exit codes for the relver CLI.

The numeric values are part of the CLI contract: release pipelines branch on
them to tell a data problem (discrepancy, conflict) from bad input.
- 0: Success
- 1: User error (unknown release type, missing --patch-from, bad override)
- 2: Environment error (git/npm/gh could not be run for a required query)
- 3: Discrepancy between registry, git tags and GitHub releases
- 4: Computed version already exists
- 5: A source reported a version that cannot be parsed
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    DISCREPANCY = 3
    CONFLICT = 4
    INVALID_DATA = 5

"""Error presentation and exit code mapping for release errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from relver.core.errors import ErrorCode
from relver.output.console import Style
from relver.release.errors import ReleaseError

if TYPE_CHECKING:
    from relver.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print the diagnostic verbatim, then the hint dimmed."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    match error.kind:
        case "unknown_release_type" | "missing_patch_source" | "invalid_override":
            return int(ErrorCode.USER_ERROR)
        case "discrepancy" | "missing_release":
            return int(ErrorCode.DISCREPANCY)
        case "version_conflict":
            return int(ErrorCode.CONFLICT)
        case "invalid_version":
            return int(ErrorCode.INVALID_DATA)
        case "source_failed":
            return int(ErrorCode.ENV_ERROR)

"""Standardized CLI exit codes for specsentry.

Exit code scheme:

    0  SUCCESS           -- command completed, nothing to report
    1  GENERAL_ERROR     -- unexpected failure, crash, unhandled exception
    2  USAGE_ERROR       -- invalid arguments, bad flags, unknown command (Click default)
    3  SPEC_DIR_MISSING  -- the configured spec directory does not exist
    4  PARSE_FAILURE     -- a source file could not be parsed into a tree
    5  GATE_FAILURE      -- --strict was given and methods lack specs

CI jobs can tell "methods lack specs" (5) apart from "tool crashed" (1).
"""

from __future__ import annotations

import click

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_SPEC_DIR_MISSING: int = 3
EXIT_PARSE_FAILURE: int = 4
EXIT_GATE_FAILURE: int = 5


class SpecSentryError(click.ClickException):
    """Base class for specsentry errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class SpecDirMissingError(SpecSentryError):
    """Raised when the spec directory does not exist."""

    def __init__(self, message: str = "`spec` directory is missing"):
        super().__init__(message, EXIT_SPEC_DIR_MISSING)


class ParseFailureError(SpecSentryError):
    """Raised when a source file cannot be turned into a syntax tree."""

    def __init__(self, message: str = "Could not parse source file."):
        super().__init__(message, EXIT_PARSE_FAILURE)


class GateFailureError(SpecSentryError):
    """Raised when --strict is set and findings exist."""

    def __init__(self, message: str = "Public methods without specs."):
        super().__init__(message, EXIT_GATE_FAILURE)

"""Exception hierarchy for oaspec.

All exceptions inherit from :class:`OaspecError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`oaspec.exit_codes`.
The top-level error handler in :func:`oaspec.app.main` catches
``OaspecError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    OaspecError (exit 1)
    +-- InvalidUsageError              (exit 2)
    +-- ConfigError                    (exit 1)
    +-- LoadError                      (exit 3)
    +-- DecodeError                    (exit 4)
    +-- ResolveError                   (exit 5)
    |   +-- SpecNotFoundError
    |   +-- UnsupportedReferenceError
    |   +-- ComponentsRequiredError
    |   +-- CycleDetectedError
    |   +-- UnexpectedComponentTypeError
    +-- ValidationError                (exit 6)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from oaspec.exit_codes import (
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_LOAD_ERROR,
    EXIT_RESOLVE_ERROR,
    EXIT_VALIDATION_FAILED,
)

if TYPE_CHECKING:
    from oaspec.validation.issues import ValidationIssue


class OaspecError(Exception):
    """Base exception for all oaspec errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`oaspec.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(OaspecError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(OaspecError):
    """Raised when a configuration file is missing, malformed, or contains invalid values."""


class LoadError(OaspecError):
    """Raised when document text cannot be read or is neither JSON nor YAML."""

    exit_code = EXIT_LOAD_ERROR


class DecodeError(OaspecError):
    """Raised when a raw tree does not decode into the requested type.

    Args:
        type_name: Name of the type that was being decoded.
        cause: The underlying error, usually a pydantic validation error.
    """

    exit_code = EXIT_DECODE_ERROR

    def __init__(self, type_name: str, cause: Exception):
        super().__init__(f"unable to decode {type_name}: {cause}")
        self.type_name = type_name
        self.cause = cause


class ResolveError(OaspecError):
    """Base class for failures while following a ``$ref`` through the registry."""

    exit_code = EXIT_RESOLVE_ERROR


class SpecNotFoundError(ResolveError):
    """Raised when a cell holds neither a reference nor a value, or a reference names a missing entry."""


class UnsupportedReferenceError(ResolveError):
    """Raised for references that do not point into ``#/components/<category>/<name>``."""


class ComponentsRequiredError(ResolveError):
    """Raised when a reference is followed but there is no registry (or no matching table)."""


class CycleDetectedError(ResolveError):
    """Raised when a reference chain revisits an identifier.

    Args:
        ref: The identifier that was seen twice.
        chain: Identifiers visited so far, in resolution order.
    """

    def __init__(self, ref: str, chain: Sequence[str]):
        self.ref = ref
        self.chain = list(chain)
        path = " -> ".join([*self.chain, ref])
        super().__init__(f"cycle detected while resolving '{ref}': {path}")


class UnexpectedComponentTypeError(ResolveError):
    """Raised when a registry entry is not of the type the reference site expects."""


class ValidationError(OaspecError):
    """Raised by :func:`oaspec.validation.ensure_valid` when the validator reports findings.

    Args:
        issues: Every finding, in the order they were discovered.
    """

    exit_code = EXIT_VALIDATION_FAILED

    def __init__(self, issues: Sequence[ValidationIssue], message: Optional[str] = None):
        self.issues = list(issues)
        if message is None:
            message = f"document has {len(self.issues)} validation issue(s)"
            if self.issues:
                message += ": " + "; ".join(str(issue) for issue in self.issues[:5])
        super().__init__(message)

"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~oaspec.exceptions.OaspecError` subclass.
CI scripts can inspect the exit code to tell a broken document apart from a
document that merely has findings.

Example::

    $ oaspec validate openapi.yaml
    $ echo $?
    6   # EXIT_VALIDATION_FAILED -- the document has findings
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_LOAD_ERROR = 3
"""The document text could not be read or parsed as JSON/YAML."""

EXIT_DECODE_ERROR = 4
"""The parsed document does not fit the typed OpenAPI model."""

EXIT_RESOLVE_ERROR = 5
"""A ``$ref`` could not be resolved against the components registry."""

EXIT_VALIDATION_FAILED = 6
"""The document was decoded but the validator reported findings."""

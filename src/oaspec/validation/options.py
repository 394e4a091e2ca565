"""Switches that relax or skip individual validator rules."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ValidationOptions(BaseModel):
    """Validator settings. Every switch defaults to the strict behaviour.

    Loaded from configuration files (see :mod:`oaspec.config`), so unknown
    keys are rejected to surface typos early.
    """

    model_config = ConfigDict(extra="forbid")

    skip_example_validation: bool = False
    """Do not check ``example``/``examples`` values against their schema."""

    skip_default_validation: bool = False
    """Do not check schema ``default`` values against their schema."""

    allow_extension_name_without_prefix: bool = False
    """Accept extension keys that do not start with ``x-``."""

    allow_undefined_tags_in_operation: bool = False
    """Accept operation tags that are not declared in the root ``tags`` list."""

    allow_request_body_for_get: bool = False
    allow_request_body_for_head: bool = False
    allow_request_body_for_delete: bool = False

    allow_unused_components: bool = False
    """Do not report registry entries that nothing references."""

    validate_data_as_json: bool = False
    """Let :func:`~oaspec.validation.validate_data` parse string values as JSON first."""

    max_depth: int = Field(default=200, ge=1)
    """Nesting depth at which the walker stops descending and reports an issue.

    Decoded documents rarely get this deep, since pydantic rejects very deep
    input while decoding; the guard mostly protects graphs built in code.
    """

    def allows_request_body(self, method: str) -> bool:
        """Whether a request body is acceptable on an operation for *method*."""
        return {
            "get": self.allow_request_body_for_get,
            "head": self.allow_request_body_for_head,
            "delete": self.allow_request_body_for_delete,
        }.get(method, True)

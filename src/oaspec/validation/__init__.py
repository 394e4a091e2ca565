"""Document validation.

:func:`validate_document` returns every finding as a
:class:`ValidationIssue`; :func:`ensure_valid` raises
:class:`~oaspec.exceptions.ValidationError` instead. :func:`validate_data`
checks a runtime value against one schema of a document.
"""

from oaspec.validation.issues import ValidationIssue
from oaspec.validation.options import ValidationOptions
from oaspec.validation.validator import ensure_valid, validate_data, validate_document

__all__ = [
    "ValidationIssue",
    "ValidationOptions",
    "ensure_valid",
    "validate_data",
    "validate_document",
]

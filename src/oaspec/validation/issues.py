"""Validation findings."""

from __future__ import annotations

from pydantic import BaseModel

REQUIRED = "required"
MUTUALLY_EXCLUSIVE = "mutually exclusive"
UNUSED = "unused"


class ValidationIssue(BaseModel):
    """One finding, tagged with the document path it was found at.

    Paths use dots for fields and brackets for map keys and list indices,
    e.g. ``paths[/pets].get.parameters[0].name``. The document root is ``""``.
    """

    path: str
    message: str

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{self.path}: {self.message}"

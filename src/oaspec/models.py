"""Configuration models for oaspec.

These are the shapes of the JSON configuration files read by
:mod:`oaspec.config`. The OpenAPI object model itself lives in
:mod:`oaspec.spec`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from oaspec.validation.options import ValidationOptions


class OutputConfig(BaseModel):
    """Default output preferences stored in :class:`GlobalConfig`."""

    format: str = Field(default="auto", description="Output format: auto, json, plain, rich")


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/oaspec/config.json``.

    Fields here have the lowest precedence and can be overridden by project
    config, environment variables, or CLI flags. See
    :func:`~oaspec.config.resolve_options` for the full precedence chain.
    """

    output: OutputConfig = Field(default_factory=OutputConfig)
    validation: ValidationOptions = Field(default_factory=ValidationOptions)

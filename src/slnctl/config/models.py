"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, slnctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel

from slnctl.domain.membership import DEFAULT_CONFIGURATIONS, DEFAULT_PLATFORMS
from slnctl.infrastructure.filesystem import PROJECT_EXTENSIONS
from slnctl.infrastructure.slnfile import SOLUTION_EXTENSION


class SolutionConfig(BaseModel):
    """[solution] section."""

    model_config = {"frozen": True}

    extension: str = SOLUTION_EXTENSION
    project_extensions: tuple[str, ...] = PROJECT_EXTENSIONS


class MembershipConfig(BaseModel):
    """[membership] section."""

    model_config = {"frozen": True}

    case_sensitive: bool = True
    default_configurations: tuple[str, ...] = DEFAULT_CONFIGURATIONS
    default_platforms: tuple[str, ...] = DEFAULT_PLATFORMS

"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, minish.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ShellConfig(BaseModel):
    """[shell] section."""

    model_config = {"frozen": True}

    banner: bool = True
    prompt_suffix: str = "> "
    farewell: str = "Goodbye!"


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    disabled: list[str] = Field(default_factory=list)

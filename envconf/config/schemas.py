"""Pydantic base model for settings populated by the loader."""

from __future__ import annotations

from typing import Mapping

from pydantic import BaseModel, ConfigDict

from envconf.config import loader


class EnvSettings(BaseModel):
    """
    Settings model that loads itself.

    Declare the env key of each field as its alias, e.g.
    ``port: int = Field(8000, alias="PORT", ge=1)``. Fields without an alias are
    never read from the environment (config files still match them by name).
    """

    model_config = ConfigDict(populate_by_name=True)

    def load(self, *path: str, environ: Mapping[str, str] | None = None, case_sensitive: bool = False):
        """Populate and validate in place; raises ConfigError on failure."""
        return loader.load(self, *path, environ=environ, case_sensitive=case_sensitive)

    def load_or_exit(self, *path: str, environ: Mapping[str, str] | None = None, case_sensitive: bool = False):
        """Populate and validate in place; logs and exits on failure."""
        return loader.load_or_exit(self, *path, environ=environ, case_sensitive=case_sensitive)

"""
Global Configuration and Defaults.

This module centralizes the module-resolution rules (extension probe order,
index file names) and the user-tunable settings of an unbarrel run.
Settings can be loaded from a YAML file and overridden from the CLI.
"""

import logging
from pathlib import Path
from typing import List, Literal, Set

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.errors import ConfigError

logger = logging.getLogger(__name__)

# --- Module Resolution ---

# Typed-superset extensions before plain ones, "script" before "markup" variant
SOURCE_EXTENSIONS: List[str] = [".ts", ".tsx", ".js", ".jsx"]

# Basename probed inside a directory specifier
INDEX_BASENAME = "index"

# Files parsed with the markup (JSX) grammar
MARKUP_EXTENSIONS: Set[str] = {".tsx", ".jsx"}

# --- Safety Limits ---

# Longest re-export / wildcard chain followed before giving up
MAX_RESOLUTION_DEPTH = 256

# --- Output ---

DEFAULT_QUOTE_STYLE = "single"

# Default name of the optional config file looked up in the working directory
DEFAULT_CONFIG_FILENAME = ".barrel-utils.yaml"


class UnbarrelConfig(BaseModel):
    """
    Settings for a single unbarrel run.

    Attributes:
        quote_style: Quote character used for generated module specifiers.
        max_depth: Maximum length of a resolution chain.
        extensions: Source extensions in probe order.
    """

    quote_style: Literal["single", "double"] = DEFAULT_QUOTE_STYLE
    max_depth: int = Field(default=MAX_RESOLUTION_DEPTH, gt=0)
    extensions: List[str] = Field(default_factory=lambda: list(SOURCE_EXTENSIONS))

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def index_files(self) -> List[str]:
        return [f"{INDEX_BASENAME}{ext}" for ext in self.extensions]

    @property
    def quote_char(self) -> str:
        return "'" if self.quote_style == "single" else '"'

    @classmethod
    def load(cls, config_path: Path) -> "UnbarrelConfig":
        """
        Load settings from a YAML file.

        A missing file yields the defaults. Unknown keys and invalid values
        raise ConfigError.
        """
        if not config_path.exists():
            logger.debug(f"No config file at {config_path}, using defaults")
            return cls()

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(str(config_path), f"Failed to parse YAML: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(str(config_path), "Top-level value must be a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(str(config_path), str(e)) from e

    def with_overrides(self, **overrides) -> "UnbarrelConfig":
        """Return a copy with the non-None overrides applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return self.model_validate({**self.model_dump(), **updates})

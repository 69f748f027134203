"""Loader settings.

Settings are merged from three layers (later overrides earlier):

1. Defaults
2. YAML file (``requirefs.yaml`` in the working directory, or an explicit
   path), ``loader:`` section
3. Environment variables (``REQUIREFS_EXTENSIONS``, ``REQUIREFS_NATIVE_REQUIRE``,
   ``REQUIREFS_ENCODING``)
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator

from .resolver import DEFAULT_EXTENSIONS
from .resolver import normalize_extensions

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = Path("requirefs.yaml")
ENV_PREFIX = "REQUIREFS_"
ENV_FIELDS = ("extensions", "native_require", "encoding")


class LoaderSettings(BaseModel):
    """Configuration for a ModuleLoader."""

    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="Ordered suffixes probed after the exact path",
    )
    native_require: bool = Field(
        default=True,
        description="Let nested require() fall back to the host's importlib before the virtual tree",
    )
    encoding: str = Field(default="utf-8", description="Text encoding of module files")

    @field_validator("extensions", mode="before")
    @classmethod
    def split_extensions(cls, value: Any) -> Any:
        """Accept a comma-separated string (environment form)."""
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("extensions")
    @classmethod
    def dot_extensions(cls, value: list[str]) -> list[str]:
        return normalize_extensions(value)


def load_settings(path: Path | None = None, environ: Mapping[str, str] | None = None) -> LoaderSettings:
    """Build settings from defaults, a YAML file and the environment.

    Args:
        path: Settings file (default: ./requirefs.yaml); a missing file is skipped
        environ: Environment mapping (default: os.environ)

    Returns:
        Validated LoaderSettings

    Raises:
        pydantic.ValidationError: A value has the wrong type
    """
    values: dict[str, Any] = {}
    values.update(_read_settings_file(path or DEFAULT_SETTINGS_FILE))
    values.update(_read_environment(os.environ if environ is None else environ))
    return LoaderSettings(**values)


def _read_settings_file(config_path: Path) -> dict[str, Any]:
    """Read the ``loader`` section of a YAML settings file."""
    if not config_path.exists():
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to read {config_path}: {e}")
        return {}

    if not isinstance(config, dict):
        return {}

    section = config.get("loader")
    if not isinstance(section, dict):
        if section is not None:
            logger.warning(f"Ignoring non-mapping 'loader' section in {config_path}")
        return {}

    logger.debug(f"Loaded settings from {config_path}: {sorted(section)}")
    return section


def _read_environment(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for name in ENV_FIELDS:
        env_key = f"{ENV_PREFIX}{name.upper()}"
        if (env_value := environ.get(env_key)) is not None:
            values[name] = env_value
    return values

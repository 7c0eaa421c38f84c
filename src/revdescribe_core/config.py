"""Layered settings for describe runs.

Precedence, lowest first: field defaults, ``[tool.revdescribe]`` in
``pyproject.toml``, ``.revdescribe.toml`` (or an explicit config file),
``REVDESCRIBE_*`` environment variables, explicit overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

CONFIG_FILENAME = ".revdescribe.toml"
PYPROJECT_TABLE = ("tool", "revdescribe")
ENV_PREFIX = "REVDESCRIBE_"


class DescribeSettings(BaseModel):
    """Inputs of a single describe run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    repo: Path = Path(".")
    ref: str = "HEAD"
    abbrev: int = Field(7, ge=4, le=40)
    subdir: Optional[str] = None
    show_dirty: bool = False

    def subpaths(self) -> List[str]:
        if not self.subdir:
            return []
        return [p for p in self.subdir.split(";") if p.strip()]


class ConfigLoader:
    """Resolve effective :class:`DescribeSettings` from files and environment."""

    ENV_KEYS = ("ref", "abbrev", "subdir", "show_dirty")

    @staticmethod
    def read_toml(path: Path) -> Dict[str, Any]:
        try:
            with path.open("rb") as fh:
                return tomllib.load(fh)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e

    @staticmethod
    def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
        return {str(k).replace("-", "_"): v for k, v in data.items()}

    @classmethod
    def file_layers(cls, root: Path, config_path: Optional[Path] = None) -> List[Dict[str, Any]]:
        layers: List[Dict[str, Any]] = []

        pyproject = root / "pyproject.toml"
        if pyproject.is_file():
            table: Any = cls.read_toml(pyproject)
            for key in PYPROJECT_TABLE:
                table = table.get(key, {}) if isinstance(table, dict) else {}
            if not isinstance(table, dict):
                raise ConfigError(f"[tool.revdescribe] in {pyproject} must be a table")
            if table:
                layers.append(cls._normalize_keys(table))

        if config_path is not None:
            if not config_path.is_file():
                raise ConfigError(f"Config file not found: {config_path}")
            layers.append(cls._normalize_keys(cls.read_toml(config_path)))
        else:
            local = root / CONFIG_FILENAME
            if local.is_file():
                layers.append(cls._normalize_keys(cls.read_toml(local)))

        return layers

    @classmethod
    def env_layer(cls, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if environ is None else environ
        layer: Dict[str, Any] = {}
        for key in cls.ENV_KEYS:
            value = env.get(ENV_PREFIX + key.upper())
            if value is not None and value != "":
                layer[key] = value
        return layer

    @classmethod
    def load_settings(
        cls,
        repo: Path = Path("."),
        *,
        config_path: Optional[Path] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> DescribeSettings:
        merged: Dict[str, Any] = {}
        for layer in cls.file_layers(Path(repo), config_path):
            merged.update(layer)
        merged.update(cls.env_layer(environ))
        merged.update({k: v for k, v in (overrides or {}).items() if v is not None})
        merged["repo"] = Path(repo)
        try:
            return DescribeSettings.model_validate(merged)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}") from e

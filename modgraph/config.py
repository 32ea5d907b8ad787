"""Config file loading.

A project may carry a ``.modgraph.json`` next to its root build descriptor, or
one can be passed explicitly. Keys that are present replace the defaults of
:class:`~modgraph.models.AnalyzerConfig`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from modgraph.errors import ConfigError
from modgraph.models import AnalyzerConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = ".modgraph.json"


class ConfigFile(BaseModel):
    # Unknown keys are kept so they can be reported, never applied
    model_config = ConfigDict(extra="allow")

    descriptor_name: str | None = None
    configurations: list[str] | None = None
    skip_dirs: list[str] | None = None
    name_translations: dict[str, str] | None = None
    priorities: dict[str, int] | None = None
    common_modules: list[str] | None = None


def find_project_config(project_dir: Path) -> Path | None:
    candidate = project_dir / PROJECT_CONFIG_NAME
    return candidate if candidate.is_file() else None


def load_config_file(path: Path) -> ConfigFile:
    """Read and validate a JSON config file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    try:
        return ConfigFile.model_validate(json.loads(raw))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Config file {path} is invalid:\n{e}") from e


def apply_config_file(config: AnalyzerConfig, config_file: ConfigFile) -> AnalyzerConfig:
    """Overlay the keys set in ``config_file`` onto ``config`` in place."""
    ignored = sorted(config_file.model_extra or {})
    for key in ignored:
        logger.warning("ignoring unknown config key: %s", key)
    values = config_file.model_dump(exclude_none=True, exclude=set(ignored))
    for key, value in values.items():
        logger.debug("config override: %s=%r", key, value)
        setattr(config, key, value)
    if not config.configurations:
        raise ConfigError("At least one dependency configuration keyword is required")
    return config


def load_analyzer_config(
    project_dir: Path,
    config_path: Path | None = None,
    **overrides,
) -> AnalyzerConfig:
    """Build an :class:`AnalyzerConfig` from defaults, a config file and overrides."""
    config = AnalyzerConfig(project_dir=project_dir, **overrides)
    path = config_path or find_project_config(project_dir)
    if path is not None:
        logger.info("Using config file %s", path)
        apply_config_file(config, load_config_file(path))
    return config

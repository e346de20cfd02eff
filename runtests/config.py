"""Runner configuration and working context.

Configuration is read from an optional YAML file in the working
directory (runtests.yaml or .runtests.yaml), or from the file named by
the RUNTESTS_CONFIG environment variable.
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

import yaml

from .errors import InvalidConfig

CONFIG_ENV_VAR = "RUNTESTS_CONFIG"
CONFIG_FILE_NAMES = ("runtests.yaml", ".runtests.yaml")


@dataclass(frozen=True)
class WorkingContext:
    """Directory that bare runs and relative specifiers resolve against."""
    directory: Path

    @classmethod
    def current(cls) -> "WorkingContext":
        return cls(Path.cwd())

    @classmethod
    def of(cls, directory: Union[str, Path]) -> "WorkingContext":
        return cls(Path(directory).resolve())


@dataclass
class RunnerConfig:
    """Settings for test discovery and reporting."""
    pattern: str = "test*.py"
    top_level_dir: Optional[str] = None
    timestamp_format: str = "%d-%b-%Y %H:%M:%S"
    log_level: str = "WARNING"


def find_config_file(context: WorkingContext) -> Optional[Path]:
    """Locate the config file for a context, or None if there is none."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    for file_name in CONFIG_FILE_NAMES:
        candidate = context.directory / file_name
        if candidate.is_file():
            return candidate
    return None


def load_config(context: WorkingContext) -> RunnerConfig:
    """Load the runner configuration for a working context.

    Returns the defaults when no config file exists.

    Raises:
        InvalidConfig: If the file cannot be read or holds bad values.
    """
    path = find_config_file(context)
    if path is None:
        return RunnerConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise InvalidConfig(str(path), f"cannot be read ({e.strerror})") from e
    except yaml.YAMLError as e:
        raise InvalidConfig(str(path), f"malformed YAML ({e})") from e

    return parse_config_data(data, source=str(path))


def parse_config_data(data, source: str = "<inline>") -> RunnerConfig:
    """Build a RunnerConfig from already loaded YAML data."""
    if data is None:
        return RunnerConfig()
    if not isinstance(data, dict):
        raise InvalidConfig(source, f"expected a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(RunnerConfig)}
    values = {k: v for k, v in data.items() if k in known}

    for key, value in values.items():
        if key == "top_level_dir" and value is None:
            continue
        if not isinstance(value, str):
            raise InvalidConfig(source, f"'{key}' must be a string")

    if "pattern" in values and not values["pattern"]:
        raise InvalidConfig(source, "'pattern' must not be empty")

    config = RunnerConfig(**values)
    config.log_level = config.log_level.upper()
    if config.log_level not in logging.getLevelNamesMapping():
        raise InvalidConfig(source, f"unknown log_level '{config.log_level}'")
    return config

# Copyright 2026 The lenra-check Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# CHECK CONFIGURATION
# -----------------------------------------------------------------------------
# Precedence (last wins):
# 1. Built-in defaults
# 2. lenra-check.yaml in the working directory (or --config)
# 3. Environment (.env is loaded first):
#    LENRA_APP_URL, LENRA_APP_TIMEOUT, LENRA_CHECK_STRICT, LENRA_CHECK_IGNORE
# 4. Command line flags (applied by the CLI, ignore lists are merged)
# -----------------------------------------------------------------------------

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
from rich.console import Console

from lenra_check.infra.app_client import DEFAULT_APP_URL

console = Console()

CONFIG_PATH = Path("lenra-check.yaml")

ENV_APP_URL = "LENRA_APP_URL"
ENV_APP_TIMEOUT = "LENRA_APP_TIMEOUT"
ENV_STRICT = "LENRA_CHECK_STRICT"
ENV_IGNORE = "LENRA_CHECK_IGNORE"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigError(Exception):
    """Raised when the configuration file or environment holds invalid values."""

    pass


class CheckConfig(BaseModel):
    """Settings of a check run."""

    app_url: str = DEFAULT_APP_URL
    timeout: float | None = Field(default=None, gt=0)
    strict: bool = False
    ignore: list[str] = Field(default_factory=list)


def _read_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must hold a mapping of settings")
    return data


def _read_env() -> dict:
    values: dict = {}
    if os.getenv(ENV_APP_URL):
        values["app_url"] = os.environ[ENV_APP_URL]
    if os.getenv(ENV_APP_TIMEOUT):
        values["timeout"] = os.environ[ENV_APP_TIMEOUT]
    if os.getenv(ENV_STRICT):
        values["strict"] = os.environ[ENV_STRICT].strip().lower() in _TRUE_VALUES
    if os.getenv(ENV_IGNORE):
        values["ignore"] = [p.strip() for p in os.environ[ENV_IGNORE].split(",") if p.strip()]
    return values


def load_config(path: Path | None = None, env_file: Path | None = None) -> CheckConfig:
    """
    Load the check configuration.

    Args:
        path: The YAML file. `lenra-check.yaml` in the working directory if None.
            A missing file means defaults.
        env_file: The dotenv file to load. `.env` in the working directory if None.

    Returns:
        The validated CheckConfig.

    Raises:
        ConfigError: If a value is invalid.
    """
    load_dotenv(env_file or Path(".env"))
    config_path = path or CONFIG_PATH
    values = _read_file(config_path)
    if not values:
        console.print(f"[dim][CONFIG] {config_path} not found or empty, using defaults[/dim]")
    values.update(_read_env())

    try:
        return CheckConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

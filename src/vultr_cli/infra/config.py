"""Infrastructure: settings loaded from the environment and a YAML file.

Precedence is environment first, then the config file, then defaults.
The default config file is optional; an explicitly requested one is
not.

Rules
-----
* No ``print()`` — callers handle user-facing output.
* The API key is never logged.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from vultr_cli.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_URL: str = "https://api.vultr.com/v2"
DEFAULT_TIMEOUT: float = 30.0
DEFAULT_CONFIG_PATH: Path = Path("~/.vultr-cli.yaml")

ENV_API_KEY: str = "VULTR_API_KEY"
ENV_API_URL: str = "VULTR_API_URL"
ENV_TIMEOUT: str = "VULTR_API_TIMEOUT"


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved runtime settings for the API gateway."""

    api_key: str
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        return f"Settings(api_key='***', api_url={self.api_url!r}, timeout={self.timeout!r})"


def load_settings(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Resolve settings from *environ* and the YAML config file.

    Raises
    ------
    ConfigurationError
        If no API key is configured, an explicit config file is missing,
        or the file is not a valid YAML mapping.
    """
    env = os.environ if environ is None else environ
    file_values = _read_config_file(config_path)

    api_key = env.get(ENV_API_KEY) or _str_or_none(file_values.get("api-key"))
    if not api_key:
        raise ConfigurationError(
            "No Vultr API key configured.",
            hint=(
                f"Export {ENV_API_KEY}=<key> or add 'api-key: <key>' "
                f"to {DEFAULT_CONFIG_PATH}."
            ),
        )

    api_url = (
        env.get(ENV_API_URL)
        or _str_or_none(file_values.get("api-url"))
        or DEFAULT_API_URL
    )
    timeout = _parse_timeout(env.get(ENV_TIMEOUT) or file_values.get("timeout"))

    return Settings(api_key=api_key, api_url=api_url.rstrip("/"), timeout=timeout)


def _read_config_file(config_path: str | Path | None) -> dict[str, Any]:
    """Load the YAML mapping at *config_path* (or the default location)."""
    explicit = config_path is not None
    path = Path(config_path if explicit else DEFAULT_CONFIG_PATH).expanduser()

    if not path.is_file():
        if explicit:
            raise ConfigurationError(f"Config file not found: {path}")
        return {}

    logger.debug("Reading config file %s", path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigurationError(f"Could not read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping of settings.",
        )
    return data


def _parse_timeout(raw: object) -> float:
    if raw is None or raw == "":
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid timeout value: {raw!r}") from exc
    if timeout <= 0:
        raise ConfigurationError(f"Timeout must be positive, got {timeout}")
    return timeout


def _str_or_none(value: object) -> str | None:
    if value is None:
        return None
    return str(value)

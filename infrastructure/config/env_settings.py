# infrastructure/config/env_settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values

DEFAULT_TIMEOUT_SEC = 20.0
DEFAULT_LOG_LEVEL = "INFO"

ENV_BASE_URI = "REQUEST_BASE_URI"
ENV_TIMEOUT_SEC = "REQUEST_TIMEOUT_SEC"
ENV_LOG_LEVEL = "REQUEST_LOG_LEVEL"


@dataclass(frozen=True)
class ClientSettings:
    base_uri: Optional[str] = None
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env_file: Union[str, Path, None] = ".env") -> "ClientSettings":
        """
        Build settings from a .env file and the process environment.

        A key defined in the .env file takes precedence over the environment.
        """
        values = _collect(env_file)

        raw_timeout = values.get(ENV_TIMEOUT_SEC)
        timeout = DEFAULT_TIMEOUT_SEC
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ValueError(f"{ENV_TIMEOUT_SEC} must be a number, got: {raw_timeout!r}") from e
            if timeout <= 0:
                raise ValueError(f"{ENV_TIMEOUT_SEC} must be positive, got: {raw_timeout!r}")

        return cls(
            base_uri=values.get(ENV_BASE_URI) or None,
            timeout_sec=timeout,
            log_level=(values.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
        )


def _collect(env_file: Union[str, Path, None]) -> Dict[str, Optional[str]]:
    values: Dict[str, Optional[str]] = {}
    if env_file is not None and Path(env_file).exists():
        values.update(dotenv_values(env_file))

    env: Mapping[str, str] = os.environ
    for key in (ENV_BASE_URI, ENV_TIMEOUT_SEC, ENV_LOG_LEVEL):
        if key not in values and key in env:
            values[key] = env[key]
    return values

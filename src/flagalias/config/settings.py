from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from flagalias.constants import (
    DEFAULT_ENCODING,
    ENV_COMMAND_TIMEOUT,
    ENV_ENCODING,
    ENV_JSON_LOGS,
    ENV_PLACEHOLDER,
    FLAG_KEY_PLACEHOLDER,
)
from flagalias.core.errors import AliasConfigError


@dataclass(frozen=True)
class ResolverConfig:
    """Immutable knobs shared by every component of a resolution call."""
    placeholder: str = FLAG_KEY_PLACEHOLDER
    default_timeout: Optional[int] = None
    encoding: str = DEFAULT_ENCODING
    # Route resolver logs through a JSON-formatted base logger.
    json_logs: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ResolverConfig':
        """Build a config from FLAGALIAS_* environment variables."""
        env = os.environ if environ is None else environ

        raw_timeout = (env.get(ENV_COMMAND_TIMEOUT) or '').strip()
        timeout: Optional[int] = None
        if raw_timeout:
            try:
                timeout = int(raw_timeout)
            except ValueError:
                raise AliasConfigError(
                    f'{ENV_COMMAND_TIMEOUT} must be an integer number of seconds, got {raw_timeout!r}'
                ) from None

        return cls(
            placeholder=env.get(ENV_PLACEHOLDER) or FLAG_KEY_PLACEHOLDER,
            default_timeout=timeout,
            encoding=env.get(ENV_ENCODING) or DEFAULT_ENCODING,
            json_logs=env.get(ENV_JSON_LOGS) == '1',
        )

from __future__ import annotations

"""Project-wide constants used across modules."""

# Marker replaced verbatim with the flag key inside file-pattern templates.
FLAG_KEY_PLACEHOLDER: str = 'FLAG_KEY'

DEFAULT_ENCODING: str = 'utf-8'

ENV_PLACEHOLDER = 'FLAGALIAS_PLACEHOLDER'
ENV_COMMAND_TIMEOUT = 'FLAGALIAS_COMMAND_TIMEOUT'
ENV_ENCODING = 'FLAGALIAS_ENCODING'
ENV_JSON_LOGS = 'FLAGALIAS_JSON_LOGS'

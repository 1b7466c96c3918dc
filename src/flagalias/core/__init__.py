from __future__ import annotations

"""Public surface for flagalias.core: rule models, errors and protocols."""

from flagalias.core.errors import (
    AliasConfigError,
    AliasError,
    CommandExecutionError,
    CommandOutputError,
    CommandSpawnError,
    CommandTimeoutError,
    FileReadError,
    GlobError,
    MissingFileError,
    PatternCompileError,
)
from flagalias.core.interfaces import CommandRunnerProtocol, GlobResolverProtocol
from flagalias.core.models import (
    AliasRule,
    AliasType,
    CaseRule,
    CommandRule,
    FilePatternRule,
    LiteralRule,
)

__all__ = [
    # Models
    "AliasRule",
    "AliasType",
    "CaseRule",
    "CommandRule",
    "FilePatternRule",
    "LiteralRule",
    # Errors
    "AliasConfigError",
    "AliasError",
    "CommandExecutionError",
    "CommandOutputError",
    "CommandSpawnError",
    "CommandTimeoutError",
    "FileReadError",
    "GlobError",
    "MissingFileError",
    "PatternCompileError",
    # Protocols
    "CommandRunnerProtocol",
    "GlobResolverProtocol",
]

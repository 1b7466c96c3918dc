from __future__ import annotations

"""
Error taxonomy for alias resolution.

Every failure raised by flagalias derives from :class:`AliasError`. Errors
carry the context needed to diagnose them (rule identifier, path, flag or
command) both in the message and as attributes. None of them is recoverable
inside a resolution call: the first one aborts the whole call.
"""

from typing import Optional, Sequence


class AliasError(Exception):
    """Base class for all alias resolution failures."""

    def __init__(
        self,
        message: str,
        *,
        rule: Optional[str] = None,
        path: Optional[str] = None,
        flag: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.rule = rule
        self.path = path
        self.flag = flag


class AliasConfigError(AliasError):
    """A raw rule mapping is malformed or misses a required field."""


class GlobError(AliasError):
    """A path glob is syntactically invalid."""

    def __init__(self, message: str, *, pattern: str, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.pattern = pattern


class MissingFileError(AliasError):
    """A globbed path vanished before it could be read into the cache."""


class FileReadError(AliasError):
    """A globbed path exists but could not be read."""


class PatternCompileError(AliasError):
    """A pattern template does not compile once the flag key is substituted."""

    def __init__(self, message: str, *, pattern: str, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.pattern = pattern


class CommandExecutionError(AliasError):
    """An alias command exited with a non-zero status or could not run."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = '',
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class CommandSpawnError(CommandExecutionError):
    """The alias command could not be started at all."""


class CommandTimeoutError(CommandExecutionError, TimeoutError):
    """The alias command did not finish before its deadline and was killed."""

    def __init__(self, message: str, *, timeout: float, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.timeout = timeout


class CommandOutputError(AliasError):
    """The alias command's stdout is not a JSON array of strings."""

    def __init__(self, message: str, *, output: str = '', **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.output = output

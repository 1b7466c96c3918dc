from __future__ import annotations
"""External alias commands.

An alias command is a program that receives a flag key on stdin and prints
a JSON array of alias strings on stdout. One process is spawned per
(flag, rule) pair; nothing is pooled or reused.

The command string is split on whitespace only: the first token is the
executable and the remaining tokens are passed as arguments verbatim. There
is no shell, so quoting, escaping, globbing, pipes and variable expansion
are not available. Wrap such needs in a script and configure the script.
"""

import json
import logging
import subprocess
from typing import List, Optional, Sequence

from flagalias.constants import DEFAULT_ENCODING
from flagalias.core.errors import (
    CommandExecutionError,
    CommandOutputError,
    CommandSpawnError,
    CommandTimeoutError,
)
from flagalias.core.interfaces import CommandRunnerProtocol
from flagalias.core.models import CommandRule
from flagalias.logging.helpers import get_logger


def split_command(command: str) -> List[str]:
    """Tokenize *command* on runs of whitespace."""
    return (command or '').split()


class SubprocessRunner:
    """Default `CommandRunnerProtocol` implementation.

    Raises the `subprocess` exceptions untouched; `CommandInvoker` maps them
    onto the alias error taxonomy. On timeout the child is killed before
    `subprocess.TimeoutExpired` propagates.
    """

    def run(self, argv: Sequence[str], *, stdin: bytes, cwd: str, timeout: Optional[float]) -> bytes:
        proc = subprocess.run(  # noqa: S603 - argv comes from trusted configuration
            list(argv),
            input=stdin,
            capture_output=True,
            cwd=cwd,
            timeout=timeout,
            check=True,
        )
        return proc.stdout


def parse_aliases(output: bytes, *, encoding: str = DEFAULT_ENCODING) -> List[str]:
    """Decode command stdout as a JSON array of strings."""
    try:
        text = output.decode(encoding)
        data = json.loads(text)
    except (UnicodeDecodeError, ValueError) as exc:
        raise CommandOutputError(
            f'could not unmarshal json output of alias command: {exc}',
            output=output.decode(encoding, errors='replace'),
        ) from exc
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise CommandOutputError(
            'could not unmarshal json output of alias command: expected an array of strings',
            output=text,
        )
    return data


class CommandInvoker:
    def __init__(
        self,
        runner: Optional[CommandRunnerProtocol] = None,
        *,
        default_timeout: Optional[int] = None,
        encoding: str = DEFAULT_ENCODING,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._runner: CommandRunnerProtocol = runner or SubprocessRunner()
        self._default_timeout = default_timeout
        self._encoding = encoding
        self._log = logger or get_logger('command')

    def _deadline(self, rule: CommandRule) -> Optional[int]:
        if rule.timeout is None and self._default_timeout is not None:
            return CommandRule(rule.command, self._default_timeout).deadline
        return rule.deadline

    def invoke(self, rule: CommandRule, flag: str, base_dir: str) -> List[str]:
        """Run the rule's command for *flag* inside *base_dir* and return its aliases."""
        argv = split_command(rule.command)
        if not argv:
            raise CommandSpawnError('failed to execute alias command: empty command', flag=flag)
        timeout = self._deadline(rule)

        self._log.debug('running alias command %r for %r (timeout=%s)', argv, flag, timeout)
        try:
            stdout = self._runner.run(argv, stdin=flag.encode(self._encoding), cwd=base_dir, timeout=timeout)
        except subprocess.TimeoutExpired as exc:
            raise CommandTimeoutError(
                f'failed to execute alias command: {argv[0]} timed out after {timeout}s',
                timeout=float(timeout or 0),
                command=argv,
                flag=flag,
            ) from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or b'').decode(self._encoding, errors='replace').strip()
            raise CommandExecutionError(
                f'failed to execute alias command: {exc}',
                command=argv,
                returncode=exc.returncode,
                stderr=stderr,
                flag=flag,
            ) from exc
        except (OSError, ValueError) as exc:
            raise CommandSpawnError(
                f'failed to execute alias command: {exc}',
                command=argv,
                flag=flag,
            ) from exc

        try:
            return parse_aliases(stdout, encoding=self._encoding)
        except CommandOutputError as exc:
            exc.flag = flag
            raise

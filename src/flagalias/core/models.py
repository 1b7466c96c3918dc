from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence, Tuple, Union

from flagalias.core.errors import AliasConfigError


def _squash(text: str) -> str:
    return ''.join(ch for ch in text if ch not in '_-. ').lower()


class AliasType(str, enum.Enum):
    """Canonical alias rule types."""

    LITERAL = 'literal'
    CAMEL_CASE = 'camelCase'
    PASCAL_CASE = 'pascalCase'
    SNAKE_CASE = 'snakeCase'
    UPPER_SNAKE_CASE = 'upperSnakeCase'
    KEBAB_CASE = 'kebabCase'
    DOT_CASE = 'dotCase'
    FILE_PATTERN = 'filePattern'
    COMMAND = 'command'

    @classmethod
    def parse(cls, text: str) -> 'AliasType':
        """Match *text* case-insensitively against the canonical types.

        Separators are ignored, so 'snake_case', 'SnakeCase' and 'snake-case'
        all resolve to SNAKE_CASE. 'UPPER_SNAKE' is accepted as well.
        """
        key = _squash(text or '')
        found = _BY_SQUASHED.get(key)
        if found is None:
            raise AliasConfigError(f'unknown alias type {text!r}')
        return found

    @property
    def is_case(self) -> bool:
        return self in CASE_TYPES


_BY_SQUASHED = {_squash(t.value): t for t in AliasType}
_BY_SQUASHED['uppersnake'] = AliasType.UPPER_SNAKE_CASE

CASE_TYPES = frozenset({
    AliasType.CAMEL_CASE,
    AliasType.PASCAL_CASE,
    AliasType.SNAKE_CASE,
    AliasType.UPPER_SNAKE_CASE,
    AliasType.KEBAB_CASE,
    AliasType.DOT_CASE,
})


@dataclass(frozen=True)
class LiteralRule:
    """Fixed aliases per flag key."""
    flags: Mapping[str, Sequence[str]] = field(default_factory=dict)

    @property
    def kind(self) -> AliasType:
        return AliasType.LITERAL


@dataclass(frozen=True)
class CaseRule:
    """One naming-convention rewrite of the flag key."""
    convention: AliasType

    def __post_init__(self) -> None:
        if self.convention not in CASE_TYPES:
            raise AliasConfigError(f'{self.convention.value!r} is not a case convention')

    @property
    def kind(self) -> AliasType:
        return self.convention


@dataclass(frozen=True)
class FilePatternRule:
    """Aliases captured by regex templates from the contents of globbed files."""
    paths: Tuple[str, ...]
    patterns: Tuple[str, ...]
    name: Optional[str] = None

    @property
    def kind(self) -> AliasType:
        return AliasType.FILE_PATTERN

    def label(self, index: int) -> str:
        """Diagnostic identifier: the configured name, else the rule position."""
        return self.name or str(index)


@dataclass(frozen=True)
class CommandRule:
    """Aliases printed as a JSON array by an external program.

    `command` is split on whitespace: the first token is the executable and
    the rest are its arguments. No shell quoting or escaping is interpreted,
    so arguments cannot contain spaces.
    """
    command: str
    timeout: Optional[int] = None

    @property
    def kind(self) -> AliasType:
        return AliasType.COMMAND

    @property
    def deadline(self) -> Optional[int]:
        """Timeout in seconds, or None when the command may run unbounded."""
        if self.timeout is None or self.timeout <= 0:
            return None
        return self.timeout


AliasRule = Union[LiteralRule, CaseRule, FilePatternRule, CommandRule]

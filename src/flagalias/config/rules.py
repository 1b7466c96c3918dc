from __future__ import annotations
"""Conversion of raw alias configuration into typed rules.

The raw shape is what a YAML or JSON configuration loader produces for the
`aliases` section:

    - type: camelCase
    - type: literal
      flags:
        my-flag: [MY_FLAG, myFlagConst]
    - type: filePattern
      name: constants
      paths: ["src/**/*.py"]
      patterns: ["(\\w+) = 'FLAG_KEY'"]
    - type: command
      command: ./scripts/aliases
      timeout: 5

Each entry is validated on the way in; the first invalid entry raises
`AliasConfigError` naming its position.
"""
import re
from typing import Any, List, Mapping, Optional, Sequence

from flagalias.constants import FLAG_KEY_PLACEHOLDER
from flagalias.core.errors import AliasConfigError, PatternCompileError
from flagalias.core.models import (
    AliasRule,
    AliasType,
    CaseRule,
    CommandRule,
    FilePatternRule,
    LiteralRule,
)

_SAMPLE_KEY = 'sample-flag-key'


def _str_list(value: Any, *, field_name: str, where: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise AliasConfigError(f'{where}: {field_name!r} must be a list of strings', rule=where)
    if not all(isinstance(v, str) for v in value):
        raise AliasConfigError(f'{where}: {field_name!r} must contain only strings', rule=where)
    return tuple(value)


def _parse_literal(raw: Mapping[str, Any], where: str) -> LiteralRule:
    flags = raw.get('flags') or {}
    if not isinstance(flags, Mapping):
        raise AliasConfigError(f"{where}: 'flags' must map flag keys to alias lists", rule=where)
    parsed = {
        str(key): _str_list(values, field_name=f'flags.{key}', where=where)
        for key, values in flags.items()
    }
    return LiteralRule(flags=parsed)


def _parse_file_pattern(raw: Mapping[str, Any], where: str) -> FilePatternRule:
    name = raw.get('name')
    if name is not None and not isinstance(name, str):
        raise AliasConfigError(f"{where}: 'name' must be a string", rule=where)
    return FilePatternRule(
        paths=_str_list(raw.get('paths'), field_name='paths', where=where),
        patterns=_str_list(raw.get('patterns'), field_name='patterns', where=where),
        name=name or None,
    )


def _parse_command(raw: Mapping[str, Any], where: str) -> CommandRule:
    command = raw.get('command')
    if command is not None and not isinstance(command, str):
        raise AliasConfigError(f"{where}: 'command' must be a string", rule=where)
    timeout = raw.get('timeout')
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, int)):
        raise AliasConfigError(f"{where}: 'timeout' must be an integer number of seconds", rule=where)
    return CommandRule(command=command or '', timeout=timeout)


def validate_rule(rule: AliasRule, index: int, *, placeholder: str = FLAG_KEY_PLACEHOLDER) -> None:
    """Reject rules that could never produce aliases."""
    where = f'alias {index}'
    if isinstance(rule, FilePatternRule):
        where = f"filepattern '{rule.label(index)}'"
        if not rule.paths:
            raise AliasConfigError(f'{where}: must provide at least one path', rule=where)
        if not rule.patterns:
            raise AliasConfigError(f'{where}: must provide at least one pattern', rule=where)
        for template in rule.patterns:
            if placeholder not in template:
                raise AliasConfigError(f'{where}: pattern {template!r} must contain {placeholder}', rule=where)
            try:
                re.compile(template.replace(placeholder, _SAMPLE_KEY))
            except re.error as exc:
                raise PatternCompileError(
                    f'{where}: invalid pattern {template!r}: {exc}', pattern=template, rule=where
                ) from exc
    elif isinstance(rule, CommandRule):
        if not rule.command.strip():
            raise AliasConfigError(f'{where}: command aliases must provide a command', rule=where)
    elif isinstance(rule, LiteralRule):
        if not rule.flags:
            raise AliasConfigError(f'{where}: literal aliases must map at least one flag', rule=where)


def rule_from_mapping(
    raw: Mapping[str, Any],
    index: int = 0,
    *,
    placeholder: str = FLAG_KEY_PLACEHOLDER,
) -> AliasRule:
    """Build and validate one typed rule from its raw configuration entry."""
    where = f'alias {index}'
    if not isinstance(raw, Mapping):
        raise AliasConfigError(f'{where}: expected a mapping, got {type(raw).__name__}', rule=where)
    try:
        kind = AliasType.parse(str(raw.get('type') or ''))
    except AliasConfigError as exc:
        raise AliasConfigError(f'{where}: {exc}', rule=where) from exc

    rule: AliasRule
    if kind is AliasType.LITERAL:
        rule = _parse_literal(raw, where)
    elif kind is AliasType.FILE_PATTERN:
        rule = _parse_file_pattern(raw, where)
    elif kind is AliasType.COMMAND:
        rule = _parse_command(raw, where)
    else:
        rule = CaseRule(kind)

    validate_rule(rule, index, placeholder=placeholder)
    return rule


def rules_from_config(
    raw: Optional[Sequence[Mapping[str, Any]]],
    *,
    placeholder: str = FLAG_KEY_PLACEHOLDER,
) -> List[AliasRule]:
    """Build the ordered rule list from the raw `aliases` configuration section."""
    if raw is None:
        return []
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise AliasConfigError('aliases must be a list of rule mappings')
    return [rule_from_mapping(item, idx, placeholder=placeholder) for idx, item in enumerate(raw)]

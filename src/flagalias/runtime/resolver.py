from __future__ import annotations

"""
Alias resolution driver.

`AliasResolver.resolve` computes, for every requested flag key, the ordered
and deduplicated list of alternate spellings produced by the configured
alias rules:

    1. the file content cache is built once for all file-pattern rules;
    2. each flag is run through every rule in configured order;
    3. the per-flag list is deduplicated, first occurrence wins.

Resolution is fail-fast: the first error aborts the call and no partial
mapping is returned. Each flag is assembled in its own list, and the cache
is read-only once built.
"""

import logging
import os
from typing import Callable, Dict, List, Optional, Sequence

from flagalias.config.settings import ResolverConfig
from flagalias.core.interfaces import CommandRunnerProtocol, GlobResolverProtocol
from flagalias.core.models import (
    AliasRule,
    AliasType,
    CaseRule,
    CommandRule,
    FilePatternRule,
    LiteralRule,
)
from flagalias.core.report import ResolutionReport, StageTimer
from flagalias.discovery.glob_resolver import GlobResolver
from flagalias.io.content_cache import ContentCacheBuilder, FileContentCache
from flagalias.logging.factory import DefaultLoggerFactory
from flagalias.logging.helpers import get_logger
from flagalias.naming.case_converter import convert
from flagalias.processing.pattern_extractor import PatternExtractor
from flagalias.runtime.command_invoker import CommandInvoker
from flagalias.utils.dedupe import dedupe

_Handler = Callable[['AliasResolver', AliasRule, int, str, str, FileContentCache], List[str]]


class AliasResolver:
    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        *,
        globber: Optional[GlobResolverProtocol] = None,
        runner: Optional[CommandRunnerProtocol] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._cfg = config or ResolverConfig()
        if logger is None and self._cfg.json_logs:
            logger = DefaultLoggerFactory(json_logs=True).get_logger('resolver')
        self._log = logger or get_logger('resolver')
        globber = globber or GlobResolver()
        self._cache_builder = ContentCacheBuilder(globber)
        self._extractor = PatternExtractor(
            globber,
            placeholder=self._cfg.placeholder,
            encoding=self._cfg.encoding,
        )
        self._invoker = CommandInvoker(
            runner,
            default_timeout=self._cfg.default_timeout,
            encoding=self._cfg.encoding,
        )
        self._report = ResolutionReport()

    @property
    def report(self) -> ResolutionReport:
        """Report of the most recent `resolve` call."""
        return self._report

    # -------- Strategies --------

    def _literal(self, rule: LiteralRule, index: int, flag: str, base_dir: str, cache: FileContentCache) -> List[str]:
        return list(rule.flags.get(flag, ()))

    def _case(self, rule: CaseRule, index: int, flag: str, base_dir: str, cache: FileContentCache) -> List[str]:
        return [convert(flag, rule.convention)]

    def _file_pattern(self, rule: FilePatternRule, index: int, flag: str, base_dir: str, cache: FileContentCache) -> List[str]:
        return self._extractor.extract(rule, flag, base_dir, cache, index=index)

    def _command(self, rule: CommandRule, index: int, flag: str, base_dir: str, cache: FileContentCache) -> List[str]:
        self._report.add_command()
        return self._invoker.invoke(rule, flag, base_dir)

    _STAGES = {
        AliasType.LITERAL: 'literal',
        AliasType.FILE_PATTERN: 'file_pattern',
        AliasType.COMMAND: 'command',
    }

    def _dispatch(self, rule: AliasRule, index: int, flag: str, base_dir: str, cache: FileContentCache) -> List[str]:
        handler = _HANDLERS[rule.kind]
        stage = 'case' if rule.kind.is_case else self._STAGES[rule.kind]
        self._log.debug('rule %d (%s) for %r', index, rule.kind.value, flag)
        with StageTimer(self._report, stage):
            aliases = handler(self, rule, index, flag, base_dir, cache)
        self._report.add_aliases(rule.kind.value, len(aliases))
        return aliases

    # -------- Entry point --------

    def resolve(self, flags: Sequence[str], rules: Sequence[AliasRule], base_dir: str) -> Dict[str, List[str]]:
        """Return a mapping of every flag in *flags* to its deduplicated aliases."""
        base = os.path.abspath(base_dir)
        self._report = ResolutionReport(flags=len(flags), rules=len(rules))

        with StageTimer(self._report, 'cache_build'):
            cache = self._cache_builder.build(rules, base, report=self._report)

        result: Dict[str, List[str]] = {}
        for flag in flags:
            collected: List[str] = []
            for idx, rule in enumerate(rules):
                collected.extend(self._dispatch(rule, idx, flag, base, cache))
            result[flag] = dedupe(collected)

        self._report.finish(aliases_total=sum(len(v) for v in result.values()))
        self._log.debug(
            'resolved aliases for %d flag(s) with %d rule(s): %d alias(es)',
            len(result), len(rules), self._report.aliases_total,
        )
        return result


_HANDLERS: Dict[AliasType, _Handler] = {
    AliasType.LITERAL: AliasResolver._literal,
    AliasType.CAMEL_CASE: AliasResolver._case,
    AliasType.PASCAL_CASE: AliasResolver._case,
    AliasType.SNAKE_CASE: AliasResolver._case,
    AliasType.UPPER_SNAKE_CASE: AliasResolver._case,
    AliasType.KEBAB_CASE: AliasResolver._case,
    AliasType.DOT_CASE: AliasResolver._case,
    AliasType.FILE_PATTERN: AliasResolver._file_pattern,
    AliasType.COMMAND: AliasResolver._command,
}

_missing = set(AliasType) - set(_HANDLERS)
if _missing:
    raise RuntimeError(f'no alias handler for: {sorted(t.value for t in _missing)}')


def generate_aliases(
    flags: Sequence[str],
    rules: Sequence[AliasRule],
    base_dir: str,
    *,
    config: Optional[ResolverConfig] = None,
) -> Dict[str, List[str]]:
    """Map each flag key in *flags* to its aliases under *rules*, relative to *base_dir*.

    Without an explicit *config*, settings come from the FLAGALIAS_* environment.
    """
    return AliasResolver(config or ResolverConfig.from_env()).resolve(flags, rules, base_dir)

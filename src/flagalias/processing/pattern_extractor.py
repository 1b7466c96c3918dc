"""
pattern_extractor – Harvest aliases from file contents with regex templates.

A template is a regular expression in which a placeholder token (``FLAG_KEY``
by default) stands for the flag key. The token is replaced verbatim, without
escaping, so the key becomes part of the expression itself. Every capture
group of every match is an alias; matches of templates without groups
contribute nothing.
"""

from __future__ import annotations

import logging
import os
import re
from typing import List, Optional

from flagalias.constants import DEFAULT_ENCODING, FLAG_KEY_PLACEHOLDER
from flagalias.core.errors import GlobError, PatternCompileError
from flagalias.core.interfaces import GlobResolverProtocol
from flagalias.core.models import FilePatternRule
from flagalias.discovery.glob_resolver import GlobResolver
from flagalias.io.content_cache import FileContentCache
from flagalias.logging.helpers import get_logger


def render_pattern(template: str, flag: str, *, placeholder: str = FLAG_KEY_PLACEHOLDER) -> str:
    """Replace every occurrence of *placeholder* in *template* with *flag*."""
    return template.replace(placeholder, flag)


def compile_pattern(
    template: str,
    flag: str,
    *,
    placeholder: str = FLAG_KEY_PLACEHOLDER,
    rule: Optional[str] = None,
) -> re.Pattern[str]:
    source = render_pattern(template, flag, placeholder=placeholder)
    try:
        return re.compile(source)
    except re.error as exc:
        raise PatternCompileError(
            f"filepattern '{rule}': invalid pattern '{source}': {exc}",
            pattern=template,
            rule=rule,
            flag=flag,
        ) from exc


class PatternExtractor:
    def __init__(
        self,
        globber: Optional[GlobResolverProtocol] = None,
        *,
        placeholder: str = FLAG_KEY_PLACEHOLDER,
        encoding: str = DEFAULT_ENCODING,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._globber: GlobResolverProtocol = globber or GlobResolver()
        self._placeholder = placeholder
        self._encoding = encoding
        self._log = logger or get_logger('extract')

    def concat_contents(self, rule: FilePatternRule, label: str, base_dir: str, cache: FileContentCache) -> bytes:
        """Join the cached bytes of the rule's matches, glob by glob, in match order.

        A file matched by several globs contributes its content once per glob.
        """
        parts: List[bytes] = []
        for pattern in rule.paths:
            try:
                matches = self._globber.expand(base_dir, pattern)
            except GlobError as exc:
                raise GlobError(
                    f"filepattern '{label}': could not process path glob '{os.path.join(base_dir, pattern)}'",
                    pattern=pattern,
                    rule=label,
                ) from exc
            for path in matches:
                data = cache.get(path)
                if data:
                    parts.append(data)
        return b''.join(parts)

    def extract(
        self,
        rule: FilePatternRule,
        flag: str,
        base_dir: str,
        cache: FileContentCache,
        *,
        index: int = 0,
    ) -> List[str]:
        label = rule.label(index)
        text = self.concat_contents(rule, label, base_dir, cache).decode(self._encoding, errors='replace')

        aliases: List[str] = []
        for template in rule.patterns:
            rx = compile_pattern(template, flag, placeholder=self._placeholder, rule=label)
            if not rx.groups:
                continue
            for m in rx.finditer(text):
                # Groups that did not participate in the match yield an empty alias.
                aliases.extend(g if g is not None else '' for g in m.groups())
        self._log.debug('filepattern %r: %d alias(es) for %r', label, len(aliases), flag)
        return aliases

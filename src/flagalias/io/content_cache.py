from __future__ import annotations
"""Read-once store of the files referenced by file-pattern rules.

`ContentCacheBuilder` expands every path glob of every file-pattern rule,
reads each distinct file exactly once and freezes the result into a
`FileContentCache`. The cache is then shared, read-only, by every flag and
rule evaluated in the same resolution call.
"""
import logging
import os
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Sequence

from flagalias.core.errors import FileReadError, GlobError, MissingFileError
from flagalias.core.interfaces import GlobResolverProtocol
from flagalias.core.models import AliasRule, FilePatternRule
from flagalias.core.report import ResolutionReport
from flagalias.discovery.glob_resolver import GlobResolver
from flagalias.logging.helpers import get_logger, trace_io
from flagalias.utils.dedupe import dedupe


class FileContentCache(Mapping[str, bytes]):
    """Immutable mapping of absolute file path → raw file bytes."""

    def __init__(self, contents: Optional[Mapping[str, bytes]] = None) -> None:
        self._contents = MappingProxyType(dict(contents or {}))

    def __getitem__(self, path: str) -> bytes:
        return self._contents[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._contents)

    def __len__(self) -> int:
        return len(self._contents)

    def __repr__(self) -> str:
        return f'FileContentCache({len(self)} files, {self.total_bytes} bytes)'

    @property
    def total_bytes(self) -> int:
        return sum(len(v) for v in self._contents.values())


class ContentCacheBuilder:
    def __init__(
        self,
        globber: Optional[GlobResolverProtocol] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._globber: GlobResolverProtocol = globber or GlobResolver()
        self._log = logger or get_logger('cache')

    def _expand_rule(self, rule: FilePatternRule, label: str, base_dir: str) -> list[str]:
        paths: list[str] = []
        for pattern in rule.paths:
            try:
                paths.extend(self._globber.expand(base_dir, pattern))
            except GlobError as exc:
                raise GlobError(
                    f"filepattern '{label}': could not process path glob '{os.path.join(base_dir, pattern)}'",
                    pattern=pattern,
                    rule=label,
                ) from exc
        return dedupe(paths)

    @staticmethod
    def _read(path: str, label: str) -> bytes:
        if not os.path.exists(path):
            raise MissingFileError(
                f"filepattern '{label}': could not find file at path '{path}'",
                rule=label,
                path=path,
            )
        try:
            with open(path, 'rb') as fh:
                return fh.read()
        except OSError as exc:
            raise FileReadError(
                f"filepattern '{label}': could not process file at path '{path}': {exc}",
                rule=label,
                path=path,
            ) from exc

    def build(
        self,
        rules: Sequence[AliasRule],
        base_dir: str,
        *,
        report: Optional[ResolutionReport] = None,
    ) -> FileContentCache:
        """Load every file matched by any file-pattern rule in *rules*.

        Files already loaded for an earlier rule are not read again.
        """
        contents: Dict[str, bytes] = {}
        for idx, rule in enumerate(rules):
            if not isinstance(rule, FilePatternRule):
                continue
            label = rule.label(idx)
            for path in self._expand_rule(rule, label, base_dir):
                if path in contents:
                    trace_io(self._log, 'cache hit', rule=label, path=path)
                    continue
                data = self._read(path, label)
                contents[path] = data
                trace_io(self._log, 'cached file', rule=label, path=path, size=len(data))

        cache = FileContentCache(contents)
        if report is not None:
            report.add_cached(files=len(cache), size=cache.total_bytes)
        self._log.debug('content cache ready: %d file(s), %d byte(s)', len(cache), cache.total_bytes)
        return cache

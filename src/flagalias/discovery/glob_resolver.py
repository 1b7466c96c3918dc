from __future__ import annotations

"""Expansion of path globs relative to a base directory.

Patterns follow `glob` semantics with `recursive=True`: `**` spans any
number of directories (including none), `*`, `?` and `[...]` match within a
single path segment, and hidden entries are matched like any other. Only
regular files are returned; directories matched by a pattern are dropped.

Matches come back in walk order: the files of a directory in lexical
order, followed by its subdirectories, themselves visited in lexical order.
"""

import glob
import logging
import os
from typing import List, Optional, Tuple

from flagalias.core.errors import GlobError
from flagalias.logging.helpers import get_logger
from flagalias.utils.dedupe import dedupe


def _check_pattern(base_dir: str, pattern: str) -> None:
    shown = os.path.join(base_dir, pattern or '')
    if not pattern or not pattern.strip():
        raise GlobError(f"could not process path glob '{shown}': empty pattern", pattern=pattern)
    if os.path.isabs(pattern):
        raise GlobError(
            f"could not process path glob '{shown}': pattern must be relative to the base directory",
            pattern=pattern,
        )
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == '[':
            j = i + 1
            if j < n and pattern[j] in '!^':
                j += 1
            if j < n and pattern[j] == ']':
                j += 1
            close = pattern.find(']', j)
            if close == -1:
                raise GlobError(
                    f"could not process path glob '{shown}': unterminated character class",
                    pattern=pattern,
                )
            i = close + 1
            continue
        i += 1


def _walk_order(match: str) -> Tuple[Tuple[str, ...], str]:
    """Top-down walk order: a directory's files, then its subdirectories, each lexically."""
    head, tail = os.path.split(os.path.normpath(match))
    return (tuple(head.split(os.sep)) if head else (), tail)


class GlobResolver:
    """Default `GlobResolverProtocol` implementation backed by `glob.glob`."""

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('glob')

    def expand(self, base_dir: str, pattern: str) -> List[str]:
        _check_pattern(base_dir, pattern)
        try:
            matches = glob.glob(pattern, root_dir=base_dir, recursive=True, include_hidden=True)
        except (OSError, ValueError) as exc:
            raise GlobError(
                f"could not process path glob '{os.path.join(base_dir, pattern)}': {exc}",
                pattern=pattern,
            ) from exc

        paths = [
            os.path.join(base_dir, m)
            for m in sorted(matches, key=_walk_order)
            if os.path.isfile(os.path.join(base_dir, m))
        ]
        paths = dedupe(os.path.normpath(p) for p in paths)
        self._log.debug('glob %r under %s matched %d file(s)', pattern, base_dir, len(paths))
        return paths


def glob_to_absolute_paths(base_dir: str, pattern: str) -> List[str]:
    """Expand *pattern* under *base_dir* with the default resolver."""
    return GlobResolver().expand(os.path.abspath(base_dir), pattern)

"""
Interfaces for the pluggable seams of the alias resolver.

These protocols let callers (and tests) swap the glob expansion and the
process runner without touching the resolver.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class GlobResolverProtocol(Protocol):
    def expand(self, base_dir: str, pattern: str) -> List[str]:
        """Return the deduplicated, ordered absolute paths matching *pattern* under *base_dir*."""
        ...


@runtime_checkable
class CommandRunnerProtocol(Protocol):
    def run(self, argv: Sequence[str], *, stdin: bytes, cwd: str, timeout: Optional[float]) -> bytes:
        """Run *argv* and return its captured stdout."""
        ...

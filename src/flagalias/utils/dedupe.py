from __future__ import annotations

from typing import Hashable, Iterable, List, TypeVar

T = TypeVar('T', bound=Hashable)


def dedupe(items: Iterable[T]) -> List[T]:
    """Drop repeated items, keeping the first occurrence of each in order."""
    return list(dict.fromkeys(items))

"""
case_converter – Rewrite a flag key into a conventional naming style.

Every converter splits the key into words first and then reassembles them:

  • runs of characters that are neither letters nor digits separate words
  • a lower-case letter followed by an upper-case letter starts a new word
  • inside an upper-case run, the last capital starts a new word when it is
    followed by a lower-case letter ("JSONData" → "JSON", "Data")
  • a switch between digits and letters starts a new word ("v2" → "v", "2")

Keys without any boundary are a single word. Converters never fail: a key
with no letters or digits at all converts to the empty string.

The camel-style converters capitalize each word and lower-case the rest of
it, acronyms included: PascalCase turns "userID" into "UserId", not
"UserID". That keeps every converter idempotent, and "MY_FLAG_KEY" becomes
"MyFlagKey" rather than "MYFLAGKEY".
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List

from flagalias.core.models import AliasType

_SEPARATOR_RX = re.compile(r'[\W_]+')


def _char_class(ch: str) -> str:
    if ch.isdigit():
        return 'd'
    if ch.isupper():
        return 'u'
    return 'l'


def _split_chunk(chunk: str) -> List[str]:
    words: List[str] = []
    start = 0
    for i in range(1, len(chunk)):
        prev, cur = _char_class(chunk[i - 1]), _char_class(chunk[i])
        nxt = _char_class(chunk[i + 1]) if i + 1 < len(chunk) else None
        boundary = (
            (prev == 'd') != (cur == 'd')
            or (prev == 'l' and cur == 'u')
            or (prev == 'u' and cur == 'u' and nxt == 'l')
        )
        if boundary:
            words.append(chunk[start:i])
            start = i
    words.append(chunk[start:])
    return words


def split_words(key: str) -> List[str]:
    """Split *key* into its words, preserving their original casing."""
    words: List[str] = []
    for chunk in _SEPARATOR_RX.split(key or ''):
        if chunk:
            words.extend(_split_chunk(chunk))
    return words


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_camel(key: str) -> str:
    """UpperCamel / PascalCase: "my-flag-key" → "MyFlagKey"."""
    return ''.join(_capitalize(w) for w in split_words(key))


def to_lower_camel(key: str) -> str:
    """lowerCamel: "my-flag-key" → "myFlagKey"."""
    words = split_words(key)
    if not words:
        return ''
    return words[0].lower() + ''.join(_capitalize(w) for w in words[1:])


def to_delimited(key: str, delimiter: str) -> str:
    """Lower-case words joined by *delimiter*."""
    return delimiter.join(w.lower() for w in split_words(key))


def to_snake(key: str) -> str:
    return to_delimited(key, '_')


def to_screaming_snake(key: str) -> str:
    return to_delimited(key, '_').upper()


def to_kebab(key: str) -> str:
    return to_delimited(key, '-')


def to_dot(key: str) -> str:
    return to_delimited(key, '.')


_CONVERTERS: Dict[AliasType, Callable[[str], str]] = {
    AliasType.CAMEL_CASE: to_lower_camel,
    AliasType.PASCAL_CASE: to_camel,
    AliasType.SNAKE_CASE: to_snake,
    AliasType.UPPER_SNAKE_CASE: to_screaming_snake,
    AliasType.KEBAB_CASE: to_kebab,
    AliasType.DOT_CASE: to_dot,
}


def convert(key: str, convention: AliasType) -> str:
    """Return *key* spelled in *convention* (one of the six case types)."""
    try:
        fn = _CONVERTERS[convention]
    except KeyError:
        raise ValueError(f'{convention!r} is not a case convention') from None
    return fn(key)

"""Split type names, method names and argument lists into fragments.

Tokenization never fails: text without any separator comes back as a single
token, and joining all tokens always gives back the input unchanged.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Iterator

from .fragments import Fragment, FragmentKind, separator

# Characters that split qualified and generic names, e.g. List<Dictionary<K,V>>
NAME_SEPARATORS = frozenset(".<>,")

# Inside an argument list, whitespace also separates so that modifiers stand alone
ARGUMENT_WHITESPACE = frozenset(" \t\r\n")

# Parameter passing keywords highlighted in argument lists
ARGUMENT_MODIFIERS = frozenset({"ref", "out", "in", "params", "this"})


@lru_cache(maxsize=None)
def _splitter(separators: frozenset[str]) -> re.Pattern[str]:
    """Regex whose split() puts every separator character at an odd index."""
    chars = "".join(sorted(separators))
    return re.compile(f"([{re.escape(chars)}])")


def _split(text: str, separators: Iterable[str]) -> Iterator[tuple[str, bool]]:
    separators = frozenset(separators)
    if not separators:
        if text:
            yield text, False
        return
    for i, token in enumerate(_splitter(separators).split(text)):
        if token:
            yield token, i % 2 == 1


def tokenize_name(
    text: str, separators: Iterable[str] = NAME_SEPARATORS
) -> Iterator[tuple[str, bool]]:
    """Yield (token, is_separator) pairs of a dotted or generic name.

    Each separator character is a token of its own, every run of other
    characters is one token. No trimming is done.
    """
    yield from _split(text, separators)


def tokenize_arguments(
    text: str, separators: Iterable[str] = NAME_SEPARATORS
) -> Iterator[tuple[str, bool, bool]]:
    """Yield (token, is_modifier, is_separator) triples of an argument list.

    The text is the argument list without its parentheses. Whitespace is
    split like the other separators, one character per token.
    """
    for token, is_separator in _split(text, ARGUMENT_WHITESPACE.union(separators)):
        yield token, not is_separator and token in ARGUMENT_MODIFIERS, is_separator


def name_fragments(
    text: str, kind: FragmentKind, separators: Iterable[str] = NAME_SEPARATORS
) -> list[Fragment]:
    return [
        separator(token) if is_separator else Fragment(kind, token)
        for token, is_separator in tokenize_name(text, separators)
    ]


def argument_fragments(
    text: str, separators: Iterable[str] = NAME_SEPARATORS
) -> list[Fragment]:
    fragments = []
    for token, is_modifier, is_separator in tokenize_arguments(text, separators):
        if is_separator:
            kind = FragmentKind.SEPARATOR
        elif is_modifier:
            kind = FragmentKind.ARGUMENT_MODIFIER
        else:
            kind = FragmentKind.ARGUMENT
        fragments.append(Fragment(kind, token))
    return fragments

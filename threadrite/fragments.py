from __future__ import annotations

from collections import namedtuple
from enum import Enum


class FragmentKind(Enum):
    """What a piece of rendered text stands for (used for colour and CSS)."""

    BORDER = "border"
    HEADER = "header"
    EXCEPTION_TYPE = "exctype"
    EXCEPTION_MESSAGE = "excmessage"
    STACK_FRAME = "frame"
    NAMESPACE = "namespace"
    TYPE_NAME = "typename"
    METHOD_NAME = "methodname"
    SEPARATOR = "separator"
    TEXT = "text"
    ARGUMENT = "argument"
    ARGUMENT_MODIFIER = "modifier"


# The text of a fragment is atomic: it is never split across printed lines
Fragment = namedtuple("Fragment", ["kind", "text"])


def border(text: str) -> Fragment:
    return Fragment(FragmentKind.BORDER, text)


def separator(text: str) -> Fragment:
    return Fragment(FragmentKind.SEPARATOR, text)


def plain(text: str) -> Fragment:
    return Fragment(FragmentKind.TEXT, text)

"""
Enumerated engine options and reserved ids.

The native layer translates these ordinals through fixed-size tables with
no bounds check, so every value must pass ``coerce_option`` before it is
marshaled.
"""

from enum import IntEnum
from typing import TypeVar

from .exceptions import ValidationError

__all__ = [
    "Charset",
    "TokenNumbering",
    "CaseHandling",
    "WhitespaceHandling",
    "Usage",
    "IGN_TAG_ID",
    "WHITESPACE_TAG_ID",
    "INVALID_ID",
    "coerce_option",
]

# Reserved tag ids
IGN_TAG_ID = 0
WHITESPACE_TAG_ID = 1

# Returned by the *_id lookups for unknown strings, and by the enum getters
# for an internal value missing from the translation table.
INVALID_ID = -1


class Charset(IntEnum):
    """Encoding of the engine's input and output."""

    UTF8 = 0
    ISO8859_2 = 1
    CP1250 = 2
    CP852 = 3

    @property
    def codec(self) -> str:
        """Python codec name for this charset."""
        return _CODECS[self]


_CODECS = {
    Charset.UTF8: "utf-8",
    Charset.ISO8859_2: "iso8859_2",
    Charset.CP1250: "cp1250",
    Charset.CP852: "cp852",
}


class TokenNumbering(IntEnum):
    """When node numbering restarts."""

    SEPARATE_NUMBERING = 0  # on every analyse()
    CONTINUOUS_NUMBERING = 1  # only when the setting is changed


class CaseHandling(IntEnum):
    """How tokens whose letter case does not match the dictionary are treated."""

    CONDITIONALLY_CASE_SENSITIVE = 0
    STRICTLY_CASE_SENSITIVE = 1
    IGNORE_CASE = 2


class WhitespaceHandling(IntEnum):
    """Whether whitespace appears in analysis output."""

    SKIP_WHITESPACES = 0
    APPEND_WHITESPACES = 1
    KEEP_WHITESPACES = 2


class Usage(IntEnum):
    """Which operations an engine instance supports."""

    BOTH_ANALYSE_AND_GENERATE = 0
    ANALYSE_ONLY = 1
    GENERATE_ONLY = 2


E = TypeVar("E", bound=IntEnum)


def coerce_option(enum_cls: type[E], value: object, option: str) -> E:
    """Convert ``value`` to a member of ``enum_cls`` or raise ValidationError.

    Accepts an enum member, a plain int ordinal, or a member name (case
    insensitive, e.g. ``"cp1250"``). ``bool`` is rejected even though it is
    an int subclass.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls[value.upper()]
        except KeyError:
            pass
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return enum_cls(value)
        except ValueError:
            pass
    allowed = ", ".join(m.name for m in enum_cls)
    raise ValidationError(
        f"Invalid {option}: {value!r} (expected one of {allowed})",
        details={"option": option, "value": value},
    )

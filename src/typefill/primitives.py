"""Random draws for primitive kinds.

Integers are uniform 64-bit patterns.  Floats are uniform in ``[0, 1)``.
Strings are up to 20 characters picked from a few representative Unicode
blocks so that consumers see one-, two- and three-byte UTF-8 encodings.

All helpers take the :class:`random.Random` they draw from; nothing here
keeps state of its own.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable

from .kinds import Kind, coerce, element_types, type_name, unwrap_newtype
from .ref import Ref
from .utils.errors import UnsupportedKindError

MAX_STRING_LENGTH = 20


@dataclass(slots=True, frozen=True)
class CharRange:
    """Half-open range ``[first, last)`` of code points."""

    first: str
    last: str

    def choose(self, rng: random.Random) -> str:
        """Return a random character from the range."""

        count = ord(self.last) - ord(self.first)
        return chr(ord(self.first) + rng.randrange(count))


UNICODE_RANGES: tuple[CharRange, ...] = (
    CharRange(" ", "~"),  # ASCII
    CharRange("\u00a0", "\u02af"),  # Latin-1 supplement through IPA
    CharRange("\u4e00", "\u9fff"),  # common CJK
)


def rand_bool(rng: random.Random) -> bool:
    return rng.getrandbits(1) == 1


def rand_uint64(rng: random.Random) -> int:
    """Return 64 random bits assembled from two 32-bit draws."""

    return rng.getrandbits(32) << 32 | rng.getrandbits(32)


def rand_int64(rng: random.Random) -> int:
    """Return a uniform signed 64-bit integer."""

    value = rand_uint64(rng)
    if value >= 1 << 63:
        value -= 1 << 64
    return value


def rand_string(rng: random.Random) -> str:
    """Return a random string of fewer than ``MAX_STRING_LENGTH`` characters."""

    length = rng.randrange(MAX_STRING_LENGTH)
    return "".join(
        UNICODE_RANGES[rng.randrange(len(UNICODE_RANGES))].choose(rng) for _ in range(length)
    )


def rand_bytes(rng: random.Random, length: int) -> bytes:
    return bytes(rng.getrandbits(8) for _ in range(length))


# ---------------------------------------------------------------------------
# Per-kind fillers
# ---------------------------------------------------------------------------


def _fill_bool(ref: Ref[Any], rng: random.Random) -> None:
    ref.value = rand_bool(rng)


def _fill_int(ref: Ref[Any], rng: random.Random) -> None:
    ref.value = coerce(ref.type, rand_int64(rng))


def _fill_float(ref: Ref[Any], rng: random.Random) -> None:
    ref.value = coerce(ref.type, rng.random())


def _fill_string(ref: Ref[Any], rng: random.Random) -> None:
    ref.value = coerce(ref.type, rand_string(rng))


def _fill_enum(ref: Ref[Any], rng: random.Random) -> None:
    members = list(unwrap_newtype(ref.type))
    if not members:
        raise UnsupportedKindError(f"enum {type_name(ref.type)} has no members")
    ref.value = members[rng.randrange(len(members))]


def _fill_literal(ref: Ref[Any], rng: random.Random) -> None:
    choices = element_types(ref.type)
    ref.value = choices[rng.randrange(len(choices))]


def _fill_none(ref: Ref[Any], rng: random.Random) -> None:
    ref.value = None


def _unimplemented(ref: Ref[Any], rng: random.Random) -> None:
    raise UnsupportedKindError(f"random values of {type_name(ref.type)} are not supported")


PRIMITIVE_FILLERS: dict[Kind, Callable[[Ref[Any], random.Random], None]] = {
    Kind.BOOL: _fill_bool,
    Kind.INT: _fill_int,
    Kind.FLOAT: _fill_float,
    Kind.STRING: _fill_string,
    Kind.ENUM: _fill_enum,
    Kind.LITERAL: _fill_literal,
    Kind.NONE: _fill_none,
    Kind.COMPLEX: _unimplemented,
    Kind.ADDRESS: _unimplemented,
}


__all__ = [
    "MAX_STRING_LENGTH",
    "CharRange",
    "UNICODE_RANGES",
    "rand_bool",
    "rand_uint64",
    "rand_int64",
    "rand_string",
    "rand_bytes",
    "PRIMITIVE_FILLERS",
]

"""Built-in generation functions for common value types.

These run only when no user override matches and the type does not generate
itself.  They share the override calling convention so a user override for
the same type simply takes precedence.
"""

from __future__ import annotations

import datetime
import uuid
from typing import Any, Callable

from .continuation import Continuation
from .kinds import normalize
from .ref import Ref

# About 1000 years of values keeps serializers that reject far-future dates happy.
_SPAN_SECONDS = 1000 * 365 * 24 * 60 * 60
_SPAN_DAYS = 1000 * 365
_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


def fill_datetime(ref: Ref[datetime.datetime], c: Continuation) -> None:
    """Timezone-aware UTC timestamp within 1000 years after the epoch."""

    seconds = c.rand.randrange(_SPAN_SECONDS)
    nanos: Ref[int] = Ref(int)
    c.fill(nanos)
    micros = (nanos.value % 1_000_000_000) // 1000
    ref.value = _EPOCH + datetime.timedelta(seconds=seconds, microseconds=micros)


def fill_date(ref: Ref[datetime.date], c: Continuation) -> None:
    ref.value = _EPOCH.date() + datetime.timedelta(days=c.rand.randrange(_SPAN_DAYS))


def fill_uuid(ref: Ref[uuid.UUID], c: Continuation) -> None:
    """Random version 4 UUID drawn from the shared stream."""

    ref.value = uuid.UUID(int=c.rand_uint64() << 64 | c.rand_uint64(), version=4)


DEFAULT_FUNCS: dict[Any, Callable[[Any, Continuation], None]] = {
    normalize(Ref[datetime.datetime]): fill_datetime,
    normalize(Ref[datetime.date]): fill_date,
    normalize(Ref[uuid.UUID]): fill_uuid,
}


__all__ = ["fill_datetime", "fill_date", "fill_uuid", "DEFAULT_FUNCS"]

"""Continuation handles and the self-generation protocol.

A :class:`Continuation` is handed to every override, ``generate_self`` method
and built-in default.  It exposes the generator's shared random stream and
lets the callee hand sub-values back to the recursive algorithm.  The handle
borrows the active generation context, so it is closed as soon as the call
that received it returns.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any, Protocol, get_origin, runtime_checkable

from . import primitives
from .ref import Ref, as_ref
from .utils.errors import StaleContinuationError

if TYPE_CHECKING:
    from types import TracebackType

    from .context import GenerationContext


class Continuation:
    """Source of randomness and re-entry point for custom generation code."""

    __slots__ = ("_context", "_rand")

    def __init__(self, context: GenerationContext, rand: random.Random) -> None:
        self._context: GenerationContext | None = context
        self._rand = rand

    def _active(self) -> GenerationContext:
        if self._context is None:
            raise StaleContinuationError(
                "continuation used after the call that received it returned"
            )
        return self._context

    @property
    def rand(self) -> random.Random:
        """The generator's shared random stream.

        Draw from this rather than the ``random`` module so that results stay
        reproducible for a given seed.
        """

        self._active()
        return self._rand

    def fill(self, target: Any) -> None:
        """Continue generation into ``target`` (a ``Ref`` or struct instance)."""

        self._active().generate(as_ref(target))

    def fill_without_overrides(self, target: Any) -> None:
        """Like :meth:`fill`, but skip overrides and ``generate_self`` for ``target``.

        Values nested inside ``target`` still consult overrides.
        """

        self._active().generate(as_ref(target), skip_overrides=True)

    def generate(self, tp: Any) -> Any:
        """Return a freshly generated value of type ``tp``."""

        ref: Ref[Any] = Ref(tp)
        self.fill(ref)
        return ref.value

    def rand_bool(self) -> bool:
        return primitives.rand_bool(self.rand)

    def rand_uint64(self) -> int:
        """Return 64 random bits."""

        return primitives.rand_uint64(self.rand)

    def rand_string(self) -> str:
        """Return a random string of up to 20 characters with mixed encodings."""

        return primitives.rand_string(self.rand)

    def close(self) -> None:
        self._context = None

    def __enter__(self) -> Continuation:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


@runtime_checkable
class SelfGenerating(Protocol):
    """Protocol for types that know how to generate their own contents.

    The generator calls ``generate_self`` on a present instance once no
    override matches the type.
    """

    def generate_self(self, c: Continuation) -> None:
        ...


def is_self_generating(tp: Any) -> bool:
    """Return ``True`` when class ``tp`` opts into self-generation."""

    if not isinstance(tp, type) or get_origin(tp) is not None:
        return False
    return issubclass(tp, SelfGenerating)


__all__ = ["Continuation", "SelfGenerating", "is_self_generating"]

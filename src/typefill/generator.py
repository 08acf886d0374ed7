"""Generator configuration and fill entry points.

A :class:`Generator` is long-lived and reusable.  It owns the random stream,
the nil probability, the element-count range, the depth ceiling and the
override and default tables.  Every top-level :meth:`Generator.fill` call gets
its own :class:`~typefill.context.GenerationContext`, so calls never share
depth state, but they do share the random stream: concurrent calls against
one generator are neither synchronized nor individually reproducible.

Typical use::

    gen = Generator(seed=0).set_nil_probability(0).set_element_count_range(1, 3)
    record = Record()
    gen.fill(record)
"""

from __future__ import annotations

import random
import time
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .context import GenerationContext
from .defaults import DEFAULT_FUNCS
from .kinds import type_name
from .overrides import OverrideFunc, override_key
from .ref import Ref, as_ref
from .utils.errors import ConfigurationError
from .utils.logging import get_logger

if TYPE_CHECKING:
    from .config import GeneratorSettings

logger = get_logger(__name__)

DEFAULT_NIL_PROBABILITY = 0.2
DEFAULT_ELEMENT_COUNT_RANGE = (1, 10)
DEFAULT_MAX_DEPTH = 100


class Generator:
    """Fill typed values with random but structurally valid data."""

    def __init__(self, seed: int | None = None) -> None:
        """Initialize the generator.

        Parameters
        ----------
        seed:
            Seed for the random stream.  ``None`` seeds from the wall clock,
            which makes runs irreproducible.
        """

        if seed is None:
            seed = time.time_ns()
        self._rand = random.Random(seed)
        self._nil_probability = DEFAULT_NIL_PROBABILITY
        self._min_elements, self._max_elements = DEFAULT_ELEMENT_COUNT_RANGE
        self._max_depth = DEFAULT_MAX_DEPTH
        self._overrides: dict[Any, OverrideFunc] = {}
        self._defaults: dict[Any, OverrideFunc] = dict(DEFAULT_FUNCS)

    @classmethod
    def from_settings(cls, settings: GeneratorSettings) -> Generator:
        """Build a generator from a validated settings model."""

        return (
            cls(settings.seed)
            .set_nil_probability(settings.nil_probability)
            .set_element_count_range(settings.element_count.min, settings.element_count.max)
            .set_max_depth(settings.max_depth)
        )

    # -- configuration -----------------------------------------------------

    @property
    def rand(self) -> random.Random:
        return self._rand

    @property
    def nil_probability(self) -> float:
        return self._nil_probability

    @property
    def element_count_range(self) -> tuple[int, int]:
        return self._min_elements, self._max_elements

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def overrides(self) -> Mapping[Any, OverrideFunc]:
        """Read-only view of the registered overrides keyed by type."""

        return MappingProxyType(self._overrides)

    def register_overrides(self, *funcs: OverrideFunc) -> Generator:
        """Register custom generation functions.

        Each function takes two positional parameters.  The first is annotated
        either ``Ref[T]`` (receive a reference to a ``T`` slot and assign its
        ``value``) or a mutable type such as a dataclass, pydantic model,
        ``dict[K, V]``, ``list[T]`` or ``set[T]`` (receive the value itself
        and mutate it).  The second is the :class:`~typefill.Continuation`.
        Optional slots and empty mutable slots are allocated before the
        function runs, regardless of the nil probability.

        A later registration for the same type replaces the earlier one.
        All entries are validated before any is stored.

        Raises
        ------
        InvalidOverrideError
            If an entry is not callable or has the wrong shape.
        """

        keyed = [(override_key(func), func) for func in funcs]
        for key, func in keyed:
            if key in self._overrides:
                logger.debug("replacing override for %s", type_name(key))
            self._overrides[key] = func
        logger.debug("registered %d override(s)", len(keyed))
        return self

    def set_nil_probability(self, p: float) -> Generator:
        """Set the chance that optional and container slots come out absent."""

        if not 0.0 <= p <= 1.0:
            raise ConfigurationError(f"nil probability must be within [0, 1], got {p}")
        self._nil_probability = p
        return self

    def set_element_count_range(self, minimum: int, maximum: int) -> Generator:
        """Bound the number of entries in generated maps, sets and sequences."""

        if minimum > maximum:
            raise ConfigurationError(
                f"minimum element count {minimum} exceeds maximum {maximum}"
            )
        if minimum < 0:
            raise ConfigurationError(f"minimum element count must be >= 0, got {minimum}")
        self._min_elements = minimum
        self._max_elements = maximum
        return self

    def set_max_depth(self, depth: int) -> Generator:
        """Cap recursive descent; struct fields, items and pointees all count."""

        self._max_depth = depth
        return self

    def set_random_source(self, rand: random.Random) -> Generator:
        """Draw from ``rand`` instead of the stream seeded at construction."""

        if not isinstance(rand, random.Random):
            raise ConfigurationError(f"random source must be a random.Random, got {rand!r}")
        self._rand = rand
        return self

    # -- draws used by the generation context ------------------------------

    def should_fill(self) -> bool:
        return self._rand.random() > self._nil_probability

    def element_count(self) -> int:
        if self._min_elements == self._max_elements:
            return self._min_elements
        return self._min_elements + self._rand.randrange(
            self._max_elements - self._min_elements + 1
        )

    def find_override(self, key: Any) -> OverrideFunc | None:
        return self._overrides.get(key)

    def find_default(self, key: Any) -> OverrideFunc | None:
        return self._defaults.get(key)

    # -- entry points ------------------------------------------------------

    def fill(self, target: Any) -> None:
        """Recursively fill ``target`` with random data.

        ``target`` must be a :class:`~typefill.Ref` or a dataclass/pydantic
        model instance, which is filled in place.  Lookup order per value is:
        override, ``generate_self``, built-in default, then structural
        generation.  Cyclic types are safe up to :attr:`max_depth`.

        Raises
        ------
        NotAReferenceError
            If ``target`` is not a reference.
        UnsupportedKindError
            If a reachable type has no random value (complex numbers,
            callables, ``Any`` and the like).
        """

        self._fill(as_ref(target), skip_overrides=False)

    def fill_without_overrides(self, target: Any) -> None:
        """Like :meth:`fill`, but ignore custom functions for ``target`` itself.

        Overrides and ``generate_self`` are skipped for the outermost value;
        built-in defaults still apply.  Nested values of the same type still
        consult overrides.
        """

        self._fill(as_ref(target), skip_overrides=True)

    def generate(self, tp: Any) -> Any:
        """Return a new random value of type ``tp``."""

        ref: Ref[Any] = Ref(tp)
        self.fill(ref)
        return ref.value

    def _fill(self, ref: Ref[Any], *, skip_overrides: bool) -> None:
        logger.debug("filling %s (skip_overrides=%s)", type_name(ref.type), skip_overrides)
        GenerationContext(self).generate(ref, skip_overrides=skip_overrides)


__all__ = [
    "Generator",
    "DEFAULT_NIL_PROBABILITY",
    "DEFAULT_ELEMENT_COUNT_RANGE",
    "DEFAULT_MAX_DEPTH",
]

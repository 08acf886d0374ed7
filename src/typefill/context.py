"""The recursive generation algorithm.

A :class:`GenerationContext` lives for exactly one top-level fill call.  It
owns nothing but the current recursion depth; configuration, lookup tables and
the random stream are read from the owning generator.  Each step proceeds in
order of precedence:

1. depth guard: at or past ``max_depth`` the slot is left untouched;
2. writability guard: private struct fields are skipped silently;
3. lookup: override for ``Ref[T]``, override for the slot's own type,
   ``generate_self``, then built-in defaults (only the defaults run when
   overrides are skipped);
4. structural generation by :class:`~typefill.kinds.Kind`.

The depth counter is scoped: it is restored when a step returns so sibling
subtrees see the same remaining budget.  Cyclic types terminate only through
this ceiling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, get_origin

from .continuation import Continuation, is_self_generating
from .kinds import (
    Kind,
    classify,
    coerce,
    element_types,
    is_mutable,
    new_instance,
    new_struct,
    strip_optional,
    struct_fields,
    type_name,
    unwrap_newtype,
    zero_value,
)
from .primitives import PRIMITIVE_FILLERS, rand_bytes
from .ref import Ref, _AttrRef, _ItemRef
from .utils.errors import UnsupportedKindError

if TYPE_CHECKING:
    from .generator import Generator


class GenerationContext:
    """Recursion state for a single top-level fill call."""

    __slots__ = ("generator", "depth")

    def __init__(self, generator: Generator) -> None:
        self.generator = generator
        self.depth = 0

    def generate(self, ref: Ref[Any], *, skip_overrides: bool = False) -> None:
        """Fill ``ref`` with a random value of its type.

        ``skip_overrides`` suppresses override and self-generation lookup for
        this step only; built-in defaults still apply and nested steps consult
        everything as usual.
        """

        if self.depth >= self.generator.max_depth:
            return
        self.depth += 1
        try:
            if not ref.settable:
                return
            if not skip_overrides and self._try_custom(ref):
                return
            if self._try_default(ref):
                return
            self._generate_by_kind(ref)
        finally:
            self.depth -= 1

    # -- lookup ------------------------------------------------------------

    def _call(self, func: Callable[[Any, Continuation], None], target: Any) -> None:
        with Continuation(self, self.generator.rand) as c:
            func(target, c)

    def _ensure_value(self, ref: Ref[Any], base: Any) -> Ref[Any]:
        if ref.value is None:
            ref.value = zero_value(base)
        return ref

    def _ensure_instance(self, ref: Ref[Any], base: Any) -> Any:
        obj = ref.value
        if obj is None:
            obj = new_instance(base)
            ref.value = obj
        return obj

    def _try_custom(self, ref: Ref[Any]) -> bool:
        """Run a matching override or ``generate_self``; return ``True`` if one ran.

        Optional slots are allocated before a function that targets their
        pointee runs, whatever the nil probability says.
        """

        gen = self.generator
        tp = ref.type
        base = strip_optional(tp)

        func = gen.find_override(Ref[tp])
        if func is not None:
            self._call(func, ref)
            return True
        if base != tp:
            func = gen.find_override(Ref[base])
            if func is not None:
                self._call(func, self._ensure_value(ref, base))
                return True
        if is_mutable(base):
            func = gen.find_override(base)
            if func is not None:
                self._call(func, self._ensure_instance(ref, base))
                return True

        if is_self_generating(base):
            obj = self._ensure_instance(ref, base)
            with Continuation(self, gen.rand) as c:
                obj.generate_self(c)
            return True
        return False

    def _try_default(self, ref: Ref[Any]) -> bool:
        gen = self.generator
        tp = ref.type
        base = strip_optional(tp)
        func = gen.find_default(Ref[tp])
        if func is not None:
            self._call(func, ref)
            return True
        if base != tp:
            func = gen.find_default(Ref[base])
            if func is not None:
                self._call(func, self._ensure_value(ref, base))
                return True
        return False

    # -- structural generation ---------------------------------------------

    def _generate_by_kind(self, ref: Ref[Any]) -> None:
        kind = classify(ref.type)
        filler = PRIMITIVE_FILLERS.get(kind)
        if filler is not None:
            filler(ref, self.generator.rand)
        elif kind is Kind.POINTER:
            self._fill_pointer(ref)
        elif kind is Kind.UNION:
            self._fill_union(ref)
        elif kind is Kind.MAP:
            self._fill_map(ref)
        elif kind is Kind.SET:
            self._fill_set(ref)
        elif kind is Kind.SLICE:
            self._fill_slice(ref)
        elif kind is Kind.BYTES:
            self._fill_bytes(ref)
        elif kind is Kind.ARRAY:
            self._fill_array(ref)
        elif kind is Kind.STRUCT:
            self._fill_struct(ref)
        else:
            raise UnsupportedKindError(
                f"can't generate a value for {type_name(ref.type)} (current value {ref.value!r})"
            )

    def _fill_pointer(self, ref: Ref[Any]) -> None:
        if not self.generator.should_fill():
            ref.value = None
            return
        pointee: Ref[Any] = Ref(strip_optional(ref.type))
        self.generate(pointee)
        ref.value = pointee.value

    def _fill_union(self, ref: Ref[Any]) -> None:
        arms = element_types(ref.type)
        arm: Ref[Any] = Ref(arms[self.generator.rand.randrange(len(arms))])
        self.generate(arm)
        ref.value = arm.value

    def _fill_map(self, ref: Ref[Any]) -> None:
        gen = self.generator
        if not gen.should_fill():
            ref.value = None
            return
        key_type, value_type = element_types(ref.type)
        result: dict[Any, Any] = {}
        ref.value = result
        for _ in range(gen.element_count()):
            key: Ref[Any] = Ref(key_type)
            self.generate(key)
            value: Ref[Any] = Ref(value_type)
            self.generate(value)
            try:
                result[key.value] = value.value
            except TypeError as exc:
                raise UnsupportedKindError(
                    f"generated map key of {type_name(key_type)} is not hashable"
                ) from exc

    def _fill_set(self, ref: Ref[Any]) -> None:
        gen = self.generator
        if not gen.should_fill():
            ref.value = None
            return
        (item_type,) = element_types(ref.type)
        result: set[Any] = set()
        for _ in range(gen.element_count()):
            item: Ref[Any] = Ref(item_type)
            self.generate(item)
            try:
                result.add(item.value)
            except TypeError as exc:
                raise UnsupportedKindError(
                    f"generated set item of {type_name(item_type)} is not hashable"
                ) from exc
        if _origin_is(ref.type, frozenset):
            ref.value = frozenset(result)
        else:
            ref.value = result

    def _fill_slice(self, ref: Ref[Any]) -> None:
        gen = self.generator
        if not gen.should_fill():
            ref.value = None
            return
        item_type = element_types(ref.type)[0]
        items = [zero_value(item_type) for _ in range(gen.element_count())]
        for index in range(len(items)):
            self.generate(_ItemRef(items, index, item_type))
        ref.value = tuple(items) if _origin_is(ref.type, tuple) else items

    def _fill_bytes(self, ref: Ref[Any]) -> None:
        gen = self.generator
        if not gen.should_fill():
            ref.value = None
            return
        data = rand_bytes(gen.rand, gen.element_count())
        ref.value = coerce(ref.type, data)

    def _fill_array(self, ref: Ref[Any]) -> None:
        if not self.generator.should_fill():
            ref.value = zero_value(ref.type)
            return
        item_types = element_types(ref.type)
        current = ref.value
        if isinstance(current, tuple) and len(current) == len(item_types):
            items = list(current)
        else:
            items = [zero_value(item_type) for item_type in item_types]
        for index, item_type in enumerate(item_types):
            self.generate(_ItemRef(items, index, item_type))
        ref.value = tuple(items)

    def _fill_struct(self, ref: Ref[Any]) -> None:
        cls = unwrap_newtype(ref.type)
        obj = ref.value
        if not isinstance(obj, cls):
            obj = new_struct(cls)
            ref.value = obj
        for name, field_type in struct_fields(cls):
            self.generate(_AttrRef(obj, name, field_type))


def _origin_is(tp: Any, origin: type) -> bool:
    return get_origin(unwrap_newtype(tp)) is origin


__all__ = ["GenerationContext"]

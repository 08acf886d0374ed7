"""Typed mutable references.

Python values have no addressable storage, so the generator works on
:class:`Ref` objects instead.  A ``Ref`` pairs a normalized type with a value
slot.  Struct attributes and list items are reached through small ``Ref``
subclasses bound to their container, which lets the generator write into
caller storage exactly as it would write into a free-standing ``Ref``.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from .kinds import is_struct, normalize, set_field, struct_fields, type_name, zero_value
from .utils.errors import NotAReferenceError

T = TypeVar("T")

_UNSET: Any = object()


class Ref(Generic[T]):
    """A typed, mutable reference to a single value.

    ``Ref(int)`` starts out holding ``0``; pass ``value`` to start from
    something else.  ``Ref[T]`` is also the annotation an override uses to ask
    for a reference to a ``T`` slot rather than the value itself.
    """

    __slots__ = ("_type", "_value")

    def __init__(self, tp: Any, value: Any = _UNSET) -> None:
        self._type = normalize(tp)
        self._value = zero_value(self._type) if value is _UNSET else value

    @property
    def type(self) -> Any:
        return self._type

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self._value = value

    @property
    def settable(self) -> bool:
        """Whether generation may write through this reference."""

        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type_name(self.type)}, {self.value!r})"


class _AttrRef(Ref[Any]):
    """Reference to a struct attribute; private names are read-only."""

    __slots__ = ("_obj", "_name")

    def __init__(self, obj: Any, name: str, tp: Any) -> None:
        self._type = tp
        self._obj = obj
        self._name = name

    @property
    def value(self) -> Any:
        return getattr(self._obj, self._name, None)

    @value.setter
    def value(self, value: Any) -> None:
        set_field(self._obj, self._name, value)

    @property
    def settable(self) -> bool:
        return not self._name.startswith("_")


class _ItemRef(Ref[Any]):
    """Reference to one position of a list under construction."""

    __slots__ = ("_items", "_index")

    def __init__(self, items: list[Any], index: int, tp: Any) -> None:
        self._type = tp
        self._items = items
        self._index = index

    @property
    def value(self) -> Any:
        return self._items[self._index]

    @value.setter
    def value(self, value: Any) -> None:
        self._items[self._index] = value


class _InstanceRef(Ref[Any]):
    """Reference to a caller-supplied struct instance filled in place.

    Rebinding copies the fields of the new value into the original instance
    so the caller's object observes the result.
    """

    __slots__ = ("_obj",)

    def __init__(self, obj: Any) -> None:
        self._type = type(obj)
        self._obj = obj

    @property
    def value(self) -> Any:
        return self._obj

    @value.setter
    def value(self, value: Any) -> None:
        if value is self._obj:
            return
        if not isinstance(value, self._type):
            raise NotAReferenceError(
                f"cannot replace a {type_name(self._type)} target with {value!r}; "
                "fill a Ref to rebind the value"
            )
        for name, _ in struct_fields(self._type):
            set_field(self._obj, name, getattr(value, name))


def attr_ref(obj: Any, name: str) -> Ref[Any]:
    """Return a reference to field ``name`` of struct instance ``obj``.

    The reference is typed from the field's declared annotation.  Fields whose
    name starts with an underscore yield a reference that generation skips.
    """

    cls = type(obj)
    if not is_struct(cls):
        raise NotAReferenceError(f"{obj!r} is not a dataclass or pydantic model instance")
    for field_name, tp in struct_fields(cls):
        if field_name == name:
            return _AttrRef(obj, name, tp)
    raise AttributeError(f"{cls.__qualname__} has no field {name!r}")


def as_ref(target: Any) -> Ref[Any]:
    """Coerce a fill target into a :class:`Ref`.

    Raises
    ------
    NotAReferenceError
        If ``target`` is neither a ``Ref`` nor a struct instance.
    """

    if isinstance(target, Ref):
        return target
    if is_struct(type(target)):
        return _InstanceRef(target)
    raise NotAReferenceError(
        f"fill target must be a Ref or a dataclass/pydantic model instance, got {target!r}"
    )


__all__ = ["Ref", "attr_ref", "as_ref"]

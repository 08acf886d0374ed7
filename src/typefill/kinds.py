"""Type classification for the recursive generator.

Annotations are reduced to a canonical form by :func:`normalize` so that they
can serve as dictionary keys (``typing.List[int]`` and ``list[int]`` compare
equal, ``Annotated`` metadata is dropped).  :func:`classify` then maps a
normalized annotation onto a :class:`Kind` which decides how structural
generation proceeds.

Struct types are dataclasses and pydantic models.  Their field lists are
resolved once per class and cached.  Zero instances are built without running
``__init__`` so that validation hooks never see half-generated data.
"""

from __future__ import annotations

import collections.abc as cabc
import ctypes
import dataclasses
import datetime
import enum
import functools
import types
import typing
import uuid
from typing import Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel

from .utils.errors import UnsupportedKindError


class Kind(enum.Enum):
    """Structural category of a type."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BYTES = "bytes"
    ENUM = "enum"
    LITERAL = "literal"
    NONE = "none"
    POINTER = "pointer"
    UNION = "union"
    MAP = "map"
    SLICE = "slice"
    SET = "set"
    ARRAY = "array"
    STRUCT = "struct"
    COMPLEX = "complex"
    ADDRESS = "address"
    UNSUPPORTED = "unsupported"


NoneType = type(None)

_MAP_ORIGINS = frozenset({dict, cabc.Mapping, cabc.MutableMapping})
_SLICE_ORIGINS = frozenset({list, cabc.Sequence, cabc.MutableSequence})
_SET_ORIGINS = frozenset({set, frozenset, cabc.Set, cabc.MutableSet})
_MUTABLE_ORIGINS = frozenset(
    {dict, cabc.MutableMapping, list, cabc.MutableSequence, set, cabc.MutableSet}
)
_UNION_ORIGINS = (Union, types.UnionType)

_SIMPLE_KINDS: dict[Any, Kind] = {
    bool: Kind.BOOL,
    int: Kind.INT,
    float: Kind.FLOAT,
    str: Kind.STRING,
    bytes: Kind.BYTES,
    bytearray: Kind.BYTES,
    complex: Kind.COMPLEX,
    memoryview: Kind.ADDRESS,
    NoneType: Kind.NONE,
}

_SPECIAL_ZEROS: dict[Any, Any] = {
    datetime.datetime: datetime.datetime.min,
    datetime.date: datetime.date.min,
    uuid.UUID: uuid.UUID(int=0),
}


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def normalize(tp: Any) -> Any:
    """Return the canonical form of annotation ``tp``."""

    if tp is None:
        return NoneType
    origin = get_origin(tp)
    if origin is None:
        return tp
    args = get_args(tp)
    if origin is typing.Annotated:
        return normalize(args[0])
    if origin in _UNION_ORIGINS:
        return Union[tuple(normalize(arg) for arg in args)]
    if origin is Literal or origin is cabc.Callable:
        return tp
    try:
        return origin[tuple(normalize(arg) for arg in args)]
    except TypeError:
        return tp


def unwrap_newtype(tp: Any) -> Any:
    """Follow ``typing.NewType`` aliases down to the underlying type."""

    while isinstance(tp, typing.NewType):
        tp = normalize(tp.__supertype__)
    return tp


def type_name(tp: Any) -> str:
    """Readable name of ``tp`` for diagnostics."""

    if isinstance(tp, type):
        return tp.__qualname__
    if isinstance(tp, typing.NewType):
        return tp.__name__
    return repr(tp)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def is_struct(tp: Any) -> bool:
    """Return ``True`` for dataclass and pydantic model classes."""

    if not isinstance(tp, type) or get_origin(tp) is not None:
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def _is_address(tp: type) -> bool:
    return issubclass(tp, (ctypes._Pointer, ctypes.c_void_p))


def classify(tp: Any) -> Kind:
    """Map normalized annotation ``tp`` onto its :class:`Kind`.

    Subclasses of builtin scalars such as ``class Celsius(float)`` take the
    kind of their builtin base; generated values are converted with
    :func:`coerce`.
    """

    tp = unwrap_newtype(tp)
    origin = get_origin(tp)
    if origin is not None:
        args = get_args(tp)
        if origin in _UNION_ORIGINS:
            return Kind.POINTER if NoneType in args else Kind.UNION
        if origin is Literal:
            return Kind.LITERAL
        if origin in _MAP_ORIGINS:
            return Kind.MAP
        if origin in _SLICE_ORIGINS:
            return Kind.SLICE
        if origin in _SET_ORIGINS:
            return Kind.SET
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return Kind.SLICE
            return Kind.ARRAY
        return Kind.UNSUPPORTED

    if not isinstance(tp, type):
        return Kind.UNSUPPORTED
    if issubclass(tp, enum.Enum):
        return Kind.ENUM
    simple = _SIMPLE_KINDS.get(tp)
    if simple is not None:
        return simple
    for builtin, kind in _SIMPLE_KINDS.items():
        if issubclass(tp, builtin):
            return kind
    if _is_address(tp):
        return Kind.ADDRESS
    if is_struct(tp):
        return Kind.STRUCT
    return Kind.UNSUPPORTED


def coerce(tp: Any, value: Any) -> Any:
    """Convert builtin ``value`` to ``tp`` when ``tp`` subclasses its type."""

    tp = unwrap_newtype(tp)
    if isinstance(tp, type) and type(value) is not tp:
        return tp(value)
    return value


def strip_optional(tp: Any) -> Any:
    """Return the pointee of ``Optional[X]``; other types are returned as is.

    ``Optional[A | B]`` yields ``Union[A, B]``.
    """

    if get_origin(tp) not in _UNION_ORIGINS:
        return tp
    args = get_args(tp)
    if NoneType not in args:
        return tp
    rest = tuple(arg for arg in args if arg is not NoneType)
    if len(rest) == 1:
        return rest[0]
    return Union[rest]


def is_mutable(tp: Any) -> bool:
    """Return ``True`` when values of ``tp`` can be filled in place."""

    if is_struct(tp):
        return True
    return get_origin(tp) in _MUTABLE_ORIGINS


def element_types(tp: Any) -> tuple[Any, ...]:
    """Type arguments of a container annotation, newtypes unwrapped."""

    return get_args(unwrap_newtype(tp))


# ---------------------------------------------------------------------------
# Structs
# ---------------------------------------------------------------------------


@functools.cache
def struct_fields(cls: type) -> tuple[tuple[str, Any], ...]:
    """Return ``(name, annotation)`` pairs for the fields of struct ``cls``."""

    if issubclass(cls, BaseModel):
        return tuple(
            (name, normalize(info.annotation)) for name, info in cls.model_fields.items()
        )
    try:
        hints = typing.get_type_hints(cls)
    except NameError as exc:
        raise UnsupportedKindError(
            f"cannot resolve annotations of {cls.__qualname__}: {exc}"
        ) from exc
    return tuple((f.name, normalize(hints[f.name])) for f in dataclasses.fields(cls))


def is_frozen(cls: type) -> bool:
    if issubclass(cls, BaseModel):
        return bool(cls.model_config.get("frozen", False))
    return bool(cls.__dataclass_params__.frozen)  # type: ignore[attr-defined]


def set_field(obj: Any, name: str, value: Any) -> None:
    """Assign a struct field, bypassing the freeze on frozen structs."""

    if is_frozen(type(obj)):
        object.__setattr__(obj, name, value)
    else:
        setattr(obj, name, value)


def new_struct(cls: type) -> Any:
    """Return an instance of ``cls`` whose fields all hold zero values."""

    zeros = {name: zero_value(tp) for name, tp in struct_fields(cls)}
    if issubclass(cls, BaseModel):
        return cls.model_construct(**zeros)
    obj = object.__new__(cls)
    for name, value in zeros.items():
        object.__setattr__(obj, name, value)
    return obj


# ---------------------------------------------------------------------------
# Zero values and allocation
# ---------------------------------------------------------------------------


def zero_value(tp: Any) -> Any:
    """Return the zero value of ``tp``.

    Optional values and variable-length containers are absent (``None``).
    Fixed tuples hold the zero value of each item and structs are zero
    instances.
    """

    tp = unwrap_newtype(tp)
    special = _SPECIAL_ZEROS.get(tp) if isinstance(tp, type) else None
    if special is not None:
        return special
    kind = classify(tp)
    if kind is Kind.BOOL:
        return False
    if kind is Kind.INT:
        return coerce(tp, 0)
    if kind is Kind.FLOAT:
        return coerce(tp, 0.0)
    if kind is Kind.STRING:
        return coerce(tp, "")
    if kind is Kind.COMPLEX:
        return coerce(tp, 0j)
    if kind is Kind.ENUM:
        try:
            return next(iter(tp))
        except StopIteration:
            raise UnsupportedKindError(f"enum {type_name(tp)} has no members") from None
    if kind is Kind.LITERAL:
        return get_args(tp)[0]
    if kind is Kind.UNION:
        return zero_value(get_args(tp)[0])
    if kind is Kind.ARRAY:
        return tuple(zero_value(arg) for arg in get_args(tp))
    if kind is Kind.STRUCT:
        return new_struct(tp)
    return None


def new_instance(tp: Any) -> Any:
    """Allocate an empty value of ``tp`` for in-place generation."""

    tp = unwrap_newtype(tp)
    if is_struct(tp):
        return new_struct(tp)
    kind = classify(tp)
    if kind is Kind.MAP:
        return {}
    if kind is Kind.SLICE:
        return []
    if kind is Kind.SET:
        return set()
    if isinstance(tp, type):
        return tp()
    raise UnsupportedKindError(f"cannot allocate a value of {type_name(tp)}")


__all__ = [
    "Kind",
    "NoneType",
    "normalize",
    "unwrap_newtype",
    "type_name",
    "is_struct",
    "classify",
    "coerce",
    "strip_optional",
    "is_mutable",
    "element_types",
    "struct_fields",
    "is_frozen",
    "set_field",
    "new_struct",
    "zero_value",
    "new_instance",
]

"""Validation of user override functions.

An override is any callable shaped ``(target, c: Continuation) -> None``.  The
annotation on ``target`` decides which slots it serves:

* ``Ref[T]``: a reference to a ``T`` slot (and to ``Optional[T]`` slots);
  assign ``target.value`` to produce the value;
* a mutable type (dataclass, pydantic model, ``dict``, ``list`` or ``set``
  annotation): the already-allocated value, to be mutated in place.

Immutable value types such as ``int`` or ``str`` cannot be mutated by the
callee, so they must be requested through ``Ref``.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, get_origin

from .continuation import Continuation
from .kinds import is_mutable, normalize, type_name
from .ref import Ref
from .utils.errors import InvalidOverrideError

OverrideFunc = Callable[[Any, Continuation], None]

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _describe(func: Any) -> str:
    return getattr(func, "__qualname__", None) or repr(func)


def override_key(func: Any) -> Any:
    """Return the lookup key for override ``func``.

    Raises
    ------
    InvalidOverrideError
        If ``func`` is not callable or does not have the override shape.
    """

    if not callable(func):
        raise InvalidOverrideError(f"overrides must be callables, got {func!r}")
    name = _describe(func)
    try:
        sig = inspect.signature(func, eval_str=True)
    except NameError as exc:
        raise InvalidOverrideError(f"cannot resolve annotations of {name}: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise InvalidOverrideError(f"cannot inspect the signature of {name}") from exc

    params = list(sig.parameters.values())
    if len(params) != 2 or any(p.kind not in _POSITIONAL for p in params):
        raise InvalidOverrideError(f"{name} must take exactly two positional parameters")
    if sig.return_annotation not in (inspect.Signature.empty, None, type(None)):
        raise InvalidOverrideError(f"{name} must not return a value")

    target, cont = params
    if target.annotation is inspect.Parameter.empty:
        raise InvalidOverrideError(f"first parameter of {name} must be annotated with its type")
    key = normalize(target.annotation)
    if get_origin(key) is not Ref and not is_mutable(key):
        raise InvalidOverrideError(
            f"first parameter of {name} must be Ref[...] or a mutable type "
            f"(dataclass, pydantic model, dict, list or set), got {type_name(key)}"
        )
    if cont.annotation not in (inspect.Parameter.empty, Continuation):
        raise InvalidOverrideError(f"second parameter of {name} must be a Continuation")
    return key


__all__ = ["OverrideFunc", "override_key"]

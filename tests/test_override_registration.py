from dataclasses import dataclass
from typing import Optional

import pytest

from typefill import (
    ConfigurationError,
    Continuation,
    Generator,
    InvalidOverrideError,
    Ref,
)
from typefill.kinds import normalize


@dataclass
class Point:
    x: int
    y: int


def set_int(i: Ref[int], c: Continuation) -> None:
    i.value = 1


def set_point(p: Point, c: Continuation) -> None:
    p.x = 5


def test_keys() -> None:
    gen = Generator(seed=0).register_overrides(set_int, set_point)
    assert set(gen.overrides) == {normalize(Ref[int]), Point}


def test_not_callable() -> None:
    with pytest.raises(InvalidOverrideError):
        Generator(seed=0).register_overrides(42)  # type: ignore[arg-type]


def test_wrong_arity() -> None:
    def one(i: Ref[int]) -> None:
        pass

    def three(i: Ref[int], c: Continuation, extra: int) -> None:
        pass

    for func in (one, three):
        with pytest.raises(InvalidOverrideError):
            Generator(seed=0).register_overrides(func)  # type: ignore[arg-type]


def test_immutable_target_rejected() -> None:
    def bad(i: int, c: Continuation) -> None:
        pass

    def bad_optional(p: Optional[Point], c: Continuation) -> None:
        pass

    for func in (bad, bad_optional):
        with pytest.raises(InvalidOverrideError):
            Generator(seed=0).register_overrides(func)


def test_unannotated_target_rejected() -> None:
    with pytest.raises(InvalidOverrideError):
        Generator(seed=0).register_overrides(lambda i, c: None)


def test_return_value_rejected() -> None:
    def returns(i: Ref[int], c: Continuation) -> int:
        return 1

    with pytest.raises(InvalidOverrideError):
        Generator(seed=0).register_overrides(returns)  # type: ignore[arg-type]


def test_wrong_continuation_annotation() -> None:
    def wrong(i: Ref[int], c: int) -> None:
        pass

    with pytest.raises(InvalidOverrideError):
        Generator(seed=0).register_overrides(wrong)  # type: ignore[arg-type]


def test_unannotated_continuation_allowed() -> None:
    def loose(i: Ref[int], c) -> None:  # type: ignore[no-untyped-def]
        i.value = 3

    assert Generator(seed=0).register_overrides(loose).generate(int) == 3


def test_registration_is_atomic() -> None:
    def bad(i: int, c: Continuation) -> None:
        pass

    gen = Generator(seed=0)
    with pytest.raises(InvalidOverrideError):
        gen.register_overrides(set_int, bad)
    assert dict(gen.overrides) == {}


def test_later_registration_wins() -> None:
    def set_two(i: Ref[int], c: Continuation) -> None:
        i.value = 2

    gen = Generator(seed=0).register_overrides(set_int).register_overrides(set_two)
    assert gen.generate(int) == 2


def test_invalid_override_is_configuration_error() -> None:
    assert issubclass(InvalidOverrideError, ConfigurationError)
    assert issubclass(InvalidOverrideError, ValueError)

import datetime
import enum
import uuid
from dataclasses import astuple, dataclass
from typing import Optional

from typefill import Generator


class Mood(enum.Enum):
    HAPPY = 1
    SAD = 2


@dataclass
class Inner:
    e: float


@dataclass
class MyType:
    a: str
    b: str
    c: int
    d: Inner


@dataclass
class Everything:
    flag: bool
    number: int
    text: str
    mood: Mood
    blob: bytes
    tags: set[str]
    scores: dict[str, float]
    history: list[Optional[Inner]]
    pair: tuple[int, str]
    when: datetime.datetime
    day: datetime.date
    ident: uuid.UUID
    maybe: Optional[MyType]


def test_same_seed_same_values() -> None:
    first = Generator(seed=42)
    second = Generator(seed=42)
    for _ in range(20):
        assert first.generate(Everything) == second.generate(Everything)


def test_different_seeds_differ() -> None:
    assert Generator(seed=1).generate(Everything) != Generator(seed=2).generate(Everything)


def test_values_are_unique() -> None:
    gen = Generator()
    seen = {astuple(gen.generate(MyType)) for _ in range(1000)}
    assert len(seen) == 1000

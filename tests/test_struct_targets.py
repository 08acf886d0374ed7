from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict

from typefill import Generator, attr_ref


class Address(BaseModel):
    street: str
    zip_code: Optional[int] = None
    tags: list[str] = []


class FrozenTag(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    weight: int


@dataclass(frozen=True)
class FrozenPoint:
    x: int
    y: int


@dataclass
class Secretive:
    public: int = 0
    _secret: int = field(default=7)


@dataclass
class Parent:
    name: str
    address: Address
    tag: Optional[FrozenTag]


def test_pydantic_model() -> None:
    gen = Generator(seed=0).set_nil_probability(0)
    address = gen.generate(Address)
    assert isinstance(address, Address)
    assert isinstance(address.street, str)
    assert isinstance(address.zip_code, int)
    assert address.tags


def test_pydantic_instance_filled_in_place() -> None:
    gen = Generator(seed=1).set_nil_probability(0)
    address = Address(street="unchanged")
    same = address
    gen.fill(address)
    assert same is address
    assert address.zip_code is not None
    assert address.tags


def test_frozen_dataclass() -> None:
    point = Generator(seed=2).generate(FrozenPoint)
    assert point != FrozenPoint(x=0, y=0)
    assert hash(point) == hash(FrozenPoint(x=point.x, y=point.y))


def test_frozen_pydantic_model() -> None:
    tag = Generator(seed=3).generate(FrozenTag)
    assert isinstance(tag.weight, int)
    assert tag.weight != 0


def test_private_fields_are_skipped() -> None:
    gen = Generator(seed=4)
    obj = Secretive()
    gen.fill(obj)
    assert obj._secret == 7
    assert obj.public != 0


def test_private_attr_ref_is_not_settable() -> None:
    assert not attr_ref(Secretive(), "_secret").settable
    assert attr_ref(Secretive(), "public").settable


def test_nested_models() -> None:
    gen = Generator(seed=5).set_nil_probability(0)
    parent = gen.generate(Parent)
    assert isinstance(parent.address, Address)
    assert isinstance(parent.tag, FrozenTag)

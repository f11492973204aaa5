"""Shared record types and doubles for mapping tests."""

from __future__ import annotations

import enum
from dataclasses import InitVar, dataclass, field
from typing import NewType, Optional

from fieldmap import embed

UserId = NewType("UserId", int)


class Color(enum.Enum):
    RED = "red"
    BLUE = "blue"


@dataclass
class Address:
    city: str = field(default="", metadata={"db": "city"})


@dataclass
class Person:
    name: str = field(default="", metadata={"db": "name"})
    addr: Address = field(default_factory=Address, metadata={"db": "addr,omitempty"})


@dataclass
class Base:
    id: int = field(default=0, metadata={"db": "id"})


@dataclass
class Derived:
    base: Base = embed(default_factory=Base)
    extra: str = field(default="", metadata={"db": "extra"})


@dataclass
class TaggedDerived:
    base: Base = embed(default_factory=Base, db="base")
    extra: str = field(default="", metadata={"db": "extra"})


@dataclass
class Shadowing:
    base: Base = embed(default_factory=Base)
    id: int = field(default=0, metadata={"db": "id"})


@dataclass
class WithExclusions:
    name: str = field(default="", metadata={"db": "name"})
    hidden: Address = field(default_factory=Address, metadata={"db": "-"})
    _secret: str = field(default="", metadata={"db": "secret"})


@dataclass
class Account:
    UserName: str = ""
    EmailAddress: str = ""


@dataclass
class JsonRecord:
    name: str = field(default="", metadata={"json": "name,omitempty"})
    limit: int = field(default=0, metadata={"json": "limit,max=5,omitempty"})


@dataclass
class Leaf:
    value: int = field(default=0, metadata={"db": "value"})


@dataclass
class Branch:
    leaf: Optional[Leaf] = embed(default=None, db="leaf")
    labels: Optional[dict[str, str]] = field(default=None, metadata={"db": "labels"})


@dataclass
class Root:
    branch: Optional[Branch] = embed(default=None, db="branch")
    note: Optional[str] = field(default=None, metadata={"db": "note"})


@dataclass
class Required:
    count: int
    label: str
    color: Color
    owner: UserId
    tags: list[str]


@dataclass
class Inner:
    base: Base = embed(default_factory=Base)


@dataclass
class Outer:
    inner: Inner = field(default_factory=Inner, metadata={"db": "outer"})


@dataclass
class Needs:
    seed: InitVar[int]
    value: int = field(default=0, metadata={"db": "value"})

    def __post_init__(self, seed: int) -> None:
        self.value = seed


@dataclass
class HoldsNeeds:
    inner: Needs = field(default_factory=lambda: Needs(1), metadata={"db": "inner"})


@dataclass
class Positive:
    amount: int = field(metadata={"db": "amount"})

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError("amount must be positive")


@dataclass
class Order:
    total: Positive = field(default_factory=lambda: Positive(1), metadata={"db": "total"})
    note: str = field(default="", metadata={"db": "note"})


@dataclass
class NotEmbeddable:
    value: int = embed(default=0)


@dataclass(slots=True)
class RecordingLogger:
    events: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    def debug(self, event: str, **kwargs: object) -> None:
        self.events.append((event, dict(kwargs)))

    def names(self) -> list[str]:
        return [event for event, _ in self.events]

"""Search – typed predicate tree.

A request's filter is a :class:`Conjunction` of atomic constraints.  Each
constraint is a frozen dataclass; the set of variants is closed
(:data:`Constraint`) so translators can handle every one explicitly.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ThresholdOp(str, Enum):
    GTE = "gte"
    LTE = "lte"


class TagMatchPolicy(str, Enum):
    """How a requested tag set is compared with a listing's tags.

    ``ANY`` matches listings having at least one requested tag; ``ALL``
    requires every requested tag to be present.
    """

    ANY = "any"
    ALL = "all"


@dataclass(frozen=True)
class ExactMatch:
    """Case-sensitive equality on a single field."""

    field: str
    value: str


@dataclass(frozen=True)
class AnchoredMatch:
    """Case-insensitive match of the whole field value against *value*."""

    field: str
    value: str


@dataclass(frozen=True)
class NumericThreshold:
    """``field >= bound`` or ``field <= bound``."""

    field: str
    bound: float
    op: ThresholdOp


@dataclass(frozen=True)
class TagMembership:
    """Compare an array field with a non-empty set of tags."""

    field: str
    tags: tuple[str, ...]
    policy: TagMatchPolicy = TagMatchPolicy.ANY

    def __post_init__(self) -> None:
        if not self.tags:
            raise ValueError("TagMembership requires at least one tag")


@dataclass(frozen=True)
class TextSearch:
    """Case-insensitive substring match of *term* on any of *fields*."""

    term: str
    fields: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.term:
            raise ValueError("TextSearch requires a non-empty term")
        if not self.fields:
            raise ValueError("TextSearch requires at least one field")


Constraint = Union[ExactMatch, AnchoredMatch, NumericThreshold, TagMembership, TextSearch]


@dataclass(frozen=True)
class Conjunction:
    """All constraints must hold.  An empty conjunction matches everything."""

    constraints: tuple[Constraint, ...] = ()

    def __len__(self) -> int:
        return len(self.constraints)

    def __iter__(self):  # noqa: ANN204
        return iter(self.constraints)

    @property
    def is_empty(self) -> bool:
        return not self.constraints


__all__ = [
    "AnchoredMatch",
    "Conjunction",
    "Constraint",
    "ExactMatch",
    "NumericThreshold",
    "TagMatchPolicy",
    "TagMembership",
    "TextSearch",
    "ThresholdOp",
]

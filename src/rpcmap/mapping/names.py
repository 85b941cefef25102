from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Resolved:
    name: str


@dataclass(frozen=True)
class _Unresolvable:
    def __repr__(self) -> str:
        return "UNRESOLVABLE"


UNRESOLVABLE = _Unresolvable()

NameResolution = Union[Resolved, _Unresolvable]


def resolve_name(declared: Optional[str], discovered: Optional[str]) -> NameResolution:
    """
    Binding name for a path variable or query parameter.

    Precedence: explicit declared name, then the reflected parameter name.
    """
    if declared:
        return Resolved(declared)
    if discovered:
        return Resolved(discovered)
    return UNRESOLVABLE


def first_or_default(values: Optional[Sequence[T]], default: T) -> T:
    # first-wins policy for multiple declared paths / verbs
    if not values:
        return default
    return values[0]

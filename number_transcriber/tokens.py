"""
Token algebra — the intermediate representation between a number and its text.

A tokenizer turns a number into a tree of these nodes; a renderer walks the
tree once and produces text. The set of node kinds is CLOSED:

    NullToken                   → a position that prints nothing (or 零 in Chinese)
    LiteralToken(text)          → verbatim text: "and", "y", "点"
    MappedToken(value)          → a registered word: 3 → "three"
    PrefixedToken(prefix, value)→ "twenty" + "three"
    SuffixedToken(value, suffix)→ "three" + "hundred"
    GroupListToken(children)    → ordered sequence, largest group first

Example (English, 2_345):

    GroupList(
        Suffixed(Mapped(2), Mapped(1000)),
        Prefixed(Suffixed(Mapped(3), Mapped(100)), Prefixed(Mapped(40), Mapped(5))),
    )

Every node is frozen. A tree is built fresh for each tokenize() call and is
never shared or mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Union

if TYPE_CHECKING:
    from .rendering import TranscribingRenderer


class _Dispatchable:
    """Entry point used by the pipeline: ``tree.dispatch(renderer) -> text``."""

    __slots__ = ()

    def dispatch(self, renderer: TranscribingRenderer) -> str:
        return renderer.render(self)  # type: ignore[arg-type]


@dataclass(frozen=True)
class NullToken(_Dispatchable):
    """An empty position: a zero group, or a skipped run of Chinese digits."""


@dataclass(frozen=True)
class LiteralToken(_Dispatchable):
    text: str


@dataclass(frozen=True)
class MappedToken(_Dispatchable):
    value: int


@dataclass(frozen=True)
class PrefixedToken(_Dispatchable):
    prefix: ValueToken
    value: ValueToken


@dataclass(frozen=True)
class SuffixedToken(_Dispatchable):
    value: ValueToken
    suffix: ValueToken


@dataclass(frozen=True)
class GroupListToken(_Dispatchable):
    children: tuple[ValueToken, ...]

    def __init__(self, children: Iterable[ValueToken]):
        object.__setattr__(self, "children", tuple(children))


ValueToken = Union[
    NullToken,
    LiteralToken,
    MappedToken,
    PrefixedToken,
    SuffixedToken,
    GroupListToken,
]

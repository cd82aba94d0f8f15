"""Largest mapped value that dominates a token subtree."""

from __future__ import annotations

from .tokens import (
    GroupListToken,
    LiteralToken,
    MappedToken,
    NullToken,
    PrefixedToken,
    SuffixedToken,
    ValueToken,
)


def maximum_value(token: ValueToken) -> int:
    """Return the largest leaf value in ``token``'s subtree.

    The Spanish renderer uses this as a one-level lookahead: the maximum of
    a million-group's value decides between "un millón" and "dos millones"
    before the value itself is rendered.

    Null and literal tokens count as 0; so does an empty group list.
    """
    if isinstance(token, MappedToken):
        return token.value
    if isinstance(token, (NullToken, LiteralToken)):
        return 0
    if isinstance(token, PrefixedToken):
        return max(maximum_value(token.prefix), maximum_value(token.value))
    if isinstance(token, SuffixedToken):
        return max(maximum_value(token.value), maximum_value(token.suffix))
    if isinstance(token, GroupListToken):
        return max((maximum_value(child) for child in token.children), default=0)
    raise TypeError(f"Unknown token kind: {type(token).__name__}")

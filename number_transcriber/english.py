"""
English — short scale, no agreement.

    1_234_567.89 → "one million two hundred thirty four thousand
                    five hundred sixty seven and eighty nine"

No hyphens ("thirty four") and no "and" inside groups; "and" only
separates the fractional part.
"""

from __future__ import annotations

from .context import TranscriptionContext
from .models import MappingRole, mapping
from .registry import MappingRegistry
from .rendering import TranscribingRenderer
from .tokenizer import GroupedTokenizer, GroupingRules
from .tokens import MappedToken, PrefixedToken, SuffixedToken, ValueToken

_SUBGROUP = MappingRole.SUBGROUP_QUANTIFIER
_GROUP = MappingRole.GROUP_QUANTIFIER

# ─── Word Table ──────────────────────────────────────────────────────

REGISTRY = MappingRegistry(
    "english",
    [
        mapping(0, "zero"),
        mapping(1, "one"),
        mapping(2, "two"),
        mapping(3, "three"),
        mapping(4, "four"),
        mapping(5, "five"),
        mapping(6, "six"),
        mapping(7, "seven"),
        mapping(8, "eight"),
        mapping(9, "nine"),
        mapping(10, "ten", _SUBGROUP),
        mapping(11, "eleven"),
        mapping(12, "twelve"),
        mapping(13, "thirteen"),
        mapping(14, "fourteen"),
        mapping(15, "fifteen"),
        mapping(16, "sixteen"),
        mapping(17, "seventeen"),
        mapping(18, "eighteen"),
        mapping(19, "nineteen"),
        mapping(20, "twenty"),
        mapping(30, "thirty"),
        mapping(40, "forty"),
        mapping(50, "fifty"),
        mapping(60, "sixty"),
        mapping(70, "seventy"),
        mapping(80, "eighty"),
        mapping(90, "ninety"),
        mapping(100, "hundred", _SUBGROUP),
        mapping(1_000, "thousand", _GROUP),
        mapping(1_000_000, "million", _GROUP),
        mapping(1_000_000_000, "billion", _GROUP),
        mapping(1_000_000_000_000, "trillion", _GROUP),
    ],
)


# ─── Grouping Rules ──────────────────────────────────────────────────


def compose_subgroup(tokenizer: GroupedTokenizer, value: int, quantifier: int) -> ValueToken:
    """345 → Prefixed(Suffixed(3, hundred), Prefixed(forty, five)).

    Tens are found by the same rule: for 45 the quantifier is 10, so the
    base is 40 ("forty") and the remainder 5 follows it.
    """
    remainder = value % quantifier
    if remainder == 0:
        if quantifier >= 100:
            return SuffixedToken(MappedToken(value // quantifier), MappedToken(quantifier))
        return MappedToken(value)

    return PrefixedToken(
        compose_subgroup(tokenizer, value - remainder, quantifier),
        tokenizer.parse_group_value(remainder),
    )


RULES = GroupingRules(
    registry=REGISTRY,
    decimal_separator="and",
    compose_subgroup=compose_subgroup,
)

TOKENIZER = GroupedTokenizer(RULES)
CONTEXT = TranscriptionContext(REGISTRY)


class EnglishRenderer(TranscribingRenderer):
    word_separator = " "

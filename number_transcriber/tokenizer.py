"""
Grouped-decomposition tokenizer — the algorithm shared by every language.

Flow for 1_234_567.89 (English):

    "1234567.89"  ──split──►  1234567  |  89
                                  │
                 peel groups smallest-first (divmod by 1000):
                      567 → bare subtree           (units group)
                      234 → Suffixed(…, thousand)
                        1 → Suffixed(…, million)
                                  │
                 reverse to reading order, then post-process
                                  │
    GroupList( GroupList(million, thousand, units), Literal("and"), GroupList(89) )

A language plugs in through a GroupingRules record: its registry, the word
for the decimal point, and a handful of strategy functions. The strategies
are plain callables that receive the tokenizer so they can recurse into
parse_group_value().

Numbers beyond the largest named quantifier overflow: the remainder is
tokenized recursively and followed by the largest quantifier word, so
10**15 in English reads "one thousand trillion".
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Union

from .exceptions import InvalidInput, MalformedRegistry
from .registry import MappingRegistry
from .tokens import (
    GroupListToken,
    LiteralToken,
    MappedToken,
    NullToken,
    SuffixedToken,
    ValueToken,
)

Number = Union[Decimal, int, float, str]

# Digits allowed on each side of the decimal point. Python refuses to turn
# strings longer than 4300 digits into ints.
MAX_DIGITS = 4_000

ComposeSubgroup = Callable[["GroupedTokenizer", int, int], ValueToken]
ParseGroup = Callable[["GroupedTokenizer", int, int, bool], ValueToken]
PostProcessGroups = Callable[[list[ValueToken]], list[ValueToken]]
TokenizeFraction = Callable[[str], ValueToken]


# ─── Input Coercion ─────────────────────────────────────────────────


def to_decimal(number: Number) -> Decimal:
    """Coerce ``number`` to a finite, non-negative Decimal.

    Floats go through ``str()`` so 22.22 stays 22.22 instead of becoming
    22.219999999999998863131622783839702606201171875.

    Raises:
        InvalidInput: If the value is not a number, not finite, or negative.
    """
    if isinstance(number, bool):
        raise InvalidInput(f"Not a number: {number!r}", details={"number": repr(number)})

    if isinstance(number, Decimal):
        value = number
    elif isinstance(number, (int, float)):
        value = Decimal(str(number))
    elif isinstance(number, str):
        try:
            value = Decimal(number.strip())
        except InvalidOperation:
            raise InvalidInput(
                f"Not a decimal number: {number!r}", details={"number": number}
            ) from None
    else:
        raise InvalidInput(
            f"Unsupported number type: {type(number).__name__}",
            details={"type": type(number).__name__},
        )

    if not value.is_finite():
        raise InvalidInput(f"Number must be finite: {number!r}", details={"number": str(value)})
    if value < 0:
        raise InvalidInput(
            "Negative numbers are not supported", details={"number": str(value)}
        )

    # Measured on the digit tuple, before "1e999999999" is ever expanded
    digits, exponent = len(value.as_tuple().digits), value.as_tuple().exponent
    integer_width = digits + exponent
    fraction_width = max(-exponent, 0)
    if integer_width > MAX_DIGITS or fraction_width > MAX_DIGITS:
        raise InvalidInput(
            f"Number has more than {MAX_DIGITS} digits before or after the decimal point",
            details={
                "integer_digits": integer_width,
                "fraction_digits": fraction_width,
                "max_digits": MAX_DIGITS,
            },
        )

    # -0 and 0 are the same number
    return value.copy_abs()


def split_decimal(value: Decimal) -> tuple[int, Optional[str]]:
    """Split at the decimal point: Decimal("22.05") → (22, "05").

    The fractional digits are returned as written (leading and trailing
    zeros kept). ``None`` means the literal had no decimal point at all.
    """
    text = format(value, "f")
    integer_digits, point, fractional_digits = text.partition(".")
    return int(integer_digits), (fractional_digits if point else None)


# ─── Language Capability Record ─────────────────────────────────────


@dataclass(frozen=True)
class GroupingRules:
    """Everything the shared algorithm needs to know about a language."""

    registry: MappingRegistry
    decimal_separator: str  # "and", "coma", "点"
    compose_subgroup: ComposeSubgroup
    parse_group: Optional[ParseGroup] = None
    post_process_groups: Optional[PostProcessGroups] = None
    tokenize_fraction: Optional[TokenizeFraction] = None


# ─── Grouped Tokenizer ──────────────────────────────────────────────


class GroupedTokenizer:
    """Turns a non-negative decimal into a token tree.

    Immutable after construction; safe to share between threads.
    """

    def __init__(self, rules: GroupingRules):
        registry = rules.registry
        self.rules = rules
        self.group_quantifiers = registry.group_quantifiers  # descending
        self.subgroup_quantifiers = registry.subgroup_quantifiers  # descending
        self.maximum_group_index = len(registry.group_quantifiers)
        self.grouping_width = registry.min_group_quantifier
        self.largest_group_quantifier = registry.max_group_quantifier
        self.largest_consecutive = registry.largest_consecutive

    def tokenize(self, number: Number) -> ValueToken:
        """Tokenize ``number``.

        Raises:
            InvalidInput: If the number is negative or not a finite decimal.
        """
        integer_part, fractional_digits = split_decimal(to_decimal(number))

        integer_token = self.tokenize_integer(integer_part)
        if fractional_digits is None:
            return integer_token

        if self.rules.tokenize_fraction is not None:
            fractional_token = self.rules.tokenize_fraction(fractional_digits)
        else:
            # 0.20 is read as "twenty", 0.05 as "five"
            fractional_token = self.tokenize_integer(int(fractional_digits))

        return GroupListToken(
            (integer_token, LiteralToken(self.rules.decimal_separator), fractional_token)
        )

    def tokenize_integer(self, value: int) -> GroupListToken:
        if value == 0:
            return GroupListToken((MappedToken(0),))

        groups = self._peel_groups(value)
        # groups were collected {units, thousands, millions, ...}
        groups.reverse()

        if self.rules.post_process_groups is not None:
            groups = self.rules.post_process_groups(groups)
        return GroupListToken(groups)

    def parse_group_value(self, value: int) -> ValueToken:
        """Tokenize a single group value (0 <= value < grouping width)."""
        if value <= self.largest_consecutive:
            return MappedToken(value)

        for quantifier in self.subgroup_quantifiers:
            if value >= quantifier:
                return self.rules.compose_subgroup(self, value, quantifier)

        raise MalformedRegistry(
            f"{value} cannot be decomposed with the {self.rules.registry.name} registry",
            details={"registry": self.rules.registry.name, "value": value},
        )

    def default_parse_group(self, group_value: int, quantifier: int) -> ValueToken:
        """Null for an empty group, the bare value for units, value + quantifier otherwise."""
        if group_value == 0:
            return NullToken()
        if quantifier > 1:
            return SuffixedToken(self.parse_group_value(group_value), MappedToken(quantifier))
        return self.parse_group_value(group_value)

    # ─── Internal Helpers ────────────────────────────────────────────

    def _parse_group(self, group_value: int, quantifier: int, leading: bool) -> ValueToken:
        if self.rules.parse_group is not None:
            return self.rules.parse_group(self, group_value, quantifier, leading)
        return self.default_parse_group(group_value, quantifier)

    def _grouping_divisor(self, index: int) -> int:
        """Divisor that peels group ``index`` off the number.

        Usually the grouping width, but where two consecutive group
        quantifiers are further apart (Spanish millón → billón is 10**6) the
        group spans the whole gap.
        """
        if index == 0 or index >= self.maximum_group_index:
            return self.grouping_width

        last = len(self.group_quantifiers) - 1
        current_quantifier = self.group_quantifiers[last - index + 1]
        next_quantifier = self.group_quantifiers[last - index]
        return next_quantifier // current_quantifier

    def _peel_groups(self, value: int) -> list[ValueToken]:
        groups: list[ValueToken] = []
        remaining = value
        index = 0
        quantifier = 1  # 1, 1_000, 1_000_000, ...
        divisor = self._grouping_divisor(index)

        while remaining:
            if index == self.maximum_group_index and remaining >= divisor:
                # Beyond the largest quantifier: "<remaining> trillion".
                # Appended in reverse because the list is reversed afterwards.
                groups.append(MappedToken(self.largest_group_quantifier))
                groups.append(self.tokenize_integer(remaining))
                break

            remaining, group_value = divmod(remaining, divisor)

            if group_value >= self.grouping_width:
                # Only in groups wider than the default: "mil millones"
                groups.append(
                    SuffixedToken(self.tokenize_integer(group_value), MappedToken(quantifier))
                )
            else:
                groups.append(self._parse_group(group_value, quantifier, remaining == 0))

            index += 1
            quantifier *= divisor
            divisor = self._grouping_divisor(index)

        return groups


# ─── Sequential Digits ──────────────────────────────────────────────


def tokenize_sequential_digits(digits: str) -> GroupListToken:
    """One MappedToken per digit, in written order: "05" → [0, 5]."""
    return GroupListToken(MappedToken(int(digit)) for digit in digits)

"""
Simplified Chinese financial numerals (大写数字).

Groups are four digits wide (萬, 億, 兆), and inside a group every digit
carries its own position word:

    11          → 壹拾壹
    1_010       → 壹仟零壹拾
    10_010      → 壹萬零拾
    1_0000_0001 → 壹億零壹
    10**16      → 壹萬兆
    0.05        → 零点零伍

ZERO RULES:
  - One 零 for a whole run of skipped positions, never two in a row.
  - No 零 at the start, none at the end (壹仟, not 壹仟零).
  - A group after the first that lacks its thousands digit starts with 零.
The tokenizer marks candidate positions with NullToken; ChineseRenderer
decides which of them actually print.
"""

from __future__ import annotations

from .context import TranscriptionContext
from .models import MappingRole, mapping
from .registry import MappingRegistry
from .rendering import GrammarState, TranscribingRenderer
from .tokenizer import GroupedTokenizer, GroupingRules, tokenize_sequential_digits
from .tokens import GroupListToken, MappedToken, NullToken, SuffixedToken, ValueToken

_SUBGROUP = MappingRole.SUBGROUP_QUANTIFIER
_GROUP = MappingRole.GROUP_QUANTIFIER

# ─── Word Table ──────────────────────────────────────────────────────

REGISTRY = MappingRegistry(
    "chinese",
    [
        mapping(0, "零"),
        mapping(1, "壹"),
        mapping(2, "贰"),
        mapping(3, "叁"),
        mapping(4, "肆"),
        mapping(5, "伍"),
        mapping(6, "陆"),
        mapping(7, "柒"),
        mapping(8, "捌"),
        mapping(9, "玖"),
        mapping(10, "拾", _SUBGROUP),
        mapping(100, "佰", _SUBGROUP),
        mapping(1_000, "仟", _SUBGROUP),
        mapping(10_000, "萬", _GROUP),
        mapping(100_000_000, "億", _GROUP),
        mapping(1_000_000_000_000, "兆", _GROUP),
    ],
)


# ─── Grouping Rules ──────────────────────────────────────────────────


def compose_subgroup(tokenizer: GroupedTokenizer, value: int, quantifier: int) -> ValueToken:
    """Peel one digit per position, from ``quantifier`` down to the units."""
    positions = [q for q in tokenizer.subgroup_quantifiers if q <= quantifier]
    positions.append(1)

    parts: list[ValueToken] = []
    skipped = False
    remaining = value
    for position in positions:
        digit, remaining = divmod(remaining, position)
        if digit == 0:
            skipped = bool(parts)
            continue
        if skipped:
            parts.append(NullToken())
            skipped = False
        if position == 1:
            parts.append(MappedToken(digit))
        else:
            parts.append(SuffixedToken(MappedToken(digit), MappedToken(position)))

    if len(parts) == 1:
        return parts[0]
    return GroupListToken(parts)


def parse_group(tokenizer: GroupedTokenizer, group_value: int, quantifier: int, leading: bool) -> ValueToken:
    group = tokenizer.default_parse_group(group_value, quantifier)
    # 壹萬零拾: a gap inside the number is read as 零
    if not leading and 0 < group_value < 1_000:
        return GroupListToken((NullToken(), group))
    return group


def strip_trailing_nulls(groups: list[ValueToken]) -> list[ValueToken]:
    while groups and isinstance(groups[-1], NullToken):
        groups.pop()
    return groups


RULES = GroupingRules(
    registry=REGISTRY,
    decimal_separator="点",
    compose_subgroup=compose_subgroup,
    parse_group=parse_group,
    post_process_groups=strip_trailing_nulls,
    tokenize_fraction=tokenize_sequential_digits,
)

TOKENIZER = GroupedTokenizer(RULES)
CONTEXT = TranscriptionContext(REGISTRY)


# ─── Renderer ────────────────────────────────────────────────────────


class ChineseRenderer(TranscribingRenderer):
    """Prints a NullToken as 零 unless it would lead or repeat a zero."""

    word_separator = ""

    def __init__(self, context: TranscriptionContext):
        super().__init__(context)
        self._at_start = True
        self._after_zero = False

    def _mapped(self, token: MappedToken, state: GrammarState) -> str:
        self._at_start = False
        self._after_zero = False
        return super()._mapped(token, state)

    def _null(self, token: NullToken, state: GrammarState) -> str:
        if self._at_start or self._after_zero:
            return ""
        self._after_zero = True
        return self.context.zero_word

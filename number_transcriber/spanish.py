"""
Spanish — long scale with number and apocope agreement.

    1            → "uno"
    100 / 101    → "cien" / "ciento uno"
    1_000        → "mil"                 (never "un mil")
    1_000_000    → "un millón"
    2_000_000    → "dos millones"
    10**9        → "mil millones"        (the long scale has no word for it)
    21_000       → "veintiún mil"
    10**12       → "un billón"

The group between millón and billón is six digits wide, so the tokenizer
peels 1000, 1000, then 10**6.

Agreement is decided top-down by SpanishRenderer, which threads a
GrammarState through the tree. The state is passed by value: each child
receives its own copy and nothing leaks back to siblings.
"""

from __future__ import annotations

from .accumulator import maximum_value
from .context import TranscriptionContext
from .models import GrammaticalNumber, MappingRole, WordForm, map_word, mapping, word_from
from .registry import MappingRegistry
from .rendering import GrammarState, TranscribingRenderer
from .tokenizer import GroupedTokenizer, GroupingRules
from .tokens import (
    GroupListToken,
    LiteralToken,
    MappedToken,
    PrefixedToken,
    SuffixedToken,
    ValueToken,
)

_SUBGROUP = MappingRole.SUBGROUP_QUANTIFIER
_GROUP = MappingRole.GROUP_QUANTIFIER
_SINGULAR = GrammaticalNumber.SINGULAR
_PLURAL = GrammaticalNumber.PLURAL
_DEFAULT = WordForm.DEFAULT
_SHORTENED = WordForm.SHORTENED

# Values with an apocopated form before mil / millón / billón
_APOCOPATED = (1, 21, 100)

# ─── Word Table ──────────────────────────────────────────────────────

REGISTRY = MappingRegistry(
    "spanish",
    [
        mapping(0, "cero"),
        mapping(1, word_from("uno", map_word("un", form=_SHORTENED))),
        mapping(2, "dos"),
        mapping(3, "tres"),
        mapping(4, "cuatro"),
        mapping(5, "cinco"),
        mapping(6, "seis"),
        mapping(7, "siete"),
        mapping(8, "ocho"),
        mapping(9, "nueve"),
        mapping(10, "diez", _SUBGROUP),
        mapping(11, "once"),
        mapping(12, "doce"),
        mapping(13, "trece"),
        mapping(14, "catorce"),
        mapping(15, "quince"),
        mapping(16, "dieciséis"),
        mapping(17, "diecisiete"),
        mapping(18, "dieciocho"),
        mapping(19, "diecinueve"),
        mapping(20, "veinte", _SUBGROUP),
        mapping(21, word_from("veintiuno", map_word("veintiún", form=_SHORTENED))),
        mapping(22, "veintidós"),
        mapping(23, "veintitrés"),
        mapping(24, "veinticuatro"),
        mapping(25, "veinticinco"),
        mapping(26, "veintiséis"),
        mapping(27, "veintisiete"),
        mapping(28, "veintiocho"),
        mapping(29, "veintinueve"),
        mapping(30, "treinta", _SUBGROUP),
        mapping(40, "cuarenta", _SUBGROUP),
        mapping(50, "cincuenta", _SUBGROUP),
        mapping(60, "sesenta", _SUBGROUP),
        mapping(70, "setenta", _SUBGROUP),
        mapping(80, "ochenta", _SUBGROUP),
        mapping(90, "noventa", _SUBGROUP),
        mapping(100, word_from("ciento", map_word("cien", form=_SHORTENED)), _SUBGROUP),
        mapping(200, "doscientos", _SUBGROUP),
        mapping(300, "trescientos", _SUBGROUP),
        mapping(400, "cuatrocientos", _SUBGROUP),
        mapping(500, "quinientos", _SUBGROUP),
        mapping(600, "seiscientos", _SUBGROUP),
        mapping(700, "setecientos", _SUBGROUP),
        mapping(800, "ochocientos", _SUBGROUP),
        mapping(900, "novecientos", _SUBGROUP),
        mapping(1_000, "mil", _GROUP),
        mapping(
            1_000_000,
            word_from(map_word("millón", _SINGULAR), map_word("millones", _PLURAL)),
            _GROUP,
        ),
        mapping(
            1_000_000_000_000,
            word_from(map_word("billón", _SINGULAR), map_word("billones", _PLURAL)),
            _GROUP,
        ),
    ],
)


# ─── Grouping Rules ──────────────────────────────────────────────────


def compose_subgroup(tokenizer: GroupedTokenizer, value: int, quantifier: int) -> ValueToken:
    """Tens and hundreds are registered words, so the base is always a leaf.

    45  → Prefixed(cuarenta, Prefixed("y", cinco))
    145 → Prefixed(ciento, Prefixed(cuarenta, Prefixed("y", cinco)))
    """
    remainder = value - quantifier
    if remainder == 0:
        return MappedToken(value)

    rest = tokenizer.parse_group_value(remainder)
    if 20 <= quantifier < 100:
        rest = PrefixedToken(LiteralToken("y"), rest)
    return PrefixedToken(MappedToken(quantifier), rest)


def parse_group(tokenizer: GroupedTokenizer, group_value: int, quantifier: int, leading: bool) -> ValueToken:
    # "mil", not "un mil"
    if quantifier == 1_000 and group_value == 1:
        return MappedToken(1_000)
    return tokenizer.default_parse_group(group_value, quantifier)


RULES = GroupingRules(
    registry=REGISTRY,
    decimal_separator="coma",
    compose_subgroup=compose_subgroup,
    parse_group=parse_group,
)

TOKENIZER = GroupedTokenizer(RULES)
CONTEXT = TranscriptionContext(REGISTRY)


# ─── Renderer ────────────────────────────────────────────────────────


class SpanishRenderer(TranscribingRenderer):
    """Chooses singular/plural and full/apocopated forms while rendering.

    RULES:
      - "un"/"veintiún"/"cien" only directly before a group quantifier of 1000 or more.
      - The quantifier is plural when the value in front of it exceeds 1.
      - "ciento" before a non-zero remainder, "cien" when standing alone.
    """

    word_separator = " "

    def _suffixed(self, token: SuffixedToken, state: GrammarState) -> str:
        value_max = maximum_value(token.value)
        suffix_max = maximum_value(token.suffix)

        shortened = suffix_max >= 1_000 and value_max in _APOCOPATED
        value_state = GrammarState(state.number, _SHORTENED if shortened else _DEFAULT)
        suffix_state = GrammarState(_PLURAL if value_max > 1 else _SINGULAR, state.form)

        value = self.render(token.value, value_state)
        suffix = self.render(token.suffix, suffix_state)
        return f"{value}{self.word_separator}{suffix}"

    def _prefixed(self, token: PrefixedToken, state: GrammarState) -> str:
        long_form = maximum_value(token.prefix) == 100 and maximum_value(token.value) > 0
        prefix_state = GrammarState(state.number, _DEFAULT if long_form else _SHORTENED)
        value_state = GrammarState(state.number, _DEFAULT)

        prefix = self.render(token.prefix, prefix_state)
        value = self.render(token.value, value_state)
        return f"{prefix}{self.word_separator}{value}"

    def _group_list(self, token: GroupListToken, state: GrammarState) -> str:
        parts = []
        previous_max = 0
        for child in token.children:
            child_state = GrammarState(
                _PLURAL if previous_max > 1 else _SINGULAR,
                _SHORTENED if _is_bare_hundred(child) else _DEFAULT,
            )
            parts.append(self.render(child, child_state))
            previous_max = maximum_value(child)
        return self.word_separator.join(part for part in parts if part)


def _is_bare_hundred(token: ValueToken) -> bool:
    return isinstance(token, MappedToken) and token.value == 100

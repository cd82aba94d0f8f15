"""
Test suite for the number transcriber core.

Everything here is a pure computation — no network, no clock, no flakiness.
Token trees are checked structurally where the shape matters (grouping,
overflow, zero markers); everything else is checked on the rendered text.

Run: pytest tests/ -v
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from number_transcriber import chinese, english, spanish
from number_transcriber.accumulator import maximum_value
from number_transcriber.context import TranscriptionContext
from number_transcriber.exceptions import (
    InvalidInput,
    MalformedRegistry,
    TranscriptionError,
    UnsupportedLanguage,
)
from number_transcriber.fixtures import load_fixtures
from number_transcriber.models import (
    GrammaticalNumber,
    MappingEntry,
    MappingRole,
    WordForm,
    WordValue,
    map_word,
    mapping,
    word_from,
)
from number_transcriber.pipeline import (
    NumberTranscriber,
    resolve_language,
    supported_languages,
    transcribe,
)
from number_transcriber.registry import MappingRegistry
from number_transcriber.tokenizer import MAX_DIGITS, GroupedTokenizer, GroupingRules, to_decimal
from number_transcriber.tokens import (
    GroupListToken,
    LiteralToken,
    MappedToken,
    NullToken,
    PrefixedToken,
    SuffixedToken,
)

FIXTURES = Path(__file__).parent / "fixtures"

_LANGUAGE_MODULES = {"en": english, "es": spanish, "zh": chinese}


# ═══════════════════════════════════════════════════════════════════════
# MAPPING REGISTRY
# ═══════════════════════════════════════════════════════════════════════


class TestRegistryFacts:
    """Facts derived once from each language table."""

    def test_english(self):
        registry = english.REGISTRY
        assert registry.min_group_quantifier == 1_000
        assert registry.max_group_quantifier == 10**12
        assert registry.largest_consecutive == 20
        assert registry.group_quantifiers == (10**12, 10**9, 10**6, 1_000)
        assert registry.subgroup_quantifiers == (100, 10)

    def test_spanish(self):
        registry = spanish.REGISTRY
        assert registry.min_group_quantifier == 1_000
        assert registry.max_group_quantifier == 10**12
        assert registry.largest_consecutive == 30
        assert registry.group_quantifiers == (10**12, 10**6, 1_000)
        assert registry.subgroup_quantifiers[:3] == (900, 800, 700)
        assert registry.subgroup_quantifiers[-1] == 10

    def test_chinese(self):
        registry = chinese.REGISTRY
        assert registry.min_group_quantifier == 10_000
        assert registry.max_group_quantifier == 10**12
        assert registry.largest_consecutive == 10
        assert registry.subgroup_quantifiers == (1_000, 100, 10)

    def test_entry_lookup(self):
        assert english.REGISTRY.entry(40).word.word() == "forty"
        assert 40 in english.REGISTRY
        assert 41 not in english.REGISTRY

    def test_unmapped_value_raises_key_error(self):
        with pytest.raises(KeyError):
            english.REGISTRY.entry(41)


class TestMalformedRegistry:
    """Broken tables are rejected when they are built."""

    def test_empty(self):
        with pytest.raises(MalformedRegistry, match="empty"):
            MappingRegistry("broken", [])

    def test_duplicate_value(self):
        with pytest.raises(MalformedRegistry, match="ascending"):
            MappingRegistry(
                "broken",
                [
                    mapping(1, "one"),
                    mapping(1, "uno"),
                    mapping(1_000, "thousand", MappingRole.GROUP_QUANTIFIER),
                ],
            )

    def test_descending_values(self):
        with pytest.raises(MalformedRegistry) as exc_info:
            MappingRegistry(
                "broken",
                [
                    mapping(2, "two"),
                    mapping(1, "one"),
                    mapping(1_000, "thousand", MappingRole.GROUP_QUANTIFIER),
                ],
            )
        assert exc_info.value.details["previous"] == 2
        assert exc_info.value.details["current"] == 1

    def test_no_group_quantifier(self):
        with pytest.raises(MalformedRegistry, match="group quantifiers"):
            MappingRegistry("broken", [mapping(0, "zero"), mapping(1, "one")])

    def test_last_entry_not_group_quantifier(self):
        with pytest.raises(MalformedRegistry, match="last entry"):
            MappingRegistry(
                "broken",
                [
                    mapping(1, "one"),
                    mapping(1_000, "thousand", MappingRole.GROUP_QUANTIFIER),
                    mapping(2_000, "two thousand"),
                ],
            )

    def test_undecomposable_group_value(self):
        # 0..3 and 1000 only: 5 can be neither mapped nor composed
        registry = MappingRegistry(
            "sparse",
            [
                mapping(0, "zero"),
                mapping(1, "one"),
                mapping(2, "two"),
                mapping(3, "three"),
                mapping(1_000, "thousand", MappingRole.GROUP_QUANTIFIER),
            ],
        )
        tokenizer = GroupedTokenizer(
            GroupingRules(
                registry=registry,
                decimal_separator="point",
                compose_subgroup=english.compose_subgroup,
            )
        )
        with pytest.raises(MalformedRegistry):
            tokenizer.tokenize(5)

    def test_negative_value_rejected(self):
        with pytest.raises(ValidationError):
            MappingEntry(value=-1, word=word_from("minus one"))

    def test_mapping_shorthand_reports_bad_value_as_malformed(self):
        with pytest.raises(MalformedRegistry) as exc_info:
            mapping(-1, "minus one")
        assert exc_info.value.details["value"] == -1

    def test_oversized_value_rejected(self):
        with pytest.raises(MalformedRegistry):
            mapping(2**63, "too big", MappingRole.GROUP_QUANTIFIER)

    def test_missing_zero_entry(self):
        with pytest.raises(MalformedRegistry, match="simple entry for 0"):
            MappingRegistry(
                "nozero",
                [
                    mapping(1, "one"),
                    mapping(1_000, "thousand", MappingRole.GROUP_QUANTIFIER),
                ],
            )

    def test_zero_must_be_a_simple_entry(self):
        with pytest.raises(MalformedRegistry) as exc_info:
            MappingRegistry(
                "zerogroup",
                [
                    mapping(0, "zero", MappingRole.SUBGROUP_QUANTIFIER),
                    mapping(1_000, "thousand", MappingRole.GROUP_QUANTIFIER),
                ],
            )
        assert exc_info.value.details["first_role"] == "SUBGROUP_QUANTIFIER"

    def test_malformed_registry_is_a_transcription_error(self):
        with pytest.raises(TranscriptionError) as exc_info:
            MappingRegistry("broken", [])
        assert exc_info.value.code == "MALFORMED_REGISTRY"


# ═══════════════════════════════════════════════════════════════════════
# WORD VALUES
# ═══════════════════════════════════════════════════════════════════════


class TestWordValues:
    def test_plain_string_covers_everything(self):
        value = word_from("dos")
        for number in GrammaticalNumber:
            for form in WordForm:
                assert value.word(number, form) == "dos"

    def test_shortened_override(self):
        value = word_from("uno", map_word("un", form=WordForm.SHORTENED))
        assert value.word() == "uno"
        assert value.word(GrammaticalNumber.SINGULAR, WordForm.SHORTENED) == "un"
        assert value.word(GrammaticalNumber.PLURAL, WordForm.SHORTENED) == "un"

    def test_number_split(self):
        value = word_from(
            map_word("millón", GrammaticalNumber.SINGULAR),
            map_word("millones", GrammaticalNumber.PLURAL),
        )
        assert value.word(GrammaticalNumber.SINGULAR) == "millón"
        assert value.word(GrammaticalNumber.PLURAL, WordForm.SHORTENED) == "millones"

    def test_incomplete_word_value_rejected(self):
        with pytest.raises(MalformedRegistry, match="PLURAL"):
            word_from(map_word("millón", GrammaticalNumber.SINGULAR))

    def test_incomplete_model_rejected(self):
        with pytest.raises(MalformedRegistry):
            WordValue(singular_default="x")

    def test_no_mappings_rejected(self):
        with pytest.raises(MalformedRegistry):
            word_from()

    def test_context_lookup(self):
        context = spanish.CONTEXT
        assert context.as_word(1) == "uno"
        assert context.as_word(1, form=WordForm.SHORTENED) == "un"
        assert context.as_word(10**6, GrammaticalNumber.PLURAL) == "millones"
        assert context.zero_word == "cero"

    def test_context_is_per_registry(self):
        assert TranscriptionContext(chinese.REGISTRY).zero_word == "零"


# ═══════════════════════════════════════════════════════════════════════
# TOKEN TREES
# ═══════════════════════════════════════════════════════════════════════


class TestTokenTrees:
    """Structure of the trees the grouped tokenizer builds."""

    def test_english_thousands(self):
        tree = english.TOKENIZER.tokenize(2_345)
        assert tree == GroupListToken(
            (
                SuffixedToken(MappedToken(2), MappedToken(1_000)),
                PrefixedToken(
                    SuffixedToken(MappedToken(3), MappedToken(100)),
                    PrefixedToken(MappedToken(40), MappedToken(5)),
                ),
            )
        )

    def test_zero_is_a_single_leaf(self):
        for module in _LANGUAGE_MODULES.values():
            assert module.TOKENIZER.tokenize(0) == GroupListToken((MappedToken(0),))

    def test_empty_groups_are_null(self):
        tree = english.TOKENIZER.tokenize(1_000_000)
        assert tree == GroupListToken(
            (SuffixedToken(MappedToken(1), MappedToken(10**6)), NullToken(), NullToken())
        )

    def test_overflow_beyond_largest_quantifier(self):
        tree = english.TOKENIZER.tokenize(10**15)
        assert tree == GroupListToken(
            (
                GroupListToken((SuffixedToken(MappedToken(1), MappedToken(1_000)), NullToken())),
                MappedToken(10**12),
                NullToken(),
                NullToken(),
                NullToken(),
                NullToken(),
            )
        )

    def test_spanish_six_digit_group(self):
        # millón → billón spans 10**6, so 10**9 is "mil" millones
        tree = spanish.TOKENIZER.tokenize(10**9)
        assert tree == GroupListToken(
            (
                SuffixedToken(GroupListToken((MappedToken(1_000), NullToken())), MappedToken(10**6)),
                NullToken(),
                NullToken(),
            )
        )

    def test_spanish_conjunction(self):
        tree = spanish.TOKENIZER.tokenize(31)
        assert tree == GroupListToken(
            (PrefixedToken(MappedToken(30), PrefixedToken(LiteralToken("y"), MappedToken(1))),)
        )

    def test_chinese_zero_marker_inside_group(self):
        tree = chinese.TOKENIZER.tokenize(1_010)
        assert tree == GroupListToken(
            (
                GroupListToken(
                    (
                        SuffixedToken(MappedToken(1), MappedToken(1_000)),
                        NullToken(),
                        SuffixedToken(MappedToken(1), MappedToken(10)),
                    )
                ),
            )
        )

    def test_chinese_trailing_nulls_stripped(self):
        tree = chinese.TOKENIZER.tokenize(10_000)
        assert tree == GroupListToken((SuffixedToken(MappedToken(1), MappedToken(10_000)),))

    def test_decimal_composite(self):
        tree = english.TOKENIZER.tokenize("1.05")
        assert tree == GroupListToken(
            (
                GroupListToken((MappedToken(1),)),
                LiteralToken("and"),
                GroupListToken((MappedToken(5),)),
            )
        )

    def test_chinese_fraction_keeps_leading_zero(self):
        tree = chinese.TOKENIZER.tokenize("0.05")
        assert tree.children[2] == GroupListToken((MappedToken(0), MappedToken(5)))

    def test_tokenize_through_transcriber(self):
        assert NumberTranscriber("en").tokenize(7) == GroupListToken((MappedToken(7),))


class TestMaximumValue:
    def test_leaf(self):
        assert maximum_value(MappedToken(40)) == 40

    def test_null_and_literal_are_zero(self):
        assert maximum_value(NullToken()) == 0
        assert maximum_value(LiteralToken("y")) == 0

    def test_empty_group_list(self):
        assert maximum_value(GroupListToken(())) == 0

    def test_nested(self):
        token = SuffixedToken(
            PrefixedToken(MappedToken(100), MappedToken(21)), MappedToken(1_000)
        )
        assert maximum_value(token) == 1_000
        assert maximum_value(token.value) == 100

    def test_unknown_kind(self):
        with pytest.raises(TypeError):
            maximum_value("forty")  # type: ignore[arg-type]


# ═══════════════════════════════════════════════════════════════════════
# ENGLISH
# ═══════════════════════════════════════════════════════════════════════


class TestEnglish:
    @pytest.mark.parametrize("value", range(0, 21))
    def test_consecutive_values_are_registered_words(self, value):
        assert transcribe(value, "en") == english.REGISTRY.entry(value).word.word()

    @pytest.mark.parametrize(
        ("exponent", "expected"),
        [
            (1, "ten"),
            (2, "one hundred"),
            (3, "one thousand"),
            (4, "ten thousand"),
            (5, "one hundred thousand"),
            (6, "one million"),
            (9, "one billion"),
            (12, "one trillion"),
            (13, "ten trillion"),
            (15, "one thousand trillion"),
            (16, "ten thousand trillion"),
        ],
    )
    def test_powers_of_ten(self, exponent, expected):
        assert transcribe(10**exponent, "en") == expected

    def test_decimal(self):
        assert transcribe(Decimal("22.22"), "en") == "twenty two and twenty two"

    def test_float_input(self):
        assert transcribe(22.22, "en") == "twenty two and twenty two"

    def test_zero_fraction_still_spoken(self):
        assert transcribe("22.0", "en") == "twenty two and zero"

    def test_underscore_grouping(self):
        assert transcribe("1_000_000", "en") == "one million"

    def test_scientific_notation(self):
        assert transcribe(Decimal("1E+3"), "en") == "one thousand"

    def test_negative_zero_is_zero(self):
        assert transcribe("-0", "en") == "zero"


# ═══════════════════════════════════════════════════════════════════════
# SPANISH
# ═══════════════════════════════════════════════════════════════════════


class TestSpanish:
    """Agreement: un/uno, cien/ciento, millón/millones."""

    @pytest.mark.parametrize("value", range(0, 31))
    def test_consecutive_values_are_registered_words(self, value):
        assert transcribe(value, "es") == spanish.REGISTRY.entry(value).word.word()

    def test_one(self):
        assert transcribe(1, "es") == "uno"

    def test_one_million_is_shortened(self):
        assert transcribe(1_000_000, "es") == "un millón"

    def test_two_million_is_plural(self):
        assert transcribe(2_000_000, "es") == "dos millones"

    def test_thousand_has_no_article(self):
        assert transcribe(1_000, "es") == "mil"

    def test_hundred_alone(self):
        assert transcribe(100, "es") == "cien"

    def test_hundred_with_remainder(self):
        assert transcribe(101, "es") == "ciento uno"

    def test_hundred_thousand(self):
        assert transcribe(100_000, "es") == "cien mil"

    def test_hundred_after_thousand(self):
        assert transcribe(100_100, "es") == "cien mil cien"

    def test_twenty_one_is_shortened_before_quantifier(self):
        assert transcribe(21_000, "es") == "veintiún mil"
        assert transcribe(21_000_000, "es") == "veintiún millones"
        assert transcribe(21, "es") == "veintiuno"

    def test_thousand_millions(self):
        assert transcribe(10**9, "es") == "mil millones"

    def test_billion_is_long_scale(self):
        assert transcribe(10**12, "es") == "un billón"
        assert transcribe(10**13, "es") == "diez billones"

    def test_overflow(self):
        assert transcribe(10**15, "es") == "mil billones"

    def test_conjunction_only_between_tens_and_units(self):
        assert transcribe(45, "es") == "cuarenta y cinco"
        assert transcribe(145, "es") == "ciento cuarenta y cinco"
        assert transcribe(105, "es") == "ciento cinco"

    def test_accented_spellings(self):
        assert transcribe(16, "es") == "dieciséis"
        assert transcribe(22, "es") == "veintidós"
        assert transcribe(300, "es") == "trescientos"

    def test_decimal(self):
        assert transcribe("22.22", "es") == "veintidós coma veintidós"


# ═══════════════════════════════════════════════════════════════════════
# CHINESE (FINANCIAL)
# ═══════════════════════════════════════════════════════════════════════


class TestChinese:
    @pytest.mark.parametrize("value", range(0, 11))
    def test_consecutive_values_are_registered_words(self, value):
        assert transcribe(value, "zh") == chinese.REGISTRY.entry(value).word.word()

    def test_ten_is_a_single_word(self):
        assert transcribe(10, "zh") == "拾"

    def test_eleven(self):
        assert transcribe(11, "zh") == "壹拾壹"

    def test_single_zero_inside_group(self):
        text = transcribe(1_010, "zh")
        assert text == "壹仟零壹拾"
        assert text.count("零") == 1

    def test_single_zero_across_groups(self):
        text = transcribe(10_010, "zh")
        assert text == "壹萬零拾"
        assert text.count("零") == 1

    def test_zero_run_collapses(self):
        assert transcribe(1_0000_0001, "zh") == "壹億零壹"

    def test_no_trailing_zero(self):
        text = transcribe(1_000, "zh")
        assert text == "壹仟"
        assert "零" not in text

    def test_group_quantifiers(self):
        assert transcribe(10**4, "zh") == "壹萬"
        assert transcribe(10**8, "zh") == "壹億"
        assert transcribe(10**12, "zh") == "壹兆"

    def test_overflow(self):
        assert transcribe(10**16, "zh") == "壹萬兆"

    def test_fraction_digits_in_order(self):
        assert transcribe("0.05", "zh") == "零点零伍"

    def test_renderer_state_is_per_call(self):
        transcriber = NumberTranscriber("zh")
        assert transcriber.transcribe(10_010) == "壹萬零拾"
        assert transcriber.transcribe(10_010) == "壹萬零拾"


# ═══════════════════════════════════════════════════════════════════════
# INVALID INPUT
# ═══════════════════════════════════════════════════════════════════════


class TestInvalidInput:
    @pytest.mark.parametrize("language", ["en", "es", "zh"])
    def test_negative_rejected_for_every_language(self, language):
        with pytest.raises(InvalidInput):
            _LANGUAGE_MODULES[language].TOKENIZER.tokenize(-1)

    @pytest.mark.parametrize("number", ["abc", "", "1.2.3", "NaN", "Infinity", "-5.5"])
    def test_bad_literals(self, number):
        with pytest.raises(InvalidInput):
            transcribe(number, "en")

    def test_non_finite_float(self):
        with pytest.raises(InvalidInput, match="finite"):
            transcribe(float("inf"), "en")

    def test_bool_is_not_a_number(self):
        with pytest.raises(InvalidInput):
            to_decimal(True)

    def test_unsupported_type(self):
        with pytest.raises(InvalidInput) as exc_info:
            to_decimal([1, 2])  # type: ignore[arg-type]
        assert exc_info.value.details["type"] == "list"

    def test_error_code(self):
        with pytest.raises(InvalidInput) as exc_info:
            transcribe(-1, "es")
        assert exc_info.value.code == "INVALID_INPUT"

    def test_too_many_integer_digits(self):
        with pytest.raises(InvalidInput) as exc_info:
            transcribe("1e5000", "en")
        assert exc_info.value.details["max_digits"] == MAX_DIGITS

    def test_huge_exponent_rejected_without_expanding(self):
        with pytest.raises(InvalidInput):
            transcribe("1e999999999", "zh")

    def test_too_many_fraction_digits(self):
        with pytest.raises(InvalidInput):
            transcribe("0." + "1" * 5_000, "es")

    def test_largest_accepted_width(self):
        text = transcribe("1" + "0" * (MAX_DIGITS - 1), "en")
        assert text.startswith("one ")
        assert text.endswith("trillion")


# ═══════════════════════════════════════════════════════════════════════
# LANGUAGE DISPATCH
# ═══════════════════════════════════════════════════════════════════════


class TestDispatch:
    @pytest.mark.parametrize(
        ("tag", "expected"),
        [("en", "en"), ("en-US", "en"), ("es_ES", "es"), ("ZH-cn", "zh"), (" es-MX ", "es")],
    )
    def test_primary_subtag(self, tag, expected):
        assert resolve_language(tag).tag == expected

    @pytest.mark.parametrize("tag", ["fr", "", "english"])
    def test_unknown_language(self, tag):
        with pytest.raises(UnsupportedLanguage) as exc_info:
            resolve_language(tag)
        assert exc_info.value.code == "UNSUPPORTED_LANGUAGE"

    def test_transcribe_unknown_language(self):
        with pytest.raises(UnsupportedLanguage):
            transcribe(1, "de")

    def test_supported_languages(self):
        assert supported_languages() == ["en", "es", "zh"]

    def test_regional_tag_uses_language_rules(self):
        assert transcribe(1_000_000, "es-AR") == "un millón"

    def test_renderer_rejects_unknown_token(self):
        renderer = english.EnglishRenderer(english.CONTEXT)
        with pytest.raises(TypeError):
            renderer.render("seven")  # type: ignore[arg-type]


class TestTranscriptionResult:
    def test_run_normalizes_literal(self):
        result = NumberTranscriber("es").run("1_250_000.50")
        assert result.number == "1250000.50"
        assert result.language == "es"
        assert result.text == "un millón doscientos cincuenta mil coma cincuenta"

    def test_run_integer(self):
        result = NumberTranscriber("en-GB").run(42)
        assert result.number == "42"
        assert result.language == "en"
        assert result.text == "forty two"


class TestDeterminism:
    @pytest.mark.parametrize("language", ["en", "es", "zh"])
    def test_repeated_calls_identical(self, language):
        outputs = {transcribe("123456789.01", language) for _ in range(5)}
        assert len(outputs) == 1


# ═══════════════════════════════════════════════════════════════════════
# GOLDEN FIXTURES
# ═══════════════════════════════════════════════════════════════════════


_FIXTURE_FILES = [
    ("english.tsv", "en"),
    ("spanish.tsv", "es"),
    ("chinese.tsv", "zh"),
]


class TestGoldenFixtures:
    @pytest.mark.parametrize(("filename", "language"), _FIXTURE_FILES)
    def test_fixture_file(self, filename, language):
        cases = load_fixtures(FIXTURES / filename)
        mismatches = [
            (case.line, case.number, case.expected, transcribe(case.number, language))
            for case in cases
            if transcribe(case.number, language) != case.expected
        ]
        assert mismatches == []


class TestLoadFixtures:
    def test_skips_comments_and_blank_lines(self, tmp_path):
        path = tmp_path / "cases.tsv"
        path.write_text("# header\n\n7\tseven\n  # indented comment\n1_000\tone thousand\n", encoding="utf-8")
        cases = load_fixtures(path)
        assert [(c.number, c.expected) for c in cases] == [("7", "seven"), ("1_000", "one thousand")]
        assert cases[0].line == 3

    def test_missing_tab(self, tmp_path):
        path = tmp_path / "cases.tsv"
        path.write_text("7 seven\n", encoding="utf-8")
        with pytest.raises(ValueError, match="tab"):
            load_fixtures(path)

    def test_too_many_tabs(self, tmp_path):
        path = tmp_path / "cases.tsv"
        path.write_text("7\tseven\textra\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_fixtures(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "cases.tsv"
        path.write_text("# nothing here\n", encoding="utf-8")
        with pytest.raises(ValueError, match="no fixture cases"):
            load_fixtures(path)

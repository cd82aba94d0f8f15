"""
Pydantic models for the language tables and transcription results.

Every language table is a list of MappingEntry objects. If an entry does not
fit the model (negative value, missing word form) it fails loudly when the
table is built, not halfway through rendering a number.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .exceptions import MalformedRegistry

# Mapped values are 64-bit signed longs in every table we ship.
MAX_MAPPED_VALUE = 2**63 - 1


# ─── Enumerations ───────────────────────────────────────────────────


class MappingRole(str, Enum):
    """What a mapped value does inside a number."""

    SIMPLE = "SIMPLE"  # Plain word: zero, one, eleven, twenty
    SUBGROUP_QUANTIFIER = "SUBGROUP_QUANTIFIER"  # Scale inside a group: ten, hundred
    GROUP_QUANTIFIER = "GROUP_QUANTIFIER"  # Scale of a whole group: thousand, million


class GrammaticalNumber(str, Enum):
    SINGULAR = "SINGULAR"
    PLURAL = "PLURAL"


class WordForm(str, Enum):
    DEFAULT = "DEFAULT"  # "uno", "ciento"
    SHORTENED = "SHORTENED"  # "un", "cien"


# ─── Word Values ────────────────────────────────────────────────────


class WordMapping(NamedTuple):
    """One literal string and the (number, form) combinations it covers."""

    text: str
    numbers: frozenset[GrammaticalNumber]
    forms: frozenset[WordForm]


def map_word(
    text: str,
    number: GrammaticalNumber | None = None,
    form: WordForm | None = None,
) -> WordMapping:
    """Map ``text`` to one number and/or form; omitted axes cover every value.

    Example:
        map_word("un", form=WordForm.SHORTENED)        → singular + plural, shortened
        map_word("millones", GrammaticalNumber.PLURAL) → plural, default + shortened
    """
    numbers = frozenset(GrammaticalNumber) if number is None else frozenset({number})
    forms = frozenset(WordForm) if form is None else frozenset({form})
    return WordMapping(text, numbers, forms)


class WordValue(BaseModel):
    """Total map from (grammatical number, word form) to a literal string.

    Most words are invariant ("dos"). A few have up to four spellings
    ("uno"/"un", "millón"/"millones"). All four slots MUST be filled.
    """

    model_config = ConfigDict(frozen=True)

    singular_default: Optional[str] = None
    singular_shortened: Optional[str] = None
    plural_default: Optional[str] = None
    plural_shortened: Optional[str] = None

    @model_validator(mode="after")
    def _require_every_combination(self) -> WordValue:
        missing = [
            f"{number.value}/{form.value}"
            for number in GrammaticalNumber
            for form in WordForm
            if getattr(self, _slot(number, form)) is None
        ]
        if missing:
            raise MalformedRegistry(
                f"Word value does not cover: {', '.join(missing)}",
                details={"missing": missing},
            )
        return self

    def word(
        self,
        number: GrammaticalNumber = GrammaticalNumber.SINGULAR,
        form: WordForm = WordForm.DEFAULT,
    ) -> str:
        return getattr(self, _slot(number, form))


def _slot(number: GrammaticalNumber, form: WordForm) -> str:
    return f"{number.value.lower()}_{form.value.lower()}"


def word_from(*mappings: Union[str, WordMapping]) -> WordValue:
    """Build a WordValue from a plain string or from several word mappings.

    Later mappings override earlier ones for the combinations they cover.

    Raises:
        MalformedRegistry: If no mapping is given or a combination is left empty.
    """
    if not mappings:
        raise MalformedRegistry("No word data provided")

    slots: dict[str, str] = {}
    for item in mappings:
        if isinstance(item, str):
            item = map_word(item)
        for number in item.numbers:
            for form in item.forms:
                slots[_slot(number, form)] = item.text

    return WordValue(**slots)


# ─── Mapping Entries ────────────────────────────────────────────────


class MappingEntry(BaseModel):
    """A single row of a language table: value, word(s) and role."""

    model_config = ConfigDict(frozen=True)

    value: int = Field(ge=0, le=MAX_MAPPED_VALUE)
    word: WordValue
    role: MappingRole = MappingRole.SIMPLE

    @property
    def is_group_quantifier(self) -> bool:
        return self.role == MappingRole.GROUP_QUANTIFIER

    @property
    def is_subgroup_quantifier(self) -> bool:
        return self.role == MappingRole.SUBGROUP_QUANTIFIER


def mapping(
    value: int,
    word: Union[str, WordValue],
    role: MappingRole = MappingRole.SIMPLE,
) -> MappingEntry:
    """Shorthand used by the language tables.

    Raises:
        MalformedRegistry: If the value is out of range or the row is invalid.
    """
    if isinstance(word, str):
        word = word_from(word)
    try:
        return MappingEntry(value=value, word=word, role=role)
    except ValidationError as exc:
        raise MalformedRegistry(
            f"Invalid mapping for {value!r}: {exc.errors()[0]['msg']}",
            details={"value": value, "errors": [error["msg"] for error in exc.errors()]},
        ) from exc


# ─── Transcription Result ───────────────────────────────────────────


class TranscriptionResult(BaseModel):
    """The output of a single transcription."""

    number: str  # Normalized decimal literal, e.g. "1250000.50"
    language: str  # Resolved primary language tag, e.g. "es"
    text: str

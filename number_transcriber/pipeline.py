"""
Transcription pipeline — language dispatch plus tokenize → render.

Flow:
  ┌──────────────────────┐
  │ number + language tag│
  └──────────┬───────────┘
             │
      ┌──────▼──────┐
      │  Dispatch   │   ← "es-MX" → Spanish tokenizer/context/renderer
      └──────┬──────┘
             │
      ┌──────▼──────┐
      │  Tokenize   │   ← number → token tree (grouping, overflow, decimals)
      └──────┬──────┘
             │
      ┌──────▼──────┐
      │   Render    │   ← token tree → text (agreement, zero rules)
      └─────────────┘

Design principles:
  - Tokenizers, contexts and language records are built once at import.
  - A fresh renderer is created for every call; nothing is shared mutably.
  - Errors propagate to the caller. There is nothing to retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from . import chinese, english, spanish
from .context import TranscriptionContext
from .exceptions import UnsupportedLanguage
from .models import TranscriptionResult
from .rendering import TranscribingRenderer
from .tokenizer import GroupedTokenizer, Number, split_decimal, to_decimal
from .tokens import ValueToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageSupport:
    """Everything needed to transcribe numbers in one language."""

    tag: str
    name: str
    tokenizer: GroupedTokenizer
    context: TranscriptionContext
    renderer_factory: Callable[[TranscriptionContext], TranscribingRenderer]

    def new_renderer(self) -> TranscribingRenderer:
        return self.renderer_factory(self.context)


# ─── Language Table ─────────────────────────────────────────────────

_LANGUAGES: dict[str, LanguageSupport] = {
    "en": LanguageSupport(
        tag="en",
        name="English",
        tokenizer=english.TOKENIZER,
        context=english.CONTEXT,
        renderer_factory=english.EnglishRenderer,
    ),
    "es": LanguageSupport(
        tag="es",
        name="Spanish",
        tokenizer=spanish.TOKENIZER,
        context=spanish.CONTEXT,
        renderer_factory=spanish.SpanishRenderer,
    ),
    "zh": LanguageSupport(
        tag="zh",
        name="Simplified Chinese (financial)",
        tokenizer=chinese.TOKENIZER,
        context=chinese.CONTEXT,
        renderer_factory=chinese.ChineseRenderer,
    ),
}


def primary_subtag(tag: str) -> str:
    """Primary subtag of a language tag: "en-US" → "en", "es_ES" → "es"."""
    return tag.strip().replace("_", "-").split("-", 1)[0].lower()


def resolve_language(tag: str) -> LanguageSupport:
    """Find the language support registered for ``tag``.

    Raises:
        UnsupportedLanguage: If no language is registered for the tag's
            primary subtag.
    """
    primary = primary_subtag(tag)
    support = _LANGUAGES.get(primary)
    if support is None:
        raise UnsupportedLanguage(
            f"Unsupported language: {tag!r}",
            details={"language": tag, "supported": supported_languages()},
        )
    logger.debug("Resolved language %r to %s", tag, support.name)
    return support


def supported_languages() -> list[str]:
    return list(_LANGUAGES)


def language_table() -> list[LanguageSupport]:
    return list(_LANGUAGES.values())


# ─── Transcriber ────────────────────────────────────────────────────


class NumberTranscriber:
    """Transcribes numbers into words for one language.

    Usage:
        transcriber = NumberTranscriber("es")
        transcriber.transcribe("1000000")   # "un millón"
        result = transcriber.run(22.5)      # TranscriptionResult
    """

    def __init__(self, language: str = "en"):
        self.language = resolve_language(language)

    def tokenize(self, number: Number) -> ValueToken:
        """Build the token tree for ``number``.

        Raises:
            InvalidInput: If the number is negative or not a finite decimal.
        """
        return self.language.tokenizer.tokenize(number)

    def transcribe(self, number: Number) -> str:
        tree = self.tokenize(number)
        text = tree.dispatch(self.language.new_renderer())
        logger.debug("Transcribed %s [%s] → %r", number, self.language.tag, text)
        return text

    def run(self, number: Number) -> TranscriptionResult:
        """Transcribe ``number`` and return it together with its normalized literal."""
        value = to_decimal(number)
        integer_part, fractional_digits = split_decimal(value)
        normalized = str(integer_part)
        if fractional_digits is not None:
            normalized = f"{normalized}.{fractional_digits}"

        return TranscriptionResult(
            number=normalized,
            language=self.language.tag,
            text=self.transcribe(value),
        )


def transcribe(number: Number, language: str = "en") -> str:
    """Transcribe ``number`` into words in ``language``.

    Raises:
        InvalidInput: If the number is negative or not a finite decimal.
        UnsupportedLanguage: If the language tag is not supported.
    """
    return NumberTranscriber(language).transcribe(number)

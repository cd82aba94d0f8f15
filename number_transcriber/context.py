"""Transcription context — value → word lookup for one language."""

from __future__ import annotations

from .models import GrammaticalNumber, WordForm
from .registry import MappingRegistry


class TranscriptionContext:
    """Looks up the literal word for a mapped value.

    Stateless apart from the (immutable) registry, so one instance per
    language is shared by every render.
    """

    def __init__(self, registry: MappingRegistry):
        self.registry = registry

    def as_word(
        self,
        value: int,
        number: GrammaticalNumber = GrammaticalNumber.SINGULAR,
        form: WordForm = WordForm.DEFAULT,
    ) -> str:
        return self.registry.entry(value).word.word(number, form)

    @property
    def zero_word(self) -> str:
        return self.as_word(0)

"""
Token tree → text.

The base renderer is enough for languages without agreement (English): it
walks the tree once, left to right, and joins the pieces with the language's
word separator. Languages with grammar override individual node handlers:

    Spanish  → threads a GrammarState (number + word form) down the tree
    Chinese  → keeps two flags to collapse runs of 零

A renderer instance MAY hold per-render state, so one is created per call.
"""

from __future__ import annotations

from typing import NamedTuple

from .context import TranscriptionContext
from .models import GrammaticalNumber, WordForm
from .tokens import (
    GroupListToken,
    LiteralToken,
    MappedToken,
    NullToken,
    PrefixedToken,
    SuffixedToken,
    ValueToken,
)


class GrammarState(NamedTuple):
    """Grammatical number and word form requested for a subtree."""

    number: GrammaticalNumber = GrammaticalNumber.SINGULAR
    form: WordForm = WordForm.DEFAULT


DEFAULT_STATE = GrammarState()


class TranscribingRenderer:
    """Renders a token tree for one language."""

    word_separator = " "

    def __init__(self, context: TranscriptionContext):
        self.context = context

    def render(self, token: ValueToken, state: GrammarState = DEFAULT_STATE) -> str:
        if isinstance(token, GroupListToken):
            return self._group_list(token, state)
        if isinstance(token, MappedToken):
            return self._mapped(token, state)
        if isinstance(token, PrefixedToken):
            return self._prefixed(token, state)
        if isinstance(token, SuffixedToken):
            return self._suffixed(token, state)
        if isinstance(token, LiteralToken):
            return self._literal(token, state)
        if isinstance(token, NullToken):
            return self._null(token, state)
        raise TypeError(f"Unknown token kind: {type(token).__name__}")

    # ─── Node Handlers ───────────────────────────────────────────────

    def _group_list(self, token: GroupListToken, state: GrammarState) -> str:
        # Children MUST be rendered in order (Chinese zero flags depend on it)
        parts = [self.render(child, state) for child in token.children]
        return self.word_separator.join(part for part in parts if part)

    def _mapped(self, token: MappedToken, state: GrammarState) -> str:
        return self.context.as_word(token.value, state.number, state.form)

    def _prefixed(self, token: PrefixedToken, state: GrammarState) -> str:
        prefix = self.render(token.prefix, state)
        value = self.render(token.value, state)
        return f"{prefix}{self.word_separator}{value}"

    def _suffixed(self, token: SuffixedToken, state: GrammarState) -> str:
        value = self.render(token.value, state)
        suffix = self.render(token.suffix, state)
        return f"{value}{self.word_separator}{suffix}"

    def _literal(self, token: LiteralToken, state: GrammarState) -> str:
        return token.text

    def _null(self, token: NullToken, state: GrammarState) -> str:
        return ""

"""
Mapping registry — one per language, validated once at import time.

A registry wraps the ordered list of MappingEntry rows for a language and
derives the facts the grouped tokenizer needs:

    min_group_quantifier   → grouping width (1000 for English, 10000 for Chinese)
    max_group_quantifier   → overflow point (trillion, billón, 兆)
    largest_consecutive    → end of the 0, 1, 2, ... run (20 for English)
    group_quantifiers      → descending
    subgroup_quantifiers   → descending

RULES:
  - Values MUST be strictly ascending.
  - There MUST be at least one group quantifier.
  - The first entry MUST be a simple entry for 0.
  - The last entry MUST be a group quantifier.
Any violation raises MalformedRegistry immediately; nothing is checked at
transcription time.
"""

from __future__ import annotations

from typing import Sequence

from .exceptions import MalformedRegistry
from .models import MappingEntry, MappingRole


class MappingRegistry:
    """Immutable, validated view over a language's mapping entries."""

    def __init__(self, name: str, entries: Sequence[MappingEntry]):
        self.name = name
        self.entries: tuple[MappingEntry, ...] = tuple(entries)

        self._validate_ascending()

        group = [e.value for e in self.entries if e.is_group_quantifier]
        if not group:
            raise MalformedRegistry(
                f"{name} registry does not contain any group quantifiers",
                details={"registry": name},
            )
        if not self.entries[-1].is_group_quantifier:
            raise MalformedRegistry(
                f"{name} registry's last entry is not a group quantifier",
                details={"registry": name, "last_value": self.entries[-1].value},
            )
        first = self.entries[0]
        if first.value != 0 or first.role != MappingRole.SIMPLE:
            raise MalformedRegistry(
                f"{name} registry does not start with a simple entry for 0",
                details={"registry": name, "first_value": first.value, "first_role": first.role.value},
            )

        self.min_group_quantifier: int = group[0]
        self.max_group_quantifier: int = group[-1]
        self.group_quantifiers: tuple[int, ...] = tuple(reversed(group))
        self.subgroup_quantifiers: tuple[int, ...] = tuple(
            e.value for e in reversed(self.entries) if e.is_subgroup_quantifier
        )
        self.largest_consecutive: int = self._largest_consecutive()
        self._by_value: dict[int, MappingEntry] = {e.value: e for e in self.entries}

    def __contains__(self, value: object) -> bool:
        return value in self._by_value

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"MappingRegistry({self.name!r}, {len(self.entries)} entries)"

    def entry(self, value: int) -> MappingEntry:
        """Return the entry registered for ``value``.

        Raises:
            KeyError: If the value has no mapping in this language.
        """
        try:
            return self._by_value[value]
        except KeyError:
            raise KeyError(f"{value} has no mapping in the {self.name} registry") from None

    # ─── Internal Helpers ────────────────────────────────────────────

    def _validate_ascending(self) -> None:
        if not self.entries:
            raise MalformedRegistry(f"{self.name} registry is empty", details={"registry": self.name})

        for previous, current in zip(self.entries, self.entries[1:]):
            if current.value <= previous.value:
                raise MalformedRegistry(
                    f"{self.name} registry values are not in strict ascending order: "
                    f"{previous.value} is followed by {current.value}",
                    details={
                        "registry": self.name,
                        "previous": previous.value,
                        "current": current.value,
                    },
                )

    def _largest_consecutive(self) -> int:
        last = self.entries[0].value
        for entry in self.entries[1:]:
            if entry.value != last + 1:
                break
            last = entry.value
        return last

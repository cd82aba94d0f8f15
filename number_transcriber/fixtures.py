"""
Golden-value fixture files.

One case per line, a decimal literal and the expected text separated by a
single tab:

    # English
    1_000_000\tone million
    22.22\ttwenty two and twenty two

Blank lines and lines starting with ``#`` are ignored. The literal is kept
as written; ``_`` grouping is accepted by the tokenizer.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FixtureCase:
    """One golden value."""

    number: str  # Literal as written in the file, e.g. "1_000_000"
    expected: str
    line: int  # 1-based, for failure messages


def load_fixtures(path: str | Path) -> list[FixtureCase]:
    """Read every case from a fixture file.

    Raises:
        ValueError: If a line does not hold exactly one tab, or the file
            contains no cases at all.
    """
    resolved = Path(path)
    cases: list[FixtureCase] = []

    with resolved.open(encoding="utf-8") as f:
        for line_number, raw_line in enumerate(f, start=1):
            line = raw_line.rstrip("\r\n")
            if not line.strip() or line.lstrip().startswith("#"):
                continue

            fields = line.split("\t")
            if len(fields) != 2:
                raise ValueError(
                    f"{resolved.name}:{line_number}: expected '<number>\\t<text>', "
                    f"got {len(fields) - 1} tab(s)"
                )

            number, expected = fields
            cases.append(FixtureCase(number=number.strip(), expected=expected, line=line_number))

    if not cases:
        raise ValueError(f"{resolved.name} contains no fixture cases")
    return cases

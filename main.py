#!/usr/bin/env python3
"""
Number Transcriber — Entry Point
================================

Writes a number out in words, in one language or in all of them.

Usage:
    python main.py 1250000.50           # Every supported language
    python main.py 1250000.50 es        # Spanish only
    NUMBER_TRANSCRIBER_LOG_LEVEL=DEBUG python main.py 10010 zh
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

from number_transcriber.exceptions import TranscriptionError
from number_transcriber.pipeline import NumberTranscriber, language_table

# ─── Load .env if available ──────────────────────────────────────────
load_dotenv()


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72


# ─── Pretty Printer ─────────────────────────────────────────────────


def print_transcriptions(number: str, languages: list[str]) -> int:
    """Print ``number`` in each language.

    Returns:
        0 if every transcription succeeded, 1 otherwise.
    """
    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  {number}{_RESET}")
    print(f"{'─' * _WIDTH}")

    exit_code = 0
    for tag in languages:
        try:
            result = NumberTranscriber(tag).run(number)
        except TranscriptionError as exc:
            print(f"  {_RED}{_BOLD}[{exc.code}]{_RESET} {exc}")
            for key, value in exc.details.items():
                print(f"      {_DIM}{key}: {value}{_RESET}")
            exit_code = 1
            continue
        print(f"  {_DIM}{result.language}{_RESET}  {_GREEN}{result.text}{_RESET}")

    print(f"{'=' * _WIDTH}\n")
    return exit_code


# ─── Main ────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    logging.basicConfig(
        level=os.getenv("NUMBER_TRANSCRIBER_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args or len(args) > 2:
        print("Usage: python main.py <number> [<language>]", file=sys.stderr)
        return 2

    number = args[0]
    languages = [args[1]] if len(args) == 2 else [language.tag for language in language_table()]
    return print_transcriptions(number, languages)


if __name__ == "__main__":
    sys.exit(main())

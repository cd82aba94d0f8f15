"""
Number Transcriber — financial numbers written out in words.

Architecture: Dispatch → Grouped tokenizer → Token tree → Renderer
Languages:    English (en), Spanish (es), Simplified Chinese financial (zh)
"""

from .exceptions import InvalidInput, MalformedRegistry, TranscriptionError, UnsupportedLanguage
from .pipeline import NumberTranscriber, resolve_language, supported_languages, transcribe

__version__ = "1.0.0"

__all__ = [
    "InvalidInput",
    "MalformedRegistry",
    "NumberTranscriber",
    "TranscriptionError",
    "UnsupportedLanguage",
    "resolve_language",
    "supported_languages",
    "transcribe",
]

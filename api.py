"""
Number Transcriber — FastAPI Server
===================================

RESTful API for writing financial numbers out in words.

Endpoints:
    POST /transcribe        Transcribe a decimal number
    GET  /languages         Supported language tags
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
    http://localhost:8000/redoc            # ReDoc (alternative)
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from number_transcriber import __version__
from number_transcriber.exceptions import InvalidInput, UnsupportedLanguage
from number_transcriber.pipeline import NumberTranscriber, language_table, primary_subtag

# ─── Load .env if available ──────────────────────────────────────────
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = os.getenv("NUMBER_TRANSCRIBER_DEFAULT_LANGUAGE", "en")


# ─── Application Lifespan (pre-build transcribers) ──────────────────

_transcribers: dict[str, NumberTranscriber] | None = None


def _build_transcribers() -> dict[str, NumberTranscriber]:
    return {language.tag: NumberTranscriber(language.tag) for language in language_table()}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build one transcriber per supported language on startup."""
    global _transcribers  # noqa: PLW0603
    _transcribers = _build_transcribers()
    yield
    _transcribers = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Number Transcriber API",
    description=(
        "Writes decimal numbers out in words for cheques and financial "
        "documents. English, Spanish and Simplified Chinese financial numerals."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class TranscribeRequest(BaseModel):
    """Request body for the /transcribe endpoint."""

    number: str = Field(
        ...,
        min_length=1,
        description="Non-negative decimal literal. '_' may be used for grouping.",
        json_schema_extra={"example": "1_250_000.50"},
    )
    language: Optional[str] = Field(
        default=None,
        description="Language tag (en, es, zh, or a regional form such as es-MX).",
        json_schema_extra={"example": "es"},
    )


class TranscribeResponse(BaseModel):
    number: str = Field(description="Normalized decimal literal")
    language: str = Field(description="Resolved primary language tag")
    text: str

    model_config = {"json_schema_extra": {"example": {
        "number": "1250000.50",
        "language": "es",
        "text": "un millón doscientos cincuenta mil coma cincuenta",
    }}}


class LanguageOut(BaseModel):
    tag: str
    name: str


class LanguagesResponse(BaseModel):
    languages: list[LanguageOut]


class HealthResponse(BaseModel):
    status: str
    version: str
    languages_loaded: int


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_transcribers() -> dict[str, NumberTranscriber]:
    if _transcribers is None:
        raise HTTPException(status_code=503, detail="Transcribers not initialised")
    return _transcribers


def _error_detail(exc: InvalidInput | UnsupportedLanguage) -> dict:
    return {"code": exc.code, "message": str(exc), "details": exc.details}


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/transcribe",
    summary="Transcribe a number into words",
    tags=["Transcription"],
    responses={
        404: {"description": "Unsupported language"},
        422: {"description": "Not a non-negative finite decimal"},
        503: {"description": "Transcribers not yet initialised"},
    },
)
def transcribe_number(request: TranscribeRequest) -> TranscribeResponse:
    """Write ``number`` out in words.

    - **number**: decimal literal, e.g. `"22.22"` or `"1_000_000"`
    - **language**: optional; defaults to the server's configured language
    """
    transcribers = _get_transcribers()
    tag = request.language or DEFAULT_LANGUAGE

    transcriber = transcribers.get(primary_subtag(tag))
    if transcriber is None:
        error = UnsupportedLanguage(
            f"Unsupported language: {tag!r}",
            details={"language": tag, "supported": sorted(transcribers)},
        )
        raise HTTPException(status_code=404, detail=_error_detail(error))

    try:
        result = transcriber.run(request.number)
    except InvalidInput as exc:
        raise HTTPException(status_code=422, detail=_error_detail(exc)) from exc

    logger.info("Transcribed %s [%s]", result.number, result.language)
    return TranscribeResponse(**result.model_dump())


@app.get(
    "/languages",
    summary="List supported languages",
    tags=["Transcription"],
)
def list_languages() -> LanguagesResponse:
    """Returns every language tag the service can transcribe into."""
    return LanguagesResponse(
        languages=[LanguageOut(tag=language.tag, name=language.name) for language in language_table()]
    )


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Transcribers not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and configuration info."""
    transcribers = _get_transcribers()
    return HealthResponse(
        status="healthy",
        version=__version__,
        languages_loaded=len(transcribers),
    )

"""
FastAPI application for Big-O Lens.
"""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from bigo import (
    AnalysisReport,
    InputRejectedError,
    analyze,
    export_report,
    language_from_filename,
    list_supported_languages,
)
from bigo.analyzer import validate_source
from bigo.export import MEDIA_TYPES, ExportFormat

from bigo_service import __version__
from bigo_service.config import settings, logger
from bigo_service.models import (
    AnalysisSummary,
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    LanguagesResponse,
)

GENERIC_LANGUAGE = "generic"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info(f"Big-O Lens v{__version__} starting...")
    logger.info(f"Server: {settings.HOST}:{settings.PORT}")
    logger.info(f"Supported languages: {', '.join(list_supported_languages())}")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title="Big-O Lens API",
    description="Heuristic time complexity estimation for source code",
    version=__version__,
    lifespan=lifespan,
)

cors_origins = settings.cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(InputRejectedError)
async def rejected_input_handler(request: Request, exc: InputRejectedError):
    logger.warning(f"Rejected input on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    error_details = [
        {"field": err.get("loc", [])[-1] if err.get("loc") else "unknown", "type": err.get("type")}
        for err in exc.errors()[:5]
    ]
    logger.warning(f"Validation error on {request.method} {request.url.path}: {error_details}")
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(error="Invalid request format").model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: "
        f"{type(exc).__name__}: {str(exc)[:200]}"
    )
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Internal server error").model_dump(),
    )


def resolve_language(language: str, filename: str) -> str:
    """Explicit tag wins; ``auto`` is resolved from the filename extension."""
    if language.lower() != "auto":
        return language
    return language_from_filename(filename) or GENERIC_LANGUAGE


def run_analysis(request: AnalyzeRequest) -> AnalysisReport:
    validate_source(request.code, max_length=settings.MAX_CODE_LENGTH)
    language = resolve_language(request.language, request.filename)

    start_time = time.time()
    report = analyze(request.code, language)
    elapsed_time = time.time() - start_time

    logger.info(
        f"Analyzed {language} code ({len(request.code)} chars) in {elapsed_time:.3f}s - "
        f"overall {report.overall.value}, {len(report.functions)} function(s)"
    )
    return report


def summarize(report: AnalysisReport) -> AnalysisSummary:
    return AnalysisSummary(
        notation=report.overall.value,
        description=report.overall.description,
        rating=report.overall.rating,
        functionCount=len(report.functions),
        averageConfidence=report.average_confidence,
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Big-O Lens API",
        "version": __version__,
        "status": "ok",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/languages", response_model=LanguagesResponse)
async def languages():
    """Languages with a dedicated extraction profile; others use generic rules."""
    return LanguagesResponse(languages=list_supported_languages())


@app.post("/analyze", response_model=AnalyzeResponse, responses={
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
})
def analyze_code(request: AnalyzeRequest):
    """
    Analyze code complexity.

    Returns the overall Big-O class and a per-function breakdown with
    confidence scores and the signals behind each estimate.
    """
    report = run_analysis(request)
    return AnalyzeResponse(success=True, result=report, summary=summarize(report))


@app.post("/export", responses={400: {"model": ErrorResponse}})
def export_code_report(
    request: AnalyzeRequest,
    fmt: ExportFormat = Query(default="json", alias="format"),
):
    """Analyze code and return the report rendered as JSON, Markdown, CSV or HTML."""
    report = run_analysis(request)
    file_name = request.filename if request.filename != "untitled" else None
    content = export_report(report, fmt, file_name=file_name)
    return Response(content=content, media_type=MEDIA_TYPES[fmt])

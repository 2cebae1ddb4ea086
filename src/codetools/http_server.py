"""
HTTP layer for CodeTools.

Provides a FastAPI server exposing language detection, compaction,
uncompaction and formatting endpoints.
"""

import json
import logging
import time
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from codetools.core.auth import SIGNATURE_HEADER, TIMESTAMP_HEADER, verify_signature
from codetools.core.errors import AuthenticationError
from codetools.services.code_service import FormatOutcome
from codetools.services.container import ServicesContainer, create_services

logger = logging.getLogger(__name__)

DETECT_MISSING_TEXT = "No text provided"
MISSING_TEXT = "Missing required 'text' field"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EngineCandidateResponse(CamelModel):
    engine: str
    language: str
    confidence: float


class DetectResponse(CamelModel):
    language: str
    possible: list[str]
    engines: list[EngineCandidateResponse]


class CompactResponse(CamelModel):
    language: str
    original_length: int
    compacted_length: int
    compacted_text: str


class UncompactResponse(CamelModel):
    language: str
    original_length: int
    formatted_length: int
    formatted_text: str


class FormatResponse(UncompactResponse):
    success: bool
    message: str


class HealthResponse(BaseModel):
    status: str
    uptime: float


def _internal_error(route: str, exc: Exception) -> HTTPException:
    logger.error(f"Error in {route}: {exc}", exc_info=True)
    return HTTPException(
        status_code=500,
        detail={"error": "Internal server error", "details": str(exc)},
    )


def _uncompact_response(outcome: FormatOutcome) -> UncompactResponse:
    return UncompactResponse(
        language=outcome.language,
        original_length=outcome.original_length,
        formatted_length=outcome.formatted_length,
        formatted_text=outcome.formatted_text,
    )


def create_app(
    services: ServicesContainer | None = None,
    config_path: str | Path | None = None,
) -> FastAPI:
    """
    FastAPI application factory.

    Args:
        services: Prebuilt services; created from configuration when None.
        config_path: Optional configuration file used when creating services.
    """
    if services is None:
        services = create_services(config_path)
    cfg = services.config
    code_service = services.code_service
    started_at = time.monotonic()

    app = FastAPI(
        title="CodeTools",
        version="0.1.0",
        description="HTTP interface for code language detection, compaction and formatting.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc.detail, dict):
            content = exc.detail
        else:
            content = {"error": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    async def read_body(request: Request) -> bytes:
        body = await request.body()
        if len(body) > cfg.limits.max_body_bytes:
            raise HTTPException(
                status_code=413,
                detail={"error": "Payload too large", "maxBytes": cfg.limits.max_body_bytes},
            )
        return body

    async def verify_request(request: Request, body: bytes = Depends(read_body)) -> None:
        if not cfg.auth.internal_key:
            return
        try:
            verify_signature(
                secret=cfg.auth.internal_key,
                signature=request.headers.get(SIGNATURE_HEADER),
                timestamp=request.headers.get(TIMESTAMP_HEADER),
                body=body,
                max_skew_ms=cfg.auth.max_skew_ms,
            )
        except AuthenticationError as e:
            logger.warning(f"Rejected request to {request.url.path}: {e.reason}")
            raise HTTPException(status_code=401, detail={"error": e.reason})

    def parse_text(body: bytes, missing_message: str) -> str:
        try:
            payload = json.loads(body) if body else None
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid JSON body")
        text = payload.get("text") if isinstance(payload, dict) else None
        if not text or not isinstance(text, str):
            raise HTTPException(status_code=400, detail=missing_message)
        return text

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(status="OK", uptime=time.monotonic() - started_at)

    @app.post("/detect", response_model=DetectResponse, dependencies=[Depends(verify_request)])
    async def detect(body: bytes = Depends(read_body)):
        text = parse_text(body, DETECT_MISSING_TEXT)
        if len(text) > cfg.limits.max_detect_chars:
            raise HTTPException(
                status_code=413,
                detail={"error": "Text too long", "maxChars": cfg.limits.max_detect_chars},
            )
        try:
            outcome = await code_service.detect(text)
        except Exception as exc:
            raise _internal_error("/detect", exc)
        return DetectResponse(
            language=outcome.language,
            possible=outcome.possible,
            engines=[EngineCandidateResponse(**c.to_dict()) for c in outcome.engines],
        )

    @app.post("/compact", response_model=CompactResponse, dependencies=[Depends(verify_request)])
    async def compact(body: bytes = Depends(read_body)):
        text = parse_text(body, MISSING_TEXT)
        try:
            outcome = await code_service.compact(text)
        except Exception as exc:
            raise _internal_error("/compact", exc)
        return CompactResponse(
            language=outcome.language,
            original_length=outcome.original_length,
            compacted_length=outcome.compacted_length,
            compacted_text=outcome.compacted_text,
        )

    @app.post("/uncompact", response_model=UncompactResponse, dependencies=[Depends(verify_request)])
    async def uncompact(body: bytes = Depends(read_body)):
        text = parse_text(body, MISSING_TEXT)
        try:
            outcome = await code_service.uncompact(text)
        except Exception as exc:
            raise _internal_error("/uncompact", exc)
        return _uncompact_response(outcome)

    @app.post("/format", response_model=FormatResponse, dependencies=[Depends(verify_request)])
    async def format_code(body: bytes = Depends(read_body)):
        text = parse_text(body, MISSING_TEXT)
        try:
            outcome = await code_service.format(text)
        except Exception as exc:
            raise _internal_error("/format", exc)
        return FormatResponse(
            language=outcome.language,
            original_length=outcome.original_length,
            formatted_length=outcome.formatted_length,
            formatted_text=outcome.formatted_text,
            success=outcome.success,
            message=outcome.message,
        )

    @app.on_event("startup")
    async def startup_event():
        await services.detector.warm_up()

    @app.on_event("shutdown")
    async def shutdown_event():
        await code_service.aclose()

    return app

import os
import time
import asyncio
import logging
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from styleprint.models import CamelModel, DesignSystem, RawExtraction
from styleprint.services.extractor import extract_raw
from styleprint.services.generator import (
    DesignSystemGenerationError,
    MissingAPIKeyError,
    generate_design_system,
)

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_INPUT_CHARS = int(os.getenv("MAX_INPUT_CHARS", "2000000"))

# ── Concurrency & rate limiting (generation only; extraction is cheap) ──
MAX_CONCURRENT_GENERATIONS = int(os.getenv("MAX_CONCURRENT_GENERATIONS", "5"))
_generation_semaphore = asyncio.Semaphore(MAX_CONCURRENT_GENERATIONS)

# Simple per-IP rate limiter
_rate_limit_map: dict[str, float] = {}
RATE_LIMIT_SECONDS = float(os.getenv("RATE_LIMIT_SECONDS", "10"))


class DesignRequest(BaseModel):
    input: str


class DesignSystemResponse(CamelModel):
    design_system: DesignSystem
    raw: RawExtraction
    usage: dict


def _validated_input(request: DesignRequest) -> str:
    document = request.input
    if not document.strip():
        raise HTTPException(status_code=400, detail="Input is empty — paste HTML or CSS source")
    if len(document) > MAX_INPUT_CHARS:
        raise HTTPException(
            status_code=413,
            detail=f"Input too large ({len(document):,} chars, limit {MAX_INPUT_CHARS:,})",
        )
    return document


def _check_rate_limit(client_ip: str, now: float) -> None:
    last_request = _rate_limit_map.get(client_ip, 0)
    if now - last_request < RATE_LIMIT_SECONDS:
        raise HTTPException(status_code=429, detail="Please wait before generating another design system")

    # Entries past the cooldown no longer limit anything
    for ip, seen in list(_rate_limit_map.items()):
        if now - seen >= RATE_LIMIT_SECONDS:
            del _rate_limit_map[ip]
    _rate_limit_map[client_ip] = now


@router.post("/api/extract", response_model=RawExtraction)
def extract_tokens(request: DesignRequest):
    """Run only the extraction pass and return the raw token sets."""
    document = _validated_input(request)
    return extract_raw(document)


@router.post("/api/design-system", response_model=DesignSystemResponse)
async def create_design_system(request: DesignRequest, raw_request: Request):
    """Extract raw tokens and have the AI turn them into a structured design system."""
    document = _validated_input(request)

    client_ip = raw_request.client.host if raw_request.client else "unknown"
    _check_rate_limit(client_ip, time.time())

    if _generation_semaphore.locked():
        logger.warning(f"[design] Rejected request from {client_ip}: all {MAX_CONCURRENT_GENERATIONS} slots busy")
        raise HTTPException(
            status_code=503,
            detail=f"Server busy — {MAX_CONCURRENT_GENERATIONS} generations already in progress. Try again shortly.",
        )

    async with _generation_semaphore:
        logger.info(f"[design] Generating for {client_ip}: {len(document)} chars")
        t0 = time.time()
        try:
            result = await generate_design_system(document)
        except DesignSystemGenerationError as e:
            logger.error(f"[design] Generation failed for {client_ip}: {e}")
            status = 500 if isinstance(e, MissingAPIKeyError) else 502
            raise HTTPException(status_code=status, detail=str(e))

    logger.info(f"[design] Done in {time.time() - t0:.1f}s")
    return result

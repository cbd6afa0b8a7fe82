"""FastAPI application entry point."""

from __future__ import annotations

import logging
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from refextract.errors import DocumentReadError, NormalizationError
from refextract.extraction.normalizers import LLMNormalizer, RulesNormalizer
from refextract.extraction.pipeline import HybridPipeline

logger = logging.getLogger(__name__)

app = FastAPI(
    title="refextract",
    description="Cross-reference extraction for regulatory PDFs",
    version="0.1.0",
)


class Mode(str, Enum):
    rules = "rules"
    llm = "llm"


@app.get("/health")
def health() -> dict[str, str]:
    """Simple readiness probe."""
    return {"status": "ok"}


@app.post("/extract")
async def extract(request: Request, mode: Mode = Mode.rules) -> Dict[str, Any]:
    """Run the hybrid pipeline over a PDF sent as the raw request body."""
    body = await request.body()
    if not body:
        raise HTTPException(status_code=400, detail="Request body must contain a PDF.")

    try:
        normalizer = LLMNormalizer() if mode is Mode.llm else RulesNormalizer()
    except ValueError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    with tempfile.TemporaryDirectory() as workdir:
        pdf_path = Path(workdir) / "upload.pdf"
        pdf_path.write_bytes(body)
        try:
            result = await run_in_threadpool(HybridPipeline(normalizer).run, pdf_path)
        except DocumentReadError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except NormalizationError as exc:
            logger.error("Normalization failed: %s; raw output: %s", exc, exc.raw)
            raise HTTPException(status_code=502, detail=str(exc)) from exc

    return {"references": [record.to_output() for record in result.references]}

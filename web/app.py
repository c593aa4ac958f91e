"""
FastAPI application for the ASSERO valuation engine.

Production deployment configuration via environment variables.
"""

import asyncio
import logging
import math
import os
from datetime import date
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from core import ValuationRequestError, build_pipeline, parse_category
from core.comparables import DEFAULT_LIMIT
from core.pipeline import ValuationPipeline
from utils.config import Config
from utils.logging import CorrelationIdMiddleware


logger = logging.getLogger(__name__)

# =============================================================================
# Environment Configuration
# =============================================================================

IS_PRODUCTION = os.getenv("PRODUCTION", "").lower() == "true"

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else []
if not ALLOWED_ORIGINS and not IS_PRODUCTION:
    # Development fallback only
    ALLOWED_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

VERSION = "0.2.0"


# =============================================================================
# Request Models
# =============================================================================

class ParseDescriptionRequest(BaseModel):
    description: str = ""
    category: Optional[str] = None


class EstimateRequest(BaseModel):
    category: Optional[str] = None
    attributes: Optional[Dict[str, Any]] = None
    description: Optional[str] = None
    location: Optional[str] = None
    limit: int = Field(default=DEFAULT_LIMIT, ge=0, le=20)


class ReportRequest(EstimateRequest):
    report_date: Optional[date] = None


def _error_response(errors) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "errors": list(errors)})


def create_app(config: Optional[Config] = None, pipeline: Optional[ValuationPipeline] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration (default: from environment)
        pipeline: Pre-built pipeline (default: wired from ``config``)
    """
    config = config or Config.load()
    pipeline = pipeline or build_pipeline(config)

    app = FastAPI(
        title="ASSERO Valuation Engine",
        description="Asset valuation and market context for real estate, watches and vehicles",
        version=VERSION,
        docs_url=None if IS_PRODUCTION else "/docs",
        redoc_url=None if IS_PRODUCTION else "/redoc",
        openapi_url=None if IS_PRODUCTION else "/openapi.json",
        debug=config.debug and not IS_PRODUCTION,
    )

    # Healthchecks first: synchronous, no IO
    @app.get("/", include_in_schema=False)
    def root():
        return {"status": "ok"}

    @app.get("/health", include_in_schema=False)
    def health():
        return {
            "status": "healthy",
            "version": VERSION,
            "environment": "production" if IS_PRODUCTION else "development",
            "delegated_extraction": pipeline.extractor.delegated_enabled,
        }

    app.add_middleware(CorrelationIdMiddleware)
    if ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    # ==========================================================================
    # Error mapping: invalid requests are the only user-visible failure
    # ==========================================================================
    @app.exception_handler(ValuationRequestError)
    async def valuation_request_error(request: Request, exc: ValuationRequestError):
        logger.info("Rejected request %s: %s", request.url.path, exc.errors)
        return _error_response(exc.errors)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
            for err in exc.errors()
        ]
        return _error_response(errors)

    # ==========================================================================
    # API
    # ==========================================================================
    @app.post("/api/parse-description")
    async def parse_description(body: ParseDescriptionRequest):
        """Extract structured attributes from a free-text description."""
        category = parse_category(body.category)
        if not body.description.strip():
            raise ValuationRequestError(["description is required"])

        attributes, method = await asyncio.to_thread(
            pipeline.extractor.extract_with_method, body.description, category
        )
        return {
            "success": True,
            "category": category.value,
            "attributes": attributes.to_dict(),
            "method": method,
        }

    @app.post("/api/valuations/estimate")
    async def estimate(body: EstimateRequest):
        """Full valuation: estimate, market context, comparables, distribution."""
        report = await pipeline.appraise_async(
            body.category,
            text=body.description,
            attributes=body.attributes,
            location=body.location,
            limit=body.limit,
        )
        return {"success": True, **report.to_dict()}

    @app.get("/api/market-stats")
    async def market_stats(category: Optional[str] = None, location: Optional[str] = None):
        asset_category = parse_category(category)
        context = await asyncio.to_thread(pipeline.market.get_context, asset_category, location)
        return {"success": True, "data": context.to_dict()}

    @app.get("/api/comparables")
    def comparables(
        category: Optional[str] = None,
        estimate: Optional[float] = None,
        limit: int = DEFAULT_LIMIT,
    ):
        asset_category = parse_category(category)
        if estimate is None or not math.isfinite(estimate) or estimate < 0:
            raise ValuationRequestError(["estimate must be a finite, non-negative number"])

        selected = pipeline.comparables.select(asset_category, estimate, max(0, min(limit, 20)))
        distribution = pipeline.comparables.distribution(asset_category, estimate)
        return {
            "success": True,
            "comparables": [c.to_dict() for c in selected],
            "distribution": distribution.to_dict(),
        }

    @app.post("/api/valuations/report")
    async def valuation_report(body: ReportRequest):
        """Valuation rendered as a PDF document."""
        report = await pipeline.appraise_async(
            body.category,
            text=body.description,
            attributes=body.attributes,
            location=body.location,
            limit=body.limit,
        )
        pdf_bytes = await asyncio.to_thread(pipeline.render, report, body.report_date)
        filename = f"assero-bewertung-{report.category.value}.pdf"
        return Response(
            content=pdf_bytes,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    logger.info("ASSERO valuation engine configured: %s", config.to_dict())
    return app


# Create app instance for uvicorn
app = create_app()

"""
imagepub — FastAPI dispatch service

Endpoints:
  POST /v1/plan      — mode + version → tag, push decision, build args
  POST /v1/dispatch  — manual dispatch of a publish run (returns JobResult)
  GET  /health       — Health check
"""

import time
import uuid

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from imagepub import __version__
from imagepub.core.config import load_settings
from imagepub.errors import ExternalToolFailure, PublishError
from imagepub.models.job import JobResult
from imagepub.models.publish import PublishRequest
from imagepub.release.selector import build_args_for, select_for_request
from imagepub.utils.logging import logger


app = FastAPI(
    title="imagepub API",
    description="Plan and dispatch nightly or release container image publishes.",
    version=__version__,
)


# ──────────────────────────────────────────────────────────
# Request/Response models
# ──────────────────────────────────────────────────────────

class PlanRequest(BaseModel):
    mode: str = Field(default="nightly", description="nightly (default) or release")
    version: str | None = Field(default=None, description="Version for a release tag")


class PlanResponse(BaseModel):
    mode: str
    tag: str
    push: bool
    build_args: dict[str, str] = Field(default_factory=dict)


class DispatchRequest(BaseModel):
    mode: str = Field(default="nightly", description="nightly (default) or release")
    repository: str = Field(default="", description="Repository the dispatch comes from")
    dry_run: bool = Field(default=False, description="Log commands without running them")
    allow_overwrite: bool = Field(default=False, description="Allow re-pushing an existing release tag")


# ──────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    return {"status": "ok", "service": "imagepub", "version": __version__}


@app.post("/v1/plan", response_model=PlanResponse)
async def plan(req: PlanRequest):
    """Show what a run with these inputs would publish. Pure; nothing is built."""
    settings = load_settings()
    try:
        request = PublishRequest.create(req.mode, req.version)
    except PublishError as exc:
        raise HTTPException(status_code=422, detail=exc.to_dict())

    selection = select_for_request(request, settings.image.image)
    return PlanResponse(
        mode=request.mode.value,
        tag=selection.tag,
        push=selection.push,
        build_args=build_args_for(request),
    )


@app.post("/v1/dispatch", response_model=JobResult)
def dispatch(req: DispatchRequest):
    """
    Run a publish synchronously and return its JobResult.

    Structured input errors map to 422, external tool failures to 502.
    """
    from imagepub.pipeline.orchestrator import PublishOrchestrator

    request_id = uuid.uuid4().hex[:12]
    start = time.perf_counter()
    logger.info(
        "[%s] POST /v1/dispatch — mode=%s dry_run=%s", request_id, req.mode, req.dry_run,
    )

    try:
        orchestrator = PublishOrchestrator(
            raw_mode=req.mode,
            settings=load_settings(),
            repository=req.repository,
            dry_run=req.dry_run,
            allow_overwrite=req.allow_overwrite,
        )
        result = orchestrator.run()
    except ExternalToolFailure as exc:
        logger.warning("[%s] tool failure: %s", request_id, exc.code)
        raise HTTPException(status_code=502, detail=exc.to_dict())
    except PublishError as exc:
        logger.warning("[%s] rejected: %s", request_id, exc.code)
        raise HTTPException(status_code=422, detail=exc.to_dict())

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("[%s] %s in %.0f ms", request_id, result.state.value, elapsed_ms)
    return result

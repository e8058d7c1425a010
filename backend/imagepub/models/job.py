"""
imagepub — Job result and pipeline output contracts.

Every publish run returns a JobResult with full traceability:
timings, selected tag, built wheels, and warnings.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class JobState(str, enum.Enum):
    RECEIVED = "RECEIVED"
    AUTHORIZED = "AUTHORIZED"
    CREDENTIALS_CONFIGURED = "CREDENTIALS_CONFIGURED"
    VERSION_RESOLVED = "VERSION_RESOLVED"
    WHEEL_BUILT = "WHEEL_BUILT"
    IMAGE_PUBLISHED = "IMAGE_PUBLISHED"
    DELIVERED = "DELIVERED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


class StepTiming(BaseModel):
    step: str
    duration_ms: int
    status: str = "ok"  # ok | skipped | failed
    detail: str = ""


class ArtifactMetadata(BaseModel):
    filename: str
    size_bytes: int
    content_hash: str = ""  # SHA-256 of the wheel


class JobResult(BaseModel):
    """Complete output contract for every publish run."""

    job_id: str
    state: JobState
    mode: str
    version: str = ""
    image_tag: str | None = None
    pushed: bool = False
    dry_run: bool = False
    artifacts: list[ArtifactMetadata] = Field(default_factory=list)
    timings: list[StepTiming] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

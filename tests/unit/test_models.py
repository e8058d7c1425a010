"""Unit tests for Pydantic data models."""

import pytest

from imagepub.models import (
    ArtifactMetadata, ImageBuildSpec, JobResult, JobState, StepTiming, TagSelection,
)


class TestJobResult:
    def test_minimal(self):
        jr = JobResult(job_id="abc123", state=JobState.DELIVERED, mode="nightly")
        assert jr.image_tag is None
        assert jr.pushed is False
        assert jr.timings == []

    def test_full(self):
        jr = JobResult(
            job_id="xyz789",
            state=JobState.DELIVERED,
            mode="release",
            version="0.25.0",
            image_tag="deepjavalibrary/djl-spark:0.25.0-cpu",
            pushed=True,
            artifacts=[ArtifactMetadata(filename="djl_spark-0.25.0-py3-none-any.whl", size_bytes=100)],
            timings=[StepTiming(step="validate", duration_ms=1)],
        )
        assert jr.model_dump()["state"] == "DELIVERED"
        assert len(jr.artifacts) == 1

    def test_job_states(self):
        assert JobState.RECEIVED == "RECEIVED"
        assert JobState.SKIPPED == "SKIPPED"
        assert JobState.FAILED == "FAILED"

    def test_step_timing_defaults(self):
        st = StepTiming(step="test", duration_ms=10)
        assert st.status == "ok"
        assert st.detail == ""


class TestImageModels:
    def test_build_spec_requires_tag(self):
        with pytest.raises(Exception):
            ImageBuildSpec(dockerfile="Dockerfile", tags=[])

    def test_tag_selection_requires_tag(self):
        with pytest.raises(Exception):
            TagSelection(tag="")

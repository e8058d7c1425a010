"""imagepub data models — typed contracts for the publish pipeline."""

from imagepub.models.publish import (
    PublishMode,
    PublishRequest,
    TagSelection,
    ImageBuildSpec,
)
from imagepub.models.job import (
    JobState,
    StepTiming,
    ArtifactMetadata,
    JobResult,
)

__all__ = [
    "PublishMode",
    "PublishRequest",
    "TagSelection",
    "ImageBuildSpec",
    "JobState",
    "StepTiming",
    "ArtifactMetadata",
    "JobResult",
]

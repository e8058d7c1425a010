"""
imagepub — Publish Orchestrator.

Runs one publish as a strictly sequential state machine:

  RECEIVED → AUTHORIZED → CREDENTIALS_CONFIGURED → VERSION_RESOLVED
  → WHEEL_BUILT → IMAGE_PUBLISHED → DELIVERED

A repository mismatch ends the run as SKIPPED before any tool runs.
The first failure ends it as FAILED and propagates; there is no rollback.
"""

from __future__ import annotations

import time
import uuid
from pathlib import Path
from typing import Protocol

from imagepub.core.config import Settings, validate_credentials
from imagepub.errors import MissingVersionError, PropertiesNotFoundError, ReleaseTagExistsError
from imagepub.models.job import ArtifactMetadata, JobResult, JobState, StepTiming
from imagepub.models.publish import ImageBuildSpec, PublishMode, PublishRequest, TagSelection
from imagepub.registry.hub import DockerHubTags
from imagepub.release.properties import read_version
from imagepub.release.selector import build_args_for, select_for_request
from imagepub.release.trigger import repository_allowed
from imagepub.tools.aws import AwsCredentialConfigurator, EcrLogin
from imagepub.tools.docker import DockerCli
from imagepub.tools.runner import CommandRunner
from imagepub.tools.wheel import WheelBuilder
from imagepub.utils.logging import logger


class TagLookup(Protocol):
    def exists(self, repository: str, tag: str) -> bool: ...


class PipelineContext:
    """Mutable context passed through pipeline steps."""

    def __init__(self):
        self.mode: PublishMode | None = None
        self.request: PublishRequest | None = None
        self.selection: TagSelection | None = None
        self.artifacts: list[ArtifactMetadata] = []
        self.warnings: list[str] = []


class PublishOrchestrator:
    """
    State-machine orchestrator for one image publish.

    Tracks every step's timing and status and produces a JobResult.
    """

    def __init__(
        self,
        raw_mode: str | None,
        settings: Settings,
        repository: str = "",
        runner: CommandRunner | None = None,
        tag_lookup: TagLookup | None = None,
        dry_run: bool = False,
        allow_overwrite: bool = False,
        root: str | Path = ".",
    ):
        self.job_id = uuid.uuid4().hex[:12]
        self.raw_mode = raw_mode
        self.settings = settings
        self.repository = repository
        self.dry_run = dry_run
        self.allow_overwrite = allow_overwrite
        self.root = Path(root)
        self.runner = runner or CommandRunner(
            dry_run=dry_run,
            timeout=settings.tool_timeout,
            secrets=[settings.aws.secret_access_key, settings.docker_hub.password],
        )
        self.tag_lookup = tag_lookup or DockerHubTags(settings.docker_hub.hub_url)
        self.docker = DockerCli(self.runner)
        self.state = JobState.RECEIVED
        self.ctx = PipelineContext()
        self.timings: list[StepTiming] = []

    def _record_step(self, name: str, start: float, status: str = "ok", detail: str = ""):
        ms = int((time.perf_counter() - start) * 1000)
        self.timings.append(StepTiming(step=name, duration_ms=ms, status=status, detail=detail))
        symbol = "✓" if status == "ok" else ("⊘" if status == "skipped" else "✗")
        logger.info("  %s %s — %dms %s", symbol, name, ms, detail)

    def _result(self) -> JobResult:
        request = self.ctx.request
        selection = self.ctx.selection
        return JobResult(
            job_id=self.job_id,
            state=self.state,
            mode=self.ctx.mode.value if self.ctx.mode else (self.raw_mode or PublishMode.NIGHTLY.value),
            version=request.version if request else "",
            image_tag=selection.tag if selection else None,
            pushed=bool(selection and selection.push and self.state is JobState.DELIVERED and not self.dry_run),
            dry_run=self.dry_run,
            artifacts=self.ctx.artifacts,
            timings=self.timings,
            warnings=self.ctx.warnings,
        )

    def run(self) -> JobResult:
        """Execute the full publish. Returns a complete JobResult."""
        logger.info("=" * 60)
        logger.info("[%s] Publish starting (mode=%r dry_run=%s)", self.job_id, self.raw_mode, self.dry_run)
        logger.info("=" * 60)
        start = time.perf_counter()

        try:
            if not self._step_authorize():
                return self._result()
            self._step_validate()
            self._step_credentials()
            self._step_resolve_version()
            self._step_build_wheel()
            self._step_publish_image()
            self.state = JobState.DELIVERED
        except Exception:
            self.state = JobState.FAILED
            raise

        total_ms = int((time.perf_counter() - start) * 1000)
        logger.info("=" * 60)
        logger.info("[%s] Publish complete — %s in %dms", self.job_id, self.ctx.selection.tag, total_ms)
        logger.info("=" * 60)
        return self._result()

    def _step_validate(self):
        t = time.perf_counter()
        try:
            self.ctx.mode = PublishMode.parse(self.raw_mode)
        except Exception as exc:
            self._record_step("validate", t, "failed", str(exc))
            raise
        self._record_step("validate", t, detail=f"mode={self.ctx.mode.value}")

    def _step_authorize(self) -> bool:
        t = time.perf_counter()
        allowed = self.settings.allowed_repository
        if not repository_allowed(self.repository, allowed):
            self.state = JobState.SKIPPED
            self.ctx.warnings.append(
                f"Repository {self.repository} is not {allowed}; nothing published."
            )
            self._record_step("authorize", t, "skipped", self.repository)
            return False
        self.state = JobState.AUTHORIZED
        self._record_step("authorize", t)
        return True

    def _step_credentials(self):
        t = time.perf_counter()
        try:
            if not self.dry_run:
                validate_credentials(self.settings)

            self.docker.setup_buildx()
            configurator = AwsCredentialConfigurator(self.settings.aws)
            hosts = EcrLogin(self.runner, configurator).login(self.settings.aws.registries)
            hub = self.settings.docker_hub
            self.docker.login(hub.username, hub.password)
        except Exception as exc:
            self._record_step("credentials", t, "failed", str(exc))
            raise

        self.state = JobState.CREDENTIALS_CONFIGURED
        self._record_step("credentials", t, detail=f"ecr={len(hosts)} docker_hub=yes")

    def _step_resolve_version(self):
        t = time.perf_counter()
        key = self.settings.version_key
        release = self.ctx.mode is PublishMode.RELEASE
        try:
            version = read_version(self.root / self.settings.properties_file, key)
        except PropertiesNotFoundError as exc:
            if release:
                self._record_step("resolve_version", t, "failed", exc.message)
                raise
            version = None

        if release and not version:
            self._record_step("resolve_version", t, "failed", f"{key} missing")
            raise MissingVersionError(key)
        if not version:
            self.ctx.warnings.append(f"{key} not found; nightly image is built without a version.")

        self.ctx.request = PublishRequest.create(self.ctx.mode, version)
        self.state = JobState.VERSION_RESOLVED
        self._record_step("resolve_version", t, detail=version or "-")

    def _step_build_wheel(self):
        t = time.perf_counter()
        builder = WheelBuilder(self.runner, str(self.root / self.settings.wheel_dir))
        try:
            self.ctx.artifacts = builder.build()
        except Exception as exc:
            self._record_step("build_wheel", t, "failed", str(exc))
            raise
        self.state = JobState.WHEEL_BUILT
        self._record_step("build_wheel", t, detail=f"{len(self.ctx.artifacts)} wheel(s)")

    def _step_publish_image(self):
        t = time.perf_counter()
        request = self.ctx.request
        image = self.settings.image
        selection = select_for_request(request, image.image)
        self.ctx.selection = selection

        try:
            if request.mode is PublishMode.RELEASE and not self.allow_overwrite:
                if self.dry_run:
                    logger.info("  DRY RUN: would check %s is not yet published", selection.tag)
                elif self.tag_lookup.exists(selection.repository, selection.reference):
                    raise ReleaseTagExistsError(selection.tag)

            spec = ImageBuildSpec(
                context=str(self.root / image.context),
                dockerfile=str(self.root / image.dockerfile),
                tags=[selection.tag],
                build_args=build_args_for(request),
                push=selection.push,
            )
            self.docker.build(spec)
        except Exception as exc:
            self._record_step("publish_image", t, "failed", str(exc))
            raise
        self.state = JobState.IMAGE_PUBLISHED
        self._record_step("publish_image", t, detail=selection.tag)

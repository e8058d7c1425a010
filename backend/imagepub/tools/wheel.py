"""
imagepub — Wheel build step.

Runs `setup.py bdist_wheel` in the package directory and reports the wheels
that landed in dist/.
"""

from __future__ import annotations

import hashlib
import sys
from pathlib import Path

from imagepub.models.job import ArtifactMetadata
from imagepub.tools.runner import CommandRunner
from imagepub.utils.logging import logger, step_timer


class WheelBuilder:
    def __init__(self, runner: CommandRunner, working_dir: str, python: str = sys.executable):
        self.runner = runner
        self.working_dir = Path(working_dir)
        self.python = python

    @property
    def dist_dir(self) -> Path:
        return self.working_dir / "dist"

    def _existing(self) -> set[Path]:
        if not self.dist_dir.is_dir():
            return set()
        return set(self.dist_dir.glob("*.whl"))

    def build(self) -> list[ArtifactMetadata]:
        before = self._existing()
        with step_timer("Build wheel"):
            self.runner.run([self.python, "setup.py", "bdist_wheel"], cwd=str(self.working_dir))

        if self.runner.dry_run:
            return []

        artifacts: list[ArtifactMetadata] = []
        for wheel in sorted(self._existing() - before):
            content = wheel.read_bytes()
            artifacts.append(
                ArtifactMetadata(
                    filename=wheel.name,
                    size_bytes=len(content),
                    content_hash=hashlib.sha256(content).hexdigest(),
                )
            )
            logger.info("  Built wheel: %s (%d bytes)", wheel.name, len(content))
        return artifacts

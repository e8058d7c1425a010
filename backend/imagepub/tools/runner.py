"""
imagepub — External command runner.

Every collaborator (docker, aws, the packaging tool) goes through
CommandRunner so the pipeline stays fail-fast and dry-run capable:

  exit != 0      → ExternalToolFailure
  missing binary → ToolNotFoundError
  timeout        → ToolTimeoutError
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from imagepub.errors import ExternalToolFailure, ToolNotFoundError, ToolTimeoutError
from imagepub.utils.logging import logger, redact


@dataclass(frozen=True)
class CommandResult:
    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""


class CommandRunner:
    """Runs one command at a time, synchronously. No retries."""

    def __init__(self, dry_run: bool = False, timeout: float | None = None, secrets: Sequence[str] = ()):
        self.dry_run = dry_run
        self.timeout = timeout
        self.secrets: list[str] = []
        for secret in secrets:
            self.add_secret(secret)

    def add_secret(self, secret: str) -> None:
        """Mask this value in every command line and error logged from now on."""
        if secret and secret not in self.secrets:
            self.secrets.append(secret)

    def run(
        self,
        argv: Sequence[str],
        cwd: str | None = None,
        env: Mapping[str, str] | None = None,
        input_text: str | None = None,
    ) -> CommandResult:
        argv = tuple(argv)
        tool = os.path.basename(argv[0])
        shown = redact(argv, self.secrets)

        if self.dry_run:
            logger.info("  DRY RUN: would execute: %s", shown)
            return CommandResult(argv=argv, returncode=0)

        logger.info("  $ %s", shown)
        merged_env = None
        if env:
            merged_env = dict(os.environ)
            merged_env.update(env)

        try:
            proc = subprocess.run(
                argv,
                cwd=cwd,
                env=merged_env,
                input=input_text,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError:
            raise ToolNotFoundError(tool)
        except subprocess.TimeoutExpired:
            raise ToolTimeoutError(tool, self.timeout or 0)

        if proc.returncode != 0:
            stderr = redact([proc.stderr or ""], self.secrets)
            logger.error("  %s returned %d: %s", tool, proc.returncode, stderr.strip()[-500:])
            raise ExternalToolFailure(tool, proc.returncode, stderr)

        return CommandResult(
            argv=argv,
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )

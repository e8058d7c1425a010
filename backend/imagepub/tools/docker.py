"""
imagepub — docker / buildx collaborator.

Key commands used:
  docker buildx create --use           — set up a buildx builder
  docker login --password-stdin        — registry login (password never in argv)
  docker buildx build ... --push|--load — build and optionally push
"""

from __future__ import annotations

from imagepub.models.publish import ImageBuildSpec
from imagepub.tools.runner import CommandResult, CommandRunner
from imagepub.utils.logging import logger, step_timer


class DockerCli:
    """Thin wrapper around the docker CLI."""

    def __init__(self, runner: CommandRunner, executable: str = "docker"):
        self.runner = runner
        self.executable = executable

    def setup_buildx(self) -> None:
        with step_timer("Setup Docker buildx"):
            self.runner.run([self.executable, "buildx", "create", "--use"])

    def login(self, username: str, password: str, registry: str | None = None) -> None:
        target = registry or "Docker Hub"
        with step_timer(f"Login to {target}"):
            self.runner.add_secret(password)
            argv = [self.executable, "login", "--username", username, "--password-stdin"]
            if registry:
                argv.append(registry)
            self.runner.run(argv, input_text=password)

    def build_command(self, spec: ImageBuildSpec) -> list[str]:
        argv = [self.executable, "buildx", "build", "--file", spec.dockerfile]
        for tag in spec.tags:
            argv.extend(["--tag", tag])
        for key, value in sorted(spec.build_args.items()):
            argv.extend(["--build-arg", f"{key}={value}"])
        argv.append("--push" if spec.push else "--load")
        argv.append(spec.context)
        return argv

    def build(self, spec: ImageBuildSpec) -> CommandResult:
        action = "Build and push" if spec.push else "Build"
        with step_timer(f"{action} {', '.join(spec.tags)}"):
            result = self.runner.run(self.build_command(spec))
            logger.info("  Image %s: %s", "pushed" if spec.push else "built", ", ".join(spec.tags))
            return result

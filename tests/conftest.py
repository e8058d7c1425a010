"""Shared test configuration and fixtures for the imagepub test suite."""

import sys
from pathlib import Path

import pytest

# Add backend to Python path so imports work
backend_dir = str(Path(__file__).parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from imagepub.core.config import AwsConfig, DockerHubConfig, ImageConfig, Settings  # noqa: E402
from imagepub.tools.runner import CommandResult  # noqa: E402
from imagepub.errors import ExternalToolFailure  # noqa: E402


class RecordingRunner:
    """Stands in for CommandRunner: records argv and returns canned results."""

    def __init__(self, fail_on: str | None = None, stdout: str = "ecr-token"):
        self.calls: list[dict] = []
        self.fail_on = fail_on
        self.stdout = stdout
        self.dry_run = False
        self.secrets: list[str] = []

    def add_secret(self, secret):
        if secret and secret not in self.secrets:
            self.secrets.append(secret)

    def run(self, argv, cwd=None, env=None, input_text=None):
        argv = tuple(argv)
        self.calls.append({"argv": argv, "cwd": cwd, "env": env, "input": input_text})
        if self.fail_on and self.fail_on in " ".join(argv):
            raise ExternalToolFailure(argv[0], 1, "boom")
        return CommandResult(argv=argv, returncode=0, stdout=self.stdout)

    def commands(self) -> list[str]:
        return [" ".join(c["argv"]) for c in self.calls]


class FakeTagLookup:
    def __init__(self, existing: set[str] | None = None):
        self.existing = existing or set()
        self.queries: list[tuple[str, str]] = []

    def exists(self, repository: str, tag: str) -> bool:
        self.queries.append((repository, tag))
        return f"{repository}:{tag}" in self.existing


def make_settings(**overrides) -> Settings:
    values = dict(
        aws=AwsConfig(
            access_key_id="AKIDEXAMPLE",
            secret_access_key="aws-secret",
            region="us-east-2",
            registries=("711395599931",),
        ),
        docker_hub=DockerHubConfig(username="djl-bot", password="hub-secret", hub_url="https://hub.test"),
        image=ImageConfig(image="deepjavalibrary/djl-spark", context=".", dockerfile="docker/spark/Dockerfile"),
        properties_file="gradle.properties",
        version_key="djl_version",
        wheel_dir="extensions/spark/setup",
        allowed_repository="deepjavalibrary/djl",
        tool_timeout=60.0,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def tag_lookup():
    return FakeTagLookup()


@pytest.fixture
def repo_root(tmp_path):
    (tmp_path / "gradle.properties").write_text(
        "# build settings\norg.gradle.jvmargs=-Xmx2g\ndjl_version=0.25.0\n", encoding="utf-8"
    )
    (tmp_path / "extensions" / "spark" / "setup").mkdir(parents=True)
    (tmp_path / "docker" / "spark").mkdir(parents=True)
    (tmp_path / "docker" / "spark" / "Dockerfile").write_text("FROM scratch\n", encoding="utf-8")
    return tmp_path

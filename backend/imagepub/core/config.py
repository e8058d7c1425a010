"""
imagepub — Publisher configuration.
Loads .env automatically, then reads all settings from environment variables.

Secrets are only collected here and handed to the registry collaborators
explicitly; nothing else in the package reads os.environ.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from imagepub.errors import MissingCredentialsError

_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)


@dataclass(frozen=True)
class AwsConfig:
    """AWS credentials and the ECR registries to log in to."""
    access_key_id: str
    secret_access_key: str
    region: str
    registries: tuple[str, ...]


@dataclass(frozen=True)
class DockerHubConfig:
    """Docker Hub login and tag lookup endpoint."""
    username: str
    password: str
    hub_url: str


@dataclass(frozen=True)
class ImageConfig:
    """What gets built and where it is pushed."""
    image: str
    context: str
    dockerfile: str


@dataclass(frozen=True)
class Settings:
    """Top-level publisher configuration."""
    aws: AwsConfig
    docker_hub: DockerHubConfig
    image: ImageConfig
    properties_file: str
    version_key: str
    wheel_dir: str
    allowed_repository: str
    tool_timeout: float


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


def load_settings() -> Settings:
    return Settings(
        aws=AwsConfig(
            access_key_id=os.getenv("AWS_ACCESS_KEY_ID", ""),
            secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY", ""),
            region=os.getenv("AWS_REGION", "us-east-2"),
            registries=_split_csv(os.getenv("ECR_REGISTRIES", "711395599931")),
        ),
        docker_hub=DockerHubConfig(
            username=os.getenv("DOCKER_USERNAME", ""),
            password=os.getenv("DOCKER_PASSWORD", ""),
            hub_url=os.getenv("PUBLISH_HUB_URL", "https://hub.docker.com"),
        ),
        image=ImageConfig(
            image=os.getenv("PUBLISH_IMAGE", "deepjavalibrary/djl-spark"),
            context=os.getenv("PUBLISH_CONTEXT", "."),
            dockerfile=os.getenv("PUBLISH_DOCKERFILE", "docker/spark/Dockerfile"),
        ),
        properties_file=os.getenv("PUBLISH_PROPERTIES_FILE", "gradle.properties"),
        version_key=os.getenv("PUBLISH_VERSION_KEY", "djl_version"),
        wheel_dir=os.getenv("PUBLISH_WHEEL_DIR", "extensions/spark/setup"),
        allowed_repository=os.getenv("PUBLISH_ALLOWED_REPOSITORY", "deepjavalibrary/djl"),
        tool_timeout=float(os.getenv("PUBLISH_TOOL_TIMEOUT", "3600")),
    )


def validate_credentials(cfg: Settings) -> None:
    """Fail fast if registry credentials are missing."""
    missing: list[str] = []
    if not cfg.aws.access_key_id:
        missing.append("AWS_ACCESS_KEY_ID")
    if not cfg.aws.secret_access_key:
        missing.append("AWS_SECRET_ACCESS_KEY")
    if not cfg.docker_hub.username:
        missing.append("DOCKER_USERNAME")
    if not cfg.docker_hub.password:
        missing.append("DOCKER_PASSWORD")
    if missing:
        raise MissingCredentialsError(missing)

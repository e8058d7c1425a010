"""
imagepub — Docker Hub tag lookup.

Release tags are immutable once published, so a release run checks the
registry before pushing.

  GET /v2/repositories/{namespace}/{name}/tags/{tag}   200 → exists, 404 → free
"""

from __future__ import annotations

import httpx

from imagepub.errors import RegistryQueryError
from imagepub.utils.logging import logger


class DockerHubTags:
    """Read-only client for the Docker Hub tags endpoint."""

    def __init__(self, base_url: str = "https://hub.docker.com", transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    def exists(self, repository: str, tag: str) -> bool:
        url = f"{self.base_url}/v2/repositories/{repository}/tags/{tag}"
        try:
            with httpx.Client(timeout=30.0, transport=self.transport) as client:
                resp = client.get(url)
        except httpx.TransportError as exc:
            logger.error("  Docker Hub lookup failed: %s", exc)
            raise RegistryQueryError(url, 0, str(exc)) from exc
        if resp.status_code == 200:
            logger.info("  Tag %s:%s already exists on Docker Hub", repository, tag)
            return True
        if resp.status_code == 404:
            return False
        raise RegistryQueryError(url, resp.status_code, resp.text)

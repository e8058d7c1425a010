"""
imagepub — AWS credential configuration and Amazon ECR login.

Credentials are passed to the aws CLI through an explicit env mapping;
the process environment is never modified.
"""

from __future__ import annotations

from imagepub.core.config import AwsConfig
from imagepub.tools.runner import CommandRunner
from imagepub.utils.logging import logger, step_timer


class AwsCredentialConfigurator:
    def __init__(self, config: AwsConfig):
        self.config = config

    def environment(self) -> dict[str, str]:
        return {
            "AWS_ACCESS_KEY_ID": self.config.access_key_id,
            "AWS_SECRET_ACCESS_KEY": self.config.secret_access_key,
            "AWS_REGION": self.config.region,
            "AWS_DEFAULT_REGION": self.config.region,
        }


def ecr_registry_host(registry_id: str, region: str) -> str:
    return f"{registry_id}.dkr.ecr.{region}.amazonaws.com"


class EcrLogin:
    """aws ecr get-login-password | docker login --password-stdin, per registry."""

    def __init__(self, runner: CommandRunner, configurator: AwsCredentialConfigurator):
        self.runner = runner
        self.configurator = configurator

    def login(self, registry_ids: tuple[str, ...] | list[str]) -> list[str]:
        region = self.configurator.config.region
        env = self.configurator.environment()
        hosts: list[str] = []
        with step_timer("Login to Amazon ECR"):
            for registry_id in registry_ids:
                host = ecr_registry_host(registry_id, region)
                token = self.runner.run(
                    ["aws", "ecr", "get-login-password", "--region", region],
                    env=env,
                ).stdout.strip()
                self.runner.add_secret(token)
                self.runner.run(
                    ["docker", "login", "--username", "AWS", "--password-stdin", host],
                    input_text=token,
                )
                logger.info("  Logged in to %s", host)
                hosts.append(host)
        return hosts

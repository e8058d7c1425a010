"""Unit tests for the docker, aws and wheel collaborators."""

from imagepub.core.config import AwsConfig
from imagepub.models.publish import ImageBuildSpec
from imagepub.tools.aws import AwsCredentialConfigurator, EcrLogin, ecr_registry_host
from imagepub.tools.docker import DockerCli
from imagepub.tools.runner import CommandRunner
from imagepub.tools.wheel import WheelBuilder


AWS = AwsConfig(
    access_key_id="AKIDEXAMPLE",
    secret_access_key="aws-secret",
    region="us-east-2",
    registries=("711395599931",),
)


class TestDockerCli:
    def test_build_and_push_command(self, runner):
        spec = ImageBuildSpec(
            context=".",
            dockerfile="docker/spark/Dockerfile",
            tags=["deepjavalibrary/djl-spark:0.25.0-cpu"],
            build_args={"DJL_VERSION": "0.25.0"},
            push=True,
        )
        DockerCli(runner).build(spec)
        assert runner.commands() == [
            "docker buildx build --file docker/spark/Dockerfile "
            "--tag deepjavalibrary/djl-spark:0.25.0-cpu "
            "--build-arg DJL_VERSION=0.25.0 --push ."
        ]

    def test_build_without_push_loads(self, runner):
        spec = ImageBuildSpec(dockerfile="Dockerfile", tags=["x:y"])
        argv = DockerCli(runner).build_command(spec)
        assert "--load" in argv
        assert "--push" not in argv

    def test_login_uses_stdin(self, runner):
        DockerCli(runner).login("djl-bot", "hub-secret")
        call = runner.calls[0]
        assert "hub-secret" not in call["argv"]
        assert call["input"] == "hub-secret"
        assert "hub-secret" in runner.secrets

    def test_repeated_login_registers_secret_once(self):
        runner = CommandRunner(dry_run=True, secrets=["hub-secret"])
        cli = DockerCli(runner)
        cli.login("djl-bot", "hub-secret")
        cli.login("djl-bot", "hub-secret", "registry.example.com")
        assert runner.secrets == ["hub-secret"]

    def test_setup_buildx(self, runner):
        DockerCli(runner).setup_buildx()
        assert runner.commands() == ["docker buildx create --use"]


class TestAws:
    def test_environment_is_explicit(self):
        env = AwsCredentialConfigurator(AWS).environment()
        assert env["AWS_ACCESS_KEY_ID"] == "AKIDEXAMPLE"
        assert env["AWS_DEFAULT_REGION"] == "us-east-2"

    def test_registry_host(self):
        assert ecr_registry_host("711395599931", "us-east-2") == "711395599931.dkr.ecr.us-east-2.amazonaws.com"

    def test_ecr_login_pipes_token(self, runner):
        hosts = EcrLogin(runner, AwsCredentialConfigurator(AWS)).login(AWS.registries)
        assert hosts == ["711395599931.dkr.ecr.us-east-2.amazonaws.com"]
        token_call, login_call = runner.calls
        assert token_call["argv"][:3] == ("aws", "ecr", "get-login-password")
        assert token_call["env"]["AWS_SECRET_ACCESS_KEY"] == "aws-secret"
        assert login_call["argv"][-1] == hosts[0]
        assert login_call["input"] == "ecr-token"
        assert "ecr-token" in runner.secrets

    def test_ecr_login_ignores_empty_token(self):
        runner = CommandRunner(dry_run=True)
        EcrLogin(runner, AwsCredentialConfigurator(AWS)).login(["111", "222"])
        assert runner.secrets == []


class TestWheelBuilder:
    def test_reports_new_wheels(self, tmp_path, runner):
        dist = tmp_path / "dist"
        dist.mkdir()
        (dist / "old-0.1-py3-none-any.whl").write_bytes(b"old")

        class BuildingRunner(type(runner)):
            def run(self, argv, cwd=None, env=None, input_text=None):
                (dist / "djl_spark-0.25.0-py3-none-any.whl").write_bytes(b"wheel-bytes")
                return super().run(argv, cwd=cwd, env=env, input_text=input_text)

        building = BuildingRunner()
        artifacts = WheelBuilder(building, str(tmp_path), python="python3").build()
        assert [a.filename for a in artifacts] == ["djl_spark-0.25.0-py3-none-any.whl"]
        assert artifacts[0].size_bytes == len(b"wheel-bytes")
        assert len(artifacts[0].content_hash) == 64
        assert building.calls[0]["argv"] == ("python3", "setup.py", "bdist_wheel")
        assert building.calls[0]["cwd"] == str(tmp_path)

    def test_dry_run_reports_nothing(self, tmp_path, runner):
        runner.dry_run = True
        assert WheelBuilder(runner, str(tmp_path)).build() == []

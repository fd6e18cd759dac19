"""Runtime settings for ecs-release."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ecs_release.config.paths import env_path

ENV_FILE_PATH = str(env_path())


class ReleaseSettings(BaseSettings):
    """Default release targets, overridable from the environment.

    Values are read from ``ECS_RELEASE_*`` variables and the user env file.
    Command line options take precedence over both.
    """

    model_config = SettingsConfigDict(
        env_prefix="ECS_RELEASE_",
        env_file=ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    region: str = Field(default="us-east-1", description="AWS region")
    profile: str | None = Field(default=None, description="AWS named profile")
    cluster: str = Field(default="bia-cluster-alb", description="ECS cluster name")
    service: str = Field(default="bia-service", description="ECS service name")
    task_definition: str = Field(default="bia-tf", description="Task definition family")
    ecr_repo: str = Field(default="bia", description="ECR repository name")
    container: str | None = Field(
        default=None,
        description="Container definition to update (defaults to the first one)",
    )
    build_context: str = Field(default=".", description="Docker build context")
    wait_delay_seconds: int = Field(default=15, ge=1, description="Seconds between polls")
    wait_max_attempts: int = Field(default=40, ge=1, description="Polls before giving up")


def get_settings() -> ReleaseSettings:
    """Load and return the release settings."""
    return ReleaseSettings()

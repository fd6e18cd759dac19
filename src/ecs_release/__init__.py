"""ecs-release - build, deploy and roll back container images on AWS ECS."""

__version__ = "0.1.0"

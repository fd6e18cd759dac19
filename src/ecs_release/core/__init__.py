"""ecs-release core modules."""

from ecs_release.core.settings import ReleaseSettings, get_settings

__all__ = [
    "ReleaseSettings",
    "get_settings",
]

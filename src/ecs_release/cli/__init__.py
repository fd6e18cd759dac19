"""Command line interface for ecs-release."""

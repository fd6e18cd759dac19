"""CLI entrypoint for ecs-release."""

import logging
import sys
from collections.abc import Callable
from typing import Any, TypeVar

import click
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from ecs_release.cli.errors import report_release_error
from ecs_release.cli.tables import print_images_table, print_status_table
from ecs_release.cli.ui import console, print_error, print_warning, report_step
from ecs_release.core.deployments.aws_ecs import (
    EcsReleaseConfig,
    ImageNotFoundError,
    ReleaseError,
    build_release,
    create_session,
    deploy_release,
    describe_service_status,
    image_exists,
    list_images,
    require_executables,
    rollback_release,
)
from ecs_release.core.settings import get_settings

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])

RELEASE_ERRORS = (ReleaseError, ClientError, BotoCoreError)

TARGET_OPTIONS = (
    click.option("-r", "--region", help="AWS region."),
    click.option("-c", "--cluster", help="ECS cluster name."),
    click.option("-s", "--service", help="ECS service name."),
    click.option("-t", "--task-def", "task_definition", help="Task definition family."),
    click.option("-e", "--ecr-repo", help="ECR repository name."),
    click.option("-p", "--profile", help="AWS named profile."),
    click.option("--container", help="Container definition to update (default: the first one)."),
)


def target_options(func: F) -> F:
    """Attach the release target options to a command.

    They are accepted both before and after the command name.
    """
    for option in reversed(TARGET_OPTIONS):
        func = option(func)
    return func


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=(
        "Recommended flow: build, then deploy; rollback --version <commit-hash> "
        "if the new version misbehaves."
    ),
)
@target_options
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, **options: str | None) -> None:
    """Build, tag and deploy images to ECS, with rollback support.

    Every build produces an image tagged with the current commit hash.
    Defaults can be overridden with ECS_RELEASE_* environment variables.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        print_error("No command given.")
        click.echo(ctx.get_help())
        ctx.exit(1)

    ctx.obj = options


def release_config_from_options(options: dict[str, Any]) -> EcsReleaseConfig:
    """Merge CLI options over environment settings.

    Args:
        options: Option values, None when not given.

    Returns:
        The release configuration.
    """
    settings = get_settings()

    def pick(name: str, default: Any) -> Any:
        value = options.get(name)
        return default if value is None else value

    return EcsReleaseConfig(
        aws_region=pick("region", settings.region),
        aws_profile=pick("profile", settings.profile),
        cluster_name=pick("cluster", settings.cluster),
        service_name=pick("service", settings.service),
        task_family=pick("task_definition", settings.task_definition),
        ecr_repository=pick("ecr_repo", settings.ecr_repo),
        container_name=pick("container", settings.container),
        build_context=pick("build_context", settings.build_context),
        wait_delay_seconds=settings.wait_delay_seconds,
        wait_max_attempts=settings.wait_max_attempts,
    )


def _command_config(ctx: click.Context, options: dict[str, Any]) -> EcsReleaseConfig:
    """Build the config for a command; its own options win over the group's."""
    merged = dict(ctx.obj or {})
    merged.update({name: value for name, value in options.items() if value is not None})
    try:
        return release_config_from_options(merged)
    except ValidationError as exc:
        print_error(f"Invalid configuration values: {exc}")
        raise click.exceptions.Exit(1) from exc


@cli.command()
@target_options
@click.option("--context", "build_context", help="Docker build context (default: .).")
@click.pass_context
def build(ctx: click.Context, **options: str | None) -> None:
    """Build the Docker image tagged with the current commit and push it to ECR."""
    config = _command_config(ctx, options)

    def action() -> None:
        require_executables(["git", "docker"])
        build_release(create_session(config), config, report_step)

    _run_or_exit(action)
    report_step("Operation completed")


@cli.command()
@target_options
@click.pass_context
def deploy(ctx: click.Context, **options: str | None) -> None:
    """Deploy the image of the current commit to the ECS service."""
    config = _command_config(ctx, options)

    def action() -> bool:
        require_executables(["git"])
        return deploy_release(create_session(config), config, report_step).stable

    _report_stability(_run_or_exit(action))
    report_step("Operation completed")


@cli.command()
@target_options
@click.option("-v", "--version", "version", help="Image tag to roll back to (commit hash).")
@click.pass_context
def rollback(ctx: click.Context, version: str | None, **options: str | None) -> None:
    """Roll the ECS service back to a previously pushed version."""
    config = _command_config(ctx, options)
    if not version:
        print_error("No version given for rollback. Use --version or -v.")
        _print_available_versions(config)
        sys.exit(1)

    try:
        stable = _run_or_exit(
            lambda: rollback_release(create_session(config), config, version, report_step).stable,
            passthrough=(ImageNotFoundError,),
        )
    except ImageNotFoundError:
        print_error(f"Version not found in ECR: {version}")
        _print_available_versions(config)
        sys.exit(1)

    _report_stability(stable)
    report_step("Operation completed")


@cli.command(name="list")
@target_options
@click.pass_context
def list_command(ctx: click.Context, **options: str | None) -> None:
    """List the last 10 images pushed to ECR."""
    config = _command_config(ctx, options)
    report_step(f"Listing the latest images in {config.ecr_repository}")
    images = _run_or_exit(lambda: list_images(create_session(config), config))
    print_images_table(config.ecr_repository, images)


@cli.command()
@target_options
@click.pass_context
def status(ctx: click.Context, **options: str | None) -> None:
    """Show the task definition and image the service is running."""
    config = _command_config(ctx, options)

    def action() -> None:
        session = create_session(config)
        service_status = describe_service_status(
            session,
            config.cluster_name,
            config.service_name,
            config.container_name,
        )
        tag = image_tag(service_status.image)
        in_registry = image_exists(session, config.ecr_repository, tag) if tag else None
        print_status_table(service_status, in_registry)

    _run_or_exit(action)


@cli.command(name="help")
@click.pass_context
def help_command(ctx: click.Context) -> None:
    """Show this help."""
    parent = ctx.parent or ctx
    click.echo(parent.get_help())


def image_tag(image: str) -> str | None:
    """Return the tag of an image reference, if it has one.

    Digest references (``repo@sha256:...``) have no tag.
    """
    if "@" in image:
        return None
    _, sep, tag = image.rpartition(":")
    if not sep or "/" in tag:
        return None
    return tag


def _run_or_exit(
    action: Callable[[], T],
    passthrough: tuple[type[Exception], ...] = (),
) -> T:
    """Run a release action, exiting with status 1 on failure.

    Exceptions listed in passthrough are re-raised for the caller to handle.
    """
    try:
        return action()
    except RELEASE_ERRORS as exc:
        if isinstance(exc, passthrough):
            raise
        report_release_error(exc)
        sys.exit(1)


def _print_available_versions(config: EcsReleaseConfig) -> None:
    console.print()
    console.print("Available versions:")
    images = _run_or_exit(lambda: list_images(create_session(config), config))
    print_images_table(config.ecr_repository, images)


def _report_stability(stable: bool) -> None:
    if not stable:
        print_warning("Timed out waiting for the service to stabilise. Check its status manually.")


def main() -> None:
    """Run the CLI."""
    try:
        exit_code = cli.main(standalone_mode=False)
    except click.UsageError as exc:
        exc.show()
        sys.exit(1)
    except click.ClickException as exc:
        exc.show()
        sys.exit(exc.exit_code)
    except click.Abort:
        print_error("Aborted.")
        sys.exit(1)
    sys.exit(exit_code if isinstance(exit_code, int) else 0)

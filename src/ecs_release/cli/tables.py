"""Table rendering for image listings and service status."""

from rich.table import Table

from ecs_release.cli.ui import console
from ecs_release.core.deployments.aws_ecs import ImageSummary, ServiceStatus


def print_images_table(repository: str, images: list[ImageSummary]) -> None:
    """Print recently pushed images.

    Args:
        repository: ECR repository name.
        images: Images ordered by push time.
    """
    if not images:
        console.print(f"[yellow]No images found in {repository}.[/yellow]")
        return

    table = Table(title=f"Images in {repository}", show_header=True, header_style="bold cyan")
    table.add_column("Tags", style="bright_white")
    table.add_column("Pushed at", style="white", no_wrap=True)
    for image in images:
        pushed_at = image.pushed_at.isoformat() if image.pushed_at else "-"
        table.add_row(image.label, pushed_at)
    console.print(table)


def print_status_table(status: ServiceStatus, image_in_registry: bool | None) -> None:
    """Print the deployed state of a service.

    Args:
        status: Current service state.
        image_in_registry: Whether the running image tag is still in ECR, None if unknown.
    """
    table = Table(title=f"Service {status.service_name}", show_header=False)
    table.add_column("Field", style="bold cyan", no_wrap=True)
    table.add_column("Value", style="bright_white")
    table.add_row("Task definition", status.task_definition_arn)
    table.add_row("Image", status.image or "-")
    table.add_row("Tasks", f"{status.running_count}/{status.desired_count} running")
    table.add_row("Rollout", status.rollout_state or "-")
    if image_in_registry is None:
        registry = "[yellow]unknown[/yellow]"
    elif image_in_registry:
        registry = "[green]present[/green]"
    else:
        registry = "[red]missing[/red]"
    table.add_row("Image in ECR", registry)
    console.print(table)

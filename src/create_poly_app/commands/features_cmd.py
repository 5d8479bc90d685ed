"""Features command for listing the feature catalog."""

from rich.table import Table

from create_poly_app.services import get_feature_service
from create_poly_app.utils import get_console, print_info


def features_command(verbose: bool = False) -> None:
    """Print every registered feature in declaration order.

    Args:
        verbose: Also list each feature's prompts and stages
    """
    service = get_feature_service()

    table = Table(title="Available Features")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Depends on", style="dim")
    table.add_column("Activated by", style="yellow")
    table.add_column("Stages", justify="right")

    for feature in service.list_available_features():
        table.add_row(
            feature.id,
            feature.name,
            ", ".join(feature.depends_on) or "-",
            feature.activated_by.describe() if feature.activated_by is not None else "always",
            str(len(feature.stages)),
        )

    console = get_console()
    console.print(table)

    if not verbose:
        return

    for feature in service.list_available_features():
        console.print(f"\n[bold]{feature.name}[/bold] [dim]({feature.id})[/dim]")
        if feature.description:
            console.print(f"  {feature.description}")
        for prompt in feature.configuration:
            default = f" [dim](default: {prompt.default_value!r})[/dim]" if prompt.has_default else ""
            console.print(f"  [green]?[/green] {prompt.id}: {prompt.type.value}{default}")
        for stage in feature.stages:
            gate = f" [yellow]when {stage.activated_by.describe()}[/yellow]" if stage.activated_by else ""
            console.print(f"  [cyan]-[/cyan] {stage.name}{gate}")

    required_by = {f.id: service.get_features_requiring(f.id) for f in service.list_available_features()}
    for feature_id, dependents in required_by.items():
        if dependents:
            print_info(f"{feature_id} is required by: {', '.join(dependents)}")

"""Config command for viewing and managing contactnet configuration."""

import typer

from ..app import app, console
from ...config import (
    get_config,
    reset_config,
    CONFIG_FILE,
)
from ...core.models import DEGREE_DISTRIBUTION_TYPES


VALID_KEYS = {
    "network.population_size",
    "network.degree_distribution",
    "network.mean_degree",
    "network.seed",
    "output.directory",
}

INT_FIELDS = {"population_size", "seed"}
FLOAT_FIELDS = {"mean_degree"}

# Distributions that `contactnet network` can build from mean_degree alone
DEFAULTABLE_DISTRIBUTIONS = ("fixed", "poisson", "normal", "lognormal")


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. network.population_size, network.seed)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify contactnet configuration.

    Examples:
        contactnet config show
        contactnet config set network.population_size 5000
        contactnet config set network.degree_distribution lognormal
        contactnet config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] contactnet config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]contactnet Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Network[/bold cyan] (defaults for `contactnet network`)")
    console.print(f"  population_size     = {config.network.population_size}")
    console.print(f"  degree_distribution = {config.network.degree_distribution}")
    console.print(f"  mean_degree         = {config.network.mean_degree}")
    seed = config.network.seed if config.network.seed is not None else "[dim](random)[/dim]"
    console.print(f"  seed                = {seed}")

    console.print()
    console.print("[bold cyan]Output[/bold cyan]")
    console.print(f"  directory = {config.output.directory}")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    config = get_config()
    zone, field_name = key.split(".", 1)
    target = config.network if zone == "network" else config.output

    # Type coercion
    if field_name in INT_FIELDS:
        if field_name == "seed" and value.lower() in ("none", "random", ""):
            parsed = None
        else:
            try:
                parsed = int(value)
            except ValueError:
                console.print(f"[red]Invalid integer:[/red] {value}")
                raise typer.Exit(1)
    elif field_name in FLOAT_FIELDS:
        try:
            parsed = float(value)
        except ValueError:
            console.print(f"[red]Invalid number:[/red] {value}")
            raise typer.Exit(1)
    elif field_name == "degree_distribution":
        if value not in DEGREE_DISTRIBUTION_TYPES:
            console.print(f"[red]Unknown distribution:[/red] {value}")
            console.print(f"Valid: {', '.join(DEFAULTABLE_DISTRIBUTIONS)}")
            raise typer.Exit(1)
        if value not in DEFAULTABLE_DISTRIBUTIONS:
            # uniform needs bounds and categorical needs a file, neither stored in config
            console.print(f"[red]Cannot use {value} as the default distribution[/red]")
            console.print(f"Valid: {', '.join(DEFAULTABLE_DISTRIBUTIONS)}")
            console.print(f"Pass {value} options to `contactnet network` instead")
            raise typer.Exit(1)
        parsed = value
    else:
        parsed = value

    setattr(target, field_name, parsed)
    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {parsed}")
    console.print(f"  Saved to {CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {CONFIG_FILE}")
    else:
        console.print("Config already at defaults (no config file exists)")

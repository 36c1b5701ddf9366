"""Inspect command for summarizing a saved network."""

from pathlib import Path

import typer
from pydantic import ValidationError

from ...core.models import NetworkSnapshot
from ...population.network import compute_snapshot_metrics, validate_snapshot
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, metrics_rows


@app.command("inspect")
def inspect_command(
    path: Path = typer.Argument(..., help="Network JSON written by `contactnet network -o`"),
    validate: bool = typer.Option(
        True,
        "--validate/--no-validate",
        help="Check the edge list for self-loops, duplicates and unknown agents",
    ),
):
    """
    Show metrics for a saved network.

    Examples:
        contactnet inspect networks/net.json
        contactnet --json inspect networks/net.json
    """
    out = Output(console=console, json_mode=get_json_mode())

    if not path.exists():
        out.error(f"File not found: {path}", exit_code=ExitCode.FILE_NOT_FOUND)
        raise typer.Exit(out.finish())

    try:
        snapshot = NetworkSnapshot.load_json(path)
    except (ValidationError, UnicodeDecodeError, OSError) as e:
        out.error(f"Could not read network from {path}: {e}")
        raise typer.Exit(out.finish())

    meta = snapshot.meta
    out.success(
        f"Loaded {meta.network_type} ({snapshot.node_count:,} agents, "
        f"{len(snapshot.edges):,} edges)",
        network_type=meta.network_type,
        created_at=meta.created_at.isoformat(),
        seed=meta.seed,
        degree_distribution=meta.degree_distribution,
    )

    if validate:
        is_valid, problems = validate_snapshot(snapshot, verbose=True)
        out.set_data("valid", is_valid)
        if not is_valid:
            for problem in problems:
                out.warning(problem)
            out.error("Network failed validation")
            raise typer.Exit(out.finish())

    metrics = compute_snapshot_metrics(snapshot)
    if get_json_mode():
        out.set_data("metrics", metrics.to_dict())
    else:
        out.table("Network Metrics", ["Metric", "Value"], metrics_rows(metrics))

    raise typer.Exit(out.finish())

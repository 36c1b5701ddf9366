"""Network command for building a configuration-model contact network."""

import random
import time
from pathlib import Path

import typer
import yaml

from ...config import get_config
from ...core.errors import ContactNetError
from ...core.models import (
    DEGREE_DISTRIBUTION_TYPES,
    NetworkSnapshot,
    load_degree_distribution,
)
from ...population import (
    ConfigurationModel,
    DegreeSampler,
    Population,
    distribution_from_options,
)
from ...population.network import compute_network_metrics, validate_network
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, format_elapsed, metrics_rows


_MEAN_DEFAULTED = ("poisson", "normal", "lognormal", "fixed")


def _resolve_output_path(output: Path) -> Path:
    """Bare file names land in the configured output directory."""
    if output.is_absolute() or output.parent != Path("."):
        return output
    return get_config().output_dir / output


@app.command("network")
def network_command(
    size: int | None = typer.Option(
        None, "--size", "-n", min=0, help="Number of agents (default from config)"
    ),
    distribution: str | None = typer.Option(
        None,
        "--distribution",
        "-d",
        help="Degree distribution: " + " | ".join(DEGREE_DISTRIBUTION_TYPES),
    ),
    mean: float | None = typer.Option(
        None, "--mean", help="Mean degree (default from config)"
    ),
    std: float | None = typer.Option(
        None, "--std", help="Degree standard deviation (normal, lognormal)"
    ),
    min_degree: int | None = typer.Option(
        None, "--min", help="Minimum degree (uniform, normal, lognormal)"
    ),
    max_degree: int | None = typer.Option(
        None, "--max", help="Maximum degree (uniform, normal, lognormal)"
    ),
    degree: int | None = typer.Option(
        None, "--degree", help="Degree for every agent (fixed)"
    ),
    degree_config: Path | None = typer.Option(
        None,
        "--degree-config",
        "-c",
        help="Degree distribution YAML file (overrides distribution options)",
    ),
    seed: int | None = typer.Option(
        None, "--seed", help="Random seed for reproducibility"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the network as JSON"
    ),
    validate: bool = typer.Option(
        False, "--validate", "-v", help="Check symmetry, self-loops and duplicates"
    ),
):
    """
    Build a configuration-model contact network.

    Each agent draws a degree from the chosen distribution; stubs are then
    matched at random. Self-loops and repeated edges are dropped, so realized
    degrees can be lower than requested.

    Examples:
        contactnet network -n 1000 -d poisson --mean 4 --seed 42
        contactnet network -n 500 -d uniform --min 2 --max 6 -o net.json
        contactnet network -n 2000 -c degrees.yaml --validate
    """
    out = Output(console=console, json_mode=get_json_mode())
    config = get_config()

    # Resolve degree distribution
    try:
        if degree_config is not None:
            if not degree_config.exists():
                out.error(
                    f"Degree config not found: {degree_config}",
                    exit_code=ExitCode.FILE_NOT_FOUND,
                )
                raise typer.Exit(out.finish())
            dist = load_degree_distribution(degree_config)
        else:
            kind = distribution or config.network.degree_distribution
            if mean is None and degree is None and kind in _MEAN_DEFAULTED:
                mean = config.network.mean_degree
            dist = distribution_from_options(
                kind,
                mean=mean,
                std=std,
                min_degree=min_degree,
                max_degree=max_degree,
                degree=degree,
            )
    except (ValueError, yaml.YAMLError) as e:
        out.error(f"Invalid degree distribution: {e}")
        raise typer.Exit(out.finish())

    n = size if size is not None else config.network.population_size
    if seed is None:
        seed = config.network.seed
    if seed is None:
        seed = random.randrange(2**31)

    rng = random.Random(seed)
    population = Population(n)
    network = ConfigurationModel(population, DegreeSampler(dist, rng), uniform=rng)
    population.add(network)

    start = time.time()
    try:
        if get_json_mode():
            network.finalize()
        else:
            with console.status(f"Building network over {n:,} agents..."):
                network.finalize()
    except ContactNetError as e:
        out.error(f"Network generation failed: {e}", exit_code=ExitCode.NETWORK_ERROR)
        raise typer.Exit(out.finish())
    elapsed = time.time() - start

    out.success(
        f"Built {dist.type} network: {n:,} agents, {network.edge_count:,} edges "
        f"({format_elapsed(elapsed)}, seed {seed})",
        seed=seed,
        degree_distribution=dist.model_dump(mode="json"),
        elapsed_seconds=elapsed,
    )

    metrics = compute_network_metrics(network)
    if get_json_mode():
        out.set_data("metrics", metrics.to_dict())
    else:
        out.table("Network Metrics", ["Metric", "Value"], metrics_rows(metrics))

    if validate:
        is_valid, problems = validate_network(network, verbose=True)
        out.set_data("valid", is_valid)
        if is_valid:
            out.success("Network invariants hold")
        else:
            for problem in problems:
                out.warning(problem)
            out.error("Network failed validation")

    if output is not None:
        path = _resolve_output_path(output)
        snapshot = NetworkSnapshot.from_network(
            network,
            seed=seed,
            degree_distribution=dist.model_dump(mode="json"),
        )
        try:
            snapshot.save_json(path)
        except OSError as e:
            out.error(f"Could not write {path}: {e}")
            raise typer.Exit(out.finish())
        out.success(f"Saved network to {path}", output=str(path))

    raise typer.Exit(out.finish())

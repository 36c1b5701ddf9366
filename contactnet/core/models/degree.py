"""Degree distribution models and YAML I/O.

A degree distribution describes how many contacts each agent asks for when a
configuration-model network is built. Every model carries a ``type``
discriminator so a distribution can be written to and read from YAML:

    type: poisson
    mean: 4.0
"""

from pathlib import Path
from typing import Annotated, Literal

import yaml
from pydantic import BaseModel, Field, TypeAdapter, model_validator


class FixedDegree(BaseModel):
    """Every agent requests the same degree."""

    type: Literal["fixed"] = "fixed"
    degree: int = Field(ge=0)


class UniformDegree(BaseModel):
    """Degrees drawn uniformly from an inclusive integer range."""

    type: Literal["uniform"] = "uniform"
    min: int = Field(ge=0)
    max: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "UniformDegree":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


class PoissonDegree(BaseModel):
    """Poisson-distributed degrees (Erdos-Renyi-like networks)."""

    type: Literal["poisson"] = "poisson"
    mean: float = Field(ge=0)


class NormalDegree(BaseModel):
    """Rounded Gaussian degrees, clamped to [min, max] and never negative."""

    type: Literal["normal"] = "normal"
    mean: float = Field(ge=0)
    std: float = Field(default=1.0, ge=0)
    min: int | None = Field(default=None, ge=0)
    max: int | None = Field(default=None, ge=0)


class LognormalDegree(BaseModel):
    """Rounded lognormal degrees for heavy-tailed contact patterns.

    ``mean`` and ``std`` are the real-space moments of the distribution, not
    the log-space parameters.
    """

    type: Literal["lognormal"] = "lognormal"
    mean: float = Field(gt=0)
    std: float | None = Field(
        default=None, gt=0, description="Defaults to half the mean"
    )
    min: int | None = Field(default=None, ge=0)
    max: int | None = Field(default=None, ge=0)


class CategoricalDegree(BaseModel):
    """Degrees picked from explicit options with relative weights."""

    type: Literal["categorical"] = "categorical"
    options: list[int] = Field(min_length=1)
    weights: list[float] = Field(description="Relative weights, one per option")

    @model_validator(mode="after")
    def _check_options(self) -> "CategoricalDegree":
        if len(self.options) != len(self.weights):
            raise ValueError(
                f"options ({len(self.options)}) and weights ({len(self.weights)}) "
                "must have the same length"
            )
        if any(o < 0 for o in self.options):
            raise ValueError("degree options must be non-negative")
        if any(w < 0 for w in self.weights) or sum(self.weights) <= 0:
            raise ValueError("weights must be non-negative with a positive sum")
        return self


DegreeDistribution = Annotated[
    FixedDegree
    | UniformDegree
    | PoissonDegree
    | NormalDegree
    | LognormalDegree
    | CategoricalDegree,
    Field(discriminator="type"),
]

DEGREE_DISTRIBUTION_TYPES = (
    "fixed",
    "uniform",
    "poisson",
    "normal",
    "lognormal",
    "categorical",
)

_adapter = TypeAdapter(DegreeDistribution)


def parse_degree_distribution(data: dict) -> DegreeDistribution:
    """Validate a plain dict into the matching distribution model."""
    return _adapter.validate_python(data)


def load_degree_distribution(path: Path | str) -> DegreeDistribution:
    """Load a degree distribution from a YAML file."""
    path = Path(path)

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a degree distribution mapping")

    return parse_degree_distribution(data)


def save_degree_distribution(dist: DegreeDistribution, path: Path | str) -> None:
    """Save a degree distribution to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(
            dist.model_dump(mode="json", exclude_none=True),
            f,
            default_flow_style=False,
            sort_keys=False,
        )

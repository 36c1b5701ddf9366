"""Degree samplers: degree generators built from distribution models.

A ``DegreeSampler`` is callable with a population size and returns one
non-negative integer per agent, which is what ``ConfigurationModel``
expects from its degree generator:

    rng = random.Random(42)
    sampler = DegreeSampler(PoissonDegree(mean=4.0), rng)
    network = ConfigurationModel(population, sampler, uniform=rng)
"""

import logging
import math
import random

from ..core.models import (
    CategoricalDegree,
    DegreeDistribution,
    FixedDegree,
    LognormalDegree,
    NormalDegree,
    PoissonDegree,
    UniformDegree,
    parse_degree_distribution,
)

logger = logging.getLogger(__name__)


def sample_degree(dist: DegreeDistribution, rng: random.Random) -> int:
    """Draw one degree from a distribution.

    Raises:
        ValueError: If the distribution type is unknown.
    """
    if isinstance(dist, FixedDegree):
        return dist.degree
    elif isinstance(dist, UniformDegree):
        return rng.randint(dist.min, dist.max)
    elif isinstance(dist, PoissonDegree):
        return _sample_poisson(dist.mean, rng)
    elif isinstance(dist, NormalDegree):
        value = round(rng.gauss(dist.mean, dist.std))
        return _clamp(value, dist.min, dist.max)
    elif isinstance(dist, LognormalDegree):
        return _sample_lognormal(dist, rng)
    elif isinstance(dist, CategoricalDegree):
        return rng.choices(dist.options, weights=dist.weights, k=1)[0]
    else:
        raise ValueError(f"Unknown degree distribution type: {type(dist)}")


def _clamp(value: int, lo: int | None, hi: int | None) -> int:
    if lo is not None:
        value = max(value, lo)
    if hi is not None:
        value = min(value, hi)
    return max(value, 0)


def _sample_poisson(mean: float, rng: random.Random) -> int:
    """Poisson draw by multiplying uniforms until they fall below e^-mean.

    Large means are split into chunks so e^-mean does not underflow; the sum
    of independent Poisson draws is Poisson with the summed mean.
    """
    total = 0
    while mean > 0:
        chunk = min(mean, 500.0)
        mean -= chunk
        limit = math.exp(-chunk)
        k = 0
        p = rng.random()
        while p > limit:
            k += 1
            p *= rng.random()
        total += k
    return total


def _sample_lognormal(dist: LognormalDegree, rng: random.Random) -> int:
    """Lognormal draw from real-space mean/std, rounded and clamped."""
    std = dist.std if dist.std is not None else dist.mean * 0.5

    # Convert from actual mean/std to log-space mu/sigma
    variance = std**2
    mean_sq = dist.mean**2
    mu = math.log(mean_sq / math.sqrt(mean_sq + variance))
    sigma = math.sqrt(math.log(1 + variance / mean_sq))

    value = round(rng.lognormvariate(mu, sigma))
    return _clamp(value, dist.min, dist.max)


class DegreeSampler:
    """Degree generator drawing each agent's degree independently.

    Args:
        distribution: A degree distribution model, or a dict that validates
            into one (e.g. ``{"type": "poisson", "mean": 4}``).
        rng: Random generator. Seed it for reproducible degree sequences.
    """

    def __init__(
        self,
        distribution: DegreeDistribution | dict,
        rng: random.Random | None = None,
    ):
        if isinstance(distribution, dict):
            distribution = parse_degree_distribution(distribution)
        self.distribution = distribution
        self.rng = rng if rng is not None else random.Random()

    def __call__(self, population_size: int) -> list[int]:
        if population_size < 0:
            raise ValueError(f"Population size must be >= 0, got {population_size}")
        degrees = [
            sample_degree(self.distribution, self.rng) for _ in range(population_size)
        ]
        logger.debug(
            "Sampled %d %s degrees (total stubs %d)",
            population_size,
            self.distribution.type,
            sum(degrees),
        )
        return degrees

    def __repr__(self) -> str:
        return f"DegreeSampler({self.distribution!r})"


def distribution_from_options(
    kind: str,
    *,
    mean: float | None = None,
    std: float | None = None,
    min_degree: int | None = None,
    max_degree: int | None = None,
    degree: int | None = None,
) -> DegreeDistribution:
    """Build a distribution from flat keyword options (as given on the CLI).

    Raises:
        ValueError: If required parameters for ``kind`` are missing or invalid.
    """
    if kind == "fixed":
        value = degree if degree is not None else mean
        if value is None:
            raise ValueError("fixed distribution needs --degree (or --mean)")
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"fixed degree must be an integer, got {value}")
        data = {"type": "fixed", "degree": int(value)}
    elif kind == "uniform":
        if min_degree is None or max_degree is None:
            raise ValueError("uniform distribution needs --min and --max")
        data = {"type": "uniform", "min": min_degree, "max": max_degree}
    elif kind == "poisson":
        if mean is None:
            raise ValueError("poisson distribution needs --mean")
        data = {"type": "poisson", "mean": mean}
    elif kind in ("normal", "lognormal"):
        if mean is None:
            raise ValueError(f"{kind} distribution needs --mean")
        data = {"type": kind, "mean": mean}
        if std is not None:
            data["std"] = std
        if min_degree is not None:
            data["min"] = min_degree
        if max_degree is not None:
            data["max"] = max_degree
    elif kind == "categorical":
        raise ValueError("categorical distributions must be given as a YAML file")
    else:
        raise ValueError(f"Unknown degree distribution: {kind!r}")

    return parse_degree_distribution(data)

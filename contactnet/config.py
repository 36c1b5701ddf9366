"""Configuration management for contactnet.

Config resolution order (highest priority first):
1. Programmatic (ContactNetConfig constructed in code, installed with configure())
2. Environment variables (CONTACTNET_POPULATION_SIZE, CONTACTNET_SEED, etc.)
3. Config file (~/.config/contactnet/config.json, managed by `contactnet config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "contactnet"
CONFIG_FILE = CONFIG_DIR / "config.json"


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class NetworkDefaults:
    """Defaults for `contactnet network` when options are omitted.

    - degree_distribution: one of fixed, uniform, poisson, normal, lognormal
    - mean_degree: mean (or fixed) degree handed to the distribution
    - seed: None means a fresh random seed per run
    """

    population_size: int = 1000
    degree_distribution: str = "poisson"
    mean_degree: float = 4.0
    seed: int | None = None


@dataclass
class OutputDefaults:
    """Where exported networks go when only a file name is given."""

    directory: str = "./networks"


@dataclass
class ContactNetConfig:
    """Top-level contactnet configuration.

    Examples:
        # Package use: no files needed
        config = ContactNetConfig(network=NetworkDefaults(population_size=500))

        # CLI use: loads from ~/.config/contactnet/config.json + env vars
        config = ContactNetConfig.load()
    """

    network: NetworkDefaults = field(default_factory=NetworkDefaults)
    output: OutputDefaults = field(default_factory=OutputDefaults)

    @classmethod
    def load(cls) -> "ContactNetConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError, TypeError, ValueError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        if val := os.environ.get("CONTACTNET_POPULATION_SIZE"):
            try:
                config.network.population_size = int(val)
            except ValueError:
                logger.warning("Invalid CONTACTNET_POPULATION_SIZE=%r, ignoring", val)
        if val := os.environ.get("CONTACTNET_DEGREE_DISTRIBUTION"):
            config.network.degree_distribution = val
        if val := os.environ.get("CONTACTNET_MEAN_DEGREE"):
            try:
                config.network.mean_degree = float(val)
            except ValueError:
                logger.warning("Invalid CONTACTNET_MEAN_DEGREE=%r, ignoring", val)
        if val := os.environ.get("CONTACTNET_SEED"):
            try:
                config.network.seed = int(val)
            except ValueError:
                logger.warning("Invalid CONTACTNET_SEED=%r, ignoring", val)
        if val := os.environ.get("CONTACTNET_OUTPUT_DIR"):
            config.output.directory = val

        return config

    def save(self) -> None:
        """Save config to ~/.config/contactnet/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "network": asdict(self.network),
            "output": asdict(self.output),
        }

    @property
    def output_dir(self) -> Path:
        """Resolve the output directory."""
        return Path(self.output.directory)


# =============================================================================
# Config dict application
# =============================================================================

_INT_FIELDS = {"population_size", "seed"}
_FLOAT_FIELDS = {"mean_degree"}


def _coerce(key: str, value: Any) -> Any:
    if value is None:
        return None
    if key in _INT_FIELDS:
        return int(value)
    if key in _FLOAT_FIELDS:
        return float(value)
    return value


def _apply_dict(config: ContactNetConfig, data: dict) -> None:
    """Apply a dict of values onto a ContactNetConfig."""
    if "network" in data and isinstance(data["network"], dict):
        for k, v in data["network"].items():
            if hasattr(config.network, k):
                setattr(config.network, k, _coerce(k, v))
    if "output" in data and isinstance(data["output"], dict):
        for k, v in data["output"].items():
            if hasattr(config.output, k):
                setattr(config.output, k, v)


# =============================================================================
# Global config singleton
# =============================================================================

_config: ContactNetConfig | None = None


def get_config() -> ContactNetConfig:
    """Get the global ContactNetConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = ContactNetConfig.load()
    return _config


def configure(config: ContactNetConfig) -> None:
    """Set the global ContactNetConfig programmatically.

    Use this when contactnet is used as a package:
        from contactnet.config import configure, ContactNetConfig, NetworkDefaults
        configure(ContactNetConfig(network=NetworkDefaults(seed=7)))
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None

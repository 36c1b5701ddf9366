"""CLI commands for contactnet."""

from . import (
    network,
    inspect,
    config_cmd,
)

__all__ = [
    "network",
    "inspect",
    "config_cmd",
]

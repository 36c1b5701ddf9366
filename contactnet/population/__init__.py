"""Populations of agents and the contact structures connecting them."""

from .agent import Agent
from .registry import Population
from .degree import DegreeSampler, sample_degree, distribution_from_options
from .network import Contact, Network, ConfigurationModel

__all__ = [
    "Agent",
    "Population",
    "DegreeSampler",
    "sample_degree",
    "distribution_from_options",
    "Contact",
    "Network",
    "ConfigurationModel",
]

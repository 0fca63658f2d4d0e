"""
Core components for CellConsensus.

This module provides the foundational services and utilities for the
CellConsensus system, organized into specialized submodules.
"""

# Base components
from .base import BatchProcessor, ConfigurableComponent

# Configuration classes
from .configs import BatchConfig, ConsensusConfig

# Errors
from .errors import ConsensusError, LabelColumnError, NeighborIndexError

# Services
from .consensus import (
    AMBIGUOUS,
    ConsensusService,
    VoteResult,
    resolve,
    resolve_detailed,
    transfer_labels,
)

__all__ = [
    # Base
    "ConfigurableComponent",
    "BatchProcessor",
    # Configs
    "BatchConfig",
    "ConsensusConfig",
    # Errors
    "ConsensusError",
    "LabelColumnError",
    "NeighborIndexError",
    # Consensus
    "AMBIGUOUS",
    "ConsensusService",
    "VoteResult",
    "resolve",
    "resolve_detailed",
    "transfer_labels",
]

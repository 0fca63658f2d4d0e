"""
CellConsensus: majority-vote consensus for cell-type annotations

Combines the per-cell labels produced by independent cell-type annotation
methods into one consensus label, and transfers labels from reference
cells to query cells by voting over nearest neighbours. A reserved
"ambiguous" label marks cells without a confident vote.
"""

__version__ = "0.1.0"

# Core services and configs
from .core import (
    AMBIGUOUS,
    BatchConfig,
    ConsensusConfig,
    ConsensusError,
    ConsensusService,
    LabelColumnError,
    NeighborIndexError,
    VoteResult,
    resolve,
    resolve_detailed,
    transfer_labels,
)

# Foundational settings
from .config import Settings

__all__ = [
    "Settings",
    # Voting
    "AMBIGUOUS",
    "VoteResult",
    "resolve",
    "resolve_detailed",
    "transfer_labels",
    # Services
    "ConsensusService",
    # Configuration
    "BatchConfig",
    "ConsensusConfig",
    # Errors
    "ConsensusError",
    "LabelColumnError",
    "NeighborIndexError",
]

"""
Consensus components for CellConsensus.

This module provides majority-vote reduction of per-cell labels from
independent annotation methods or from reference neighbours.
"""

from .consensus_service import ConsensusService
from .normalize import DEFAULT_MISSING_VALUES, normalize_frame, normalize_label, normalize_labels
from .transfer import transfer_labels
from .vote import AMBIGUOUS, VoteResult, count_votes, resolve, resolve_detailed

__all__ = [
    "AMBIGUOUS",
    "ConsensusService",
    "DEFAULT_MISSING_VALUES",
    "VoteResult",
    "count_votes",
    "normalize_frame",
    "normalize_label",
    "normalize_labels",
    "resolve",
    "resolve_detailed",
    "transfer_labels",
]

"""Exceptions raised at the table and neighbour-input boundaries."""

from __future__ import annotations


class ConsensusError(Exception):
    """Base class for CellConsensus errors."""


class LabelColumnError(ConsensusError, KeyError):
    """Raised when label columns are missing from a table or none are given."""

    def __str__(self) -> str:
        # KeyError quotes its message otherwise
        return str(self.args[0]) if self.args else ""


class NeighborIndexError(ConsensusError, ValueError):
    """Raised for a malformed neighbour index or similarity matrix."""

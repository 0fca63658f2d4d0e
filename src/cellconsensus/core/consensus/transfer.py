"""Nearest-neighbour label transfer by majority vote over neighbour labels."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from loguru import logger

from ..errors import NeighborIndexError
from .normalize import normalize_labels
from .vote import AMBIGUOUS, resolve


def transfer_labels(
    neighbor_indices: Any,
    reference_labels: Sequence[Any],
    similarities: Any | None = None,
    min_similarity: float | None = None,
    sentinel: str = AMBIGUOUS,
    missing_values: Sequence[str] | None = None,
) -> list[str]:
    """
    Assign each query cell the majority label of its reference neighbours.

    Args:
        neighbor_indices: Integer matrix of shape (n_query, k) with positions
            into ``reference_labels``. Negative entries mark a missing
            neighbour.
        reference_labels: Label of each reference cell.
        similarities: Optional matrix of the same shape as
            ``neighbor_indices`` with the similarity to each neighbour.
        min_similarity: Neighbours below this similarity do not vote.
            Ignored when ``similarities`` is not given.
        sentinel: Reserved label meaning "no confident vote".
        missing_values: Reference label spellings treated as the sentinel.

    Returns:
        One label per query row, the sentinel where the neighbours give no
        vote or a tied vote.

    Raises:
        NeighborIndexError: If the matrices are malformed or an index is
            out of range.
    """
    indices = np.asarray(neighbor_indices)
    if indices.ndim != 2:
        raise NeighborIndexError(
            f"Neighbour indices must be two dimensional, got shape {indices.shape}"
        )
    if indices.size and not np.issubdtype(indices.dtype, np.integer):
        raise NeighborIndexError(f"Neighbour indices must be integers, got {indices.dtype}")
    indices = indices.astype(np.int64, copy=False)

    labels = np.asarray(
        normalize_labels(reference_labels, sentinel, missing_values), dtype=object
    )
    if indices.size and indices.max() >= len(labels):
        raise NeighborIndexError(
            f"Neighbour index {indices.max()} out of range for "
            f"{len(labels)} reference labels"
        )

    sims = None
    if similarities is not None:
        sims = np.asarray(similarities, dtype=float)
        if sims.shape != indices.shape:
            raise NeighborIndexError(
                f"Similarity shape {sims.shape} does not match "
                f"neighbour index shape {indices.shape}"
            )

    voting = indices >= 0
    if sims is not None and min_similarity is not None:
        # NaN similarities compare False and so never vote
        voting &= sims >= min_similarity

    neighbor_labels = np.full(indices.shape, sentinel, dtype=object)
    neighbor_labels[voting] = labels[indices[voting]]

    transferred = [resolve(row, sentinel) for row in neighbor_labels.tolist()]
    logger.info(
        f"Transferred labels to {len(transferred)} query cells from "
        f"{len(labels)} reference cells "
        f"({sum(label == sentinel for label in transferred)} {sentinel})"
    )
    return transferred

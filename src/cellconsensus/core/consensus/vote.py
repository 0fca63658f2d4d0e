"""
Majority-vote reduction of per-source labels.

A single rule set is shared by cross-tool consensus and by
nearest-neighbour label transfer: the sentinel label never counts as a
vote, and an empty or tied vote yields the sentinel.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from pydantic import BaseModel, Field

AMBIGUOUS = "ambiguous"


class VoteResult(BaseModel):
    """Outcome of a single majority vote with its supporting counts."""

    label: str = Field(description="Winning label, or the sentinel")
    votes: int = Field(0, description="Vote count of the leading label(s)")
    num_sources: int = Field(0, description="Number of labels submitted, sentinels included")
    num_abstained: int = Field(0, description="Number of sentinel labels")
    agreement: float = Field(0.0, description="Leading count over non-sentinel votes")
    tied_labels: list[str] = Field(default_factory=list, description="Leaders when the vote is tied")
    is_ambiguous: bool = Field(False, description="Whether the result is the sentinel")


def count_votes(labels: Iterable[str], sentinel: str = AMBIGUOUS) -> Counter:
    """Tally labels, leaving out the sentinel."""
    return Counter(label for label in labels if label != sentinel)


def _leaders(counts: Counter) -> tuple[list[str], int]:
    if not counts:
        return [], 0
    top = max(counts.values())
    return [label for label, n in counts.items() if n == top], top


def resolve(labels: Iterable[str], sentinel: str = AMBIGUOUS) -> str:
    """
    Reduce a collection of labels to one label by majority vote.

    Args:
        labels: Labels from each source for one entity. May be empty and
            may contain duplicates or the sentinel.
        sentinel: Reserved label meaning "no confident vote".

    Returns:
        The label with the strictly highest count, or the sentinel when
        no votes remain or two or more labels share the highest count.

    Example:
        >>> resolve(["B cell", "B cell", "T cell"])
        'B cell'
        >>> resolve(["B cell", "T cell", "ambiguous"])
        'ambiguous'
    """
    leaders, _ = _leaders(count_votes(labels, sentinel))
    if len(leaders) != 1:
        return sentinel
    return leaders[0]


def resolve_detailed(labels: Iterable[str], sentinel: str = AMBIGUOUS) -> VoteResult:
    """Same vote as :func:`resolve`, reported with its counts."""
    labels = list(labels)
    counts = count_votes(labels, sentinel)
    leaders, top = _leaders(counts)
    total = sum(counts.values())

    winner = leaders[0] if len(leaders) == 1 else sentinel
    return VoteResult(
        label=winner,
        votes=top,
        num_sources=len(labels),
        num_abstained=len(labels) - total,
        agreement=top / total if total else 0.0,
        tied_labels=sorted(leaders) if len(leaders) > 1 else [],
        is_ambiguous=winner == sentinel,
    )

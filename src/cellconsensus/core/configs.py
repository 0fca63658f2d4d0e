"""Configuration classes for CellConsensus components."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ConsensusConfig(BaseModel):
    """Configuration for table-level consensus."""

    label_columns: list[str] | None = Field(None, description="Columns holding one label source each")
    output_column: str = Field("consensus", description="Column receiving the consensus label")
    sentinel: str | None = Field(None, description="Sentinel label; defaults to the settings value")
    missing_values: list[str] | None = Field(
        None, description="Values normalized to the sentinel; defaults to the settings value"
    )
    include_stats: bool = Field(False, description="Also write agreement and vote count columns")


class BatchConfig(BaseModel):
    """Configuration for batch processing."""

    batch_size: int = Field(5000, gt=0, description="Number of rows per batch")
    max_concurrency: int = Field(4, gt=0, description="Maximum concurrent batches in async mode")
    show_progress: bool = Field(True, description="Display a progress bar")

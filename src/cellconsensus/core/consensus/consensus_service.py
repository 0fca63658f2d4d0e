"""
Consensus service for per-cell annotation tables.

This module applies the majority vote row-wise over a table whose columns
are the labels assigned by independent annotation methods, and reports
how well each method agrees with the resulting consensus.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd
from loguru import logger

from ...config import Settings
from ..base import BatchProcessor, ConfigurableComponent
from ..configs import BatchConfig, ConsensusConfig
from ..errors import LabelColumnError
from ..utils.data_utils import save_label_table
from .normalize import normalize_frame
from .vote import VoteResult, resolve_detailed


class ConsensusService(ConfigurableComponent[ConsensusConfig], BatchProcessor):
    """
    Service computing one consensus label per cell from several label sources.

    Args:
        dataset_name (str): Name of the dataset.
        settings (Settings): Application settings.
        config (ConsensusConfig | None): Consensus configuration.

    Example:
        >>> service = ConsensusService("pbmc3k", settings)
        >>> result = service.resolve_frame(
        ...     obs, label_columns=["scmap_cluster", "scmap_cell", "singler", "seurat"]
        ... )
        >>> result["consensus"].value_counts()
    """

    def __init__(
        self,
        dataset_name: str,
        settings: Settings,
        config: ConsensusConfig | None = None,
    ) -> None:
        super().__init__(
            component_type="consensus",
            dataset_name=dataset_name,
            settings=settings,
            config=config or ConsensusConfig(),
        )

    def resolve_frame(
        self,
        df: pd.DataFrame,
        label_columns: list[str] | None = None,
        output_column: str | None = None,
        batch_config: BatchConfig | None = None,
    ) -> pd.DataFrame:
        """
        Compute the consensus label for every row of ``df``.

        Args:
            df (pd.DataFrame): Table with one row per cell.
            label_columns (list[str] | None): Label source columns. Falls back
                to the configured columns.
            output_column (str | None): Column receiving the consensus.
            batch_config (BatchConfig | None): Batch processing configuration.

        Returns:
            pd.DataFrame: Copy of ``df`` with the consensus column added.

        Raises:
            LabelColumnError: If no label columns are given or some are missing.
        """
        columns = self._resolve_columns(df, label_columns)
        batch_config = batch_config or BatchConfig()
        rows = self._label_rows(df, columns)

        results = self.process_in_batches(
            items=rows,
            batch_size=batch_config.batch_size,
            process_func=self._vote_batch,
            desc="Consensus voting",
            show_progress=batch_config.show_progress,
        )
        return self._assemble(df, results, output_column)

    async def aresolve_frame(
        self,
        df: pd.DataFrame,
        label_columns: list[str] | None = None,
        output_column: str | None = None,
        batch_config: BatchConfig | None = None,
    ) -> pd.DataFrame:
        """Asynchronously compute the consensus, running batches concurrently."""
        columns = self._resolve_columns(df, label_columns)
        batch_config = batch_config or BatchConfig()
        rows = self._label_rows(df, columns)

        results = await self.process_in_batches_async(
            items=rows,
            batch_size=batch_config.batch_size,
            process_func=self._vote_batch,
            max_concurrency=batch_config.max_concurrency,
            desc="Consensus voting (async)",
            show_progress=batch_config.show_progress,
        )
        return self._assemble(df, results, output_column)

    def source_agreement(
        self,
        df: pd.DataFrame,
        label_columns: list[str] | None = None,
        output_column: str | None = None,
    ) -> pd.DataFrame:
        """
        Compare each label source with the consensus.

        The consensus is computed first when ``output_column`` is not
        present in ``df``.

        Returns:
            pd.DataFrame: One row per source with ``num_votes``,
            ``num_agree`` and ``agreement_rate``, best agreeing first.
        """
        columns = self._resolve_columns(df, label_columns)
        output_column = output_column or self.config.output_column

        if output_column not in df.columns:
            df = self.resolve_frame(
                df,
                label_columns=columns,
                output_column=output_column,
                batch_config=BatchConfig(show_progress=False),
            )

        labels = normalize_frame(df, columns, self.sentinel, self.missing_values)
        consensus = df[output_column].astype(str)

        data = []
        for col in columns:
            voted = labels[col] != self.sentinel
            agree = voted & (labels[col] == consensus)
            num_votes = int(voted.sum())
            data.append(
                {
                    "source": col,
                    "num_votes": num_votes,
                    "num_agree": int(agree.sum()),
                    "agreement_rate": int(agree.sum()) / max(num_votes, 1),
                }
            )

        return pd.DataFrame(data).sort_values(
            "agreement_rate", ascending=False, kind="stable"
        ).reset_index(drop=True)

    def summarize(self, df: pd.DataFrame, output_column: str | None = None) -> dict[str, Any]:
        """Summarize the consensus column of a resolved table."""
        output_column = output_column or self.config.output_column
        if output_column not in df.columns:
            raise LabelColumnError(f"Consensus column '{output_column}' not found")

        labels = df[output_column].astype(str)
        num_entities = len(labels)
        num_ambiguous = int((labels == self.sentinel).sum())
        return {
            "num_entities": num_entities,
            "num_ambiguous": num_ambiguous,
            "ambiguous_fraction": num_ambiguous / num_entities if num_entities else 0.0,
            "label_counts": dict(Counter(labels).most_common()),
        }

    def save_results(self, df: pd.DataFrame, filename: str | None = None) -> Path:
        """Save a resolved table as CSV in the component's storage directory."""
        filename = filename or f"consensus_{datetime.now():%Y%m%d_%H%M%S}.csv"
        output_path = self.storage_path / filename
        save_label_table(df, output_path)
        logger.info(f"Consensus results saved to {output_path}")
        return output_path

    def _resolve_columns(
        self, df: pd.DataFrame, label_columns: list[str] | None
    ) -> list[str]:
        columns = list(label_columns or self.config.label_columns or [])
        if not columns:
            raise LabelColumnError("No label columns given for consensus")

        missing = [col for col in columns if col not in df.columns]
        if missing:
            raise LabelColumnError(
                f"Label columns not found: {missing}. Available: {list(df.columns)}"
            )
        return columns

    def _label_rows(self, df: pd.DataFrame, columns: list[str]) -> list[list[str]]:
        labels = normalize_frame(df, columns, self.sentinel, self.missing_values)
        return labels.values.tolist()

    def _vote_batch(self, batch: Sequence[list[str]]) -> list[VoteResult]:
        return [resolve_detailed(row, self.sentinel) for row in batch]

    def _assemble(
        self,
        df: pd.DataFrame,
        results: list[VoteResult],
        output_column: str | None,
    ) -> pd.DataFrame:
        output_column = output_column or self.config.output_column
        if output_column in df.columns:
            logger.warning(f"Overwriting existing column '{output_column}'")

        result_df = df.copy()
        result_df[output_column] = [r.label for r in results]
        if self.config.include_stats:
            result_df[f"{output_column}_agreement"] = [r.agreement for r in results]
            result_df[f"{output_column}_votes"] = [r.votes for r in results]

        num_ambiguous = sum(r.is_ambiguous for r in results)
        logger.info(
            f"Consensus completed for {len(results)} entities "
            f"({num_ambiguous} {self.sentinel})"
        )
        return result_df

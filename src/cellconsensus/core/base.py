"""Base classes and mixins for the CellConsensus system."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Generic, TypeVar

from loguru import logger
from pydantic import BaseModel
from tqdm import tqdm

from ..config import Settings

T = TypeVar("T", bound=BaseModel)


class ConfigurableComponent(Generic[T]):
    """
    Base class for dataset-scoped components with a results directory.

    The sentinel label and missing-value spellings come from the component
    config when it sets them, otherwise from the application settings. The
    results directory is created on first use, so read-only components
    leave no trace on disk.
    """

    def __init__(
        self,
        component_type: str,
        dataset_name: str,
        settings: Settings,
        config: T | None = None,
    ):
        """
        Args:
            component_type: Results subdirectory, e.g. 'consensus'
            dataset_name: Unique identifier for the dataset
            settings: Application settings
            config: Component-specific Pydantic configuration model
        """
        self.component_type = component_type
        self.dataset_name = dataset_name
        self.settings = settings
        self.config = config
        logger.debug(f"Created {component_type} component for dataset: {dataset_name}")

    @property
    def storage_path(self) -> Path:
        path = Path(self.settings.results_dir) / self.component_type / self.dataset_name
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def sentinel(self) -> str:
        return getattr(self.config, "sentinel", None) or self.settings.sentinel_label

    @property
    def missing_values(self) -> list[str]:
        configured = getattr(self.config, "missing_values", None)
        return self.settings.missing_values if configured is None else configured

    def get_stats(self) -> dict[str, Any]:
        """Identity, effective voting settings and config of the component."""
        return {
            "component_type": self.component_type,
            "dataset_name": self.dataset_name,
            "sentinel": self.sentinel,
            "config": self.config.model_dump() if self.config else None,
        }


class BatchProcessor:
    """Mixin for processing items in batches with progress tracking."""

    def process_in_batches(
        self,
        items: Sequence[Any],
        batch_size: int,
        process_func: Callable[[Sequence[Any]], list[Any]],
        desc: str = "Processing batches",
        show_progress: bool = True,
    ) -> list[Any]:
        """
        Process a sequence of items in batches with a progress bar.

        Args:
            items: Items to process
            batch_size: Number of items per batch
            process_func: Function to apply to each batch
            desc: Description for the progress bar
            show_progress: Whether to display the progress bar

        Returns:
            List of processed results, in input order
        """
        results: list[Any] = []
        with tqdm(total=len(items), desc=desc, disable=not show_progress) as pbar:
            for i in range(0, len(items), batch_size):
                batch = items[i : i + batch_size]
                results.extend(process_func(batch))
                logger.debug(f"{desc}: processed items {i}..{i + len(batch) - 1}")
                pbar.update(len(batch))

        return results

    async def process_in_batches_async(
        self,
        items: Sequence[Any],
        batch_size: int,
        process_func: Callable[[Sequence[Any]], list[Any]],
        max_concurrency: int,
        desc: str = "Processing batches (async)",
        show_progress: bool = True,
    ) -> list[Any]:
        """
        Process items concurrently in batches, each batch in a worker thread.

        Args:
            items: Items to process
            batch_size: Number of items per batch
            process_func: Function to apply to each batch
            max_concurrency: Maximum concurrent batches
            desc: Description for the progress bar
            show_progress: Whether to display the progress bar

        Returns:
            List of processed results, in input order
        """
        semaphore = asyncio.Semaphore(max_concurrency)

        with tqdm(total=len(items), desc=desc, disable=not show_progress) as pbar:

            async def process_with_semaphore(batch: Sequence[Any]) -> list[Any]:
                async with semaphore:
                    batch_result = await asyncio.to_thread(process_func, batch)
                pbar.update(len(batch))
                return batch_result

            tasks = [
                asyncio.create_task(process_with_semaphore(items[i : i + batch_size]))
                for i in range(0, len(items), batch_size)
            ]
            # gather keeps submission order
            batch_results = await asyncio.gather(*tasks)

        return [result for batch_result in batch_results for result in batch_result]

from __future__ import annotations

import sys
from pathlib import Path

import click
import numpy as np
import pandas as pd
from loguru import logger

from .config import Settings
from .core.configs import BatchConfig, ConsensusConfig
from .core.consensus import ConsensusService, transfer_labels
from .core.errors import ConsensusError
from .core.utils.data_utils import load_label_table, save_label_table


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Set the logging level (e.g., DEBUG, INFO, WARNING). Defaults to the LOG_LEVEL setting.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """
    CellConsensus CLI: combine cell-type labels from several annotation
    methods into one consensus label per cell.
    """
    settings = Settings()
    level = (log_level or settings.log_level).upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=settings.log_format)
    logger.debug(f"Log level set to {level}")
    ctx.obj = settings


def _split_columns(columns: str) -> list[str]:
    return [col.strip() for col in columns.split(",") if col.strip()]


def _load(file_path: Path, index_column: str | None = None) -> pd.DataFrame:
    try:
        return load_label_table(file_path, index_column=index_column)
    except (FileNotFoundError, KeyError) as e:
        raise click.ClickException(str(e)) from e
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise click.ClickException(f"Could not parse {file_path}: {e}") from e


def _numeric_table(df: pd.DataFrame, name: str) -> np.ndarray:
    try:
        return df.to_numpy(dtype=float)
    except (TypeError, ValueError) as e:
        raise click.ClickException(f"{name} table must be numeric: {e}") from e


def _neighbor_positions(df: pd.DataFrame) -> np.ndarray:
    """Whole-number neighbour positions, with empty cells as -1."""
    positions = _numeric_table(df, "Neighbour")
    present = ~np.isnan(positions)
    if not (positions[present] % 1 == 0).all():
        raise click.ClickException("Neighbour table must hold whole-number positions")
    return np.where(present, positions, -1).astype("int64")


@cli.command()
@click.option(
    "--input-file",
    required=True,
    type=click.Path(path_type=Path),
    help="CSV, TSV or Parquet table with one row per cell and one column per method.",
)
@click.option(
    "--output-file",
    required=True,
    type=click.Path(path_type=Path),
    help="Path to save the table with the consensus column.",
)
@click.option(
    "--columns",
    required=True,
    help="Comma-separated label columns to vote over.",
)
@click.option(
    "--output-column",
    default="consensus",
    show_default=True,
    help="Name of the consensus column.",
)
@click.option("--index-column", help="Column holding the cell identifiers.")
@click.option(
    "--dataset-name",
    default="default",
    show_default=True,
    help="Name used for the results directory.",
)
@click.option(
    "--batch-size",
    type=int,
    default=5000,
    show_default=True,
    help="Number of cells per batch.",
)
@click.option(
    "--with-stats/--no-stats",
    default=False,
    help="Also write per-cell agreement and vote count columns.",
)
@click.pass_obj
def resolve(
    settings: Settings,
    input_file: Path,
    output_file: Path,
    columns: str,
    output_column: str,
    index_column: str | None,
    dataset_name: str,
    batch_size: int,
    with_stats: bool,
):
    """Compute the majority-vote consensus label for every cell."""
    df = _load(input_file, index_column)
    config = ConsensusConfig(
        label_columns=_split_columns(columns),
        output_column=output_column,
        include_stats=with_stats,
    )
    service = ConsensusService(dataset_name, settings, config)

    try:
        result = service.resolve_frame(df, batch_config=BatchConfig(batch_size=batch_size))
    except ConsensusError as e:
        raise click.ClickException(str(e)) from e

    save_label_table(result, output_file, index=index_column is not None)

    summary = service.summarize(result)
    logger.info(
        f"{summary['num_entities']} cells, {summary['num_ambiguous']} "
        f"{service.sentinel} ({summary['ambiguous_fraction']:.1%})"
    )
    click.echo(f"Consensus written to {output_file}")


@cli.command()
@click.option(
    "--input-file",
    required=True,
    type=click.Path(path_type=Path),
    help="Table with one row per cell and one column per method.",
)
@click.option("--columns", required=True, help="Comma-separated label columns.")
@click.option(
    "--output-column",
    default="consensus",
    show_default=True,
    help="Consensus column; computed when absent from the table.",
)
@click.option(
    "--dataset-name",
    default="default",
    show_default=True,
    help="Name used for the results directory.",
)
@click.pass_obj
def agreement(
    settings: Settings,
    input_file: Path,
    columns: str,
    output_column: str,
    dataset_name: str,
):
    """Print how often each method agrees with the consensus."""
    df = _load(input_file)
    service = ConsensusService(dataset_name, settings)

    try:
        table = service.source_agreement(
            df, label_columns=_split_columns(columns), output_column=output_column
        )
    except ConsensusError as e:
        raise click.ClickException(str(e)) from e

    click.echo(table.to_string(index=False))


@cli.command()
@click.option(
    "--neighbors",
    "neighbors_file",
    required=True,
    type=click.Path(path_type=Path),
    help="Table of reference neighbour positions, one row per query cell.",
)
@click.option(
    "--reference",
    "reference_file",
    required=True,
    type=click.Path(path_type=Path),
    help="Table of reference cells holding the label column.",
)
@click.option("--label-column", required=True, help="Label column in the reference table.")
@click.option(
    "--output-file",
    required=True,
    type=click.Path(path_type=Path),
    help="Path to save the transferred labels.",
)
@click.option(
    "--similarities",
    "similarities_file",
    type=click.Path(path_type=Path),
    help="Optional table of neighbour similarities, same shape as --neighbors.",
)
@click.option(
    "--min-similarity",
    type=float,
    help="Neighbours below this similarity do not vote.",
)
@click.option("--index-column", help="Column holding the query cell identifiers.")
@click.option(
    "--output-column",
    default="transferred_label",
    show_default=True,
    help="Name of the transferred label column.",
)
@click.pass_obj
def transfer(
    settings: Settings,
    neighbors_file: Path,
    reference_file: Path,
    label_column: str,
    output_file: Path,
    similarities_file: Path | None,
    min_similarity: float | None,
    index_column: str | None,
    output_column: str,
):
    """Transfer reference labels to query cells by neighbour majority vote."""
    neighbors = _load(neighbors_file, index_column)
    reference = _load(reference_file)
    if label_column not in reference.columns:
        raise click.ClickException(
            f"Label column '{label_column}' not found in {reference_file}"
        )

    similarities = None
    if similarities_file is not None:
        similarities = _numeric_table(_load(similarities_file, index_column), "Similarity")
    if min_similarity is not None and similarities is None:
        logger.warning("--min-similarity given without --similarities; ignoring it")

    indices = _neighbor_positions(neighbors)

    try:
        labels = transfer_labels(
            indices,
            reference[label_column].tolist(),
            similarities=similarities,
            min_similarity=min_similarity,
            sentinel=settings.sentinel_label,
            missing_values=settings.missing_values,
        )
    except ConsensusError as e:
        raise click.ClickException(str(e)) from e

    result = pd.DataFrame({output_column: labels}, index=neighbors.index)
    save_label_table(result, output_file, index=index_column is not None)
    click.echo(f"Transferred labels written to {output_file}")


if __name__ == "__main__":
    cli()

"""Global pytest configuration and fixtures for CellConsensus tests."""

import numpy as np
import pandas as pd
import pytest

from cellconsensus.config import Settings


@pytest.fixture
def settings(tmp_path):
    """Create test settings writing results under a temporary directory."""
    return Settings(results_dir=tmp_path / "results")


@pytest.fixture
def sample_annotations():
    """Per-cell labels from four annotation methods, indexed by cell barcode."""
    data = {
        "scmap_cluster": ["B cell", "T cell", "unassigned", "NK cell", "Monocyte", "B cell"],
        "scmap_cell": ["B cell", "T cell", "T cell", "unassigned", "Monocyte", "T cell"],
        "singler": ["B cell", np.nan, "T cell", "NK cell", "Dendritic", "Monocyte"],
        "seurat": ["B cell", "T cell", "NK cell", "T cell", "Monocyte", "NK cell"],
    }
    index = pd.Index(
        ["AAACATAC-1", "AAACATTG-1", "AAACCGTG-1", "AAACGCAC-1", "AAACGCTG-1", "AAACTTGA-1"],
        name="cell",
    )
    return pd.DataFrame(data, index=index)


@pytest.fixture
def expected_consensus():
    """Consensus labels for ``sample_annotations``."""
    return ["B cell", "T cell", "T cell", "NK cell", "Monocyte", "ambiguous"]


@pytest.fixture
def label_columns():
    return ["scmap_cluster", "scmap_cell", "singler", "seurat"]

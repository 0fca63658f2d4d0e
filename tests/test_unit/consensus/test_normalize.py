"""Unit tests for missing-label normalization."""

from __future__ import annotations

import numpy as np
import pandas as pd

from cellconsensus.core.consensus.normalize import (
    normalize_frame,
    normalize_label,
    normalize_labels,
)


class TestNormalizeLabel:
    """Test single-value normalization."""

    def test_none_and_nan(self):
        assert normalize_label(None) == "ambiguous"
        assert normalize_label(np.nan) == "ambiguous"
        assert normalize_label(pd.NA) == "ambiguous"

    def test_tool_specific_spellings(self):
        for value in ["unassigned", "Unknown", "NA", " ", "None", "null"]:
            assert normalize_label(value) == "ambiguous"

    def test_sentinel_passes_through(self):
        assert normalize_label("Ambiguous") == "ambiguous"

    def test_real_label_is_stripped(self):
        assert normalize_label("  B cell ") == "B cell"

    def test_non_string_label(self):
        assert normalize_label(3) == "3"

    def test_custom_missing_values(self):
        assert normalize_label("unassigned", missing_values=["rejected"]) == "unassigned"
        assert normalize_label("rejected", missing_values=["rejected"]) == "ambiguous"

    def test_custom_sentinel(self):
        assert normalize_label(None, sentinel="unknown") == "unknown"


def test_normalize_labels():
    values = ["T cell", None, "unassigned", "NK cell"]

    assert normalize_labels(values) == ["T cell", "ambiguous", "ambiguous", "NK cell"]


def test_normalize_frame_keeps_index(sample_annotations, label_columns):
    result = normalize_frame(sample_annotations, label_columns)

    assert list(result.columns) == label_columns
    assert result.index.equals(sample_annotations.index)
    assert result.loc["AAACATTG-1", "singler"] == "ambiguous"
    assert result.loc["AAACCGTG-1", "scmap_cluster"] == "ambiguous"
    # input is left untouched
    assert sample_annotations.loc["AAACCGTG-1", "scmap_cluster"] == "unassigned"


def test_normalize_frame_categorical_column():
    df = pd.DataFrame({"seurat": pd.Categorical(["B cell", None, "T cell"])})

    result = normalize_frame(df, ["seurat"])

    assert result["seurat"].tolist() == ["B cell", "ambiguous", "T cell"]

"""
Utility functions for CellConsensus.

This module contains shared helpers for loading and saving label tables.
"""
from . import data_utils

__all__ = ["data_utils"]

"""Flowering and seed-set field observations.

Public API:
  - models: FlowerPlotObservation, relative_seedset
  - client: read_seedset_table
"""

from alpine_phenology.datasources.phenology.client import read_seedset_table
from alpine_phenology.datasources.phenology.models import FlowerPlotObservation, relative_seedset

__all__ = ["FlowerPlotObservation", "read_seedset_table", "relative_seedset"]

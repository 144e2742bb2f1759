"""CareFinder Core - UI-agnostic search core.

This package contains the pieces every surface (CLI, HTTP server, Python API)
shares:
- Dataset definitions for the facility catalog and ZIP gazetteer
- Great-circle distance engine
- Search pipeline, summary statistics and display state

The core never touches the network or the terminal, which keeps it testable
with small in-memory tables.
"""

from carefinder.core.datasets import DatasetDefinition, DatasetRegistry
from carefinder.core.geo import distances_from, haversine_distance
from carefinder.core.search import (
    SearchOutcome,
    SearchQuery,
    SearchResult,
    SearchState,
    SearchSummary,
    compute_result,
    evaluate,
    radius_to_zoom,
)

__all__ = [
    "DatasetDefinition",
    "DatasetRegistry",
    "SearchOutcome",
    "SearchQuery",
    "SearchResult",
    "SearchState",
    "SearchSummary",
    "compute_result",
    "distances_from",
    "evaluate",
    "haversine_distance",
    "radius_to_zoom",
]

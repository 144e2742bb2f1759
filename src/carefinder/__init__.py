"""CareFinder: search licensed California healthcare facilities by ZIP code.

Given a ZIP code and a radius, CareFinder finds the healthcare facilities
within that great-circle distance, applies optional facility-type,
long-term-care and birthing filters, and summarizes inpatient capacity.

Quick Start:
    from carefinder import search

    outcome = search("90068", radius_miles=10)
    print(outcome.result.summary)

For the interactive map, run: carefinder serve
"""

__version__ = "0.1.0"

# Expose API functions at package level for easy imports
from carefinder.api import (
    # Exceptions
    CareFinderError,
    DatasetUnavailableError,
    InvalidZipError,
    QueryError,
    # Search
    get_catalogs,
    list_facility_types,
    search,
)

__all__ = [
    "CareFinderError",
    "DatasetUnavailableError",
    "InvalidZipError",
    "QueryError",
    "__version__",
    "get_catalogs",
    "list_facility_types",
    "search",
]

"""CareFinder Python API for direct access to the facility search.

Functions read the process-wide catalogs (loaded on first use) and return
native Python types:
- search() returns a SearchOutcome (state + result DataFrame + summary)
- list_facility_types() returns a list of category names

Example:
    from carefinder import search

    outcome = search("90210", radius_miles=10)
    if outcome.is_valid:
        print(outcome.result.summary)
        print(outcome.result.facilities[["name", "distance_miles"]])
"""

from collections.abc import Iterable

from carefinder.core.exceptions import (
    CareFinderError,
    DatasetUnavailableError,
    InvalidZipError,
    QueryError,
)
from carefinder.core.search import (
    DEFAULT_RADIUS_MILES,
    SearchOutcome,
    SearchQuery,
    evaluate,
)
from carefinder.data_io import get_catalogs

__all__ = [
    "CareFinderError",
    "DatasetUnavailableError",
    "InvalidZipError",
    "QueryError",
    "get_catalogs",
    "list_facility_types",
    "search",
]


def search(
    zip_code: str,
    radius_miles: float = DEFAULT_RADIUS_MILES,
    facility_type: str | None = None,
    additional_filters: Iterable[str] = (),
) -> SearchOutcome:
    """Search facilities around a ZIP code.

    Args:
        zip_code: 5-digit ZIP code
        radius_miles: Search radius, 0-100 miles
        facility_type: Exact facility type to keep, or None for all types
        additional_filters: Any of "LONGTERM", "BIRTHING"

    Returns:
        SearchOutcome. An unknown ZIP yields state NO_VALID_ZIP and no result.

    Raises:
        QueryError: If the radius or filter keys are invalid.
        DatasetUnavailableError: If the catalogs cannot be loaded.

    Example:
        >>> outcome = search("00000")
        >>> outcome.state
        <SearchState.NO_VALID_ZIP: 'no_valid_zip'>
    """
    query = SearchQuery.from_inputs(
        zip_code,
        radius_miles=radius_miles,
        filter_facility_type=facility_type is not None,
        facility_type=facility_type,
        additional_filters=additional_filters,
    )
    return evaluate(get_catalogs(), query)


def list_facility_types() -> list[str]:
    """List the facility-type categories present in the catalog.

    Returns:
        Sorted list of category names usable as ``facility_type``.
    """
    return get_catalogs().facility_types()

"""Facility search: ZIP lookup, radius/attribute filtering and summary statistics.

Every user interaction builds a fresh SearchQuery and runs it through
``evaluate()``:

    SearchQuery -> lookup ZIP -> distances_from -> filter_facilities -> summarize

If the ZIP is not in the gazetteer the pipeline does not run and the outcome
is in the NO_VALID_ZIP state. Nothing is cached between calls; the only shared
state is the read-only Catalogs handle.
"""

import logging
import math
import numbers
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import pandas as pd

from carefinder.core.exceptions import InvalidZipError, QueryError
from carefinder.core.geo import distances_from

if TYPE_CHECKING:
    from carefinder.data_io import Catalogs

logger = logging.getLogger(__name__)

MIN_RADIUS_MILES = 0
MAX_RADIUS_MILES = 100
DEFAULT_RADIUS_MILES = 20

# Region-wide overview used while no valid ZIP has been entered
OVERVIEW_CENTER = (37.166111, -119.449444)
OVERVIEW_ZOOM = 6

LONG_TERM_CARE = "LONGTERM"
BIRTHING = "BIRTHING"
ADDITIONAL_FILTERS = {
    LONG_TERM_CARE: "Long-Term Care Facilities only",
    BIRTHING: "Birthing Service Provider Facilities only",
}


class SearchState(Enum):
    """The two display states of the search tool."""

    NO_VALID_ZIP = "no_valid_zip"
    VALID_ZIP = "valid_zip"


@dataclass(frozen=True)
class SearchQuery:
    """One user's search request.

    Attributes:
        zip_code: Free-text ZIP code as entered
        radius_miles: Search radius, 0-100 inclusive
        facility_type: Exact facility-type category, or None to disable
        long_term_care_only: Keep only long-term care facilities
        birthing_only: Keep only birthing service providers
    """

    zip_code: str
    radius_miles: float = DEFAULT_RADIUS_MILES
    facility_type: str | None = None
    long_term_care_only: bool = False
    birthing_only: bool = False

    def __post_init__(self):
        radius = self.radius_miles
        if not isinstance(radius, numbers.Real) or math.isnan(radius):
            raise QueryError(
                f"Search radius must be a number, got {radius!r}",
                field="radius_miles",
            )
        if not MIN_RADIUS_MILES <= radius <= MAX_RADIUS_MILES:
            raise QueryError(
                f"Search radius must be between {MIN_RADIUS_MILES} and "
                f"{MAX_RADIUS_MILES} miles, got {radius}",
                field="radius_miles",
            )

    @classmethod
    def from_inputs(
        cls,
        zip_code: str | None,
        radius_miles: float = DEFAULT_RADIUS_MILES,
        filter_facility_type: bool = False,
        facility_type: str | None = None,
        additional_filters: Iterable[str] = (),
    ) -> "SearchQuery":
        """Build a query from the raw UI controls.

        Args:
            zip_code: ZIP text box contents
            radius_miles: Slider value
            filter_facility_type: Whether the facility-type checkbox is ticked
            facility_type: Selected facility type from the drop-down
            additional_filters: Ticked keys from ADDITIONAL_FILTERS

        Raises:
            QueryError: On an unknown additional filter key or bad radius
        """
        selected = {f.upper() for f in additional_filters}
        unknown = selected - set(ADDITIONAL_FILTERS)
        if unknown:
            raise QueryError(
                f"Unknown additional filter(s): {', '.join(sorted(unknown))}. "
                f"Valid filters: {', '.join(ADDITIONAL_FILTERS)}",
                field="additional_filters",
            )
        return cls(
            zip_code=(zip_code or "").strip(),
            radius_miles=radius_miles,
            facility_type=facility_type if filter_facility_type else None,
            long_term_care_only=LONG_TERM_CARE in selected,
            birthing_only=BIRTHING in selected,
        )


@dataclass(frozen=True)
class SearchSummary:
    """Aggregate statistics over the filtered facilities.

    Means are None when no facility matched.
    """

    count: int
    mean_distance: float | None
    with_capacity: int
    total_capacity: int
    mean_capacity: float | None

    def rows(self) -> list[tuple[str, int | float | None]]:
        """Labeled statistics in display order."""
        return [
            ("Number of Facilities", self.count),
            ("Mean Distance", self.mean_distance),
            ("Facilities with Inpatient Capacity", self.with_capacity),
            ("Total Inpatient Capacity", self.total_capacity),
            ("Mean Inpatient Capacity", self.mean_capacity),
        ]


@dataclass(frozen=True)
class SearchResult:
    """Facilities matching a query, with the reference point and summary.

    Attributes:
        query: The query that produced this result
        zip_code: Resolved ZIP code
        latitude, longitude: Coordinates of the ZIP code
        facilities: Matching catalog rows plus ``distance_miles``, nearest first
        summary: Aggregates over ``facilities``
    """

    query: SearchQuery
    zip_code: str
    latitude: float
    longitude: float
    facilities: pd.DataFrame
    summary: SearchSummary


@dataclass(frozen=True)
class SearchOutcome:
    """Result of evaluating one query: the display state and, if valid, the result."""

    state: SearchState
    query: SearchQuery
    result: SearchResult | None = None

    @property
    def is_valid(self) -> bool:
        return self.state is SearchState.VALID_ZIP


def radius_to_zoom(radius_miles: float) -> int:
    """Map zoom level that fits a search circle of the given radius."""
    if radius_miles <= 6:
        return 12
    if radius_miles <= 10:
        return 11
    if radius_miles <= 23:
        return 10
    if radius_miles <= 47:
        return 9
    return 8


def annotate_distances(
    facilities: pd.DataFrame, latitude: float, longitude: float
) -> pd.DataFrame:
    """Copy of ``facilities`` with a ``distance_miles`` column from the point."""
    distance = distances_from(
        latitude,
        longitude,
        facilities["latitude"].to_numpy(),
        facilities["longitude"].to_numpy(),
    )
    return facilities.assign(distance_miles=distance)


def filter_facilities(annotated: pd.DataFrame, query: SearchQuery) -> pd.DataFrame:
    """Apply the radius and attribute filters of ``query``.

    The radius predicate runs first so the remaining predicates only see
    facilities inside the circle. All predicates combine with AND.
    """
    subset = annotated[annotated["distance_miles"] <= query.radius_miles]

    if query.facility_type is not None:
        subset = subset[subset["facility_type"] == query.facility_type]
    if query.long_term_care_only:
        subset = subset[subset["long_term_care"]]
    if query.birthing_only:
        subset = subset[subset["birthing"]]

    return subset


def summarize(facilities: pd.DataFrame) -> SearchSummary:
    """Aggregate statistics over an already-filtered facility subset."""
    count = len(facilities)
    if count == 0:
        return SearchSummary(
            count=0,
            mean_distance=None,
            with_capacity=0,
            total_capacity=0,
            mean_capacity=None,
        )

    capacity = facilities["capacity"]
    return SearchSummary(
        count=count,
        mean_distance=float(facilities["distance_miles"].mean()),
        with_capacity=int(facilities["has_inpatient_capacity"].sum()),
        total_capacity=int(capacity.sum()),
        mean_capacity=float(capacity.mean()),
    )


def compute_result(catalogs: "Catalogs", query: SearchQuery) -> SearchResult:
    """Run the full search pipeline for one query.

    Args:
        catalogs: Read-only facility catalog and ZIP gazetteer
        query: The search request

    Raises:
        InvalidZipError: If the ZIP code is not in the gazetteer
    """
    location = catalogs.lookup_zip(query.zip_code)
    if location is None:
        raise InvalidZipError(query.zip_code)

    lat = float(location["latitude"])
    lng = float(location["longitude"])

    annotated = annotate_distances(catalogs.facilities, lat, lng)
    matched = filter_facilities(annotated, query)
    matched = matched.sort_values("distance_miles", kind="stable").reset_index(
        drop=True
    )

    summary = summarize(matched)
    logger.debug(
        "ZIP %s radius %s: %d of %d facilities matched",
        query.zip_code,
        query.radius_miles,
        summary.count,
        len(annotated),
    )

    return SearchResult(
        query=query,
        zip_code=str(location.name),
        latitude=lat,
        longitude=lng,
        facilities=matched,
        summary=summary,
    )


def evaluate(catalogs: "Catalogs", query: SearchQuery) -> SearchOutcome:
    """Evaluate a query into a display state.

    An unknown ZIP is an expected interactive condition and yields the
    NO_VALID_ZIP state instead of an error.
    """
    try:
        result = compute_result(catalogs, query)
    except InvalidZipError as e:
        logger.debug("%s", e)
        return SearchOutcome(state=SearchState.NO_VALID_ZIP, query=query)

    return SearchOutcome(state=SearchState.VALID_ZIP, query=query, result=result)

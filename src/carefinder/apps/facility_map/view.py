"""Map and summary view models for a search outcome.

The browser page (index.html) is a thin Leaflet renderer: everything it draws
(center, zoom, radius circle, markers, popups, legend, summary table) is
decided here so it can be tested without a browser.
"""

import html
import math
from typing import Any

from carefinder.core.geo import miles_to_meters
from carefinder.core.search import (
    OVERVIEW_CENTER,
    OVERVIEW_ZOOM,
    SearchOutcome,
    radius_to_zoom,
)

PLACEHOLDER_TEXT = "Input valid California ZIP code for analysis!"

TILE_PROVIDER = "CartoDB.Positron"
LEGEND_TITLE = "Facility has inpatient capacity?"
LEGEND_POSITION = "bottomleft"

# Marker colors keyed on has_inpatient_capacity
CAPACITY_COLORS = {
    False: "#f92c32",
    True: "#127cd4",
}

MARKER_RADIUS = 4
MARKER_OPACITY = 0.8
CIRCLE_COLOR = "#000"
CIRCLE_WEIGHT = 3
LEGEND_OPACITY = 0.5


def format_popup(name: str, address: str, city: str, distance_miles: float) -> str:
    """HTML popup body for one facility marker."""
    return (
        f"{html.escape(name)}<br>{html.escape(address)}<br>"
        f"{html.escape(city)}, CA<br>{round(float(distance_miles), 2)} miles"
    )


def format_stat(value: int | float | None) -> str:
    """Render a summary statistic, using N/A for undefined means."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "N/A"
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def _markers(facilities) -> list[dict[str, Any]]:
    markers = []
    for row in facilities.itertuples(index=False):
        has_capacity = bool(row.has_inpatient_capacity)
        markers.append(
            {
                "facility_id": row.facility_id,
                "lat": float(row.latitude),
                "lng": float(row.longitude),
                "radius": MARKER_RADIUS,
                "color": CAPACITY_COLORS[has_capacity],
                "fill_opacity": MARKER_OPACITY,
                "has_inpatient_capacity": has_capacity,
                "popup": format_popup(
                    row.name, row.address, row.city, row.distance_miles
                ),
            }
        )
    return markers


def _legend(facilities) -> dict[str, Any] | None:
    present = sorted({bool(v) for v in facilities["has_inpatient_capacity"]})
    if not present:
        return None
    return {
        "position": LEGEND_POSITION,
        "title": LEGEND_TITLE,
        "opacity": LEGEND_OPACITY,
        "entries": [
            {"label": str(value).upper(), "color": CAPACITY_COLORS[value]}
            for value in present
        ],
    }


def build_map_view(outcome: SearchOutcome) -> dict[str, Any]:
    """Describe the map for a search outcome.

    Returns:
        dict with:
            - state: "no_valid_zip" | "valid_zip"
            - center: {"lat", "lng"}
            - zoom: int
            - tiles: tile provider name
            - circle: search radius overlay, or None
            - markers: list of facility markers
            - legend: capacity legend, or None when there are no markers
    """
    if not outcome.is_valid:
        lat, lng = OVERVIEW_CENTER
        return {
            "state": outcome.state.value,
            "center": {"lat": lat, "lng": lng},
            "zoom": OVERVIEW_ZOOM,
            "tiles": TILE_PROVIDER,
            "circle": None,
            "markers": [],
            "legend": None,
        }

    result = outcome.result
    radius = result.query.radius_miles
    return {
        "state": outcome.state.value,
        "center": {"lat": result.latitude, "lng": result.longitude},
        "zoom": radius_to_zoom(radius),
        "tiles": TILE_PROVIDER,
        "circle": {
            "lat": result.latitude,
            "lng": result.longitude,
            "radius_meters": miles_to_meters(radius),
            "color": CIRCLE_COLOR,
            "weight": CIRCLE_WEIGHT,
            "fill_opacity": 0,
        },
        "markers": _markers(result.facilities),
        "legend": _legend(result.facilities),
    }


def summary_rows(outcome: SearchOutcome) -> list[dict[str, Any]] | None:
    """Labeled summary statistics, or None when there is no valid ZIP."""
    if not outcome.is_valid:
        return None
    return [
        {"stat": label, "value": value}
        for label, value in outcome.result.summary.rows()
    ]


def format_summary(outcome: SearchOutcome) -> str:
    """Plain-text summary: the statistics table, or the placeholder text."""
    rows = summary_rows(outcome)
    if rows is None:
        return PLACEHOLDER_TEXT
    width = max(len(r["stat"]) for r in rows)
    return "\n".join(
        f"{r['stat']:<{width}}  {format_stat(r['value'])}" for r in rows
    )


def facility_records(outcome: SearchOutcome) -> list[dict[str, Any]]:
    """Matching facilities as JSON-ready dicts, nearest first."""
    if not outcome.is_valid:
        return []
    records = []
    for row in outcome.result.facilities.itertuples(index=False):
        records.append(
            {
                "facility_id": row.facility_id,
                "name": row.name,
                "address": row.address,
                "city": row.city,
                "facility_type": row.facility_type,
                "latitude": float(row.latitude),
                "longitude": float(row.longitude),
                "capacity": int(row.capacity),
                "has_inpatient_capacity": bool(row.has_inpatient_capacity),
                "long_term_care": bool(row.long_term_care),
                "birthing": bool(row.birthing),
                "distance_miles": round(float(row.distance_miles), 2),
            }
        )
    return records

"""Facility map app: view models and the Leaflet page that renders them."""

from carefinder.apps.facility_map.ui import get_ui_html
from carefinder.apps.facility_map.view import (
    PLACEHOLDER_TEXT,
    build_map_view,
    facility_records,
    format_summary,
    summary_rows,
)

__all__ = [
    "PLACEHOLDER_TEXT",
    "build_map_view",
    "facility_records",
    "format_summary",
    "get_ui_html",
    "summary_rows",
]

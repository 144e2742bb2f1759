"""Tests for the CareFinder HTTP server."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from carefinder.core.exceptions import DatasetUnavailableError
from carefinder.data_io import set_catalogs
from carefinder.server import create_app


@pytest.fixture
def client(catalogs):
    set_catalogs(catalogs)
    with TestClient(create_app()) as test_client:
        yield test_client


def test_index_serves_map_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "leaflet" in resp.text.lower()


def test_facility_types(client):
    resp = client.get("/api/facility-types")
    assert resp.status_code == 200
    assert resp.json()["facility_types"] == [
        "General Acute Care Hospital",
        "Primary Care Clinic",
        "Skilled Nursing Facility",
    ]


def test_health(client):
    data = client.get("/api/health").json()
    assert data["status"] == "ok"
    assert data["facilities"] == 5
    assert data["zip_codes"] == 3
    assert data["state"] == "CA"


def test_health_describes_datasets(client):
    datasets = {d["name"]: d for d in client.get("/api/health").json()["datasets"]}
    assert set(datasets) == {"ca-facilities", "us-zips"}
    assert "Healthcare Facility Listing" in datasets["ca-facilities"]["description"]
    assert "simplemaps" in datasets["us-zips"]["description"]


def test_map_page_drops_stale_search_responses(client):
    page = client.get("/").text
    assert "const seq = ++searchSeq;" in page
    assert "if (seq === searchSeq) render(payload);" in page
    assert "r.ok" in page


def test_map_page_uses_legend_opacity_as_given(client):
    page = client.get("/").text
    assert "div.style.opacity = view.legend.opacity;" in page


def test_search_valid_zip(client):
    resp = client.get("/api/search", params={"zip": "90210", "radius": 10})
    assert resp.status_code == 200
    data = resp.json()

    assert data["state"] == "valid_zip"
    assert data["map"]["zoom"] == 11
    assert len(data["map"]["markers"]) == 3
    assert [f["name"] for f in data["facilities"]] == [
        "Alpha Hospital",
        "Beta Clinic",
        "Gamma Nursing",
    ]
    assert data["summary"][0] == {"stat": "Number of Facilities", "value": 3}


def test_search_invalid_zip_returns_overview(client):
    resp = client.get("/api/search", params={"zip": "00000", "radius": 10})
    assert resp.status_code == 200
    data = resp.json()

    assert data["state"] == "no_valid_zip"
    assert data["map"]["zoom"] == 6
    assert data["map"]["center"] == {"lat": 37.166111, "lng": -119.449444}
    assert data["summary"] is None
    assert data["summary_text"] == "Input valid California ZIP code for analysis!"
    assert data["facilities"] == []


def test_search_empty_result_has_null_means(client):
    resp = client.get(
        "/api/search",
        params={
            "zip": "90210",
            "radius": 0,
            "filter_facility_type": "true",
            "facility_type": "Primary Care Clinic",
        },
    )
    data = resp.json()
    assert data["state"] == "valid_zip"
    values = {row["stat"]: row["value"] for row in data["summary"]}
    assert values["Number of Facilities"] == 0
    assert values["Mean Distance"] is None
    assert values["Mean Inpatient Capacity"] is None


def test_search_type_selection_ignored_when_disabled(client):
    data = client.get(
        "/api/search",
        params={"zip": "90210", "radius": 10, "facility_type": "Primary Care Clinic"},
    ).json()
    assert len(data["facilities"]) == 3


def test_search_additional_filters(client):
    data = client.get(
        "/api/search",
        params=[("zip", "90210"), ("radius", "100"), ("additional_filters", "LONGTERM")],
    ).json()
    assert [f["name"] for f in data["facilities"]] == ["Gamma Nursing"]


def test_search_unknown_filter_rejected(client):
    resp = client.get(
        "/api/search",
        params={"zip": "90210", "additional_filters": "PEDIATRIC"},
    )
    assert resp.status_code == 422


@pytest.mark.parametrize("radius", [-1, 101])
def test_search_radius_out_of_range(client, radius):
    resp = client.get("/api/search", params={"zip": "90210", "radius": radius})
    assert resp.status_code == 422


def test_startup_fails_when_dataset_unavailable():
    with patch(
        "carefinder.server.get_catalogs",
        side_effect=DatasetUnavailableError("down", dataset_name="us-zips"),
    ):
        with pytest.raises(DatasetUnavailableError):
            with TestClient(create_app()):
                pass

"""Tests for the CareFinder Python API."""

from unittest.mock import patch

import pytest

from carefinder import (
    CareFinderError,
    DatasetUnavailableError,
    InvalidZipError,
    QueryError,
    list_facility_types,
    search,
)
from carefinder.core.search import SearchState

CATALOGS_PATCH = "carefinder.api.get_catalogs"


class TestSearch:
    def test_search_valid_zip(self, catalogs):
        with patch(CATALOGS_PATCH, return_value=catalogs):
            outcome = search("90210", radius_miles=10)
        assert outcome.state is SearchState.VALID_ZIP
        assert outcome.result.summary.count == 3

    def test_search_with_facility_type(self, catalogs):
        with patch(CATALOGS_PATCH, return_value=catalogs):
            outcome = search(
                "90210", radius_miles=20, facility_type="General Acute Care Hospital"
            )
        assert list(outcome.result.facilities["facility_id"]) == ["A", "D"]

    def test_search_additional_filters(self, catalogs):
        with patch(CATALOGS_PATCH, return_value=catalogs):
            outcome = search("90210", radius_miles=20, additional_filters=["BIRTHING"])
        assert outcome.result.facilities["birthing"].all()

    def test_search_invalid_zip_is_state_not_error(self, catalogs):
        with patch(CATALOGS_PATCH, return_value=catalogs):
            outcome = search("00000")
        assert outcome.state is SearchState.NO_VALID_ZIP

    def test_search_bad_radius_raises(self, catalogs):
        with patch(CATALOGS_PATCH, return_value=catalogs):
            with pytest.raises(QueryError):
                search("90210", radius_miles=-5)

    def test_dataset_unavailable_propagates(self):
        with patch(CATALOGS_PATCH, side_effect=DatasetUnavailableError("down")):
            with pytest.raises(DatasetUnavailableError):
                search("90210")


def test_list_facility_types(catalogs):
    with patch(CATALOGS_PATCH, return_value=catalogs):
        assert "Primary Care Clinic" in list_facility_types()


class TestExceptionHierarchy:
    def test_base_class(self):
        assert issubclass(InvalidZipError, CareFinderError)
        assert issubclass(QueryError, CareFinderError)
        assert issubclass(DatasetUnavailableError, CareFinderError)

    def test_invalid_zip_message(self):
        err = InvalidZipError("00000")
        assert err.zip_code == "00000"
        assert "00000" in str(err)

"""Tests for carefinder.core.datasets module."""

from carefinder.core.datasets import (
    FACILITIES,
    ZIPS,
    DatasetDefinition,
    DatasetRegistry,
)


class TestDatasetDefinition:
    def test_required_columns_follow_mapping(self):
        ds = DatasetDefinition(
            name="test", column_mapping={"A": "a", "B": "b"}
        )
        assert ds.required_columns == ["A", "B"]

    def test_defaults(self):
        ds = DatasetDefinition(name="test")
        assert ds.source is None
        assert ds.column_mapping == {}


class TestDatasetRegistry:
    def test_builtin_datasets(self):
        DatasetRegistry.reset()
        names = [ds.name for ds in DatasetRegistry.list_all()]
        assert FACILITIES in names
        assert ZIPS in names

    def test_case_insensitive_lookup(self):
        DatasetRegistry.reset()
        assert DatasetRegistry.get("CA-FACILITIES") is not None
        assert DatasetRegistry.get("nonexistent") is None

    def test_facilities_schema(self):
        DatasetRegistry.reset()
        ds = DatasetRegistry.get(FACILITIES)
        for column in ("FACID", "FACNAME", "LATITUDE", "LONGITUDE", "CAPACITY",
                       "LTC", "BIRTHING_FACILITY_FLAG", "FAC_FDR"):
            assert column in ds.required_columns

    def test_zips_schema(self):
        DatasetRegistry.reset()
        ds = DatasetRegistry.get(ZIPS)
        assert ds.column_mapping == {
            "zip": "zip",
            "lat": "latitude",
            "lng": "longitude",
            "state_id": "state",
        }

    def test_configure_sources(self):
        DatasetRegistry.reset()
        DatasetRegistry.configure_sources("/tmp/f.csv", "https://example.com/z.csv")
        assert DatasetRegistry.get(FACILITIES).source == "/tmp/f.csv"
        assert DatasetRegistry.get(ZIPS).source == "https://example.com/z.csv"
        DatasetRegistry.reset()
        assert DatasetRegistry.get(FACILITIES).source is None

"""Dataset definitions for the two static catalogs.

This module provides:
- DatasetDefinition: Source location and column schema of a tabular dataset
- DatasetRegistry: Registry of the built-in datasets (facilities, zips)

The column mappings translate the externally-defined source headers into the
snake_case names the rest of the package works with.
"""

import logging
from dataclasses import dataclass, field
from typing import ClassVar

logger = logging.getLogger(__name__)

FACILITIES = "ca-facilities"
ZIPS = "us-zips"


@dataclass
class DatasetDefinition:
    """Dataset definition with its column schema.

    Attributes:
        name: Unique identifier for the dataset
        description: Human-readable description
        source: URL or local path the CSV is read from
        column_mapping: Source column -> canonical column. Every key must be
            present in the source file.
        dtypes: Source column dtypes passed to the CSV reader
    """

    name: str
    description: str = ""
    source: str | None = None
    column_mapping: dict[str, str] = field(default_factory=dict)
    dtypes: dict[str, str] = field(default_factory=dict)

    @property
    def required_columns(self) -> list[str]:
        return list(self.column_mapping)


class DatasetRegistry:
    """Registry for managing dataset definitions."""

    _registry: ClassVar[dict[str, DatasetDefinition]] = {}

    @classmethod
    def register(cls, dataset: DatasetDefinition):
        """Register a dataset in the registry.

        Args:
            dataset: DatasetDefinition to register
        """
        cls._registry[dataset.name.lower()] = dataset

    @classmethod
    def get(cls, name: str) -> DatasetDefinition | None:
        """Get a dataset by name (case-insensitive)."""
        return cls._registry.get(name.lower())

    @classmethod
    def list_all(cls) -> list[DatasetDefinition]:
        return list(cls._registry.values())

    @classmethod
    def reset(cls):
        """Clear registry and re-register built-in datasets."""
        cls._registry.clear()
        cls._register_builtins()

    @classmethod
    def configure_sources(cls, facilities_source: str, zips_source: str) -> None:
        """Point the built-in datasets at the given URLs or paths."""
        for name, source in ((FACILITIES, facilities_source), (ZIPS, zips_source)):
            ds = cls.get(name)
            if ds is None:
                continue
            if ds.source != source:
                logger.debug("Dataset %s source set to %s", name, source)
            ds.source = source

    @classmethod
    def _register_builtins(cls):
        """Register built-in datasets."""
        facilities = DatasetDefinition(
            name=FACILITIES,
            description=(
                "California Licensed and Certified Healthcare Facility Listing "
                "(CDPH / CMS)"
            ),
            column_mapping={
                "FACID": "facility_id",
                "FACNAME": "name",
                "ADDRESS": "address",
                "CITY": "city",
                "FAC_FDR": "facility_type",
                "LATITUDE": "latitude",
                "LONGITUDE": "longitude",
                "CAPACITY": "capacity",
                "LTC": "ltc",
                "BIRTHING_FACILITY_FLAG": "birthing_flag",
            },
            dtypes={"FACID": "str", "FAC_FDR": "str", "LTC": "str"},
        )
        zips = DatasetDefinition(
            name=ZIPS,
            description="US ZIP Codes geocoded database (simplemaps)",
            column_mapping={
                "zip": "zip",
                "lat": "latitude",
                "lng": "longitude",
                "state_id": "state",
            },
            dtypes={"zip": "str", "state_id": "str"},
        )

        cls.register(facilities)
        cls.register(zips)


# Initialize registry
DatasetRegistry._register_builtins()

import pandas as pd
import pytest

from carefinder.data_io import Catalogs, reset_catalogs

BEVERLY_HILLS = (34.0901, -118.4065)


def _facility(
    facility_id,
    name,
    lat_offset,
    facility_type,
    capacity,
    long_term_care=False,
    birthing=False,
    city="Beverly Hills",
    base=BEVERLY_HILLS,
):
    return {
        "facility_id": facility_id,
        "name": name,
        "address": f"{facility_id} Main St",
        "city": city,
        "facility_type": facility_type,
        "latitude": base[0] + lat_offset,
        "longitude": base[1],
        "capacity": capacity,
        "long_term_care": long_term_care,
        "birthing": birthing,
        "has_inpatient_capacity": capacity > 0,
    }


@pytest.fixture
def facilities_df():
    """Five facilities north of 90210 at 0, ~2, ~5, ~15 and ~350 miles."""
    rows = [
        _facility("A", "Alpha Hospital", 0.0, "General Acute Care Hospital", 100,
                  birthing=True),
        _facility("B", "Beta Clinic", 0.03, "Primary Care Clinic", 0),
        _facility("C", "Gamma Nursing", 0.0725, "Skilled Nursing Facility", 50,
                  long_term_care=True),
        _facility("D", "Delta Medical Center", 0.2175, "General Acute Care Hospital",
                  200, birthing=True),
        _facility("E", "Epsilon Clinic", 0.0, "Primary Care Clinic", 0,
                  city="San Francisco", base=(37.7989, -122.4662)),
    ]
    return pd.DataFrame(rows)


@pytest.fixture
def zips_df():
    return pd.DataFrame(
        {
            "zip": ["90210", "94129", "95014"],
            "latitude": [34.0901, 37.7989, 37.3230],
            "longitude": [-118.4065, -122.4662, -122.0322],
            "state": ["CA", "CA", "CA"],
        }
    )


@pytest.fixture
def catalogs(facilities_df, zips_df):
    return Catalogs(facilities=facilities_df, zips=zips_df, state="CA")


@pytest.fixture(autouse=True)
def clear_catalog_cache():
    """Never leak process-wide catalogs between tests."""
    reset_catalogs()
    yield
    reset_catalogs()

"""Loading and cleaning of the facility catalog and ZIP gazetteer.

Both datasets are flat CSV files with an externally-defined schema. They are
fetched once (over HTTP with requests, or read from a local path), cleaned into
canonical columns, and held in a process-wide ``Catalogs`` instance that every
search reads from and none mutates.

Any failure here raises DatasetUnavailableError: the tool is unusable without
both tables, so startup stops rather than retrying.
"""

import io
import logging
import threading
from dataclasses import dataclass
from pathlib import Path

import pandas as pd
import requests

from carefinder.config import get_config
from carefinder.core.datasets import (
    FACILITIES,
    ZIPS,
    DatasetDefinition,
    DatasetRegistry,
)
from carefinder.core.exceptions import DatasetUnavailableError

logger = logging.getLogger(__name__)

COMMON_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)

FACILITY_COLUMNS = [
    "facility_id",
    "name",
    "address",
    "city",
    "facility_type",
    "latitude",
    "longitude",
    "capacity",
    "long_term_care",
    "birthing",
    "has_inpatient_capacity",
]
ZIP_COLUMNS = ["zip", "latitude", "longitude", "state"]


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def read_source_csv(
    dataset: DatasetDefinition,
    timeout: float = 60.0,
    session: requests.Session | None = None,
) -> pd.DataFrame:
    """Read a dataset's raw CSV from its URL or local path.

    Raises:
        DatasetUnavailableError: On network errors, missing files, unparseable
            content, or when a required source column is absent.
    """
    source = dataset.source
    if not source:
        raise DatasetUnavailableError(
            f"No source configured for dataset '{dataset.name}'",
            dataset_name=dataset.name,
        )

    logger.info("Loading dataset %s from %s", dataset.name, source)
    try:
        if _is_url(source):
            http = session or requests.Session()
            resp = http.get(
                source,
                timeout=timeout,
                headers={"User-Agent": COMMON_USER_AGENT},
            )
            resp.raise_for_status()
            buffer = io.StringIO(resp.content.decode("utf-8-sig"))
            df = pd.read_csv(buffer, dtype=dataset.dtypes, low_memory=False)
        else:
            df = pd.read_csv(
                Path(source).expanduser(),
                dtype=dataset.dtypes,
                encoding="utf-8-sig",
                low_memory=False,
            )
    except requests.RequestException as e:
        raise DatasetUnavailableError(
            f"Failed to download dataset '{dataset.name}': {e}",
            dataset_name=dataset.name,
            source=source,
        ) from e
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise DatasetUnavailableError(
            f"Failed to read dataset '{dataset.name}': {e}",
            dataset_name=dataset.name,
            source=source,
        ) from e
    except pd.errors.EmptyDataError as e:
        raise DatasetUnavailableError(
            f"Dataset '{dataset.name}' is empty",
            dataset_name=dataset.name,
            source=source,
        ) from e

    missing = [c for c in dataset.required_columns if c not in df.columns]
    if missing:
        raise DatasetUnavailableError(
            f"Dataset '{dataset.name}' is missing required columns: "
            f"{', '.join(missing)}",
            dataset_name=dataset.name,
            source=source,
        )

    logger.debug("Read %d raw rows for %s", len(df), dataset.name)
    return df


def _text(series: pd.Series) -> pd.Series:
    return series.fillna("").astype(str).str.strip()


def clean_facilities(raw: pd.DataFrame, dataset: DatasetDefinition) -> pd.DataFrame:
    """Normalize the raw facility listing into the catalog schema.

    Rows without both a latitude and a longitude are dropped. Missing or
    non-numeric capacities become 0.
    """
    df = raw[dataset.required_columns].rename(columns=dataset.column_mapping).copy()

    df["latitude"] = pd.to_numeric(df["latitude"], errors="coerce")
    df["longitude"] = pd.to_numeric(df["longitude"], errors="coerce")
    before = len(df)
    df = df.dropna(subset=["latitude", "longitude"])
    dropped = before - len(df)
    if dropped:
        logger.info("Dropped %d facilities without coordinates", dropped)

    capacity = pd.to_numeric(df["capacity"], errors="coerce").fillna(0)
    df["capacity"] = capacity.clip(lower=0).astype(int)

    for col in ("facility_id", "name", "address", "city", "facility_type"):
        df[col] = _text(df[col])

    df["long_term_care"] = _text(df["ltc"]).str.upper() == "LTC"
    df["birthing"] = _text(df["birthing_flag"]).str.upper() == "YES"
    df["has_inpatient_capacity"] = df["capacity"] > 0

    return df[FACILITY_COLUMNS].reset_index(drop=True)


def clean_zips(
    raw: pd.DataFrame, dataset: DatasetDefinition, state: str = "CA"
) -> pd.DataFrame:
    """Normalize the raw gazetteer and restrict it to one state."""
    df = raw[dataset.required_columns].rename(columns=dataset.column_mapping).copy()

    df["state"] = _text(df["state"]).str.upper()
    df = df[df["state"] == state.upper()].copy()

    # Source files sometimes store ZIPs as integers, losing leading zeros
    df["zip"] = _text(df["zip"]).str.split(".").str[0].str.zfill(5)
    df["latitude"] = pd.to_numeric(df["latitude"], errors="coerce")
    df["longitude"] = pd.to_numeric(df["longitude"], errors="coerce")
    df = df.dropna(subset=["latitude", "longitude"])
    df = df.drop_duplicates(subset="zip", keep="first")

    return df[ZIP_COLUMNS].reset_index(drop=True)


@dataclass(frozen=True)
class Catalogs:
    """Read-only handle on the two static tables.

    Attributes:
        facilities: Cleaned facility catalog (see FACILITY_COLUMNS)
        zips: ZIP gazetteer restricted to ``state``, indexed by ``zip``
        state: Region code the gazetteer was filtered to
    """

    facilities: pd.DataFrame
    zips: pd.DataFrame
    state: str = "CA"

    def __post_init__(self):
        zips = self.zips
        if zips.index.name != "zip":
            zips = zips.set_index("zip")
        zips = zips[~zips.index.duplicated(keep="first")]
        object.__setattr__(self, "zips", zips)

    def facility_types(self) -> list[str]:
        """Sorted distinct facility-type categories."""
        types = self.facilities["facility_type"]
        return sorted(t for t in types.unique() if t)

    def lookup_zip(self, zip_code: str) -> pd.Series | None:
        """Return the gazetteer row for ``zip_code`` or None if absent.

        The row's ``name`` is the ZIP code.
        """
        key = zip_code.strip()
        if key not in self.zips.index:
            return None
        return self.zips.loc[key]


def load_catalogs(
    facilities_source: str | None = None,
    zips_source: str | None = None,
    state: str | None = None,
    timeout: float | None = None,
) -> Catalogs:
    """Fetch and clean both datasets.

    Arguments default to the values from ``carefinder.config.get_config()``.

    Raises:
        DatasetUnavailableError: If either dataset cannot be loaded.
    """
    config = get_config()
    DatasetRegistry.configure_sources(
        facilities_source or config.facilities_source,
        zips_source or config.zips_source,
    )
    state = state or config.state
    timeout = timeout if timeout is not None else config.fetch_timeout

    fac_def = DatasetRegistry.get(FACILITIES)
    zip_def = DatasetRegistry.get(ZIPS)

    with requests.Session() as session:
        facilities = clean_facilities(
            read_source_csv(fac_def, timeout=timeout, session=session), fac_def
        )
        zips = clean_zips(
            read_source_csv(zip_def, timeout=timeout, session=session),
            zip_def,
            state=state,
        )

    if zips.empty:
        raise DatasetUnavailableError(
            f"ZIP gazetteer has no rows for state '{state}'",
            dataset_name=zip_def.name,
            source=zip_def.source,
        )

    logger.info(
        "Loaded %d facilities and %d %s ZIP codes",
        len(facilities),
        len(zips),
        state,
    )
    return Catalogs(facilities=facilities, zips=zips, state=state)


# Process-wide catalogs, loaded once and shared by every search
_catalogs_lock = threading.Lock()
_catalogs: Catalogs | None = None


def get_catalogs() -> Catalogs:
    """Return the process-wide catalogs, loading them on first use."""
    global _catalogs

    with _catalogs_lock:
        if _catalogs is None:
            _catalogs = load_catalogs()
        return _catalogs


def set_catalogs(catalogs: Catalogs) -> None:
    """Install already-loaded catalogs as the process-wide instance."""
    global _catalogs

    with _catalogs_lock:
        _catalogs = catalogs


def reset_catalogs() -> None:
    """Drop the cached catalogs."""
    global _catalogs

    with _catalogs_lock:
        _catalogs = None

"""Runtime configuration from environment variables.

Environment variables:
    CAREFINDER_FACILITIES_SOURCE: URL or local path of the facility listing CSV
    CAREFINDER_ZIPS_SOURCE: URL or local path of the ZIP gazetteer CSV
    CAREFINDER_STATE: State code the gazetteer is restricted to (default: CA)
    CAREFINDER_HOST: Host for `carefinder serve` (default: 127.0.0.1)
    CAREFINDER_PORT: Port for `carefinder serve` (default: 8000)
    CAREFINDER_FETCH_TIMEOUT: Seconds to wait on each dataset download (default: 60)
    CAREFINDER_LOG_LEVEL: Level for the `carefinder` logger (default: INFO)

A `.env` file in the project root is read first; values already present in
the environment win.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_FACILITIES_SOURCE = (
    "https://data.chhs.ca.gov/dataset/3b5b80e8-6b8d-4715-b3c0-2699af6e72e5/"
    "resource/0a0476ba-442c-40ff-97dc-dc840fa7e907/download/"
    "healthcare_facility_locations.csv"
)
DEFAULT_ZIPS_SOURCE = "https://simplemaps.com/static/data/us-zips/1.4/uszipsv1.4.csv"
DEFAULT_STATE = "CA"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_FETCH_TIMEOUT = 60.0

_LOG_FORMAT = "%(levelname)s | %(name)s | %(message)s"


def _setup_logging() -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    pkg_logger = logging.getLogger("carefinder")
    if not pkg_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        pkg_logger.addHandler(handler)
    level = os.getenv("CAREFINDER_LOG_LEVEL", "INFO").upper()
    pkg_logger.setLevel(getattr(logging, level, logging.INFO))
    pkg_logger.propagate = False
    return pkg_logger


def _find_project_root() -> Path:
    """Find the project root (directory containing pyproject.toml)."""
    current = Path(__file__).resolve().parent
    for _ in range(10):
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    return Path.cwd()


def load_dotenv(path: Path | None = None) -> None:
    """Populate os.environ from a simple KEY=VALUE file without overriding."""
    env_file = path or _find_project_root() / ".env"
    if not env_file.is_file():
        return
    for line in env_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        os.environ.setdefault(key.strip(), value.strip().strip('"').strip("'"))


@dataclass(frozen=True)
class AppConfig:
    """Immutable application config."""

    facilities_source: str
    zips_source: str
    state: str
    host: str
    port: int
    fetch_timeout: float


def get_config() -> AppConfig:
    """Read application config from environment."""
    return AppConfig(
        facilities_source=os.getenv(
            "CAREFINDER_FACILITIES_SOURCE", DEFAULT_FACILITIES_SOURCE
        ),
        zips_source=os.getenv("CAREFINDER_ZIPS_SOURCE", DEFAULT_ZIPS_SOURCE),
        state=os.getenv("CAREFINDER_STATE", DEFAULT_STATE).upper(),
        host=os.getenv("CAREFINDER_HOST", DEFAULT_HOST),
        port=int(os.getenv("CAREFINDER_PORT", str(DEFAULT_PORT))),
        fetch_timeout=float(
            os.getenv("CAREFINDER_FETCH_TIMEOUT", str(DEFAULT_FETCH_TIMEOUT))
        ),
    )


load_dotenv()
logger = _setup_logging()

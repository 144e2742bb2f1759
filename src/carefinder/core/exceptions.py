"""Exception hierarchy for CareFinder.

This module defines all CareFinder exceptions in a single location. Core
functions raise these exceptions directly; the CLI and HTTP server catch and
format them for users.

Exception Hierarchy:
    CareFinderError (base)
    |-- InvalidZipError - ZIP code not present in the gazetteer
    |-- QueryError - Malformed search input (radius, filter keys)
    +-- DatasetUnavailableError - Startup fetch/parse of a dataset failed
"""


class CareFinderError(Exception):
    """Base exception for all CareFinder errors.

    All CareFinder-specific exceptions inherit from this class, making it easy
    to catch all CareFinder errors with a single except clause.

    Example:
        try:
            result = compute_result(catalogs, query)
        except CareFinderError as e:
            error(str(e))
    """

    pass


class InvalidZipError(CareFinderError):
    """Raised when a ZIP code is not found in the gazetteer.

    This is an expected condition during interactive use (the user is still
    typing, or entered a ZIP outside the region). ``evaluate()`` recovers it
    into the NO_VALID_ZIP display state.

    Attributes:
        zip_code: The ZIP code that could not be resolved
    """

    def __init__(self, zip_code: str):
        self.zip_code = zip_code
        super().__init__(f"ZIP code '{zip_code}' not found in gazetteer")


class QueryError(CareFinderError):
    """Raised when search inputs are out of range or malformed.

    Attributes:
        message: Human-readable error description
        field: The offending input field (optional)
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class DatasetUnavailableError(CareFinderError):
    """Raised when a dataset cannot be fetched, parsed, or lacks required columns.

    The application cannot run without both catalogs, so this is fatal at
    startup. No retry is attempted.

    Attributes:
        message: Human-readable error description
        dataset_name: The dataset that failed to load (optional)
        source: URL or path the dataset was loaded from (optional)
    """

    def __init__(
        self,
        message: str,
        dataset_name: str | None = None,
        source: str | None = None,
    ):
        self.dataset_name = dataset_name
        self.source = source
        super().__init__(message)

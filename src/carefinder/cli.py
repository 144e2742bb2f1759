import logging
from typing import Annotated

import typer
from rich.markup import escape
from rich.text import Text

from carefinder.apps.facility_map import PLACEHOLDER_TEXT, facility_records
from carefinder.apps.facility_map.view import format_stat
from carefinder.config import get_config, logger
from carefinder.console import (
    console,
    create_spinner_progress,
    error,
    info,
    print_error_panel,
    print_facilities_table,
    print_key_value,
    print_logo,
    print_summary_table,
    success,
    warning,
)
from carefinder.core.exceptions import DatasetUnavailableError, QueryError
from carefinder.core.search import DEFAULT_RADIUS_MILES, SearchQuery, evaluate
from carefinder.data_io import Catalogs, get_catalogs

app = typer.Typer(
    name="carefinder",
    help="CareFinder CLI: search California healthcare facilities by ZIP code.",
    add_completion=False,
    rich_markup_mode="markdown",
)


def version_callback(value: bool):
    if value:
        print_logo(show_tagline=True, show_version=True)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show CLI version.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-V", help="Enable DEBUG level logging for carefinder."
        ),
    ] = False,
):
    """
    Main callback for the CareFinder CLI. `--verbose` switches logging to DEBUG.
    """
    if verbose:
        pkg_logger = logging.getLogger("carefinder")
        pkg_logger.setLevel(logging.DEBUG)
        for handler in pkg_logger.handlers:
            handler.setLevel(logging.DEBUG)
        logger.debug("Verbose mode enabled via CLI flag.")


def _load_catalogs() -> Catalogs:
    """Load the catalogs behind a spinner; exit 1 if a dataset is unavailable."""
    try:
        with create_spinner_progress() as progress:
            progress.add_task("Loading facility and ZIP datasets...", total=None)
            return get_catalogs()
    except DatasetUnavailableError as e:
        print_error_panel(
            "Dataset unavailable",
            str(e),
            hint=(
                "Check your network connection, or point "
                "CAREFINDER_FACILITIES_SOURCE / CAREFINDER_ZIPS_SOURCE "
                "at local CSV copies."
            ),
        )
        raise typer.Exit(code=1)


@app.command("serve")
def serve_cmd(
    host: Annotated[
        str | None,
        typer.Option("--host", "-H", help="Interface to bind (default from config)."),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Port to listen on (default from config)."),
    ] = None,
):
    """Start the interactive map in a local web server."""
    import uvicorn

    config = get_config()
    host = host or config.host
    port = port or config.port

    catalogs = _load_catalogs()
    success(
        f"Loaded {len(catalogs.facilities):,} facilities and "
        f"{len(catalogs.zips):,} ZIP codes"
    )

    console.print()
    print_key_value("UI", f"http://{host}:{port}")
    print_key_value("API", f"http://{host}:{port}/api/search?zip=90210&radius=10")
    console.print()

    uvicorn.run("carefinder.server:app", host=host, port=port, log_level="info")


@app.command("search")
def search_cmd(
    zip_code: Annotated[str, typer.Argument(help="5-digit California ZIP code.")],
    radius: Annotated[
        float,
        typer.Option("--radius", "-r", help="Search radius in miles (0-100)."),
    ] = DEFAULT_RADIUS_MILES,
    facility_type: Annotated[
        str | None,
        typer.Option("--type", "-t", help="Only facilities of this exact type."),
    ] = None,
    long_term_care: Annotated[
        bool,
        typer.Option("--long-term-care", help="Long-term care facilities only."),
    ] = False,
    birthing: Annotated[
        bool,
        typer.Option("--birthing", help="Birthing service providers only."),
    ] = False,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum facilities to list."),
    ] = 25,
):
    """Search facilities within a radius of a ZIP code."""
    additional = []
    if long_term_care:
        additional.append("LONGTERM")
    if birthing:
        additional.append("BIRTHING")

    try:
        query = SearchQuery.from_inputs(
            zip_code,
            radius_miles=radius,
            filter_facility_type=facility_type is not None,
            facility_type=facility_type,
            additional_filters=additional,
        )
    except QueryError as e:
        error(str(e))
        raise typer.Exit(code=1)

    catalogs = _load_catalogs()
    if facility_type is not None and facility_type not in catalogs.facility_types():
        warning(
            f"Facility type '{escape(facility_type)}' is not in the catalog; "
            "run `carefinder types` to list valid values."
        )

    outcome = evaluate(catalogs, query)
    if not outcome.is_valid:
        warning(PLACEHOLDER_TEXT)
        raise typer.Exit(code=1)

    result = outcome.result
    info(
        f"{result.summary.count} facilities within {query.radius_miles:g} miles "
        f"of {result.zip_code}"
    )
    records = facility_records(outcome)
    if records:
        print_facilities_table(records, limit=limit)
    print_summary_table(
        [(label, format_stat(value)) for label, value in result.summary.rows()]
    )


@app.command("types")
def types_cmd():
    """List the facility types present in the catalog."""
    catalogs = _load_catalogs()
    for name in catalogs.facility_types():
        console.print(Text(f"  {name}"))


def main():
    app()


if __name__ == "__main__":
    main()

"""UI resource serving for the facility map page.

The page is a single-file HTML bundle using Leaflet from a CDN. It calls
``/api/facility-types`` once and ``/api/search`` on every input change, then
draws the view model returned by ``build_map_view``.
"""

from pathlib import Path

_UI_HTML_PATH = Path(__file__).parent / "index.html"


def get_ui_html() -> str:
    """Get the facility map HTML page.

    Raises:
        FileNotFoundError: If index.html is missing from the package
    """
    if not _UI_HTML_PATH.exists():
        raise FileNotFoundError(
            f"UI page not found at {_UI_HTML_PATH}. "
            "Reinstall the package or restore index.html."
        )

    return _UI_HTML_PATH.read_text(encoding="utf-8")

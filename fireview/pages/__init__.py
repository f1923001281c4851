"""HTML pages served outside the JSON API."""

from fireview.pages.root import render_root_page

__all__ = ["render_root_page"]

"""postloom: build-time content pipeline for a static blog."""

from postloom.listing.index import build_site_index
from postloom.pipeline import build_site

__version__ = "0.1.0"
__all__ = [
    "build_site",
    "build_site_index",
]

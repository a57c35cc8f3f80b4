"""Grouping, pagination and the site index."""

from postloom.listing.grouping import group_by
from postloom.listing.index import SiteIndex, build_site_index, group_collection
from postloom.listing.pagination import page_route, paginate

__all__ = ["SiteIndex", "build_site_index", "group_by", "group_collection", "page_route", "paginate"]

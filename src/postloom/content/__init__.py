"""Document loading and parsing."""

from postloom.content.loader import load_entries
from postloom.content.parser import map_to_sorted_posts, parse_entry, parse_path, sort_posts

__all__ = ["load_entries", "map_to_sorted_posts", "parse_entry", "parse_path", "sort_posts"]

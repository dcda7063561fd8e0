"""Renderers turning curated trees, search results and summaries into output."""

from .base_renderer import Renderer, describe_ignored, describe_size
from .flat_renderer import FlatRenderer
from .json_renderer import JSONRenderer, entry_to_dict
from .search_renderer import build_search_tree, render_search_flat, render_search_tree, search_header
from .summary_renderer import render_summary
from .tree_renderer import TreeRenderer

__all__ = [
    "FlatRenderer",
    "JSONRenderer",
    "Renderer",
    "TreeRenderer",
    "build_search_tree",
    "describe_ignored",
    "describe_size",
    "entry_to_dict",
    "render_search_flat",
    "render_search_tree",
    "render_summary",
    "search_header",
]

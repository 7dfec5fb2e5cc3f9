"""
Search package - Engine catalog and query resolution.

Maps raw queries (optionally prefixed with a !bang) to a search engine
and renders the redirect URL.
"""

from .engines import DEFAULT_ENGINES, DEFAULT_SUGGEST, EngineRegistry, SearchEngine
from .resolver import QueryResolver, format_redirect_url

__all__ = [
    "DEFAULT_ENGINES",
    "DEFAULT_SUGGEST",
    "EngineRegistry",
    "QueryResolver",
    "SearchEngine",
    "format_redirect_url",
]

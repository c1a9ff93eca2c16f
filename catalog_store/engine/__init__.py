"""
Query engine and related-items pass.

Both operate on collections already loaded from the KeyedStore and never
perform I/O themselves.
"""

from .query import apply_filters, paginate, query, sort_items
from .recommender import related_to

__all__ = ["apply_filters", "paginate", "query", "related_to", "sort_items"]

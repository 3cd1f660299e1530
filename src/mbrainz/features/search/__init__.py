"""
Summary: Search query construction and Lucene encoding.
Why: Give the request builder a single import surface for search predicates.
"""

from .encoder import Join, RawFragment, SearchQuery, Term, encode, escape
from .fields import SEARCH_FIELDS, search_fields

__all__ = [
    "Join",
    "RawFragment",
    "SEARCH_FIELDS",
    "SearchQuery",
    "Term",
    "encode",
    "escape",
    "search_fields",
]

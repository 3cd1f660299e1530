"""
Summary: Request builder, browse links, and the immutable descriptor.
Why: Clients and tests build requests through this import surface.
"""

from .browse import BROWSE_LINKS, BrowseBy, browse_links
from .builder import MAX_LIMIT, MIN_LIMIT, RequestBuilder, RequestExecutor
from .descriptor import RequestDescriptor

__all__ = [
    "BROWSE_LINKS",
    "BrowseBy",
    "MAX_LIMIT",
    "MIN_LIMIT",
    "RequestBuilder",
    "RequestDescriptor",
    "RequestExecutor",
    "browse_links",
]

"""
Summary: Include flag vocabulary, legality tables, and the composer.
Why: Requests validate ``inc=`` values through one entry point.
"""

from .composer import DEFAULT_COMPOSER, IncludeComposer, find_cycle, validate
from .flags import (
    BROWSE_INCLUDES,
    IMPLIED_INCLUDES,
    LOOKUP_INCLUDES,
    RELATION_INCLUDES,
    RELEASE_STATUSES,
    RELEASE_TYPES,
    IncludeFlag,
    parse_flags,
)

__all__ = [
    "BROWSE_INCLUDES",
    "DEFAULT_COMPOSER",
    "IMPLIED_INCLUDES",
    "IncludeComposer",
    "IncludeFlag",
    "LOOKUP_INCLUDES",
    "RELATION_INCLUDES",
    "RELEASE_STATUSES",
    "RELEASE_TYPES",
    "find_cycle",
    "parse_flags",
    "validate",
]

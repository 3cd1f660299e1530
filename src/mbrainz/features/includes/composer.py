"""Where: src/mbrainz/features/includes/composer.py
What: Validate and expand include flags and release filters for a request.
Why: Illegal combinations must fail before a request is built, never at the server.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Final

from mbrainz.errors import (
    IncludeConfigurationError,
    InvalidFilterError,
    InvalidIncludeError,
)
from mbrainz.shared.kinds import EntityKind, Operation

from .flags import (
    BROWSE_INCLUDES,
    IMPLIED_INCLUDES,
    LOOKUP_INCLUDES,
    RELEASE_STATUSES,
    RELEASE_TYPES,
    IncludeFlag,
    parse_flags,
)

ImplicationTable = Mapping[EntityKind, Mapping[IncludeFlag, frozenset[IncludeFlag]]]
LegalityTable = Mapping[EntityKind, frozenset[IncludeFlag]]


def find_cycle(implications: Mapping[IncludeFlag, frozenset[IncludeFlag]]) -> list[IncludeFlag] | None:
    """Return one cycle in the implication graph, or ``None`` if it is acyclic."""

    visiting: list[IncludeFlag] = []
    done: set[IncludeFlag] = set()

    def visit(flag: IncludeFlag) -> list[IncludeFlag] | None:
        if flag in done:
            return None
        if flag in visiting:
            return [*visiting[visiting.index(flag):], flag]
        visiting.append(flag)
        for implied in sorted(implications.get(flag, frozenset()), key=lambda f: f.value):
            cycle = visit(implied)
            if cycle is not None:
                return cycle
        visiting.pop()
        done.add(flag)
        return None

    for start in sorted(implications, key=lambda f: f.value):
        cycle = visit(start)
        if cycle is not None:
            return cycle
    return None


class IncludeComposer:
    """Legality checks and implication closure over static tables.

    The implication table is verified to be acyclic on construction, so the
    fixed-point expansion in :meth:`expand` always terminates.
    """

    def __init__(
        self,
        lookup: LegalityTable = LOOKUP_INCLUDES,
        browse: LegalityTable = BROWSE_INCLUDES,
        implications: ImplicationTable = IMPLIED_INCLUDES,
    ) -> None:
        for kind, table in implications.items():
            cycle = find_cycle(table)
            if cycle is not None:
                chain = " -> ".join(flag.value for flag in cycle)
                raise IncludeConfigurationError(
                    f"Include implication cycle for {kind.value}: {chain}"
                )
        self._legal: dict[Operation, LegalityTable] = {
            Operation.LOOKUP: lookup,
            Operation.BROWSE: browse,
        }
        self._implications = implications

    def legal_flags(self, kind: EntityKind, operation: Operation = Operation.LOOKUP) -> frozenset[IncludeFlag]:
        table = self._legal.get(operation)
        if table is None:
            return frozenset()
        return table.get(kind, frozenset())

    def expand(self, kind: EntityKind, flags: Iterable[IncludeFlag]) -> frozenset[IncludeFlag]:
        """Close ``flags`` under the implication table for ``kind``."""

        table = self._implications.get(kind, {})
        result = set(flags)
        pending = list(result)
        while pending:
            for implied in table.get(pending.pop(), frozenset()):
                if implied not in result:
                    result.add(implied)
                    pending.append(implied)
        return frozenset(result)

    def validate(
        self,
        kind: EntityKind,
        flags: Iterable[IncludeFlag | str],
        *,
        operation: Operation = Operation.LOOKUP,
    ) -> frozenset[IncludeFlag]:
        """Check every flag against the legality table and return the closure.

        Raises:
            InvalidIncludeError: A flag is unknown or illegal for ``kind``.
            IncludeConfigurationError: An implied flag is illegal, meaning the
                static tables disagree with each other.
        """

        requested = parse_flags(flags)
        if not requested:
            return requested
        if operation is Operation.SEARCH:
            raise InvalidIncludeError(
                "Search requests do not accept include flags", kind=kind.value
            )
        legal = self.legal_flags(kind, operation)
        for flag in sorted(requested, key=lambda f: f.value):
            if flag not in legal:
                raise InvalidIncludeError(
                    f"'{flag.value}' is not a valid include for {operation.value} {kind.value}",
                    flag=flag.value,
                    kind=kind.value,
                )
        expanded = self.expand(kind, requested)
        stray = sorted(flag.value for flag in expanded - legal)
        if stray:
            raise IncludeConfigurationError(
                f"Implied includes {stray} are not legal for {kind.value}"
            )
        return expanded

    def validate_filters(
        self,
        kind: EntityKind,
        includes: frozenset[IncludeFlag],
        release_types: Iterable[str] = (),
        release_statuses: Iterable[str] = (),
    ) -> dict[str, str]:
        """Check release filters and return the ``type``/``status`` parameters."""

        types = [value.strip().lower() for value in release_types]
        statuses = [value.strip().lower() for value in release_statuses]
        for value in types:
            if value not in RELEASE_TYPES:
                raise InvalidFilterError(f"Unknown release type: {value!r}")
        for value in statuses:
            if value not in RELEASE_STATUSES:
                raise InvalidFilterError(f"Unknown release status: {value!r}")

        if statuses and IncludeFlag.RELEASES not in includes and kind is not EntityKind.RELEASE:
            raise InvalidFilterError("A release status filter needs the 'releases' include")
        if (
            types
            and not includes & {IncludeFlag.RELEASES, IncludeFlag.RELEASE_GROUPS}
            and kind not in (EntityKind.RELEASE, EntityKind.RELEASE_GROUP)
        ):
            raise InvalidFilterError(
                "A release type filter needs the 'releases' or 'release-groups' include"
            )

        params: dict[str, str] = {}
        if types:
            params["type"] = "|".join(dict.fromkeys(types))
        if statuses:
            params["status"] = "|".join(dict.fromkeys(statuses))
        return params


DEFAULT_COMPOSER: Final[IncludeComposer] = IncludeComposer()


def validate(
    kind: EntityKind,
    flags: Iterable[IncludeFlag | str],
    *,
    operation: Operation = Operation.LOOKUP,
) -> frozenset[IncludeFlag]:
    """Validate ``flags`` with the default tables."""

    return DEFAULT_COMPOSER.validate(kind, flags, operation=operation)


__all__ = [
    "DEFAULT_COMPOSER",
    "IncludeComposer",
    "find_cycle",
    "validate",
]

"""
Summary: Indexed search fields per entity kind.
Why: Reject misspelled fields locally instead of sending a query that silently matches nothing.
"""

from __future__ import annotations

from mbrainz.shared.kinds import EntityKind

SEARCH_FIELDS: dict[EntityKind, frozenset[str]] = {
    EntityKind.ANNOTATION: frozenset({"entity", "id", "name", "text", "type"}),
    EntityKind.AREA: frozenset({
        "aid", "alias", "area", "areaaccent", "begin", "comment", "end", "ended",
        "iso", "iso1", "iso2", "iso3", "sortname", "tag", "type",
    }),
    EntityKind.ARTIST: frozenset({
        "alias", "area", "arid", "artist", "artistaccent", "begin", "beginarea",
        "comment", "country", "end", "endarea", "ended", "gender", "ipi", "isni",
        "primary_alias", "sortname", "tag", "type",
    }),
    EntityKind.CDSTUB: frozenset({
        "added", "artist", "barcode", "comment", "discid", "title", "tracks",
    }),
    EntityKind.EVENT: frozenset({
        "aid", "alias", "area", "arid", "artist", "begin", "comment", "eid", "end",
        "ended", "event", "eventaccent", "pid", "place", "tag", "type",
    }),
    EntityKind.INSTRUMENT: frozenset({
        "alias", "comment", "description", "iid", "instrument", "instrumentaccent",
        "tag", "type",
    }),
    EntityKind.LABEL: frozenset({
        "alias", "area", "begin", "code", "comment", "country", "end", "ended", "ipi",
        "isni", "label", "labelaccent", "laid", "release_count", "sortname", "tag",
        "type",
    }),
    EntityKind.PLACE: frozenset({
        "address", "alias", "area", "begin", "comment", "end", "ended", "lat", "long",
        "pid", "place", "placeaccent", "type",
    }),
    EntityKind.RECORDING: frozenset({
        "alias", "arid", "artist", "artistname", "comment", "country", "creditname",
        "date", "dur", "firstreleasedate", "format", "isrc", "number", "position",
        "primarytype", "qdur", "recording", "recordingaccent", "reid", "release",
        "rgid", "rid", "secondarytype", "status", "tag", "tid", "tnum", "tracks",
        "tracksrelease", "type", "video",
    }),
    EntityKind.RELEASE_GROUP: frozenset({
        "alias", "arid", "artist", "artistname", "comment", "creditname",
        "firstreleasedate", "primarytype", "reid", "release", "releasegroup",
        "releasegroupaccent", "releases", "rgid", "secondarytype", "status", "tag",
        "type",
    }),
    EntityKind.RELEASE: frozenset({
        "alias", "arid", "artist", "artistname", "asin", "barcode", "catno", "comment",
        "country", "creditname", "date", "discids", "discidsmedium", "format", "label",
        "laid", "lang", "mediums", "packaging", "primarytype", "quality", "reid",
        "release", "releaseaccent", "rgid", "script", "secondarytype", "status", "tag",
        "tracks", "tracksmedium", "type",
    }),
    EntityKind.SERIES: frozenset({
        "alias", "comment", "orderingattribute", "series", "seriesaccent", "sid",
        "tag", "type",
    }),
    EntityKind.TAG: frozenset({"tag"}),
    EntityKind.WORK: frozenset({
        "alias", "arid", "artist", "comment", "iswc", "lang", "recording",
        "recording_count", "rid", "tag", "type", "wid", "work", "workaccent",
    }),
}


def search_fields(kind: EntityKind) -> frozenset[str]:
    """Return the searchable fields for ``kind`` (empty when not searchable)."""

    return SEARCH_FIELDS.get(kind, frozenset())


__all__ = ["SEARCH_FIELDS", "search_fields"]

"""Venue map loading, parsing and extraction."""

from mapserver.services.maps.exclusions import (
    ExclusionRuleSet,
    build_rule_set,
    get_exclusion_rules,
    load_rule_set,
)
from mapserver.services.maps.geometry import GeometryRecord, collect_geometry, parse_number
from mapserver.services.maps.identifiers import extract_identifiers, sanitize_identifier
from mapserver.services.maps.parser import parse_document
from mapserver.services.maps.service import IdentifierChunk, MapService, SvgChunk
from mapserver.services.maps.store import MapStore

__all__ = [
    "ExclusionRuleSet",
    "GeometryRecord",
    "IdentifierChunk",
    "MapService",
    "MapStore",
    "SvgChunk",
    "build_rule_set",
    "collect_geometry",
    "extract_identifiers",
    "get_exclusion_rules",
    "load_rule_set",
    "parse_document",
    "parse_number",
    "sanitize_identifier",
]

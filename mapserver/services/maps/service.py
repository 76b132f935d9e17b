"""Map query service: load, parse, extract and paginate one map per call."""

import logging
from dataclasses import dataclass

from mapserver.config import settings
from mapserver.exceptions import ChunkOutOfRangeError
from mapserver.services.chunking import count_pages, paginate
from mapserver.services.maps.exclusions import ExclusionRuleSet, get_exclusion_rules
from mapserver.services.maps.geometry import GeometryRecord, collect_geometry
from mapserver.services.maps.identifiers import extract_identifiers
from mapserver.services.maps.parser import parse_document
from mapserver.services.maps.store import MapStore

logger = logging.getLogger(__name__)


@dataclass
class SvgChunk:
    """One page of raw SVG markup."""

    map_id: str
    chunk: str
    chunk_index: int
    total_chunks: int


@dataclass
class IdentifierChunk:
    """One page of filtered identifiers and shape geometry."""

    map_id: str
    identifiers: list[str]
    geometry: list[GeometryRecord]
    chunk_index: int
    total_chunks: int


class MapService:
    """Stateless pipeline over a MapStore; every call re-reads the document."""

    def __init__(
        self,
        store: MapStore,
        rules: ExclusionRuleSet | None = None,
        svg_chunk_size: int | None = None,
        record_chunk_size: int | None = None,
    ):
        self.store = store
        self.rules = rules if rules is not None else get_exclusion_rules()
        self.svg_chunk_size = svg_chunk_size or settings.svg_chunk_size
        self.record_chunk_size = record_chunk_size or settings.record_chunk_size

    def get_svg_chunk(self, map_id: str, index: int) -> SvgChunk:
        """Return page `index` of the map's raw markup."""
        svg_text = self.store.load(map_id)
        page = paginate(svg_text, self.svg_chunk_size, index)

        return SvgChunk(
            map_id=map_id,
            chunk=page.items,
            chunk_index=page.index,
            total_chunks=page.total_pages,
        )

    def extract(self, map_id: str) -> tuple[list[str], list[GeometryRecord]]:
        """Full (unpaginated) identifier and geometry lists for a map."""
        svg_text = self.store.load(map_id)
        tree = parse_document(svg_text)

        identifiers = extract_identifiers(
            tree,
            self.rules,
            tag=settings.identifier_tag,
            container_tag=settings.container_tag,
        )
        geometry = collect_geometry(tree, settings.geometry_container_id)

        logger.info(
            f"Extracted {len(identifiers)} identifiers and "
            f"{len(geometry)} shapes from map {map_id!r}"
        )
        return identifiers, geometry

    def get_identifier_chunk(self, map_id: str, index: int) -> IdentifierChunk:
        """
        Return page `index` of a map's identifiers and geometry.

        Both lists are paged at the same index with the record chunk size.
        The chunk count is that of the longer list; past the end of the
        shorter list its page is empty.

        Raises:
            MapNotFoundError: unknown map
            MapParseError: markup could not be parsed
            ChunkOutOfRangeError: index outside [0, total_chunks)
        """
        identifiers, geometry = self.extract(map_id)

        size = self.record_chunk_size
        total = max(count_pages(len(identifiers), size), count_pages(len(geometry), size))
        if index < 0 or index >= total:
            raise ChunkOutOfRangeError(index, total)

        return IdentifierChunk(
            map_id=map_id,
            identifiers=_page_or_empty(identifiers, size, index),
            geometry=_page_or_empty(geometry, size, index),
            chunk_index=index,
            total_chunks=total,
        )


def _page_or_empty(records: list, size: int, index: int) -> list:
    try:
        return list(paginate(records, size, index).items)
    except ChunkOutOfRangeError:
        return []

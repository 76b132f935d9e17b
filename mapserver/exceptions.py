"""Exception taxonomy for map lookups.

Each error maps to exactly one HTTP response in the app's exception handlers.
"""


class MapServiceError(Exception):
    """Base class for map service errors."""

    status_code = 500
    message = "Internal server error"


class MapNotFoundError(MapServiceError):
    """No SVG document backs the requested map id."""

    status_code = 404
    message = "Map not found"

    def __init__(self, map_id: str):
        super().__init__(f"Map not found: {map_id!r}")
        self.map_id = map_id


class ChunkOutOfRangeError(MapServiceError):
    """Requested chunk index is outside [0, total_chunks)."""

    status_code = 400
    message = "Chunk index out of range"

    def __init__(self, index: int, total: int):
        super().__init__(f"Chunk index {index} out of range (total chunks: {total})")
        self.index = index
        self.total = total


class MapParseError(MapServiceError):
    """The SVG document could not be parsed into an element tree.

    Reported to clients as a generic internal error.
    """

    message = "Failed to parse map"


class ExclusionConfigError(Exception):
    """Exclusion rule configuration is unreadable or invalid."""

    pass

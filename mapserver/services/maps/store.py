"""Filesystem-backed storage for venue SVG maps."""

import logging
from pathlib import Path

from mapserver.exceptions import MapNotFoundError

logger = logging.getLogger(__name__)


class MapStore:
    """Resolves map ids to `{maps_dir}/{map_id}.svg` files."""

    SUFFIX = ".svg"

    def __init__(self, maps_dir: str | Path):
        self.maps_dir = Path(maps_dir)

    def _path_for(self, map_id: str) -> Path:
        # Map ids are bare file stems; anything that could walk out of maps_dir is unknown
        if not map_id or map_id in (".", "..") or any(c in map_id for c in ("/", "\\", "\x00")):
            raise MapNotFoundError(map_id)
        return self.maps_dir / f"{map_id}{self.SUFFIX}"

    def exists(self, map_id: str) -> bool:
        try:
            return self._path_for(map_id).is_file()
        except (MapNotFoundError, OSError):
            return False

    def load(self, map_id: str) -> str:
        """
        Read the raw SVG markup for a map.

        The text is returned exactly as stored (no newline translation).

        Raises:
            MapNotFoundError: if no document exists for map_id
        """
        path = self._path_for(map_id)
        try:
            with open(path, encoding="utf-8", newline="") as f:
                text = f.read()
        except OSError:
            # Missing file, directory, or a name the filesystem cannot hold
            raise MapNotFoundError(map_id) from None

        logger.debug(f"Loaded map {map_id!r} ({len(text)} chars)")
        return text

    def list_map_ids(self) -> list[str]:
        """Sorted ids of every stored map."""
        if not self.maps_dir.is_dir():
            return []
        return sorted(p.stem for p in self.maps_dir.glob(f"*{self.SUFFIX}") if p.is_file())
